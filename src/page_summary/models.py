from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class PreviewImage:
    url: str = ""
    secure_url: str = ""
    type: str = ""
    width: int = 0
    height: int = 0
    alt: str = ""

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "url": self.url,
            "secureURL": self.secure_url,
            "type": self.type,
            "width": self.width,
            "height": self.height,
            "alt": self.alt,
        }
        return {k: v for k, v in out.items() if v}


@dataclass
class PageSummary:
    type: str = ""
    url: str = ""
    title: str = ""
    site_name: str = ""
    description: str = ""
    author: str = ""
    keywords: list[str] = field(default_factory=list)
    icon: PreviewImage | None = None
    images: list[PreviewImage] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """
        JSON-ready representation: camelCase keys, empty fields omitted.
        """
        out: dict[str, Any] = {
            "type": self.type,
            "url": self.url,
            "title": self.title,
            "siteName": self.site_name,
            "description": self.description,
            "author": self.author,
            "keywords": list(self.keywords),
        }
        if self.icon is not None:
            out["icon"] = self.icon.to_dict()
        out["images"] = [img.to_dict() for img in self.images]
        return {k: v for k, v in out.items() if v or k == "icon"}
