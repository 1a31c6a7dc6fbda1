from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from page_summary import __version__


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    addr: str = Field(default=":4000", alias="ADDR")
    tls_key: str | None = Field(default=None, alias="TLSKEY")
    tls_cert: str | None = Field(default=None, alias="TLSCERT")

    fetch_timeout_s: float = Field(default=20.0, alias="FETCH_TIMEOUT_S")
    user_agent: str = Field(default=f"page-summary/{__version__}", alias="USER_AGENT")
    max_head_bytes: int = Field(default=1_048_576, alias="MAX_HEAD_BYTES")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    def _split_addr(self) -> tuple[str, str]:
        host, sep, port = self.addr.rpartition(":")
        if not sep or not port.isdigit():
            raise ValueError(f"ADDR must look like host:port, got {self.addr!r}")
        return host.strip("[]"), port

    def listen_host(self) -> str:
        return self._split_addr()[0] or "0.0.0.0"

    def listen_port(self) -> int:
        return int(self._split_addr()[1])

    def tls_enabled(self) -> bool:
        return bool(self.tls_key and self.tls_cert)


def load_settings() -> Settings:
    return Settings()
