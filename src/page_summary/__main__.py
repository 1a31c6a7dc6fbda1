from page_summary.cli import main

raise SystemExit(main())
