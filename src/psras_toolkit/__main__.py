"""Allow ``python -m psras_toolkit``."""

from psras_toolkit.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
