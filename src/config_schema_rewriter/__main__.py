"""Module entry point for `python -m config_schema_rewriter`."""

from .cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
