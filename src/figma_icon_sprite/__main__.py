"""Module entry point for `python -m figma_icon_sprite`."""

from .cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
