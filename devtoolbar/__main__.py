"""Entry point for ``python -m devtoolbar``."""

from __future__ import annotations

from devtoolbar.cli.main import main

if __name__ == "__main__":
    main()
