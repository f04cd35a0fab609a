#!/usr/bin/env python3
# src/qiuye_ui/__main__.py
"""Allow ``python -m qiuye_ui``."""

from .cli import main

if __name__ == "__main__":
    main()
