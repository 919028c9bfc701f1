"""
Package entry point.

Allows running the application via:

    python -m canvasfzf

This simply forwards execution to canvasfzf.cli.main().
"""

from canvasfzf.cli import main

if __name__ == "__main__":
    main()
