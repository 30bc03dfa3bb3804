"""
Package entry point.

Allows running the application via:

    python -m monthcal

This simply forwards execution to monthcal.cli.main().
"""

from monthcal.cli import main

if __name__ == "__main__":
    main()
