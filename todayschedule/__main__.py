"""
Package entry point.

Allows running the application via:

    python -m todayschedule

This simply forwards execution to todayschedule.cli.main().
"""

from todayschedule.cli import main

if __name__ == "__main__":
    main()
