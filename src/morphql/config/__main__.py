"""CLI entry point for configuration introspection.

Usage:
    python -m morphql.config
    python -m morphql.config --check
    python -m morphql.config --json
"""

from .introspection import main

if __name__ == "__main__":
    main()
