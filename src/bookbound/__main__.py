"""Main entry point for the bookbound package."""

from bookbound.cli import main


if __name__ == "__main__":
    main()
