"""Unified entry point for Notekeep."""

from notekeep.core.config import setup_logging
from notekeep.interfaces.cli.app import app


def main():
    """Configure logging and hand over to the CLI."""
    setup_logging()
    app()


if __name__ == "__main__":
    main()
