"""Main entry point for python -m powerled."""

from powerled.cli.main import cli

if __name__ == "__main__":
    cli()
