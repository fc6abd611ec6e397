"""Entry point for ``python -m playercore``."""

from playercore.cli import cli

if __name__ == "__main__":
    cli()
