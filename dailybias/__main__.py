"""Allow ``python -m dailybias``."""

from dailybias.cli.main import run

if __name__ == "__main__":
    run()
