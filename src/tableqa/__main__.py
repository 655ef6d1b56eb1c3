"""Allow ``python -m tableqa``."""

from tableqa.cli import app

if __name__ == "__main__":
    app(prog_name="tableqa")
