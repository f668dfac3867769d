"""Module entrypoint for `python -m jtd_validate`."""

from .cli.commands import app


if __name__ == "__main__":
    app(prog_name="jtd-validate")
