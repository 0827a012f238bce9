"""Entry point for ``python -m tconv``."""

from tconv.cli import main

main(prog_name="tconv")
