"""Allow ``python -m storm_cli``."""

from storm_cli.cli import main

main()
