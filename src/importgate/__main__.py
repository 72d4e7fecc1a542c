"""Allow ``python -m importgate``."""

from importgate.cli.main import main

main()
