"""Allow running as ``python -m citekey``."""

from citekey.cli.main import main

main()
