"""Command-line interface for citation key generation."""

from citekey.cli.config import Config, load_config
from citekey.cli.main import cli, main

__all__ = ["Config", "cli", "load_config", "main"]
