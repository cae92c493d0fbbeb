"""Pytest configuration and fixtures for CLI tests."""

import json

import pytest
from click.testing import CliRunner


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user and project config files out of CLI tests."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def cli_runner():
    """Click CLI test runner invoking the citekey group."""

    class CitekeyCliRunner(CliRunner):
        def invoke(self, args, **kwargs):  # type: ignore
            from citekey.cli.main import cli

            return super().invoke(cli, args, **kwargs)

    return CitekeyCliRunner()


@pytest.fixture
def entries_data():
    """Entries as stored in a JSON entries file."""
    return [
        {
            "type": "article",
            "fields": {"author": "Smith, John", "title": "Quantum Advances", "year": 2024},
        },
        {
            "type": "article",
            "fields": {"author": "Smith, John", "title": "Classical Limits", "year": 2024},
        },
        {
            "type": "book",
            "fields": {"author": "Knuth, Donald E.", "year": "1997"},
            "citation_key": "knuth",
        },
    ]


@pytest.fixture
def entries_file(tmp_path, entries_data):
    """Write the sample entries to a JSON file."""
    path = tmp_path / "entries.json"
    path.write_text(json.dumps(entries_data))
    return path


@pytest.fixture
def config_file(tmp_path):
    """Factory writing a YAML config file."""

    def factory(content, name="config.yaml"):
        path = tmp_path / name
        path.write_text(content)
        return path

    return factory
