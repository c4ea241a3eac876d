"""Fixtures for CLI tests: an isolated working directory and a fake service."""

from unittest.mock import patch

import pytest
from click.testing import CliRunner

from arborview.core.client import TreeServiceClient


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run commands in an empty directory with no ARBORVIEW_* overrides."""
    for name in ("SERVICE_URL", "TIMEOUT", "LOG_LEVEL"):
        monkeypatch.delenv(f"ARBORVIEW_{name}", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def connected(service, workdir):
    """Route every client the CLI opens to the fake service."""
    def factory(base_url, timeout=None):
        return TreeServiceClient(base_url, timeout=timeout, transport=service.transport)

    with patch("arborview.cli.utils.TreeServiceClient", side_effect=factory) as mock_cls:
        yield mock_cls
