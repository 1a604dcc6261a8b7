# tests/conftest.py
import pytest
from typer.testing import CliRunner

from dealforge.adapters.config import config
from dealforge.entrypoints.cli import app  # ensures imports resolve; run tests from repo root


@pytest.fixture(scope="session")
def runner():
    return CliRunner()


@pytest.fixture(scope="session")
def cli_app():
    return app


@pytest.fixture
def default_sensitivity_steps(monkeypatch):
    """Pin the sensitivity grid so tests don't depend on the caller's environment."""
    monkeypatch.setattr(config, "SENSITIVITY_EXIT_CAP_STEPS", [-1.0, -0.5, 0.0, 0.5, 1.0])
    monkeypatch.setattr(config, "SENSITIVITY_RENT_GROWTH_STEPS", [-1.0, 0.0, 1.0])
