"""
Pytest configuration for the explorer tests.

Adds the repository root to the Python path so tests can import `app` and
`shor_backend`.
"""
import sys
from pathlib import Path

import pytest

# Add repository root to Python path
root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir))

from shor_backend.shor_runner.random_source import ScriptedRandomSource


@pytest.fixture
def scripted():
    """Factory for scripted random sources: scripted(4, 1) replays 4 then 1."""
    def make(*draws):
        return ScriptedRandomSource(draws)
    return make


@pytest.fixture
def flask_app():
    from app import app

    original = app.config['EXPLORER_SETTINGS']
    app.config['EXPLORER_SETTINGS'] = original._replace(step_delay=0, rng_seed=None)
    app.config['TESTING'] = True
    yield app
    app.config['EXPLORER_SETTINGS'] = original


@pytest.fixture
def client(flask_app):
    return flask_app.test_client()
