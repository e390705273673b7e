"""
Unit test fixtures: in-memory run contexts, fake clients and a throwaway workspace.
"""

import pytest
from unittest.mock import Mock

from infisical_action.runtime import InMemoryRunContext, input_env_name
from infisical_action.config.inputs import load_inputs_manifest
from .fakes import FakeInfisicalClient


@pytest.fixture
def fake_client():
    return FakeInfisicalClient(secrets={"API_KEY": "abc", "DB_URL": "p@ss/word"})


@pytest.fixture
def context():
    return InMemoryRunContext({
        'method': 'universal',
        'client-id': 'client-id',
        'client-secret': 'client-secret',
        'project-slug': 'web',
        'env-slug': 'dev',
    })


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """A temporary GITHUB_WORKSPACE."""
    monkeypatch.setenv('GITHUB_WORKSPACE', str(tmp_path))
    return tmp_path


@pytest.fixture
def clean_input_env(monkeypatch):
    """Remove any INPUT_* variables inherited from the environment."""
    for definition in load_inputs_manifest():
        monkeypatch.delenv(input_env_name(definition.name), raising=False)
    return monkeypatch


@pytest.fixture
def mock_session():
    session = Mock()
    session.headers = {}
    return session
