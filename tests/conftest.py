"""
Shared fixtures for prompt gateway tests.
"""

import pytest

from prompt_gateway import PromptGateway


@pytest.fixture(autouse=True)
def _no_ollama_host(monkeypatch):
    """Keep the local daemon URL deterministic."""
    monkeypatch.delenv("OLLAMA_HOST", raising=False)


@pytest.fixture
def gateway():
    """Gateway with default adapters."""
    return PromptGateway()
