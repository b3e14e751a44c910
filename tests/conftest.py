"""Shared pytest fixtures for gws-docs-markdown tests."""

import os

import pytest

from core.config import ENV_PREFIX, reload_compiler_config
from docs_markdown.batch import MarkdownToDocsConverter
from docs_markdown.compiler import MarkdownCompiler


@pytest.fixture(autouse=True)
def clean_config_env(monkeypatch):
    """Start every test from default configuration, whatever the outer environment holds."""
    for key in list(os.environ):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)
    reload_compiler_config()


@pytest.fixture
def env_override(monkeypatch):
    """Helper to override environment variables."""

    def _override(**kwargs):
        for key, value in kwargs.items():
            if value is None:
                monkeypatch.delenv(key, raising=False)
            else:
                monkeypatch.setenv(key, value)

    return _override


@pytest.fixture
def compiler():
    return MarkdownCompiler()


@pytest.fixture
def converter():
    return MarkdownToDocsConverter()
