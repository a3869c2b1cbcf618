"""Shared fixtures for paramfilter tests."""

from __future__ import annotations

import pytest

from paramfilter import FilterConfig, build_default_registry


@pytest.fixture
def registry():
    """Default registry with the built-in text and date types."""
    return build_default_registry()


@pytest.fixture
def config():
    """One text column and one date column."""
    return {"text": {"keys": ["title"]}, "date": {"keys": ["date_column"]}}


@pytest.fixture
def filter_config(config):
    return FilterConfig.from_mapping(config)
