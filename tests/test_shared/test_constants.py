"""Tests for shared constants."""
from __future__ import annotations

from src.shared import constants


def test_version_is_semver():
    parts = constants.VERSION.split(".")
    assert len(parts) == 3
    assert all(p.isdigit() for p in parts)


def test_response_messages():
    assert constants.VALID_MESSAGE == "API is valid"
    assert constants.INVALID_MESSAGE == "API validation failed"


def test_strategies():
    assert constants.SUPPORTED_STRATEGIES == ["memory", "file"]
    assert constants.STRATEGY_MEMORY in constants.SUPPORTED_STRATEGIES
    assert constants.STRATEGY_FILE in constants.SUPPORTED_STRATEGIES


def test_in_memory_url_is_a_file_url():
    assert constants.IN_MEMORY_DOCUMENT_URL.startswith("file:///")
