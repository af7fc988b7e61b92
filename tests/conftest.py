"""Shared test fixtures for the swagger-validator test suite."""
from __future__ import annotations

from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from src.shared.config import ValidatorConfig
from src.swagger_validator.main import create_app


@pytest.fixture
def memory_config() -> ValidatorConfig:
    """Configuration using the in-memory strategy."""
    return ValidatorConfig(staging_strategy="memory", validation_timeout_seconds=30)


@pytest.fixture
def file_config(tmp_path: Path) -> ValidatorConfig:
    """Configuration staging documents under a private temp directory."""
    return ValidatorConfig(
        staging_strategy="file",
        temp_dir=str(tmp_path),
        validation_timeout_seconds=30,
    )


@pytest.fixture
def client(memory_config: ValidatorConfig) -> Generator[TestClient, None, None]:
    """TestClient for an app using the in-memory strategy."""
    with TestClient(create_app(memory_config)) as c:
        yield c


@pytest.fixture
def file_client(file_config: ValidatorConfig) -> Generator[TestClient, None, None]:
    """TestClient for an app using the file strategy."""
    with TestClient(create_app(file_config)) as c:
        yield c
