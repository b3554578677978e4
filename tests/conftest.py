"""Shared pytest fixtures for SealKit tests."""
import logging
import os
from pathlib import Path
from typing import Any, Dict, List

import pytest
import yaml

from sealkit.core.config import set_global_config
from sealkit.core.logging import Logger, LogLevel, set_global_logger
from sealkit.transforms.registry import set_global_registry

ONE_MB = 1024 * 1024


class ListHandler(logging.Handler):
    """Handler that keeps formatted messages in memory."""

    def __init__(self):
        super().__init__()
        self.messages: List[str] = []
        self.records: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)
        self.messages.append(record.getMessage())


@pytest.fixture(autouse=True)
def reset_singletons(monkeypatch):
    """Reset global config, logger and registry and drop SEALKIT_* variables."""
    for key in list(os.environ):
        if key.startswith("SEALKIT_"):
            monkeypatch.delenv(key)

    set_global_config(None)
    set_global_logger(None)
    set_global_registry(None)
    yield
    set_global_config(None)
    set_global_logger(None)
    set_global_registry(None)


@pytest.fixture
def log_handler() -> ListHandler:
    """Install a global logger that records messages at DEBUG."""
    handler = ListHandler()
    set_global_logger(Logger(level=LogLevel.DEBUG, handlers=[handler]))
    return handler


@pytest.fixture(scope="session")
def random_payload() -> bytes:
    """1 MB of incompressible data."""
    return os.urandom(ONE_MB)


@pytest.fixture(scope="session")
def repetitive_payload() -> bytes:
    """1 MB of highly repetitive data."""
    return (b"SealKit repeats itself. " * (ONE_MB // 24 + 1))[:ONE_MB]


@pytest.fixture
def sample_config() -> Dict[str, Any]:
    """Provide a sample SealKit configuration."""
    return {
        "sealkit": {
            "errors": {"strict": True},
            "compression": {"level": 9},
            "logging": {"level": "DEBUG", "file": None},
            "pipeline": [
                {"type": "compression", "key": "zlib"},
                {"type": "aes", "key": "secret"},
            ],
        }
    }


@pytest.fixture
def config_file(tmp_path: Path, sample_config: Dict[str, Any]) -> Path:
    """Write the sample configuration to a YAML file."""
    config_path = tmp_path / "sealkit.yaml"
    with open(config_path, "w") as f:
        yaml.dump(sample_config, f)
    return config_path
