import pytest
from loguru import logger

from huffman_config import settings


@pytest.fixture
def log_lines():
    """Messages that reached the logger at INFO and above while the test ran."""
    lines = []
    handler_id = logger.add(lambda message: lines.append(message.record["message"]), level="INFO")
    yield lines
    logger.remove(handler_id)


@pytest.fixture
def report_echo(monkeypatch):
    monkeypatch.setattr(settings, "report_echo", True)
    return settings


@pytest.fixture
def sample_freqs():
    return {"a": 5, "b": 2, "c": 1, "d": 1}
