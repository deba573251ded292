import io

from loguru import logger

from huffman_config import _env_flag, configure_logging


def test_configure_logging_filters_by_level():
    stream = io.StringIO()
    configure_logging(level="warning", sink=stream)
    try:
        logger.info("hidden line")
        logger.warning("shown line")
    finally:
        configure_logging(level="INFO")
    output = stream.getvalue()
    assert "shown line" in output
    assert "hidden line" not in output


def test_env_flag(monkeypatch):
    monkeypatch.delenv("HUFFMAN_TEST_FLAG", raising=False)
    assert _env_flag("HUFFMAN_TEST_FLAG", True) is True
    monkeypatch.setenv("HUFFMAN_TEST_FLAG", "off")
    assert _env_flag("HUFFMAN_TEST_FLAG", True) is False
    monkeypatch.setenv("HUFFMAN_TEST_FLAG", "1")
    assert _env_flag("HUFFMAN_TEST_FLAG", False) is True
