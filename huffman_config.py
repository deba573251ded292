# filename: huffman_config.py

import os
import sys
from dataclasses import dataclass

from dotenv import load_dotenv
from loguru import logger

load_dotenv()


def _env_flag(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() not in ("0", "false", "no", "off", "")


@dataclass
class Settings:
    log_level: str = os.getenv("HUFFMAN_LOG_LEVEL", "INFO")
    # echo report lines to the logger after the primary sink is written
    report_echo: bool = _env_flag("HUFFMAN_REPORT_ECHO", True)
    eval_timeout: int = int(os.getenv("HUFFMAN_EVAL_TIMEOUT", "120"))


settings = Settings()


def configure_logging(level=None, sink=sys.stderr):
    """Replace loguru's default handler with a single one at the configured level."""
    logger.remove()
    return logger.add(sink, level=(level or settings.log_level).upper())
