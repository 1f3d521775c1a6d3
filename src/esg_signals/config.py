# src/esg_signals/config.py
from __future__ import annotations

from pathlib import Path
from dotenv import load_dotenv
import json
import yaml
import logging
import os

# Load .env as early as possible
load_dotenv()

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent
SCHEMA_DIR = BASE_DIR / "schemas"
DEFAULT_LEXICON_PATH = SCHEMA_DIR / "lexicons.yaml"


def load_json(path: Path):
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_yaml(path: Path):
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning("Invalid integer value for %s: %s", name, value)
        return default


class ESGConfig:
    def __init__(self):
        self.log_level = os.getenv("ESG_LOG_LEVEL", "INFO")
        self.lexicon_path = Path(os.getenv("ESG_LEXICON_PATH") or DEFAULT_LEXICON_PATH)
        self.max_workers = max(1, _env_int("ESG_MAX_WORKERS", 4))


def load_config():
    return ESGConfig()


def setup_logging(level: str = "INFO") -> None:
    """
    Configure root logger. Safe to call multiple times.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


# Run once automatically
setup_logging(os.getenv("ESG_LOG_LEVEL", "INFO"))
