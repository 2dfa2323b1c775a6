"""
Configuration.

Resolved in this order (later overrides earlier):
1. Built-in defaults
2. ``~/.review-toolkit/config.json`` (or an explicit path)
3. Environment variables ``REVIEW_TOOLKIT_SESSIONS_DIR`` and
   ``REVIEW_TOOLKIT_TOKEN_LIMIT``

Command-line options override the loaded result.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError

from review_toolkit.engine import DEFAULT_TOKEN_LIMIT

logger = logging.getLogger(__name__)

CONFIG_FILE = Path.home() / ".review-toolkit" / "config.json"
DEFAULT_SESSIONS_DIR = Path.home() / ".review-toolkit-sessions"

ENV_SESSIONS_DIR = "REVIEW_TOOLKIT_SESSIONS_DIR"
ENV_TOKEN_LIMIT = "REVIEW_TOOLKIT_TOKEN_LIMIT"


class ReviewConfig(BaseModel):
    sessions_dir: Path = DEFAULT_SESSIONS_DIR
    token_limit: int = Field(default=DEFAULT_TOKEN_LIMIT, gt=0)


def _read_file(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return {}
    return data if isinstance(data, dict) else {}


def _env_values() -> dict[str, Any]:
    values: dict[str, Any] = {}
    if os.environ.get(ENV_SESSIONS_DIR):
        values["sessions_dir"] = os.environ[ENV_SESSIONS_DIR]
    if os.environ.get(ENV_TOKEN_LIMIT):
        values["token_limit"] = os.environ[ENV_TOKEN_LIMIT]
    return values


def load_config(path: Optional[Path] = None) -> ReviewConfig:
    """Apply each layer field by field. An invalid value is skipped and the
    value from the previous layer stays in effect."""
    config_file = path or CONFIG_FILE
    layers = [(str(config_file), _read_file(config_file)), ("environment", _env_values())]

    config = ReviewConfig()
    for source, values in layers:
        for key, value in values.items():
            if key not in ReviewConfig.model_fields:
                continue
            try:
                config = ReviewConfig.model_validate({**config.model_dump(), key: value})
            except ValidationError as e:
                logger.warning("Ignoring invalid %s from %s: %s", key, source, e.errors()[0]["msg"])
    config.sessions_dir = config.sessions_dir.expanduser()
    return config


def save_config(config: ReviewConfig, path: Optional[Path] = None) -> None:
    target = path or CONFIG_FILE
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(config.model_dump_json(indent=2), encoding="utf-8")
