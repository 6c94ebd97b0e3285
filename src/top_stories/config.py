from __future__ import annotations

import json
import logging
import os
import re
import sys
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from .exceptions import ConfigurationError

# --- Configuration ---
API_BASE_URL = "https://api.nytimes.com/svc"
DEFAULT_SECTION = "arts"
HTTP_TIMEOUT = 15
SERVER_PORT = 8080
DIST_DIR = os.path.join("frontend", "dist")

API_KEY_ENV = "NYT_API_KEY"
CONFIG_PATH = os.path.expanduser("~/.config/top-stories/config.json")

REQUEST_HEADERS = {
    "User-Agent": "top-stories/0.1 (+https://developer.nytimes.com)",
    "Accept": "application/json",
}

API_KEY_PATTERN = re.compile(r"(api-key=)[^&\s'\"]+", re.I)

LOADING_TEXT = "Loading..."


def default_dist_dir() -> str:
    """Resolve the built front end against the current working directory."""
    return os.path.abspath(DIST_DIR)


def redact_api_key(text: str, api_key: Optional[str] = None) -> str:
    """Mask API key values in text that may reach logs or users."""
    text = API_KEY_PATTERN.sub(r"\1***", text)
    if api_key:
        text = text.replace(api_key, "***")
    return text


# --- Logging ---
logger = logging.getLogger("top_stories")


def setup_logging(debug: bool = False, console: bool = False) -> Optional[str]:
    """Configure logging.

    The terminal UI owns the screen, so it only logs when ``debug`` is set
    and then to a file. The server logs to stderr.
    """
    if console:
        logging.basicConfig(
            level=logging.DEBUG if debug else logging.INFO,
            stream=sys.stderr,
            format="%(message)s",
        )
        return None

    if not debug:
        logging.basicConfig(level=logging.CRITICAL, handlers=[logging.NullHandler()])
        return None

    ts = datetime.now().strftime("%Y%m%dT%H%M%S")
    pid = os.getpid()
    debug_path = f"/tmp/top_stories_debug_{ts}_{pid}.log"

    logging.basicConfig(
        level=logging.DEBUG,
        filename=debug_path,
        filemode="a",
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )

    logger.debug("Debug logging enabled to %s", debug_path)
    return debug_path


def load_config(path: str = CONFIG_PATH) -> Dict[str, Any]:
    """Load the optional JSON configuration file."""
    if not os.path.exists(path):
        logger.debug("No config file at %s, using defaults.", path)
        return {}
    try:
        with open(path, "r") as f:
            config = json.load(f)
    except (IOError, json.JSONDecodeError) as e:
        logger.error("Failed to load config from %s: %s", path, e)
        return {}
    if not isinstance(config, dict):
        logger.error("Ignoring config at %s: expected a JSON object", path)
        return {}
    logger.info("Loaded config from %s", path)
    return config


@dataclass
class Settings:
    api_key: str
    section: str = DEFAULT_SECTION
    base_url: str = API_BASE_URL
    timeout: float = HTTP_TIMEOUT
    port: int = SERVER_PORT
    dist_dir: str = field(default_factory=default_dist_dir)


def load_settings(config: Optional[Dict[str, Any]] = None) -> Settings:
    """Build settings from the environment and the config file.

    The API key is read from ``NYT_API_KEY`` (a ``.env`` file in the working
    directory is honoured) and falls back to the config file's ``api_key``.
    """
    load_dotenv()
    if config is None:
        config = load_config()

    api_key = os.environ.get(API_KEY_ENV) or config.get("api_key")
    if not api_key:
        raise ConfigurationError(
            f"No API key configured. Set {API_KEY_ENV} or add 'api_key' to {CONFIG_PATH}."
        )

    try:
        return Settings(
            api_key=api_key,
            section=config.get("section", DEFAULT_SECTION),
            base_url=config.get("base_url", API_BASE_URL).rstrip("/"),
            timeout=float(config.get("timeout", HTTP_TIMEOUT)),
            port=int(config.get("port", SERVER_PORT)),
            dist_dir=os.path.expanduser(config.get("dist_dir") or default_dist_dir()),
        )
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
