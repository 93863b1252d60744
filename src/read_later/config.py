from __future__ import annotations

import json
import logging
import os
from datetime import datetime
from typing import Any, Dict, Optional

# --- Configuration ---
DEFAULT_LIST_FILE = os.path.expanduser("~/.read_later_list")
CONFIG_PATH = os.path.expanduser("~/.config/read_later/config.json")

DEFAULTS: Dict[str, Any] = {
    "prompt_for_tags": True,
    "theme": "textual-dark",
}

# --- Logging ---
logger = logging.getLogger("read_later")


def setup_logging(debug: bool = False) -> Optional[str]:
    """Configure logging."""
    if not debug:
        logging.basicConfig(level=logging.CRITICAL, handlers=[logging.NullHandler()])
        return None

    ts = datetime.now().strftime("%Y%m%dT%H%M%S")
    pid = os.getpid()
    debug_path = f"/tmp/read_later_debug_{ts}_{pid}.log"

    logging.basicConfig(
        level=logging.DEBUG,
        filename=debug_path,
        filemode="a",
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )

    logger.debug("Debug logging enabled to %s", debug_path)
    return debug_path


def load_config() -> Dict[str, Any]:
    """Load the configuration file, or an empty config if there is none."""
    if not os.path.exists(CONFIG_PATH):
        return {}
    try:
        with open(CONFIG_PATH, "r", encoding="utf-8") as f:
            config = json.load(f)
    except (IOError, json.JSONDecodeError) as e:
        logger.error("Failed to load config from %s: %s", CONFIG_PATH, e)
        return {}
    if not isinstance(config, dict):
        logger.error("Ignoring config at %s: expected a JSON object", CONFIG_PATH)
        return {}
    logger.info("Loaded config from %s", CONFIG_PATH)
    return config


def save_config(config: Dict[str, Any]) -> None:
    """Save the configuration file."""
    try:
        os.makedirs(os.path.dirname(CONFIG_PATH), exist_ok=True)
        with open(CONFIG_PATH, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
        logger.info("Saved config to %s", CONFIG_PATH)
    except IOError as e:
        logger.error("Failed to save config to %s: %s", CONFIG_PATH, e)


def get_setting(config: Dict[str, Any], key: str) -> Any:
    return config.get(key, DEFAULTS.get(key))


def resolve_list_path(cli_path: Optional[str], config: Dict[str, Any]) -> str:
    """Pick the list file: the command line wins over config, config over the default."""
    path = cli_path or config.get("list_file") or DEFAULT_LIST_FILE
    return os.path.expanduser(path)
