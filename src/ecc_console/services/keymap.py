"""Keystroke to call-command bindings."""

import logging
from typing import Optional

import yaml

from ..models.schemas import CallCommand

logger = logging.getLogger(__name__)

DEFAULT_KEYMAP: dict[str, CallCommand] = {
    "1": CallCommand.SIGNAL_INCOMING_CALL,
    "2": CallCommand.START_CALL,
    "3": CallCommand.ACCEPT_INCOMING_CALL,
    "4": CallCommand.REJECT_INCOMING_CALL,
    "5": CallCommand.END_CALL,
    "6": CallCommand.HOLD,
    "7": CallCommand.RESUME,
    "8": CallCommand.MUTE,
    "9": CallCommand.UNMUTE,
}

# Keys handled by the console loop itself
RESERVED_KEYS = {"q", "?"}


def parse_keymap(data: Optional[dict]) -> dict[str, CallCommand]:
    """Build a keymap from a parsed configuration mapping.

    Args:
        data: Mapping with a ``keys`` section of key -> command name

    Returns:
        Keymap dictionary

    Raises:
        ValueError: If a key or command is invalid
    """
    if not data or not data.get("keys"):
        raise ValueError("Keymap must define a non-empty 'keys' mapping")

    keymap: dict[str, CallCommand] = {}
    for key, command in data["keys"].items():
        key = str(key)
        if len(key) != 1:
            raise ValueError(f"Keymap key {key!r} must be a single character")
        if key.lower() in RESERVED_KEYS:
            raise ValueError(f"Keymap key {key!r} is reserved")
        try:
            keymap[key] = CallCommand(str(command))
        except ValueError:
            raise ValueError(f"Unknown call command {command!r} for key {key!r}") from None
    return keymap


def load_keymap(keymap_path: Optional[str]) -> dict[str, CallCommand]:
    """Load key bindings from a YAML file.

    Args:
        keymap_path: Path to keymap YAML file, or None for the defaults

    Returns:
        Keymap dictionary

    Raises:
        FileNotFoundError: If keymap file doesn't exist
        yaml.YAMLError: If keymap file is invalid YAML
        ValueError: If keymap content is invalid
    """
    if keymap_path is None:
        return dict(DEFAULT_KEYMAP)

    with open(keymap_path, "r", encoding="utf-8") as f:
        keymap = parse_keymap(yaml.safe_load(f))

    logger.info(f"Loaded {len(keymap)} key bindings from {keymap_path}")
    return keymap
