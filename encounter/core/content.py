"""
Content loading module for the encounter engine.

Reads active-encounter payloads (the roster snapshot handed over by the
encounter service) from JSON files.
"""

import json
from logging import debug
from pathlib import Path
from typing import Any


def load_encounter_file(filepath: Path | str) -> dict[str, Any]:
    """
    Loads an active-encounter payload from a JSON file.

    Args:
        filepath (Path | str): Path to the JSON document.

    Returns:
        dict[str, Any]: The decoded payload, with a "creatures" list.

    Raises:
        ValueError: If the file is missing, unreadable or not an encounter object.

    """
    filepath = Path(filepath)
    try:
        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")
        if not filepath.is_file():
            raise ValueError(f"Not a file: {filepath}")
        with open(filepath, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(
                f"Expected object in {filepath}, got {type(data).__name__}"
            )
        if not isinstance(data.get("creatures", []), list):
            raise ValueError(f"Expected 'creatures' list in {filepath}")
    except (json.JSONDecodeError, FileNotFoundError, ValueError) as e:
        raise ValueError(f"File {filepath} raised an error: {e}") from e
    debug(f"Loaded encounter payload from {filepath}")
    return data
