"""
JSON config helpers.

Load a JSON file as a dict and walk a key path down to a nested sub-map,
e.g. ``load_and_query_json("config.json", "databases")`` -> ``{"main": "main.db"}``.
"""

import json
from pathlib import Path
from typing import Any


def load_json(file_path: str | Path) -> dict[str, Any]:
    """Read *file_path* and parse it. The top level must be a JSON object."""
    with open(file_path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"JSON file {file_path} must contain an object at top level")
    return data


def load_and_query_json(file_path: str | Path, *keys: str) -> dict[str, Any]:
    """
    Load *file_path* and return the sub-map reached by following *keys*.

    - Missing key -> KeyError
    - Key whose value is not an object -> ValueError
    - No keys -> the whole document
    """
    current = load_json(file_path)
    for key in keys:
        if key not in current:
            raise KeyError(f"key not found: {key}")
        value = current[key]
        if not isinstance(value, dict):
            raise ValueError(f"key does not point to a map: {key}")
        current = value
    return current
