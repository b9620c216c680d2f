"""JSON/YAML data files for catalogs and scoring weights."""

import json
from pathlib import Path
from typing import Any

import yaml

SUPPORTED_SUFFIXES = (".json", ".yaml", ".yml")


def read_data_file(filepath: str, what: str = "Data") -> Any:
    """Parse a JSON or YAML file, chosen by extension.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the extension is not .json, .yaml or .yml
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"{what} file not found: {filepath}")
    if path.suffix not in SUPPORTED_SUFFIXES:
        raise ValueError(f"Unsupported file format: {path.suffix}. Use .json, .yaml, or .yml")

    with open(path, "r", encoding="utf-8") as f:
        if path.suffix == ".json":
            return json.load(f)
        return yaml.safe_load(f)


def write_data_file(data: Any, filepath: str) -> None:
    """Write ``data`` as JSON or YAML, chosen by extension."""
    path = Path(filepath)
    if path.suffix not in SUPPORTED_SUFFIXES:
        raise ValueError(f"Unsupported file format: {path.suffix}")

    with open(path, "w", encoding="utf-8") as f:
        if path.suffix == ".json":
            json.dump(data, f, indent=2)
        else:
            yaml.safe_dump(data, f, default_flow_style=False)
