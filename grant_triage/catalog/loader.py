"""Load grant-scheme catalogs from JSON or YAML files."""

import logging
from pathlib import Path
from typing import Any, Iterable

from ..datafiles import read_data_file
from ..models.grant_scheme import GrantScheme
from .named_thresholds import attach_named_threshold

logger = logging.getLogger(__name__)


def parse_schemes(records: Iterable[dict[str, Any]]) -> list[GrantScheme]:
    """Validate raw catalog records into GrantScheme models.

    Raises:
        pydantic.ValidationError: If a record is malformed
    """
    return [GrantScheme(**attach_named_threshold(record)) for record in records]


def load_schemes(filepath: str) -> list[GrantScheme]:
    """Load a scheme catalog from file.

    The file holds either a list of scheme records or a mapping with a
    ``schemes`` key.

    Args:
        filepath: Path to a .json, .yaml or .yml catalog

    Returns:
        List of GrantScheme in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the format is unsupported or the content isn't a scheme list
    """
    data = read_data_file(filepath, "Catalog")
    if isinstance(data, dict):
        data = data.get("schemes")
    if not isinstance(data, list):
        raise ValueError(f"Catalog file {filepath} must contain a list of schemes")

    schemes = parse_schemes(data)
    logger.info("Loaded %d grant schemes from %s", len(schemes), Path(filepath).name)
    return schemes
