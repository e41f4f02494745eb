"""Define utility functions for reading planning problem files written in YAML."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml


def load_yaml_data(yaml_path: Path | str, required_keys: set[str] | None = None) -> Any:
    """Load the top-level data of a planning problem (or other YAML) file.

    :param yaml_path: Path to the YAML file to be imported
    :param required_keys: Sections the file must define, e.g. {"actions", "start", "goal"}
    :return: Parsed YAML data, normally a mapping from section names to their contents
    :raises FileNotFoundError: If the YAML file doesn't exist
    :raises RuntimeError: If the file isn't valid YAML
    :raises KeyError: If a required key is missing in the loaded data
    """
    yaml_path = Path(yaml_path)
    if not yaml_path.exists():
        raise FileNotFoundError(f"Cannot load data from nonexistent YAML file: {yaml_path}")

    try:
        with yaml_path.open() as yaml_file:
            yaml_data = yaml.safe_load(yaml_file)
    except yaml.YAMLError as error:
        raise RuntimeError(f"Failed to load from YAML file: {yaml_path}") from error

    if required_keys:
        if not isinstance(yaml_data, dict):
            raise KeyError(f"Expected a mapping with keys {sorted(required_keys)} in {yaml_path}")
        missing = sorted(required_keys - yaml_data.keys())
        if missing:
            raise KeyError(f"Required keys {missing} were missing in data loaded from {yaml_path}")

    return yaml_data
