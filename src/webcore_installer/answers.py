"""Answers file loader with schema validation."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from pydantic import ValidationError

from .catalog import select_features, select_libraries
from .exceptions import ConfigurationError
from .models import Answers, Feature, LibraryOption

SCHEMA_PATH = Path(__file__).parent / "schemas" / "answers.schema.json"

_schema_cache: dict[str, Any] = {}


def _load_schema() -> dict[str, Any]:
    """Load and cache the answers JSON schema."""
    if "answers" not in _schema_cache:
        try:
            with SCHEMA_PATH.open(encoding="utf-8") as f:
                _schema_cache["answers"] = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            msg = f"Failed to load answers schema: {e}"
            raise ConfigurationError(msg) from e
    return _schema_cache["answers"]


def validate_answers_data(data: dict[str, Any]) -> None:
    """Validate raw answers data against the JSON schema.

    Raises:
        ConfigurationError: If the data does not match the schema
    """
    try:
        jsonschema.validate(data, _load_schema())
    except jsonschema.ValidationError as e:
        msg = f"Answers validation failed: {e.message}"
        raise ConfigurationError(
            msg,
            details={"path": list(e.absolute_path)},
        ) from e


def load_answers(answers_path: Path, validate: bool = True) -> Answers:
    """Load pre-filled installer answers from a YAML file.

    Args:
        answers_path: YAML file to read
        validate: Whether to perform schema validation

    Returns:
        Validated answers

    Raises:
        ConfigurationError: If the file cannot be loaded or is invalid
    """
    if not answers_path.exists():
        msg = f"Answers file not found: {answers_path}"
        raise ConfigurationError(msg)

    try:
        with answers_path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        msg = f"Failed to parse answers YAML: {e}"
        raise ConfigurationError(msg) from e
    except OSError as e:
        msg = f"Failed to read answers file: {e}"
        raise ConfigurationError(msg) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        msg = "Answers file must contain a mapping"
        raise ConfigurationError(msg)

    if validate:
        validate_answers_data(data)

    try:
        return Answers.model_validate(data)
    except ValidationError as e:
        msg = f"Answers validation failed: {e}"
        raise ConfigurationError(msg) from e


def resolve_libraries(names: list[str]) -> list[LibraryOption]:
    """Map library keys from an answers file to catalog entries.

    Raises:
        ConfigurationError: If a key is not in the catalog
    """
    try:
        return select_libraries(names)
    except KeyError as e:
        msg = f"Unknown library: {e.args[0]}"
        raise ConfigurationError(msg, details={"libraries": names}) from e


def resolve_features(names: list[str]) -> list[Feature]:
    """Map feature names from an answers file to catalog entries.

    Raises:
        ConfigurationError: If a name is not in the catalog
    """
    try:
        return select_features(names)
    except KeyError as e:
        msg = f"Unknown feature: {e.args[0]}"
        raise ConfigurationError(msg, details={"features": names}) from e
