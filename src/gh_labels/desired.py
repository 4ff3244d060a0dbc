"""Desired-state loading.

The config file is YAML with two top-level mappings:

    labels:
      bug: red
      feature: green
    colors:
      red: e11d21
      green: "009800"

Label color names are resolved through `colors` into hex values. Keys and hex
values are copied verbatim as written, quoted or not (`000000` stays "000000").
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from gh_labels.errors import ConfigReadError, MissingColor

_YAML_NULLS = frozenset({"", "~", "null", "Null", "NULL"})


class LabelsConfig(BaseModel):
    """Parsed desired-state document."""

    model_config = ConfigDict(extra="ignore")

    labels: dict[str, str] = Field(default_factory=dict)
    colors: dict[str, str] = Field(default_factory=dict)

    @field_validator("labels", "colors", mode="before")
    @classmethod
    def _null_is_empty(cls, value: object) -> object:
        # BaseLoader keeps `labels:` with no value as an empty or null-spelled scalar.
        if value is None or (isinstance(value, str) and value in _YAML_NULLS):
            return {}
        return value


def resolve_labels(labels: Mapping[str, str], colors: Mapping[str, str]) -> dict[str, str]:
    """Map each label to the hex value of its color name.

    Raises:
        MissingColor: on the first label whose color name is not in `colors`.
    """

    resolved: dict[str, str] = {}
    for label, color_name in labels.items():
        try:
            resolved[label] = colors[color_name]
        except KeyError:
            raise MissingColor(label, color_name) from None
    return resolved


def parse_labels_config(data: bytes | str) -> LabelsConfig:
    try:
        # BaseLoader keeps every scalar as its source text, so `000000` stays "000000".
        raw = yaml.load(data, Loader=yaml.BaseLoader)
    except yaml.YAMLError as e:
        raise ConfigReadError(f"invalid YAML: {e}") from e

    if raw is None:
        return LabelsConfig()
    if not isinstance(raw, dict):
        raise ConfigReadError("config must be a mapping with 'labels' and 'colors'")

    try:
        return LabelsConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigReadError(f"invalid config: {e}") from e


def load_labels_config(path: Path) -> LabelsConfig:
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ConfigReadError(f"failed to read {path}: {e}") from e
    return parse_labels_config(data)


def load_desired_labels(source: Path | str | bytes) -> dict[str, str]:
    """Load the desired label -> hex mapping.

    `source` is a path to the config file, or the raw YAML document as bytes.
    """

    if isinstance(source, bytes):
        config = parse_labels_config(source)
    else:
        config = load_labels_config(Path(source))
    return resolve_labels(config.labels, config.colors)
