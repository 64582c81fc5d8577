"""Configuration for a labeling run.

Inputs are read once at the entry point and handed to the components as a
single LabelerConfig value.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from prlabeler.tracker.models import FieldKind

logger = logging.getLogger("prlabeler.config")

# Keys accepted in a YAML config file, same names as the action inputs.
CONFIG_KEYS = (
    "github-token",
    "github-labels",
    "jira-labels",
    "jira-components",
    "jira-api-url",
    "jira-auth-token",
    "jira-token-encoded",
)


class ConfigurationError(Exception):
    """Raised when configuration is invalid or missing."""


@dataclass(frozen=True)
class FieldMapping:
    """A Jira field value and the GitHub label it maps to."""

    tracker_value: str
    tag_name: str


@dataclass
class LabelerConfig:
    """Validated configuration for one run."""

    github_token: str
    jira_api_url: str
    jira_auth_token: str
    jira_token_encoded: bool = False
    label_mappings: list[FieldMapping] = field(default_factory=list)
    component_mappings: list[FieldMapping] = field(default_factory=list)

    @classmethod
    def from_inputs(
        cls,
        github_token: str | None,
        github_labels: str | list[str] | None,
        jira_api_url: str | None,
        jira_auth_token: str | None,
        jira_labels: str | list[str] | None = None,
        jira_components: str | list[str] | None = None,
        jira_token_encoded: bool = False,
    ) -> LabelerConfig:
        """Build a config from raw input values.

        Comma-separated strings and lists are both accepted for the label and
        component inputs. Everything is validated here, before any network
        call is made.

        Raises:
            ConfigurationError: If a required input is missing, neither
                jira-labels nor jira-components is given, or a mapping list
                length differs from the github-labels length.
        """
        required = {
            "github-token": github_token,
            "github-labels": github_labels,
            "jira-api-url": jira_api_url,
            "jira-auth-token": jira_auth_token,
        }
        missing = [name for name, value in required.items() if not value]
        if missing:
            raise ConfigurationError(f"Missing required inputs: {', '.join(missing)}")

        tag_names = parse_list(github_labels)
        label_values = parse_list(jira_labels)
        component_values = parse_list(jira_components)

        if not label_values and not component_values:
            raise ConfigurationError("Either jira-labels or jira-components must be provided.")

        logger.debug("GitHub Labels (Parsed): %s", tag_names)
        logger.debug("Jira Labels (Parsed): %s", label_values)
        logger.debug("Jira Components (Parsed): %s", component_values)

        return cls(
            github_token=str(github_token),
            jira_api_url=str(jira_api_url),
            jira_auth_token=str(jira_auth_token),
            jira_token_encoded=jira_token_encoded,
            label_mappings=build_mappings(label_values, tag_names, FieldKind.LABELS),
            component_mappings=build_mappings(component_values, tag_names, FieldKind.COMPONENTS),
        )


def parse_list(raw: str | list[str] | None) -> list[str]:
    """Split a comma-separated input into trimmed items.

    An empty or missing input gives an empty list (input not supplied).
    """
    if not raw:
        return []
    if isinstance(raw, str):
        raw = raw.split(",")
    return [str(item).strip() for item in raw]


def build_mappings(
    tracker_values: list[str], tag_names: list[str], field_kind: FieldKind
) -> list[FieldMapping]:
    """Pair Jira values with GitHub labels by position.

    An empty tracker_values list means the field kind is not configured.

    Raises:
        ConfigurationError: If the two lists differ in length.
    """
    if not tracker_values:
        return []
    if len(tracker_values) != len(tag_names):
        raise ConfigurationError(
            f"GitHub Labels and Jira {field_kind.value.capitalize()} "
            "must have the same number of elements."
        )
    return [FieldMapping(value, tag) for value, tag in zip(tracker_values, tag_names)]


def load_config_file(config_path: Path | str) -> dict[str, Any]:
    """Load input values from a YAML file.

    Args:
        config_path: Path to a YAML mapping keyed by input name
            (e.g. `github-labels`).

    Returns:
        Mapping of input name to value. Unknown keys are dropped with a warning.

    Raises:
        ConfigurationError: If the file doesn't exist or is invalid.
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Configuration must be a YAML mapping, got {type(data).__name__}"
        )

    values: dict[str, Any] = {}
    for key, value in data.items():
        key = str(key).replace("_", "-")
        if key not in CONFIG_KEYS:
            logger.warning("Ignoring unknown configuration key '%s' in %s", key, config_path)
            continue
        values[key] = value
    return values
