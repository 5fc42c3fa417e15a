"""
Configuration loading and validation.

This module handles loading of YAML configuration files and
validates that all required fields are present.
"""

import logging
from pathlib import Path
from typing import Dict, Any, List, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"

VALID_UNSET_POLICIES = ("neutral", "exclude")


def load_config(filepath: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        filepath: Path to the YAML configuration file (packaged default if None)

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config file is empty
        yaml.YAMLError: If YAML is invalid
    """
    path = Path(filepath) if filepath is not None else DEFAULT_CONFIG_PATH
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    logger.info(f"Loading configuration from {path}")
    with open(path, "r") as f:
        config = yaml.safe_load(f)

    if config is None:
        raise ValueError(f"Configuration file is empty: {path}")

    return config


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration and return list of warnings/errors.

    Args:
        config: Configuration dictionary

    Returns:
        List of warning/error messages (empty if valid)
    """
    issues = []

    if "global" not in config or "log_level" not in config.get("global", {}):
        issues.append("Missing global.log_level")

    # Unset policies of both call sites
    for section in ("scoring", "persistence"):
        policy = config.get(section, {}).get("unset_policy")
        if policy is not None and str(policy).lower() not in VALID_UNSET_POLICIES:
            issues.append(
                f"{section}.unset_policy must be one of {list(VALID_UNSET_POLICIES)}, got {policy!r}"
            )

    if "ranking" in config:
        score = config["ranking"].get("missing_profile_score", 50)
        if not isinstance(score, (int, float)) or not 0 <= score <= 100:
            issues.append(f"ranking.missing_profile_score must be in [0, 100], got {score!r}")

    if "presentation" in config:
        max_tags = config["presentation"].get("max_tags", 3)
        if not isinstance(max_tags, int) or max_tags < 1:
            issues.append(f"presentation.max_tags must be a positive integer, got {max_tags!r}")

    if "evaluation" in config:
        evaluation = config["evaluation"]
        for q in evaluation.get("quantiles", []):
            if not 0 < q < 1:
                issues.append(f"evaluation.quantiles values must be in (0, 1), got {q}")
        max_pairs = evaluation.get("max_pairs", 1)
        if not isinstance(max_pairs, int) or max_pairs < 1:
            issues.append(f"evaluation.max_pairs must be a positive integer, got {max_pairs!r}")

    # Reject attempts to tune the fixed scoring constants
    for fixed in ("weights", "thresholds", "labels"):
        if fixed in config.get("scoring", {}):
            issues.append(f"scoring.{fixed} is not configurable and will be ignored")

    return issues


def get_config_value(config: Dict[str, Any], path: str, default: Any = None) -> Any:
    """
    Get a nested configuration value using dot notation.

    Args:
        config: Configuration dictionary
        path: Dot-separated path (e.g., "persistence.unset_policy")
        default: Default value if path doesn't exist

    Returns:
        Configuration value or default
    """
    keys = path.split(".")
    value = config
    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default
    return value
