"""Configuration loader for URLPolicy.

This module loads fragment policies from YAML files and validates their
structure before turning them into FragmentClassifier instances.
"""

import logging
import re
from pathlib import Path
from typing import Any

import yaml

from urlpolicy.classifier.combinators import URLClassifier, and_, host_in, path_glob, scheme_in
from urlpolicy.classifier.fragment import FragmentClassifier, FragmentClassifierBuilder
from urlpolicy.core.constants import DEFAULTS, RELATIVE_URL_RULE_KEYS
from urlpolicy.core.exceptions import ConfigError, InvalidPolicyError


logger = logging.getLogger(__name__)


# ============================================================================
# Policy File Loader
# ============================================================================

def load_fragment_policy(policy_file: Path | str) -> FragmentClassifier:
    """Load a fragment policy from a YAML file.

    Args:
        policy_file: Path to policy YAML file

    Returns:
        FragmentClassifier built from the policy

    Raises:
        ConfigError: If file not found or YAML parsing fails
        InvalidPolicyError: If policy structure is invalid
    """
    policy_path = Path(policy_file)

    if not policy_path.exists():
        raise ConfigError(f"Policy file not found: {policy_path}")

    try:
        with policy_path.open("r") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse policy YAML: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read policy file: {e}") from e

    logger.info(f"Loaded fragment policy from {policy_path}")
    return build_fragment_policy(data)


def build_fragment_policy(data: Any) -> FragmentClassifier:
    """Build a fragment policy from parsed configuration data.

    Args:
        data: Mapping with a top-level 'fragment' section

    Returns:
        FragmentClassifier built from the policy

    Raises:
        InvalidPolicyError: If policy structure is invalid
    """
    if not data:
        raise InvalidPolicyError("Policy configuration is empty")

    if not isinstance(data, dict) or "fragment" not in data:
        raise InvalidPolicyError("Missing 'fragment' section in policy config")

    fragment_data = data["fragment"]
    if fragment_data is None:
        fragment_data = {}
    if not isinstance(fragment_data, dict):
        raise InvalidPolicyError("'fragment' section must be a mapping")

    allow_absent = fragment_data.get("allow_absent", DEFAULTS["allow_absent"])
    allow_empty = fragment_data.get("allow_empty", DEFAULTS["allow_empty"])
    patterns = fragment_data.get("patterns", [])
    relative_rules = fragment_data.get("as_relative_url", [])

    if not isinstance(allow_absent, bool):
        raise InvalidPolicyError("'allow_absent' must be a boolean")
    if not isinstance(allow_empty, bool):
        raise InvalidPolicyError("'allow_empty' must be a boolean")
    if not isinstance(patterns, list):
        raise InvalidPolicyError("'patterns' must be a list")
    if not isinstance(relative_rules, list):
        raise InvalidPolicyError("'as_relative_url' must be a list")

    builder = FragmentClassifierBuilder()

    if allow_absent:
        builder.matches(lambda fragment: fragment is None)
    if allow_empty:
        builder.matches(lambda fragment: fragment == "#")

    for pattern in patterns:
        builder.matches(_pattern_predicate(pattern))

    for index, rule in enumerate(relative_rules):
        builder.match_fragment_as_relative_url(_relative_url_classifier(index, rule))

    return builder.build()


# ============================================================================
# Rule Helpers
# ============================================================================

def _pattern_predicate(pattern: Any):
    """Compile a raw fragment pattern into a predicate.

    The pattern must match the whole fragment, "#" included.
    """
    if not isinstance(pattern, str):
        raise InvalidPolicyError(f"Fragment pattern must be a string: {pattern!r}")

    try:
        compiled = re.compile(pattern)
    except re.error as e:
        raise InvalidPolicyError(f"Invalid fragment pattern '{pattern}': {e}") from e

    return lambda fragment: fragment is not None and compiled.fullmatch(fragment) is not None


def _relative_url_classifier(index: int, rule: Any) -> URLClassifier:
    """Build the URL classifier for one 'as_relative_url' entry.

    Every key present must match.
    """
    if not isinstance(rule, dict):
        raise InvalidPolicyError(f"'as_relative_url[{index}]' must be a mapping")

    unknown = set(rule) - RELATIVE_URL_RULE_KEYS
    if unknown:
        raise InvalidPolicyError(
            f"Unknown keys in 'as_relative_url[{index}]': {', '.join(sorted(unknown))}"
        )

    parts: list[URLClassifier] = []
    for key, factory in (("schemes", scheme_in), ("hosts", host_in), ("paths", path_glob)):
        if key not in rule:
            continue
        values = rule[key]
        if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
            raise InvalidPolicyError(f"'as_relative_url[{index}].{key}' must be a list of strings")
        parts.append(factory(*values))

    if not parts:
        keys = ", ".join(sorted(RELATIVE_URL_RULE_KEYS))
        raise InvalidPolicyError(
            f"'as_relative_url[{index}]' must contain at least one of: {keys}"
        )

    return and_(*parts)
