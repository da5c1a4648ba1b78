"""General utils functions"""

from typing import Dict, Union

import humanfriendly
import yaml


def parse_backoff(value: Union[str, int, float]) -> float:
    """Parse a human friendly timespan (``5s``, ``1m``, ``500ms``) into seconds.

    Plain numbers are taken as seconds.

    Raises:
        ValueError: If the value is not a valid timespan
    """
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(humanfriendly.parse_timespan(value.strip()))
    except humanfriendly.InvalidTimespan as e:
        raise ValueError(f"Invalid timespan: {value!r}") from e


def parse_submodule_overrides(value: str) -> Dict[str, str]:
    """Parse a JSON (or YAML flow) mapping of submodule name to URL.

    An empty string yields an empty mapping.

    Raises:
        ValueError: If the value is not a mapping of strings to strings
    """
    if not value or not value.strip():
        return {}
    try:
        parsed = yaml.safe_load(value)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid submodule override mapping: {e}") from e

    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ValueError("Submodule overrides must be a mapping of name to URL")

    overrides = {}
    for name, url in parsed.items():
        if not isinstance(name, str) or not isinstance(url, str):
            raise ValueError(
                f"Submodule override {name!r}: names and URLs must be strings"
            )
        overrides[name] = url
    return overrides
