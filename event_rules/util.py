"""Helpers for event patterns and environment comparison."""

import copy
import json
from collections.abc import Mapping
from typing import Any

from aws_cdk import Token


def same_env_dimension(dim1: str, dim2: str) -> bool:
    """
    Check whether two account (or region) values denote the same place.

    Concrete values must be equal. An unresolved token on either side is
    assumed to match, because its value is not known until deployment.
    """
    if Token.is_unresolved(dim1) or Token.is_unresolved(dim2):
        return True
    return dim1 == dim2


def _json_key(value: Any) -> str:
    return json.dumps(value, sort_keys=True)


def merge_event_pattern(dest: dict[str, Any], src: Mapping[str, Any]) -> dict[str, Any]:
    """
    Merge an event pattern into an existing one, in place.

    Lists are concatenated without duplicates and nested objects are merged
    recursively. For example, merging ``{"resources": ["r2"], "detail": {"foo": ["bar"]}}``
    into ``{"resources": ["r1"], "detail": {"hello": [1]}}`` gives
    ``{"resources": ["r1", "r2"], "detail": {"hello": [1], "foo": ["bar"]}}``.

    Args:
        dest: Pattern to merge into. Modified and returned.
        src: Pattern whose values are added.

    Returns:
        The merged ``dest`` pattern.

    Raises:
        ValueError: If a leaf is not a list or object, or a list would be
            merged with an object.
    """
    for key, src_value in src.items():
        if src_value is None:
            continue

        if not isinstance(src_value, (Mapping, list)):
            raise ValueError(
                f"Invalid event pattern '{json.dumps(dict(src), default=str)}', "
                "expecting objects or arrays as leaves"
            )

        dest_value = dest.get(key)
        if not isinstance(dest_value, (Mapping, list)):
            dest[key] = copy.deepcopy(
                dict(src_value) if isinstance(src_value, Mapping) else src_value
            )
            continue

        if isinstance(src_value, list) != isinstance(dest_value, list):
            raise ValueError(
                f"Invalid event pattern '{json.dumps(dict(src), default=str)}', "
                "to merge arrays both sides must be arrays"
            )

        if isinstance(src_value, list):
            seen = set()
            merged = []
            for item in [*dest_value, *src_value]:
                item_key = _json_key(item)
                if item_key not in seen:
                    seen.add(item_key)
                    merged.append(copy.deepcopy(item))
            dest[key] = merged
        else:
            merge_event_pattern(dest_value, src_value)

    return dest


def render_event_pattern(event_pattern: Mapping[str, Any]) -> dict[str, Any] | None:
    """Render a merged pattern in the shape EventBridge expects, or None when empty."""
    if not event_pattern:
        return None

    out = {}
    for key, value in event_pattern.items():
        if key == "detail_type":
            key = "detail-type"
        out[key] = value
    return out
