"""Encode or decode the ``data`` map of a Kubernetes Secret document."""

from __future__ import annotations

import base64
import binascii
from enum import StrEnum
from typing import Any

import yaml


class SecretCodecError(ValueError):
    """Raised when the input is not a Secret-like document."""


class Direction(StrEnum):
    """Which way to transcode ``data`` values."""

    AUTO = "auto"
    ENCODE = "encode"
    DECODE = "decode"


def _try_decode(value: str) -> str | None:
    """Return the decoded text, or None if ``value`` is not base64-encoded UTF-8."""
    try:
        return base64.b64decode(value, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None


def _encode(value: str) -> str:
    return base64.b64encode(value.encode("utf-8")).decode("ascii")


def parse_secret(text: str) -> dict[str, Any]:
    """Parse a YAML or JSON Secret document.

    Raises:
        SecretCodecError: If the text cannot be parsed or has no ``data`` map
            of string values.
    """
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise SecretCodecError(f"Failed to parse input as yaml or json: {e}") from e

    if not isinstance(document, dict):
        raise SecretCodecError("Input does not look like a secret (not a mapping)")

    data = document.get("data")
    if not isinstance(data, dict):
        raise SecretCodecError("Input does not look like a secret (missing 'data' or not map type)")

    for key, value in data.items():
        if not isinstance(value, str):
            raise SecretCodecError(f"Key {key} has non string type")

    return document


def resolve_direction(data: dict[str, str], direction: Direction) -> Direction:
    """Pick a concrete direction.

    In automatic mode the values are decoded only when every one of them is
    valid base64 text; a single plain value switches the whole map to encode.
    """
    if direction is not Direction.AUTO:
        return direction
    if all(_try_decode(value) is not None for value in data.values()):
        return Direction.DECODE
    return Direction.ENCODE


def transcode_secret(text: str, direction: Direction = Direction.AUTO) -> str:
    """Encode or decode every value of the Secret's ``data`` map.

    Args:
        text: YAML or JSON Secret document.
        direction: Explicit direction, or AUTO to infer it from the values.

    Returns:
        The transformed document as YAML.

    Raises:
        SecretCodecError: On malformed input, or when DECODE is requested and
            a value is not valid base64 text.
    """
    document = parse_secret(text)
    data: dict[str, str] = document["data"]
    resolved = resolve_direction(data, direction)

    transformed: dict[str, str] = {}
    for key, value in data.items():
        if resolved is Direction.ENCODE:
            transformed[key] = _encode(value)
            continue
        decoded = _try_decode(value)
        if decoded is None:
            raise SecretCodecError(f"Key {key} is not valid base64 text")
        transformed[key] = decoded

    document["data"] = transformed
    return yaml.safe_dump(document, default_flow_style=False, sort_keys=False)
