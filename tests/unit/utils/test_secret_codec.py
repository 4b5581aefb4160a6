"""Unit tests for the Secret codec."""

from __future__ import annotations

import json

import pytest
import yaml

from ktoolhu.utils.secret_codec import (
    Direction,
    SecretCodecError,
    parse_secret,
    resolve_direction,
    transcode_secret,
)

ENCODED = """\
apiVersion: v1
kind: Secret
metadata:
  name: db
data:
  user: YWRtaW4=
  password: czNjcjN0
"""


@pytest.mark.unit
class TestTranscodeSecret:
    """Tests for transcode_secret."""

    def test_auto_decodes_when_all_values_are_base64(self) -> None:
        """Valid base64 values are decoded in automatic mode."""
        result = yaml.safe_load(transcode_secret(ENCODED))

        assert result["data"] == {"user": "admin", "password": "s3cr3t"}
        assert result["metadata"] == {"name": "db"}

    def test_auto_encodes_when_any_value_is_plain(self) -> None:
        """A single plain value switches the whole map to encoding."""
        text = json.dumps({"kind": "Secret", "data": {"user": "YWRtaW4=", "note": "hello world"}})

        result = yaml.safe_load(transcode_secret(text))

        assert result["data"] == {"user": "WVdSdGFXND0=", "note": "aGVsbG8gd29ybGQ="}

    def test_explicit_encode(self) -> None:
        """Encoding is applied even to values that look encoded."""
        result = yaml.safe_load(transcode_secret(ENCODED, Direction.ENCODE))
        assert result["data"]["user"] == "WVdSdGFXND0="

    def test_explicit_decode_rejects_plain_values(self) -> None:
        """Decoding fails loudly on non-base64 input."""
        text = "data:\n  note: not base64!\n"
        with pytest.raises(SecretCodecError, match="note"):
            transcode_secret(text, Direction.DECODE)

    def test_preserves_key_order(self) -> None:
        """Output keeps the document's key order."""
        output = transcode_secret(ENCODED)
        assert output.index("apiVersion") < output.index("kind") < output.index("data")


@pytest.mark.unit
class TestParseSecret:
    """Tests for input validation."""

    @pytest.mark.parametrize(
        ("text", "message"),
        [
            ("- a\n- b\n", "not a mapping"),
            ("kind: Secret\n", "missing 'data'"),
            ("data: [1, 2]\n", "missing 'data'"),
            ("data:\n  port: 5432\n", "non string"),
            ("data: {unclosed", "Failed to parse"),
        ],
    )
    def test_invalid_input(self, text: str, message: str) -> None:
        with pytest.raises(SecretCodecError, match=message):
            parse_secret(text)

    def test_empty_data_map_decodes(self) -> None:
        """An empty map resolves to decode and stays empty."""
        assert resolve_direction({}, Direction.AUTO) is Direction.DECODE
        assert yaml.safe_load(transcode_secret("data: {}\n"))["data"] == {}
