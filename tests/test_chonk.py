"""Tests for the length-prefixed field encoding."""

import pytest

from tasktrack.chonk import chonkify, dechonkify


class TestChonkify:
    """Tests for chonkify."""

    def test_simple_string(self):
        """Test that the length and separator precede the payload."""
        assert chonkify("buy milk") == "8:buy milk"

    def test_empty_string(self):
        """Test encoding the empty string."""
        assert chonkify("") == "0:"

    def test_counts_characters_not_bytes(self):
        """Test that non-ASCII text is measured in characters."""
        assert chonkify("café") == "4:café"


class TestDechonkify:
    """Tests for dechonkify."""

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "buy milk",
            "12345",
            "3:abc",
            ":::",
            "10:",
            "line one\nline two\r\n",
            "tabs\tand \\ backslashes",
            "日本語のタスク",
            "x" * 1000,
        ],
    )
    def test_roundtrip(self, text):
        """Test that decoding an encoded string returns it and the end index."""
        encoded = chonkify(text)
        assert dechonkify(encoded, 0) == (text, len(encoded))

    def test_concatenated_fields(self):
        """Test decoding several fields written back to back."""
        fields = ["42", "", "4:ab", "with\nnewline"]
        encoded = "".join(chonkify(f) for f in fields)

        idx = 0
        decoded = []
        for _ in fields:
            value, idx = dechonkify(encoded, idx)
            decoded.append(value)

        assert decoded == fields
        assert idx == len(encoded)

    def test_index_continuity(self):
        """Test that the returned index is exactly where the next field starts."""
        a, b = chonkify("first"), chonkify("2nd")
        value, idx = dechonkify(a + b, 0)
        assert value == "first"
        assert idx == len(a)
        assert dechonkify(a + b, idx) == ("2nd", len(a) + len(b))

    def test_decode_with_offset(self):
        """Test decoding a field that follows other text."""
        line = "D0" + chonkify("submit")
        assert dechonkify(line, 2) == ("submit", len(line))

    def test_empty_input_is_invalid(self):
        """Test that start 0 in an empty string is out of bounds."""
        assert dechonkify("", 0) is None

    def test_start_past_end_is_invalid(self):
        """Test that a start index at or past the end is rejected."""
        encoded = chonkify("abc")
        assert dechonkify(encoded, len(encoded)) is None
        assert dechonkify(encoded, len(encoded) + 5) is None

    def test_negative_start_is_invalid(self):
        """Test that a negative start index is rejected."""
        assert dechonkify("3:abc", -1) is None

    @pytest.mark.parametrize(
        "text",
        [
            "abc",  # no length prefix
            ":abc",  # empty length prefix
            "3abc",  # missing separator
            "x3:abc",  # junk before the length
            "-1:abc",  # sign is not part of the length
            "²:ab",  # non-ASCII digit
            "5:abc",  # payload overruns the input
        ],
    )
    def test_malformed_input(self, text):
        """Test that malformed fields are reported as invalid."""
        assert dechonkify(text, 0) is None

    def test_zero_length_field_at_end(self):
        """Test that an empty payload at the very end decodes."""
        assert dechonkify("0:", 0) == ("", 2)

    def test_trailing_data_is_left_alone(self):
        """Test that only one field is consumed."""
        assert dechonkify("2:abtrailing", 0) == ("ab", 4)
