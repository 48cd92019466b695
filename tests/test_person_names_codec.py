"""
Tests for the canonical text form, the length-prefixed binary form and the
function table exposed to host adapters.
"""

import sys
import struct
import logging
from pathlib import Path
import pytest

# Add the parent directory to path to import pname
sys.path.insert(0, str(Path(__file__).parent.parent))

from pname.person_names import (
    FUNCTIONS,
    InvalidFormat,
    PersonNameCodec,
    PersonNameConfig,
    PersonNameParser,
    from_binary,
    from_text,
    parse,
    read_binary,
    to_binary,
    to_text,
)
from pname.person_names_data import REJECTION_REASONS

CANONICAL_TEXTS = [
    "Lee, John",
    "Lee,John",
    "Lee, John Michael",
    "Van Der Berg, Anna",
    "O'Neil,Mary-Kate Anne",
]


def test_text_round_trip_is_verbatim():
    for text in CANONICAL_TEXTS:
        name = from_text(text)
        assert to_text(name) == text
        assert from_text(to_text(name)).original == name.original


def test_from_text_rejects_invalid_text():
    with pytest.raises(InvalidFormat):
        from_text("JohnLee")


def test_binary_frame_layout():
    assert to_binary(parse("Lee, John")) == b"\x00\x00\x00\x09Lee, John"
    assert to_binary(parse("Lee,John")) == b"\x00\x00\x00\x08Lee,John"


def test_binary_round_trip_keeps_original_text():
    for text in CANONICAL_TEXTS:
        assert from_binary(to_binary(parse(text))).original == text


def test_read_binary_consecutive_frames():
    first, second = parse("Lee, John"), parse("Van Der Berg,Anna")
    buffer = to_binary(first) + to_binary(second)

    name, offset = read_binary(buffer)
    assert name.original == "Lee, John"
    assert offset == 4 + len("Lee, John")

    name, offset = read_binary(buffer, offset)
    assert name.original == "Van Der Berg,Anna"
    assert offset == len(buffer)


def test_read_binary_rejects_offsets_outside_the_buffer():
    buffer = to_binary(parse("Lee, John")) + to_binary(parse("Li, Anna"))

    for offset in (-1, -len(buffer), len(buffer), len(buffer) + 4):
        with pytest.raises(InvalidFormat) as excinfo:
            read_binary(buffer, offset)
        assert excinfo.value.reason == REJECTION_REASONS["truncated_prefix"]


@pytest.mark.parametrize(
    "data, reason_key",
    [
        (b"", "truncated_prefix"),
        (b"\x00\x00", "truncated_prefix"),
        (b"\x00\x00\x00\x10Lee", "bad_length"),
        (b"\xff\xff\xff\xffLee", "bad_length"),
        (struct.pack(">i", 2) + b"\xff\xfe", "bad_encoding"),
        (struct.pack(">i", 9) + b"Lee, John" + b"x", "trailing_bytes"),
    ],
)
def test_bad_binary_frames(data, reason_key):
    with pytest.raises(InvalidFormat) as excinfo:
        from_binary(data)
    assert excinfo.value.reason == REJECTION_REASONS[reason_key]


def test_binary_frame_is_revalidated():
    with pytest.raises(InvalidFormat) as excinfo:
        from_binary(struct.pack(">i", 7) + b"JohnLee")
    assert excinfo.value.offending_text == "JohnLee"
    assert excinfo.value.reason == REJECTION_REASONS["no_separator"]


def test_bad_frame_is_logged(caplog):
    with caplog.at_level(logging.WARNING):
        with pytest.raises(InvalidFormat):
            from_binary(b"\x00")
    assert "Rejected binary person name (1 bytes)" in caplog.text


def test_custom_length_prefix():
    config = PersonNameConfig.create_default().with_length_prefix(">H")
    codec = PersonNameCodec(PersonNameParser(config))

    data = codec.to_binary(parse("Lee, John"))
    assert data == b"\x00\x09Lee, John"
    assert codec.from_binary(data).original == "Lee, John"


def test_function_table():
    assert set(FUNCTIONS) == {
        "in",
        "out",
        "recv",
        "send",
        "cmp",
        "lt",
        "le",
        "eq",
        "ge",
        "gt",
        "ne",
        "family",
        "given",
        "display",
    }

    john = FUNCTIONS["in"]("Lee,John Michael")
    anna = FUNCTIONS["recv"](FUNCTIONS["send"](parse("Lee, Anna")))

    assert FUNCTIONS["out"](john) == "Lee,John Michael"
    assert FUNCTIONS["cmp"](john, anna) == 1
    assert FUNCTIONS["gt"](john, anna) is True
    assert FUNCTIONS["lt"](john, anna) is False
    assert FUNCTIONS["ne"](john, anna) is True
    assert FUNCTIONS["eq"](john, parse("Lee, John")) is True
    assert FUNCTIONS["family"](john) == "Lee"
    assert FUNCTIONS["given"](john) == "John"
    assert FUNCTIONS["display"](john) == "John Lee"


def test_function_table_is_read_only():
    with pytest.raises(TypeError):
        FUNCTIONS["in"] = str
