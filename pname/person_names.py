"""
Person Name Type Module

This module implements a small text type for person names written in the canonical
form ``Family, Given [Middle...]``. Values are validated on the way in, stored as the
exact input text, and compared by family name first and given name second.

## Overview

The pipeline is deliberately short:

1. **Grammar Validation**: ``PersonNameValidator`` checks raw text against the name grammar
2. **Parsing**: ``PersonNameParser`` records where the separating comma sits
3. **Component Extraction**: ``PersonName`` derives family, given, middle and display forms
4. **Ordering**: ``compare`` and the ``lt``/``le``/``eq``/``ge``/``gt``/``ne`` predicates
5. **Codecs**: ``PersonNameCodec`` renders canonical text and length-prefixed binary frames

## Grammar

- A word is an uppercase ASCII letter followed by one or more letters, apostrophes or hyphens
- Family and given segments are one or more words separated by single spaces
- The segments are joined by a comma and at most one space
- Any words after the given name are middle names

Only ASCII letters are accepted; "Müller, Hans" is rejected.

## Usage Examples

```python
from pname.person_names import parse, compare, to_binary, from_binary

name = parse("Lee, John Michael")
name.family()   # "Lee"
name.given()    # "John"
name.middle()   # ("Michael",)
name.display()  # "John Lee"

compare(parse("Lee, John"), parse("Lee, Anna"))  # 1
parse("Lee,John") == parse("Lee, John")  # True: same family and given name

from_binary(to_binary(name)).original  # "Lee, John Michael"

parse("JohnLee")
# InvalidFormat: invalid input syntax for type person name: "JohnLee" (missing ',' ...)
```

## Equality

``==`` on ``PersonName`` is ordering equality: two names are equal when their family and
given names match, whatever their middle names or the spacing after the comma. Use
``same_text`` (or compare ``original``) when the exact canonical text matters.

## Thread Safety

Every value is immutable and every derived view is recomputed on demand, so names may be
parsed, compared and encoded from any number of threads without coordination.
"""

from __future__ import annotations
import logging
import re
import struct
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Any, Callable, Iterable, List, Optional, Tuple, Union

from pname.person_names_data import (
    NAME_PATTERN,
    NAME_SEPARATOR,
    WORD_SEPARATOR,
    LENGTH_PREFIX_FORMAT,
    TEXT_ENCODING,
    REJECTION_REASONS,
    ORDERING_FUNCTION_NAMES,
    IO_FUNCTION_NAMES,
    ACCESSOR_FUNCTION_NAMES,
)


# ════════════════════════════════════════════════════════════════════════════════
# ERRORS
# ════════════════════════════════════════════════════════════════════════════════


class InvalidFormat(ValueError):
    """Raised when text is not a valid person name."""

    def __init__(self, offending_text: str, reason: Optional[str] = None):
        self.offending_text = offending_text
        self.reason = reason
        message = f'invalid input syntax for type person name: "{offending_text}"'
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class GrammarInconsistencyError(RuntimeError):
    """The validator accepted text that has no separating comma.

    Only reachable with a custom ``name_pattern``; it signals a broken configuration,
    never bad user input.
    """


# ════════════════════════════════════════════════════════════════════════════════
# RESULT TYPES
# ════════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class ParseResult:
    """Result of a parse - success carries a value, failure carries a message."""

    success: bool
    result: Any
    error_message: Optional[str] = None

    @classmethod
    def success_with_name(cls, name: "PersonName") -> "ParseResult":
        return cls(success=True, result=name, error_message=None)

    @classmethod
    def failure(cls, error_message: str) -> "ParseResult":
        return cls(success=False, result=None, error_message=error_message)

    def map(self, f: Callable[[Any], Any]) -> "ParseResult":
        """Apply ``f`` to a successful result, e.g. ``try_parse(text).map(display)``."""
        if self.success:
            return ParseResult(success=True, result=f(self.result), error_message=None)
        return self

    def flat_map(self, f: Callable[[Any], "ParseResult"]) -> "ParseResult":
        """Chain a step that returns its own ParseResult; InvalidFormat becomes a failure."""
        if self.success:
            try:
                return f(self.result)
            except InvalidFormat as e:
                return ParseResult.failure(str(e))
        return self


# ════════════════════════════════════════════════════════════════════════════════
# IMMUTABLE CONFIGURATION DATA
# ════════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class PersonNameConfig:
    """Immutable configuration for validation and binary framing."""

    # Precompiled grammar, applied with fullmatch
    name_pattern: re.Pattern[str]

    # Binary framing
    length_prefix: struct.Struct
    encoding: str

    @classmethod
    def create_default(cls) -> "PersonNameConfig":
        """Factory method for the standard grammar and a signed 32-bit big-endian length prefix."""
        return cls(
            name_pattern=re.compile(NAME_PATTERN),
            length_prefix=struct.Struct(LENGTH_PREFIX_FORMAT),
            encoding=TEXT_ENCODING,
        )

    def with_name_pattern(self, pattern: Union[str, re.Pattern[str]]) -> "PersonNameConfig":
        """Immutable update method for a stricter grammar; text outside the standard grammar still fails."""
        compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
        return replace(self, name_pattern=compiled)

    def with_length_prefix(self, fmt: str) -> "PersonNameConfig":
        """Immutable update method for the binary length prefix, e.g. ``">H"``."""
        return replace(self, length_prefix=struct.Struct(fmt))


# ════════════════════════════════════════════════════════════════════════════════
# GRAMMAR VALIDATOR
# ════════════════════════════════════════════════════════════════════════════════


class PersonNameValidator:
    """Checks raw text against the person name grammar."""

    def __init__(self, config: PersonNameConfig):
        self._config = config

    def is_valid(self, text: object) -> bool:
        return isinstance(text, str) and self._config.name_pattern.fullmatch(text) is not None

    def validate(self, text: object) -> None:
        """Return None for valid text, raise InvalidFormat otherwise."""
        if not isinstance(text, str):
            raise InvalidFormat(repr(text), REJECTION_REASONS["not_text"])

        if self._config.name_pattern.fullmatch(text) is not None:
            return

        reason = self._rejection_reason(text)
        logging.debug(f"Rejected person name {text!r}: {reason}")
        raise InvalidFormat(text, reason)

    def _rejection_reason(self, text: str) -> str:
        if not text:
            return REJECTION_REASONS["empty"]
        if NAME_SEPARATOR not in text:
            return REJECTION_REASONS["no_separator"]
        return REJECTION_REASONS["grammar"]


# Every PersonName matches the standard grammar, whatever grammar its parser was given
_STANDARD_VALIDATOR = PersonNameValidator(PersonNameConfig.create_default())


# ════════════════════════════════════════════════════════════════════════════════
# PARSED NAME
# ════════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, eq=False, repr=False)
class PersonName:
    """
    A validated person name.

    ``original`` is the exact validated text and ``comma_offset`` the index of the
    separating comma in it. Build values with ``parse``; direct construction checks
    ``original`` against the standard grammar and ``comma_offset`` against its first comma.

    Raises:
        InvalidFormat: ``original`` does not match the standard grammar
        ValueError: ``comma_offset`` is not the index of the first comma
    """

    original: str
    comma_offset: int

    def __post_init__(self) -> None:
        _STANDARD_VALIDATOR.validate(self.original)
        if self.comma_offset != self.original.find(NAME_SEPARATOR):
            raise ValueError(f"comma_offset {self.comma_offset} is not the first ',' in {self.original!r}")

    def family(self) -> str:
        """Everything before the comma."""
        return self.original[: self.comma_offset]

    def _remainder(self) -> str:
        # Skip the comma, then at most one space
        start = self.comma_offset + 1
        if self.original.startswith(WORD_SEPARATOR, start):
            start += 1
        return self.original[start:]

    def given(self) -> str:
        """First word after the comma."""
        return self._remainder().split(WORD_SEPARATOR, 1)[0]

    def middle(self) -> Tuple[str, ...]:
        """Words after the given name, possibly none."""
        return tuple(self._remainder().split(WORD_SEPARATOR)[1:])

    def display(self) -> str:
        """Given name then family name; middle names are dropped."""
        return f"{self.given()}{WORD_SEPARATOR}{self.family()}"

    def sort_key(self) -> Tuple[str, str]:
        return (self.family(), self.given())

    def __str__(self) -> str:
        return self.original

    def __repr__(self) -> str:
        return f"PersonName({self.original!r})"

    def __hash__(self) -> int:
        return hash(self.sort_key())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PersonName):
            return NotImplemented
        return compare(self, other) == 0

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, PersonName):
            return NotImplemented
        return compare(self, other) != 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, PersonName):
            return NotImplemented
        return compare(self, other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, PersonName):
            return NotImplemented
        return compare(self, other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, PersonName):
            return NotImplemented
        return compare(self, other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, PersonName):
            return NotImplemented
        return compare(self, other) >= 0


# ════════════════════════════════════════════════════════════════════════════════
# NAME PARSER
# ════════════════════════════════════════════════════════════════════════════════


class PersonNameParser:
    """Validating parser for ``Family, Given [Middle...]`` text."""

    def __init__(self, config: Optional[PersonNameConfig] = None):
        self._config = config or PersonNameConfig.create_default()
        self._validator = PersonNameValidator(self._config)

    @property
    def config(self) -> PersonNameConfig:
        return self._config

    def is_valid(self, text: object) -> bool:
        return self._validator.is_valid(text)

    def validate(self, text: object) -> None:
        self._validator.validate(text)

    def parse(self, text: str) -> PersonName:
        """
        Validate ``text`` and split it at the first comma.

        Raises:
            InvalidFormat: the text does not match the grammar
            GrammarInconsistencyError: the grammar accepted text without a comma
        """
        self._validator.validate(text)

        comma_offset = text.find(NAME_SEPARATOR)
        if comma_offset < 0:
            logging.error(f"Grammar accepted {text!r} but it has no ',' - check the configured name_pattern")
            raise GrammarInconsistencyError(f"validated person name {text!r} has no separating comma")

        return PersonName(original=text, comma_offset=comma_offset)

    def try_parse(self, text: str) -> ParseResult:
        """Like ``parse`` but reports bad input as a failed ParseResult."""
        try:
            return ParseResult.success_with_name(self.parse(text))
        except InvalidFormat as e:
            return ParseResult.failure(str(e))


# ════════════════════════════════════════════════════════════════════════════════
# TEXT AND BINARY CODECS
# ════════════════════════════════════════════════════════════════════════════════


class PersonNameCodec:
    """Canonical text and length-prefixed binary forms of a PersonName."""

    def __init__(self, parser: PersonNameParser):
        self._parser = parser
        self._config = parser.config

    def to_text(self, name: PersonName) -> str:
        """Canonical text is the validated input, unmodified."""
        return name.original

    def from_text(self, text: str) -> PersonName:
        return self._parser.parse(text)

    def to_binary(self, name: PersonName) -> bytes:
        payload = name.original.encode(self._config.encoding)
        return self._config.length_prefix.pack(len(payload)) + payload

    def read_binary(self, buffer: bytes, offset: int = 0) -> Tuple[PersonName, int]:
        """
        Read one frame starting at ``offset``.

        Returns:
            Tuple of (name, offset just past the frame), so consecutive frames can be read
            from one message buffer.
        """
        prefix = self._config.length_prefix
        if offset < 0 or len(buffer) - offset < prefix.size:
            raise self._framing_error(buffer, "truncated_prefix")

        (length,) = prefix.unpack_from(buffer, offset)
        start = offset + prefix.size
        end = start + length
        if length < 0 or end > len(buffer):
            raise self._framing_error(buffer, "bad_length")

        try:
            text = bytes(buffer[start:end]).decode(self._config.encoding)
        except UnicodeDecodeError as e:
            raise self._framing_error(buffer, "bad_encoding") from e

        return self._parser.parse(text), end

    def from_binary(self, data: bytes) -> PersonName:
        """Decode exactly one frame; trailing bytes are rejected."""
        name, end = self.read_binary(data)
        if end != len(data):
            raise self._framing_error(data, "trailing_bytes")
        return name

    def _framing_error(self, buffer: bytes, reason_key: str) -> InvalidFormat:
        reason = REJECTION_REASONS[reason_key]
        logging.warning(f"Rejected binary person name ({len(buffer)} bytes): {reason}")
        return InvalidFormat(repr(bytes(buffer)), reason)


# ════════════════════════════════════════════════════════════════════════════════
# COMPARATOR
# ════════════════════════════════════════════════════════════════════════════════


def compare(a: PersonName, b: PersonName) -> int:
    """
    Order two names by family name, then given name, comparing code points.

    Middle names never break ties.

    Returns:
        -1, 0 or 1
    """
    a_family, b_family = a.family(), b.family()
    if a_family != b_family:
        return -1 if a_family < b_family else 1

    a_given, b_given = a.given(), b.given()
    if a_given != b_given:
        return -1 if a_given < b_given else 1

    return 0


def lt(a: PersonName, b: PersonName) -> bool:
    return compare(a, b) < 0


def le(a: PersonName, b: PersonName) -> bool:
    return compare(a, b) <= 0


def eq(a: PersonName, b: PersonName) -> bool:
    return compare(a, b) == 0


def ge(a: PersonName, b: PersonName) -> bool:
    return compare(a, b) >= 0


def gt(a: PersonName, b: PersonName) -> bool:
    return compare(a, b) > 0


def ne(a: PersonName, b: PersonName) -> bool:
    return compare(a, b) != 0


def sort_key(name: PersonName) -> Tuple[str, str]:
    return name.sort_key()


def sorted_names(names: Iterable[PersonName], reverse: bool = False) -> List[PersonName]:
    """Sort names by family then given name; the sort is stable for equal keys."""
    return sorted(names, key=sort_key, reverse=reverse)


def same_text(a: PersonName, b: PersonName) -> bool:
    """Structural identity: both values carry the same canonical text."""
    return a.original == b.original


# ════════════════════════════════════════════════════════════════════════════════
# MODULE-LEVEL CONVENIENCE FUNCTIONS
# ════════════════════════════════════════════════════════════════════════════════

# Global parser and codec instances for module-level functions
_default_parser: Optional[PersonNameParser] = None
_default_codec: Optional[PersonNameCodec] = None


def _get_default_parser() -> PersonNameParser:
    """Get or create the default parser instance."""
    global _default_parser
    if _default_parser is None:
        _default_parser = PersonNameParser()
    return _default_parser


def _get_default_codec() -> PersonNameCodec:
    """Get or create the default codec instance."""
    global _default_codec
    if _default_codec is None:
        _default_codec = PersonNameCodec(_get_default_parser())
    return _default_codec


def validate(text: object) -> None:
    """Raise InvalidFormat unless ``text`` is a valid person name."""
    _get_default_parser().validate(text)


def is_valid(text: object) -> bool:
    return _get_default_parser().is_valid(text)


def parse(text: str) -> PersonName:
    """
    Module-level convenience function for parsing.

    Args:
        text: Input such as ``"Lee, John"`` or ``"Lee,John Michael"``

    Returns:
        The parsed PersonName

    Raises:
        InvalidFormat: ``text`` does not match the grammar
    """
    return _get_default_parser().parse(text)


def try_parse(text: str) -> ParseResult:
    return _get_default_parser().try_parse(text)


def from_text(text: str) -> PersonName:
    return _get_default_codec().from_text(text)


def to_text(name: PersonName) -> str:
    return _get_default_codec().to_text(name)


def to_binary(name: PersonName) -> bytes:
    return _get_default_codec().to_binary(name)


def from_binary(data: bytes) -> PersonName:
    return _get_default_codec().from_binary(data)


def read_binary(buffer: bytes, offset: int = 0) -> Tuple[PersonName, int]:
    return _get_default_codec().read_binary(buffer, offset)


def family(name: PersonName) -> str:
    return name.family()


def given(name: PersonName) -> str:
    return name.given()


def middle(name: PersonName) -> Tuple[str, ...]:
    return name.middle()


def display(name: PersonName) -> str:
    return name.display()


# Stable, read-only table of boundary functions for host adapters
FUNCTIONS = MappingProxyType(
    {
        **dict(zip(IO_FUNCTION_NAMES, (from_text, to_text, from_binary, to_binary))),
        "cmp": compare,
        **dict(zip(ORDERING_FUNCTION_NAMES, (lt, le, eq, ge, gt, ne))),
        **dict(zip(ACCESSOR_FUNCTION_NAMES, (family, given, display))),
    }
)
