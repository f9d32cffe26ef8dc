# Copyright (c) 2026 Firefly Software Solutions Inc.
# Licensed under the Apache License, Version 2.0

"""
IPP attributes and composite value types.

An Attribute is a named, tagged value. Multi-valued attributes carry a
tuple of values that all share the attribute's tag:

    >>> Attribute.keyword("sides", "two-sided-long-edge")
    >>> Attribute(ValueTag.KEYWORD, "requested-attributes",
    ...           ["printer-name", "printer-state"])

Values are checked against the tag's wire layout when the attribute is
built, so an attribute that reaches the encoder can always be encoded.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Union

from .exceptions import InvalidAttributeError
from .protocol import INT32_MAX, INT32_MIN, ValueKind, ValueTag

# Resolution units (RFC 2911 section 4.1.15)
RESOLUTION_DPI: int = 3
RESOLUTION_DPCM: int = 4

# YYYY-MM-DDThh:mm:ss[.d]+hh:mm, the textual form of an RFC 2579 DateAndTime
DATE_TIME_PATTERN = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d))?([+-])(\d{2}):(\d{2})$"
)


@dataclass(frozen=True)
class IntRange:
    """rangeOfInteger value: inclusive lower and upper bound."""

    low: int
    high: int


@dataclass(frozen=True)
class Resolution:
    """resolution value: cross-feed and feed direction resolution plus units."""

    cross_feed: int
    feed: int
    units: int = RESOLUTION_DPI


Value = Union[int, bool, str, bytes, datetime, IntRange, Resolution]


def _int32(name: str, value: Any) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidAttributeError(name, f"expected an integer, got {type(value).__name__}")
    if not INT32_MIN <= value <= INT32_MAX:
        raise InvalidAttributeError(name, f"{value} does not fit in a signed 32-bit integer")
    return value


def _scalar(name: str, kind: ValueKind, value: Any) -> Value:
    """Validate and normalize one value for the given layout."""
    if kind is ValueKind.INTEGER:
        return _int32(name, value)

    if kind is ValueKind.BOOLEAN:
        if not isinstance(value, bool):
            raise InvalidAttributeError(name, f"expected a bool, got {type(value).__name__}")
        return value

    if kind is ValueKind.RANGE:
        if isinstance(value, (tuple, list)) and len(value) == 2:
            value = IntRange(*value)
        if not isinstance(value, IntRange):
            raise InvalidAttributeError(name, f"expected an IntRange, got {type(value).__name__}")
        _int32(name, value.low)
        _int32(name, value.high)
        return value

    if kind is ValueKind.RESOLUTION:
        if isinstance(value, (tuple, list)) and len(value) == 3:
            value = Resolution(*value)
        if not isinstance(value, Resolution):
            raise InvalidAttributeError(name, f"expected a Resolution, got {type(value).__name__}")
        _int32(name, value.cross_feed)
        _int32(name, value.feed)
        if not isinstance(value.units, int) or not 0 <= value.units <= 0xFF:
            raise InvalidAttributeError(name, f"resolution units must be a byte, got {value.units!r}")
        return value

    if kind is ValueKind.DATE_TIME:
        if isinstance(value, (bytes, bytearray)):
            return bytes(value)
        if isinstance(value, datetime):
            return value
        if isinstance(value, str) and DATE_TIME_PATTERN.match(value):
            return value
        raise InvalidAttributeError(
            name, f"expected a datetime or 'YYYY-MM-DDThh:mm:ss+hh:mm' string, got {value!r}"
        )

    if kind is ValueKind.TEXT:
        if not isinstance(value, str):
            raise InvalidAttributeError(name, f"expected a str, got {type(value).__name__}")
        return value

    # Octet strings and out-of-band values
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    raise InvalidAttributeError(name, f"expected bytes, got {type(value).__name__}")


def _is_composite_literal(kind: ValueKind, value: Sequence[Any]) -> bool:
    # (low, high) or (cross_feed, feed, units) written as a plain tuple
    size = {ValueKind.RANGE: 2, ValueKind.RESOLUTION: 3}.get(kind)
    return (
        size is not None
        and len(value) == size
        and all(isinstance(v, int) and not isinstance(v, bool) for v in value)
    )


@dataclass(frozen=True)
class Attribute:
    """
    A single IPP attribute.

    Attributes:
        tag: Value tag shared by every value of the attribute.
        name: Attribute name, e.g. "printer-uri".
        value: One value, or a tuple of values for multi-valued attributes.
            Lists are converted to tuples.
    """

    tag: ValueTag
    name: str
    value: Value | tuple[Value, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise InvalidAttributeError(str(self.name), "name must be a non-empty string")

        try:
            tag = ValueTag(self.tag)
        except ValueError:
            raise InvalidAttributeError(self.name, f"unknown value tag 0x{int(self.tag):02X}") from None
        object.__setattr__(self, "tag", tag)

        value = self.value
        if isinstance(value, (list, tuple)) and not _is_composite_literal(tag.kind, value):
            if not value:
                raise InvalidAttributeError(self.name, "a multi-valued attribute needs at least one value")
            value = tuple(_scalar(self.name, tag.kind, v) for v in value)
            if len(value) == 1:
                value = value[0]
        else:
            value = _scalar(self.name, tag.kind, value)
        object.__setattr__(self, "value", value)

    @property
    def values(self) -> tuple[Value, ...]:
        """All values of the attribute, in wire order."""
        if isinstance(self.value, tuple):
            return self.value
        return (self.value,)

    @property
    def is_multi_valued(self) -> bool:
        return isinstance(self.value, tuple)

    # =========================================================================
    # Well-known attributes
    # =========================================================================

    @classmethod
    def charset(cls, value: str) -> Attribute:
        return cls(ValueTag.CHARSET, "attributes-charset", value)

    @classmethod
    def natural_language(cls, value: str) -> Attribute:
        return cls(ValueTag.NATURAL_LANGUAGE, "attributes-natural-language", value)

    @classmethod
    def printer_uri(cls, uri: str) -> Attribute:
        return cls(ValueTag.URI, "printer-uri", uri)

    @classmethod
    def job_uri(cls, uri: str) -> Attribute:
        return cls(ValueTag.URI, "job-uri", uri)

    @classmethod
    def job_id(cls, job_id: int) -> Attribute:
        return cls(ValueTag.INTEGER, "job-id", job_id)

    @classmethod
    def requesting_user_name(cls, name: str) -> Attribute:
        return cls(ValueTag.NAME_WITHOUT_LANGUAGE, "requesting-user-name", name)

    @classmethod
    def job_name(cls, name: str) -> Attribute:
        return cls(ValueTag.NAME_WITHOUT_LANGUAGE, "job-name", name)

    @classmethod
    def document_name(cls, name: str) -> Attribute:
        return cls(ValueTag.NAME_WITHOUT_LANGUAGE, "document-name", name)

    @classmethod
    def document_format(cls, mime_type: str) -> Attribute:
        return cls(ValueTag.MIME_MEDIA_TYPE, "document-format", mime_type)

    @classmethod
    def copies(cls, copies: int) -> Attribute:
        return cls(ValueTag.INTEGER, "copies", copies)

    @classmethod
    def sides(cls, sides: str) -> Attribute:
        return cls(ValueTag.KEYWORD, "sides", sides)

    @classmethod
    def orientation(cls, orientation: int) -> Attribute:
        return cls(ValueTag.ENUM, "orientation-requested", orientation)

    @classmethod
    def print_quality(cls, quality: int) -> Attribute:
        return cls(ValueTag.ENUM, "print-quality", quality)

    @classmethod
    def requested_attributes(cls, names: Sequence[str]) -> Attribute:
        return cls(ValueTag.KEYWORD, "requested-attributes", list(names))

    # =========================================================================
    # Generic constructors by value type
    # =========================================================================

    @classmethod
    def integer(cls, name: str, value: int) -> Attribute:
        return cls(ValueTag.INTEGER, name, value)

    @classmethod
    def enum(cls, name: str, value: int) -> Attribute:
        return cls(ValueTag.ENUM, name, value)

    @classmethod
    def boolean(cls, name: str, value: bool) -> Attribute:
        return cls(ValueTag.BOOLEAN, name, value)

    @classmethod
    def keyword(cls, name: str, value: str | Sequence[str]) -> Attribute:
        return cls(ValueTag.KEYWORD, name, value)

    @classmethod
    def text(cls, name: str, value: str) -> Attribute:
        return cls(ValueTag.TEXT_WITHOUT_LANGUAGE, name, value)

    @classmethod
    def name_value(cls, name: str, value: str) -> Attribute:
        """nameWithoutLanguage attribute (``name`` is the attribute name)."""
        return cls(ValueTag.NAME_WITHOUT_LANGUAGE, name, value)

    @classmethod
    def uri(cls, name: str, value: str) -> Attribute:
        return cls(ValueTag.URI, name, value)

    @classmethod
    def mime_media_type(cls, name: str, value: str) -> Attribute:
        return cls(ValueTag.MIME_MEDIA_TYPE, name, value)

    @classmethod
    def octet_string(cls, name: str, value: bytes) -> Attribute:
        return cls(ValueTag.OCTET_STRING, name, value)

    @classmethod
    def range_of_integer(cls, name: str, low: int, high: int) -> Attribute:
        return cls(ValueTag.RANGE_OF_INTEGER, name, IntRange(low, high))

    @classmethod
    def resolution(cls, name: str, cross_feed: int, feed: int, units: int = RESOLUTION_DPI) -> Attribute:
        return cls(ValueTag.RESOLUTION, name, Resolution(cross_feed, feed, units))

    @classmethod
    def date_time(cls, name: str, value: datetime | str) -> Attribute:
        return cls(ValueTag.DATE_TIME, name, value)
