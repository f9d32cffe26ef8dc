# Copyright (c) 2026 Firefly Software Solutions Inc.
# Licensed under the Apache License, Version 2.0

"""
IPP Binary Decoding.

Parses an IPP message body into its preamble, attributes partitioned by
group, and any document data following the end-of-attributes tag.

Decoding is strict about structure and lenient about values:
- A short body, an attribute outside any group or a truncated length
  field raises MalformedMessageError
- A value whose length does not match its tag's layout, a date-time that
  is not 11 bytes and text that is not UTF-8 are returned as raw bytes
- Unknown value tags decode as raw bytes; unknown status codes pass through
"""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass, field
from typing import Any

from .attribute import IntRange, Resolution
from .exceptions import MalformedMessageError
from .protocol import (
    DATE_TIME_SIZE,
    FIXED_LENGTHS,
    GROUP_NAMES,
    HEADER_SIZE,
    MAX_DELIMITER_TAG,
    UNKNOWN_GROUP,
    GroupTag,
    ValueKind,
    kind_of,
)

logger = logging.getLogger(__name__)

# group name -> attribute name -> value, or list of values when repeated
AttributeSet = dict[str, dict[str, Any]]


@dataclass(frozen=True)
class DecodedMessage:
    """
    A decoded IPP message.

    Attributes:
        version: (major, minor) protocol version.
        status_code: Status code (responses) or operation code (requests).
        request_id: Signed 32-bit request identifier.
        attributes: Attributes by group name, then attribute name.
        data: Bytes following the end-of-attributes tag.
    """

    version: tuple[int, int]
    status_code: int
    request_id: int
    attributes: AttributeSet = field(default_factory=dict)
    data: bytes = b""


def decode_date_time(raw: bytes) -> str | bytes:
    """
    Decode an RFC 2579 DateAndTime to 'YYYY-MM-DDThh:mm:ss+hh:mm'.

    Anything that is not exactly 11 bytes, or whose UTC direction byte is
    not + or -, is returned unchanged.
    """
    if len(raw) != DATE_TIME_SIZE:
        logger.debug("date-time value of %d bytes returned raw", len(raw))
        return raw

    year, month, day, hour, minute, second, _deci, direction, off_h, off_m = struct.unpack(
        ">HBBBBBBcBB", raw
    )
    if direction not in (b"+", b"-"):
        logger.debug("date-time value with direction byte %r returned raw", direction)
        return raw
    sign = direction.decode("ascii")
    return (
        f"{year:04d}-{month:02d}-{day:02d}T{hour:02d}:{minute:02d}:{second:02d}"
        f"{sign}{off_h:02d}:{off_m:02d}"
    )


def decode_value(tag: int, raw: bytes) -> Any:
    """
    Decode one attribute value from its raw bytes.

    Args:
        tag: Value tag byte; tags outside ValueTag decode as bytes.
        raw: Value bytes without the length prefix.
    """
    kind = kind_of(tag)

    expected = FIXED_LENGTHS.get(kind)
    if expected is not None and len(raw) != expected:
        logger.debug(
            "value tag 0x%02X expects %d bytes, got %d; returned raw", tag, expected, len(raw)
        )
        return raw

    if kind is ValueKind.INTEGER:
        return struct.unpack(">i", raw)[0]

    if kind is ValueKind.BOOLEAN:
        return raw[0] != 0

    if kind is ValueKind.RANGE:
        low, high = struct.unpack(">ii", raw)
        return IntRange(low, high)

    if kind is ValueKind.RESOLUTION:
        cross_feed, feed, units = struct.unpack(">iiB", raw)
        return Resolution(cross_feed, feed, units)

    if kind is ValueKind.DATE_TIME:
        return decode_date_time(raw)

    if kind is ValueKind.TEXT:
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            logger.debug("value tag 0x%02X is not valid UTF-8; returned raw", tag)
            return raw

    return raw


class IppDecoder:
    """
    Single-use decoder over one IPP message body.

    Example:
        >>> message = IppDecoder(body).decode()
        >>> message.attributes["printer"]["printer-state"]
        3
    """

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    def decode(self) -> DecodedMessage:
        """
        Decode the whole message.

        Raises:
            MalformedMessageError: If the message structure is invalid.
        """
        if len(self._data) < HEADER_SIZE:
            raise MalformedMessageError(f"too short ({len(self._data)} bytes, need {HEADER_SIZE})")

        self._pos = 0
        major, minor, status_code, request_id = struct.unpack(">BBHi", self._read(HEADER_SIZE))
        attributes = self._read_attributes()

        message = DecodedMessage(
            version=(major, minor),
            status_code=status_code,
            request_id=request_id,
            attributes=attributes,
            data=self._data[self._pos:],
        )
        logger.debug(
            "Decoded IPP message status=0x%04X request_id=%d groups=%s data=%d",
            status_code,
            request_id,
            list(attributes),
            len(message.data),
        )
        return message

    def _read(self, size: int) -> bytes:
        end = self._pos + size
        if end > len(self._data):
            raise MalformedMessageError(
                f"truncated: need {size} bytes, {len(self._data) - self._pos} left", self._pos
            )
        chunk = self._data[self._pos:end]
        self._pos = end
        return chunk

    def _read_short(self) -> int:
        return struct.unpack(">H", self._read(2))[0]

    def _read_attributes(self) -> AttributeSet:
        groups: AttributeSet = {}
        group: dict[str, Any] | None = None
        name = ""

        while self._pos < len(self._data):
            tag = self._read(1)[0]

            if tag <= MAX_DELIMITER_TAG:
                if tag == GroupTag.END_OF_ATTRIBUTES:
                    break
                group = groups.setdefault(GROUP_NAMES.get(tag, UNKNOWN_GROUP), {})
                continue

            if group is None:
                raise MalformedMessageError("attribute found before attribute group tag", self._pos - 1)

            name_length = self._read_short()
            if name_length > 0:
                name = self._read(name_length).decode("utf-8", errors="replace")

            value = decode_value(tag, self._read(self._read_short()))

            # Zero-length name: next value of the previous attribute
            if name not in group:
                group[name] = value
            elif isinstance(group[name], list):
                group[name].append(value)
            else:
                group[name] = [group[name], value]

        return groups


def decode_message(data: bytes) -> DecodedMessage:
    """
    Decode an IPP message body.

    Args:
        data: Complete message body (HTTP body of an application/ipp response).

    Returns:
        DecodedMessage with version, status, request id, attributes and data.

    Raises:
        MalformedMessageError: If the body is too short or structurally invalid.
    """
    return IppDecoder(data).decode()
