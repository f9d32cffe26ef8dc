# Copyright (c) 2026 Firefly Software Solutions Inc.
# Licensed under the Apache License, Version 2.0

"""
IPP Binary Encoding.

Serializes the preamble, attribute groups and document data of an IPP
message into one contiguous buffer.

Binary Format Conventions:
- All multi-byte integers are big-endian
- Names and values are length-prefixed: [2 bytes len][N bytes]
- Integers and enums are 4-byte signed values with a length of 4
- Booleans are 1 byte (0x00 = False, 0x01 = True)
- Document data follows the end-of-attributes tag with no length prefix
"""

from __future__ import annotations

import logging
import struct
from collections.abc import Iterable
from datetime import datetime, timezone

from .attribute import DATE_TIME_PATTERN, Attribute, IntRange, Resolution, Value
from .exceptions import IppEncodeError, ValueTooLongError
from .protocol import INT32_MAX, INT32_MIN, IPP_VERSION, MAX_LENGTH, GroupTag, ValueKind

logger = logging.getLogger(__name__)


def _length_prefixed(what: str, data: bytes) -> bytes:
    if len(data) > MAX_LENGTH:
        raise ValueTooLongError(what, len(data), MAX_LENGTH)
    return struct.pack(">H", len(data)) + data


def encode_date_time(value: datetime | str) -> bytes:
    """
    Encode a date-time as an 11-byte RFC 2579 DateAndTime.

    Format: [2B year][month][day][hour][minute][second][deci-second]
            [direction '+'/'-'][hours from UTC][minutes from UTC]

    Naive datetimes are taken as UTC.
    """
    if isinstance(value, datetime):
        offset = value.utcoffset()
        minutes = int(offset.total_seconds() // 60) if offset is not None else 0
        fields = (
            value.year,
            value.month,
            value.day,
            value.hour,
            value.minute,
            value.second,
            value.microsecond // 100000,
        )
    else:
        match = DATE_TIME_PATTERN.match(value)
        if match is None:
            raise IppEncodeError(f"Invalid date-time string: {value!r}")
        year, month, day, hour, minute, second, deci, sign, off_h, off_m = match.groups()
        fields = (
            int(year),
            int(month),
            int(day),
            int(hour),
            int(minute),
            int(second),
            int(deci or 0),
        )
        minutes = int(off_h) * 60 + int(off_m)
        if sign == "-":
            minutes = -minutes

    direction = b"-" if minutes < 0 else b"+"
    hours_from_utc, minutes_from_utc = divmod(abs(minutes), 60)
    return struct.pack(">HBBBBBBcBB", *fields, direction, hours_from_utc, minutes_from_utc)


def encode_value(kind: ValueKind, value: Value) -> bytes:
    """
    Encode one attribute value, including its 2-byte length prefix.

    Layouts:
        integer / enum   [00 04][4B signed]
        boolean          [00 01][1B]
        rangeOfInteger   [00 08][4B low][4B high]
        resolution       [00 09][4B cross-feed][4B feed][1B units]
        dateTime         [00 0B][11B DateAndTime]
        everything else  [2B len][UTF-8 or raw bytes]
    """
    if kind is ValueKind.INTEGER:
        return struct.pack(">Hi", 4, value)

    if kind is ValueKind.BOOLEAN:
        return struct.pack(">HB", 1, 1 if value else 0)

    if kind is ValueKind.RANGE:
        if not isinstance(value, IntRange):
            raise IppEncodeError(f"Expected an IntRange for rangeOfInteger, got {type(value).__name__}")
        return struct.pack(">Hii", 8, value.low, value.high)

    if kind is ValueKind.RESOLUTION:
        if not isinstance(value, Resolution):
            raise IppEncodeError(f"Expected a Resolution for resolution, got {type(value).__name__}")
        return struct.pack(">HiiB", 9, value.cross_feed, value.feed, value.units)

    if kind is ValueKind.DATE_TIME:
        if isinstance(value, bytes):
            # Opaque value, passed through as decoded
            return _length_prefixed("date-time value", value)
        return struct.pack(">H", 11) + encode_date_time(value)

    if kind is ValueKind.TEXT:
        return _length_prefixed("value", value.encode("utf-8"))

    if kind is ValueKind.OCTETS:
        return _length_prefixed("value", value)

    raise IppEncodeError(f"No encoding for value kind {kind}")


def encode_attribute(attribute: Attribute) -> bytes:
    """
    Encode an attribute with all of its values.

    Format (first value):      [1B tag][2B name_len][name][2B value_len][value]
    Format (further values):   [1B tag][00 00][2B value_len][value]
    """
    tag = struct.pack(">B", attribute.tag)
    name = _length_prefixed(f"attribute name {attribute.name[:32]!r}", attribute.name.encode("utf-8"))
    kind = attribute.tag.kind

    parts = []
    for index, value in enumerate(attribute.values):
        parts.append(tag)
        parts.append(name if index == 0 else b"\x00\x00")
        try:
            parts.append(encode_value(kind, value))
        except ValueTooLongError as e:
            raise ValueTooLongError(f"value of {attribute.name!r}", e.size, e.max_size) from e
    return b"".join(parts)


class IppEncoder:
    """
    Incremental IPP message writer.

    Every write method returns the encoder, so a message reads in wire
    order:

        >>> data = (IppEncoder()
        ...     .write_version(2, 0)
        ...     .write_operation(Operation.GET_PRINTER_ATTRIBUTES)
        ...     .write_request_id(1)
        ...     .write_group(GroupTag.OPERATION)
        ...     .write_attribute(Attribute.charset("utf-8"))
        ...     .write_end_of_attributes()
        ...     .getvalue())
    """

    def __init__(self) -> None:
        self._parts: list[bytes] = []

    def write_version(self, major: int = IPP_VERSION[0], minor: int = IPP_VERSION[1]) -> IppEncoder:
        if not (0 <= major <= 0xFF and 0 <= minor <= 0xFF):
            raise IppEncodeError(f"Invalid IPP version {major}.{minor}")
        self._parts.append(struct.pack(">BB", major, minor))
        return self

    def write_operation(self, operation: int) -> IppEncoder:
        """Write the operation code of a request."""
        return self._write_code("operation code", operation)

    def write_status_code(self, status_code: int) -> IppEncoder:
        """Write the status code of a response."""
        return self._write_code("status code", status_code)

    def _write_code(self, what: str, code: int) -> IppEncoder:
        if not 0 <= code <= 0xFFFF:
            raise IppEncodeError(f"Invalid {what} {code}: must fit in 16 bits")
        self._parts.append(struct.pack(">H", code))
        return self

    def write_request_id(self, request_id: int) -> IppEncoder:
        if not INT32_MIN <= request_id <= INT32_MAX:
            raise IppEncodeError(f"Invalid request id {request_id}: must fit in a signed 32-bit integer")
        self._parts.append(struct.pack(">i", request_id))
        return self

    def write_group(self, group: GroupTag) -> IppEncoder:
        self._parts.append(struct.pack(">B", group))
        return self

    def write_attribute(self, attribute: Attribute) -> IppEncoder:
        self._parts.append(encode_attribute(attribute))
        return self

    def write_attributes(self, attributes: Iterable[Attribute]) -> IppEncoder:
        for attribute in attributes:
            self.write_attribute(attribute)
        return self

    def write_end_of_attributes(self) -> IppEncoder:
        self._parts.append(struct.pack(">B", GroupTag.END_OF_ATTRIBUTES))
        return self

    def write_data(self, data: bytes) -> IppEncoder:
        """Append document data verbatim."""
        self._parts.append(bytes(data))
        return self

    def getvalue(self) -> bytes:
        return b"".join(self._parts)

    def reset(self) -> IppEncoder:
        self._parts.clear()
        return self


def encode_message(
    code: int,
    request_id: int,
    groups: Iterable[tuple[GroupTag, Iterable[Attribute]]],
    data: bytes = b"",
    *,
    version: tuple[int, int] = IPP_VERSION,
) -> bytes:
    """
    Encode a complete IPP message.

    Args:
        code: Operation code (requests) or status code (responses).
        request_id: Request identifier, signed 32-bit.
        groups: (group tag, attributes) pairs in wire order. Groups without
            attributes are skipped.
        data: Optional document data appended after end-of-attributes.
        version: (major, minor) protocol version.

    Returns:
        The encoded message body.

    Raises:
        IppEncodeError: If the preamble is out of range.
        ValueTooLongError: If a name or value exceeds 65535 bytes.
    """
    encoder = IppEncoder()
    encoder.write_version(*version)
    encoder.write_operation(code)
    encoder.write_request_id(request_id)

    for group, attributes in groups:
        attributes = list(attributes)
        if not attributes:
            continue
        encoder.write_group(group)
        encoder.write_attributes(attributes)

    encoder.write_end_of_attributes()
    if data:
        encoder.write_data(data)

    message = encoder.getvalue()
    logger.debug(
        "Encoded IPP message code=0x%04X request_id=%d size=%d data=%d",
        code,
        request_id,
        len(message),
        len(data),
    )
    return message
