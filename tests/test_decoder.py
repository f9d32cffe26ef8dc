# Copyright (c) 2026 Firefly Software Solutions Inc.
# Licensed under the Apache License, Version 2.0

"""Tests for IPP binary decoding."""

import struct

import pytest

from pycoffeecups.attribute import Attribute, IntRange, Resolution
from pycoffeecups.decoder import DecodedMessage, IppDecoder, decode_date_time, decode_message, decode_value
from pycoffeecups.encoder import encode_message
from pycoffeecups.exceptions import IppError, MalformedMessageError
from pycoffeecups.protocol import INT32_MAX, INT32_MIN, GroupTag, ValueKind, ValueTag


def header(status: int = 0, request_id: int = 1) -> bytes:
    return struct.pack(">BBHi", 2, 0, status, request_id)


def attr(tag: int, name: str, value: bytes) -> bytes:
    encoded = name.encode("utf-8")
    return struct.pack(">BH", tag, len(encoded)) + encoded + struct.pack(">H", len(value)) + value


class TestPreamble:
    """Tests for the 8-byte message header."""

    @pytest.mark.parametrize("size", [0, 1, 7])
    def test_too_short(self, size: int) -> None:
        """Test bodies shorter than the header are rejected."""
        with pytest.raises(MalformedMessageError, match="too short"):
            decode_message(b"\x02" * size)

    def test_header_only(self) -> None:
        """Test a bare header decodes with no attributes."""
        message = decode_message(header(0x0001, 42))
        assert message == DecodedMessage((2, 0), 0x0001, 42, {}, b"")

    def test_negative_request_id(self) -> None:
        """Test the request id is signed."""
        assert decode_message(b"\x02\x00\x00\x00\xff\xff\xff\xff").request_id == -1

    def test_unknown_status_passes_through(self) -> None:
        """Test status codes outside the catalog are kept."""
        assert decode_message(header(0x0BAD) + b"\x03").status_code == 0x0BAD

    def test_version(self) -> None:
        """Test the version bytes."""
        assert decode_message(b"\x01\x01\x00\x00\x00\x00\x00\x01\x03").version == (1, 1)


class TestStructure:
    """Tests for structural errors and group handling."""

    def test_attribute_before_group(self) -> None:
        """Test an attribute with no open group is rejected."""
        data = header() + attr(0x21, "copies", b"\x00\x00\x00\x01") + b"\x03"
        with pytest.raises(MalformedMessageError, match="before attribute group tag") as exc_info:
            decode_message(data)
        assert exc_info.value.offset == 8

    def test_truncated_name_length(self) -> None:
        """Test a name length cut short is rejected."""
        with pytest.raises(MalformedMessageError, match="truncated"):
            decode_message(header() + b"\x01\x42\x00")

    def test_truncated_value(self) -> None:
        """Test a value running past the end of the body is rejected."""
        data = header() + b"\x01" + b"\x42\x00\x01n\x00\x0aabc"
        with pytest.raises(MalformedMessageError, match="truncated"):
            decode_message(data)

    def test_malformed_is_ipp_error(self) -> None:
        """Test decoding errors sit in the protocol branch."""
        with pytest.raises(IppError, match="Invalid IPP response"):
            decode_message(b"")

    def test_printer_state(self) -> None:
        """Test a printer group with an enum value."""
        data = (
            header()
            + b"\x04"
            + attr(0x42, "printer-name", b"Office")
            + attr(0x23, "printer-state", b"\x00\x00\x00\x03")
            + attr(0x44, "printer-state-reasons", b"none")
            + b"\x03"
        )
        message = decode_message(data)
        assert message.attributes["printer"]["printer-state"] == 3
        assert message.attributes == {
            "printer": {
                "printer-name": "Office",
                "printer-state": 3,
                "printer-state-reasons": "none",
            }
        }

    def test_missing_end_tag(self) -> None:
        """Test a body that ends without end-of-attributes still decodes."""
        data = header() + b"\x01" + attr(0x47, "attributes-charset", b"utf-8")
        assert decode_message(data).attributes == {"operation": {"attributes-charset": "utf-8"}}

    def test_data_after_end(self) -> None:
        """Test bytes after end-of-attributes become the document data."""
        data = header() + b"\x01" + attr(0x48, "attributes-natural-language", b"en") + b"\x03%PDF-1.4"
        assert decode_message(data).data == b"%PDF-1.4"

    def test_unknown_group(self) -> None:
        """Test attributes of unknown groups land in the unknown bucket."""
        data = header() + b"\x06" + attr(0x44, "k", b"v") + b"\x03"
        assert decode_message(data).attributes == {"unknown": {"k": "v"}}

    def test_additional_values(self) -> None:
        """Test zero-length names append to the previous attribute."""
        data = (
            header()
            + b"\x04"
            + attr(0x44, "sides-supported", b"one-sided")
            + attr(0x44, "", b"two-sided-long-edge")
            + attr(0x44, "", b"two-sided-short-edge")
            + b"\x03"
        )
        assert decode_message(data).attributes["printer"]["sides-supported"] == [
            "one-sided",
            "two-sided-long-edge",
            "two-sided-short-edge",
        ]

    def test_repeated_groups_merge(self) -> None:
        """Test a second group of the same kind merges into the first."""
        data = (
            header()
            + b"\x02"
            + attr(0x21, "job-id", b"\x00\x00\x00\x01")
            + b"\x02"
            + attr(0x21, "job-id", b"\x00\x00\x00\x02")
            + b"\x03"
        )
        assert decode_message(data).attributes == {"job": {"job-id": [1, 2]}}

    def test_decoder_is_reusable(self) -> None:
        """Test decode() can be called twice on the same body."""
        decoder = IppDecoder(header() + b"\x03")
        assert decoder.decode() == decoder.decode()


class TestDecodeValue:
    """Tests for value decoding."""

    def test_boolean(self) -> None:
        """Test any non-zero byte is true."""
        assert decode_value(ValueTag.BOOLEAN, b"\x00") is False
        assert decode_value(ValueTag.BOOLEAN, b"\x02") is True

    def test_range_and_resolution(self) -> None:
        """Test composite values."""
        assert decode_value(ValueTag.RANGE_OF_INTEGER, struct.pack(">ii", -5, 5)) == IntRange(-5, 5)
        assert decode_value(ValueTag.RESOLUTION, struct.pack(">iiB", 600, 300, 4)) == Resolution(600, 300, 4)

    def test_date_time(self) -> None:
        """Test an 11-byte DateAndTime decodes to text."""
        raw = bytes([0x07, 0xE8, 0x01, 0x0F, 0x0A, 0x1E, 0x00, 0x00, 0x2B, 0x05, 0x00])
        assert decode_value(ValueTag.DATE_TIME, raw) == "2024-01-15T10:30:00+05:00"

    def test_short_date_time_is_raw(self) -> None:
        """Test a date-time that is not 11 bytes is returned raw."""
        assert decode_date_time(b"\x07\xe8\x01\x0f\x0a") == b"\x07\xe8\x01\x0f\x0a"
        data = header() + b"\x01" + attr(0x31, "t", b"\x07\xe8\x01\x0f\x0a") + b"\x03"
        assert decode_message(data).attributes["operation"]["t"] == b"\x07\xe8\x01\x0f\x0a"

    def test_wrong_integer_length_is_raw(self) -> None:
        """Test a fixed-size value with the wrong length is returned raw."""
        assert decode_value(ValueTag.INTEGER, b"\x00\x01") == b"\x00\x01"
        data = header() + b"\x04" + attr(0x21, "x", b"\x00\x01") + attr(0x44, "y", b"z") + b"\x03"
        assert decode_message(data).attributes["printer"] == {"x": b"\x00\x01", "y": "z"}

    def test_invalid_utf8_is_raw(self) -> None:
        """Test text that is not UTF-8 is returned raw."""
        assert decode_value(ValueTag.TEXT_WITHOUT_LANGUAGE, b"\xff\xfe") == b"\xff\xfe"

    def test_unknown_tag_is_raw(self) -> None:
        """Test values with unknown tags are returned raw."""
        assert decode_value(0x7F, b"\x01\x02") == b"\x01\x02"
        data = header() + b"\x04" + attr(0x7F, "vendor", b"\x01\x02") + b"\x03"
        assert decode_message(data).attributes["printer"]["vendor"] == b"\x01\x02"

    def test_out_of_band_value(self) -> None:
        """Test out-of-band tags carry their (empty) bytes."""
        assert decode_value(ValueTag.NO_VALUE, b"") == b""


class TestRoundTrip:
    """Tests for encode/decode symmetry."""

    def test_every_value_kind(self) -> None:
        """Test each value layout survives a round trip."""
        attributes = [
            Attribute.integer("integer", -7),
            Attribute.enum("enum", 4),
            Attribute.boolean("boolean", True),
            Attribute.range_of_integer("range", 1, 99),
            Attribute.resolution("resolution", 600, 300),
            Attribute.date_time("date-time", "2024-01-15T10:30:00-03:30"),
            Attribute.text("text", "héllo"),
            Attribute.keyword("keyword", ["a", "b", "c"]),
            Attribute.uri("uri", "ipp://localhost:631/printers/P1"),
            Attribute.octet_string("octets", b"\x00\x01\xff"),
        ]
        data = encode_message(0, 3, [(GroupTag.PRINTER, attributes)], b"trailer")
        message = decode_message(data)

        assert message.attributes["printer"] == {
            "integer": -7,
            "enum": 4,
            "boolean": True,
            "range": IntRange(1, 99),
            "resolution": Resolution(600, 300, 3),
            "date-time": "2024-01-15T10:30:00-03:30",
            "text": "héllo",
            "keyword": ["a", "b", "c"],
            "uri": "ipp://localhost:631/printers/P1",
            "octets": b"\x00\x01\xff",
        }
        assert message.data == b"trailer"
        assert message.request_id == 3

    @pytest.mark.parametrize("value", [INT32_MIN, -1, 0, 1, INT32_MAX])
    def test_int32_boundaries(self, value: int) -> None:
        """Test integers at the edges of the signed 32-bit range."""
        data = encode_message(0, 1, [(GroupTag.JOB, [Attribute.integer("n", value)])])
        assert decode_message(data).attributes["job"]["n"] == value

    def test_raw_date_time_round_trip(self) -> None:
        """Test a raw date-time value is written back unchanged."""
        data = encode_message(0, 1, [(GroupTag.JOB, [Attribute(ValueTag.DATE_TIME, "t", b"\x01\x02")])])
        assert decode_message(data).attributes["job"]["t"] == b"\x01\x02"


SAMPLE_VALUES = {
    ValueKind.INTEGER: (-7, [INT32_MIN, 0, INT32_MAX]),
    ValueKind.BOOLEAN: (True, [True, False]),
    ValueKind.RANGE: (IntRange(1, 99), [IntRange(1, 5), IntRange(-3, 3)]),
    ValueKind.RESOLUTION: (Resolution(600, 300, 3), [Resolution(600, 600, 3), Resolution(1200, 1200, 4)]),
    ValueKind.DATE_TIME: (
        "2024-01-15T10:30:00-03:30",
        ["2024-01-15T10:30:00+05:00", "1999-12-31T23:59:59+00:00"],
    ),
    ValueKind.TEXT: ("héllo", ["one-sided", "two-sided-long-edge", "ünïcode"]),
    ValueKind.OCTETS: (b"\x00\x01\xff", [b"\x01", b"", b"\xfe\xff"]),
}


def round_trip(attribute: Attribute) -> Attribute:
    data = encode_message(0, 1, [(GroupTag.PRINTER, [attribute])])
    decoded = decode_message(data).attributes["printer"]
    assert list(decoded) == [attribute.name]
    return Attribute(attribute.tag, attribute.name, decoded[attribute.name])


class TestEveryValueTag:
    """Tests for decode(encode(attribute)) == attribute across the tag catalog."""

    def test_samples_cover_every_kind(self) -> None:
        """Test every tag's layout has sample values."""
        assert {tag.kind for tag in ValueTag} <= set(SAMPLE_VALUES)

    @pytest.mark.parametrize("tag", list(ValueTag), ids=lambda tag: tag.name)
    def test_single_value(self, tag: ValueTag) -> None:
        """Test a single-valued attribute survives a round trip."""
        attribute = Attribute(tag, "sample", SAMPLE_VALUES[tag.kind][0])
        assert round_trip(attribute) == attribute
        assert not attribute.is_multi_valued

    @pytest.mark.parametrize("tag", list(ValueTag), ids=lambda tag: tag.name)
    def test_multiple_values(self, tag: ValueTag) -> None:
        """Test a multi-valued attribute keeps its values in order."""
        attribute = Attribute(tag, "sample", SAMPLE_VALUES[tag.kind][1])
        assert attribute.is_multi_valued
        assert round_trip(attribute) == attribute


class TestDateTimeDirection:
    """Tests for the UTC direction byte of DateAndTime values."""

    @pytest.mark.parametrize("direction", [b"\x00", b"Z", b" "])
    def test_invalid_direction_is_raw(self, direction: bytes) -> None:
        """Test a direction other than + or - leaves the value raw."""
        raw = bytes([0x07, 0xE8, 0x01, 0x0F, 0x0A, 0x1E, 0x00, 0x00]) + direction + b"\x05\x00"
        assert decode_date_time(raw) == raw
        data = header() + b"\x04" + attr(0x31, "printer-current-time", raw) + b"\x03"
        assert decode_message(data).attributes["printer"]["printer-current-time"] == raw

    def test_negative_direction(self) -> None:
        """Test a west-of-UTC offset."""
        raw = struct.pack(">HBBBBBBcBB", 2024, 1, 15, 10, 30, 0, 0, b"-", 3, 30)
        assert decode_date_time(raw) == "2024-01-15T10:30:00-03:30"
