# Copyright (c) 2026 Firefly Software Solutions Inc.
# Licensed under the Apache License, Version 2.0

"""
IPP Binary Protocol Constants (RFC 2911).

Message Format:
    +-------+-------+---------------+-------------------------------+
    | Major | Minor | Op / Status   | Request ID (4 bytes, signed)  |
    +-------+-------+---------------+-------------------------------+
    | Group tag | Attribute* | ... | End-of-attributes (0x03)       |
    +---------------------------------------------------------------+
    |                 Document data (rest of the body)              |
    +---------------------------------------------------------------+

Attribute Format:
    [1B value tag][2B name len][name][2B value len][value]

    Additional values of a multi-valued attribute repeat the value tag
    with a zero name length.

Header Fields:
    - Version (2 bytes): major, minor (2.0 by default)
    - Op / Status (2 bytes): operation code in requests, status in responses
    - Request ID (4 bytes): echoed back by the server
"""

from __future__ import annotations

from enum import Enum, IntEnum

# Protocol constants
IPP_VERSION: tuple[int, int] = (2, 0)
HEADER_SIZE: int = 8
MAX_LENGTH: int = 0xFFFF  # unsigned 16-bit length fields
INT32_MIN: int = -(2**31)
INT32_MAX: int = 2**31 - 1
DATE_TIME_SIZE: int = 11
CONTENT_TYPE: str = "application/ipp"

# Tags up to this value delimit groups; anything above is a value tag
MAX_DELIMITER_TAG: int = 0x0F


class ValueKind(Enum):
    """Wire layout of an attribute value."""

    INTEGER = "integer"
    BOOLEAN = "boolean"
    RANGE = "range"
    RESOLUTION = "resolution"
    DATE_TIME = "date-time"
    TEXT = "text"
    OCTETS = "octets"


class ValueTag(IntEnum):
    """Value tags identifying an attribute value's type."""

    # Out-of-band values
    UNSUPPORTED = 0x10
    DEFAULT = 0x11
    UNKNOWN = 0x12
    NO_VALUE = 0x13
    NOT_SETTABLE = 0x15
    DELETE_ATTRIBUTE = 0x16
    ADMIN_DEFINE = 0x17

    # Integer values
    INTEGER = 0x21
    BOOLEAN = 0x22
    ENUM = 0x23

    # Octet string values
    OCTET_STRING = 0x30
    DATE_TIME = 0x31
    RESOLUTION = 0x32
    RANGE_OF_INTEGER = 0x33
    BEGIN_COLLECTION = 0x34
    TEXT_WITH_LANGUAGE = 0x35
    NAME_WITH_LANGUAGE = 0x36
    END_COLLECTION = 0x37

    # Character string values
    TEXT_WITHOUT_LANGUAGE = 0x41
    NAME_WITHOUT_LANGUAGE = 0x42
    KEYWORD = 0x44
    URI = 0x45
    URI_SCHEME = 0x46
    CHARSET = 0x47
    NATURAL_LANGUAGE = 0x48
    MIME_MEDIA_TYPE = 0x49
    MEMBER_ATTR_NAME = 0x4A

    @property
    def kind(self) -> ValueKind:
        """Wire layout used to encode and decode values with this tag."""
        return _VALUE_KINDS[self]


_VALUE_KINDS: dict[ValueTag, ValueKind] = {
    ValueTag.UNSUPPORTED: ValueKind.OCTETS,
    ValueTag.DEFAULT: ValueKind.OCTETS,
    ValueTag.UNKNOWN: ValueKind.OCTETS,
    ValueTag.NO_VALUE: ValueKind.OCTETS,
    ValueTag.NOT_SETTABLE: ValueKind.OCTETS,
    ValueTag.DELETE_ATTRIBUTE: ValueKind.OCTETS,
    ValueTag.ADMIN_DEFINE: ValueKind.OCTETS,
    ValueTag.INTEGER: ValueKind.INTEGER,
    ValueTag.BOOLEAN: ValueKind.BOOLEAN,
    ValueTag.ENUM: ValueKind.INTEGER,
    ValueTag.OCTET_STRING: ValueKind.OCTETS,
    ValueTag.DATE_TIME: ValueKind.DATE_TIME,
    ValueTag.RESOLUTION: ValueKind.RESOLUTION,
    ValueTag.RANGE_OF_INTEGER: ValueKind.RANGE,
    ValueTag.BEGIN_COLLECTION: ValueKind.OCTETS,
    ValueTag.TEXT_WITH_LANGUAGE: ValueKind.OCTETS,
    ValueTag.NAME_WITH_LANGUAGE: ValueKind.OCTETS,
    ValueTag.END_COLLECTION: ValueKind.OCTETS,
    ValueTag.TEXT_WITHOUT_LANGUAGE: ValueKind.TEXT,
    ValueTag.NAME_WITHOUT_LANGUAGE: ValueKind.TEXT,
    ValueTag.KEYWORD: ValueKind.TEXT,
    ValueTag.URI: ValueKind.TEXT,
    ValueTag.URI_SCHEME: ValueKind.TEXT,
    ValueTag.CHARSET: ValueKind.TEXT,
    ValueTag.NATURAL_LANGUAGE: ValueKind.TEXT,
    ValueTag.MIME_MEDIA_TYPE: ValueKind.TEXT,
    ValueTag.MEMBER_ATTR_NAME: ValueKind.TEXT,
}

# Fixed value lengths on the wire
FIXED_LENGTHS: dict[ValueKind, int] = {
    ValueKind.INTEGER: 4,
    ValueKind.BOOLEAN: 1,
    ValueKind.RANGE: 8,
    ValueKind.RESOLUTION: 9,
}


def kind_of(tag: int) -> ValueKind:
    """Return the layout for a raw tag byte; unknown tags are opaque octets."""
    try:
        return ValueTag(tag).kind
    except ValueError:
        return ValueKind.OCTETS


class GroupTag(IntEnum):
    """Delimiter tags marking the start of an attribute group."""

    OPERATION = 0x01
    JOB = 0x02
    END_OF_ATTRIBUTES = 0x03
    PRINTER = 0x04
    UNSUPPORTED = 0x05

    @property
    def group_name(self) -> str:
        """Name of the bucket decoded attributes of this group land in."""
        return GROUP_NAMES.get(self, UNKNOWN_GROUP)


GROUP_NAMES: dict[int, str] = {
    GroupTag.OPERATION: "operation",
    GroupTag.JOB: "job",
    GroupTag.PRINTER: "printer",
    GroupTag.UNSUPPORTED: "unsupported",
}
UNKNOWN_GROUP: str = "unknown"


class Operation(IntEnum):
    """IPP operation codes, including the CUPS vendor operations."""

    # Print operations (0x0002-0x0012)
    PRINT_JOB = 0x0002
    PRINT_URI = 0x0003
    VALIDATE_JOB = 0x0004
    CREATE_JOB = 0x0005
    SEND_DOCUMENT = 0x0006
    SEND_URI = 0x0007
    CANCEL_JOB = 0x0008
    GET_JOB_ATTRIBUTES = 0x0009
    GET_JOBS = 0x000A
    GET_PRINTER_ATTRIBUTES = 0x000B
    HOLD_JOB = 0x000C
    RELEASE_JOB = 0x000D
    RESTART_JOB = 0x000E
    PAUSE_PRINTER = 0x0010
    RESUME_PRINTER = 0x0011
    PURGE_JOBS = 0x0012

    # CUPS operations (0x4001-0x4027)
    CUPS_GET_DEFAULT = 0x4001
    CUPS_GET_PRINTERS = 0x4002
    CUPS_ADD_MODIFY_PRINTER = 0x4003
    CUPS_DELETE_PRINTER = 0x4004
    CUPS_GET_CLASSES = 0x4005
    CUPS_ADD_MODIFY_CLASS = 0x4006
    CUPS_DELETE_CLASS = 0x4007
    CUPS_ACCEPT_JOBS = 0x4008
    CUPS_REJECT_JOBS = 0x4009
    CUPS_SET_DEFAULT = 0x400A
    CUPS_GET_DEVICES = 0x400B
    CUPS_GET_PPDS = 0x400C
    CUPS_MOVE_JOB = 0x400D
    CUPS_AUTHENTICATE_JOB = 0x400E
    CUPS_GET_PPD = 0x400F
    CUPS_GET_DOCUMENT = 0x4027


class Status(IntEnum):
    """IPP status codes."""

    # Successful (0x0000-0x00FF)
    SUCCESSFUL_OK = 0x0000
    SUCCESSFUL_OK_IGNORED_OR_SUBSTITUTED_ATTRIBUTES = 0x0001
    SUCCESSFUL_OK_CONFLICTING_ATTRIBUTES = 0x0002

    # Client errors (0x0400-0x04FF)
    CLIENT_ERROR_BAD_REQUEST = 0x0400
    CLIENT_ERROR_FORBIDDEN = 0x0401
    CLIENT_ERROR_NOT_AUTHENTICATED = 0x0402
    CLIENT_ERROR_NOT_AUTHORIZED = 0x0403
    CLIENT_ERROR_NOT_POSSIBLE = 0x0404
    CLIENT_ERROR_TIMEOUT = 0x0405
    CLIENT_ERROR_NOT_FOUND = 0x0406
    CLIENT_ERROR_GONE = 0x0407
    CLIENT_ERROR_REQUEST_ENTITY_TOO_LARGE = 0x0408
    CLIENT_ERROR_REQUEST_VALUE_TOO_LONG = 0x0409
    CLIENT_ERROR_DOCUMENT_FORMAT_NOT_SUPPORTED = 0x040A
    CLIENT_ERROR_ATTRIBUTES_OR_VALUES_NOT_SUPPORTED = 0x040B
    CLIENT_ERROR_URI_SCHEME_NOT_SUPPORTED = 0x040C
    CLIENT_ERROR_CHARSET_NOT_SUPPORTED = 0x040D
    CLIENT_ERROR_CONFLICTING_ATTRIBUTES = 0x040E
    CLIENT_ERROR_COMPRESSION_NOT_SUPPORTED = 0x040F
    CLIENT_ERROR_COMPRESSION_ERROR = 0x0410
    CLIENT_ERROR_DOCUMENT_FORMAT_ERROR = 0x0411
    CLIENT_ERROR_DOCUMENT_ACCESS_ERROR = 0x0412

    # Server errors (0x0500-0x05FF)
    SERVER_ERROR_INTERNAL_ERROR = 0x0500
    SERVER_ERROR_OPERATION_NOT_SUPPORTED = 0x0501
    SERVER_ERROR_SERVICE_UNAVAILABLE = 0x0502
    SERVER_ERROR_VERSION_NOT_SUPPORTED = 0x0503
    SERVER_ERROR_DEVICE_ERROR = 0x0504
    SERVER_ERROR_TEMPORARY_ERROR = 0x0505
    SERVER_ERROR_NOT_ACCEPTING_JOBS = 0x0506
    SERVER_ERROR_BUSY = 0x0507
    SERVER_ERROR_JOB_CANCELED = 0x0508
    SERVER_ERROR_MULTIPLE_DOCUMENT_JOBS_NOT_SUPPORTED = 0x0509

    @property
    def is_successful(self) -> bool:
        return is_successful_status(self)

    @property
    def is_client_error(self) -> bool:
        return 0x0400 <= self <= 0x04FF

    @property
    def is_server_error(self) -> bool:
        return 0x0500 <= self <= 0x05FF

    @property
    def message(self) -> str:
        """Short human readable description."""
        return _STATUS_MESSAGES.get(self, "Unknown status")


_STATUS_MESSAGES: dict[Status, str] = {
    Status.SUCCESSFUL_OK: "Successful",
    Status.CLIENT_ERROR_BAD_REQUEST: "Bad request",
    Status.CLIENT_ERROR_FORBIDDEN: "Forbidden",
    Status.CLIENT_ERROR_NOT_AUTHENTICATED: "Not authenticated",
    Status.CLIENT_ERROR_NOT_AUTHORIZED: "Not authorized",
    Status.CLIENT_ERROR_NOT_FOUND: "Not found",
    Status.SERVER_ERROR_INTERNAL_ERROR: "Internal server error",
    Status.SERVER_ERROR_OPERATION_NOT_SUPPORTED: "Operation not supported",
    Status.SERVER_ERROR_SERVICE_UNAVAILABLE: "Service unavailable",
}


def is_successful_status(status_code: int) -> bool:
    """Successful status codes occupy 0x0000-0x00FF."""
    return 0x0000 <= status_code <= 0x00FF


def lookup_status(status_code: int) -> Status | None:
    """Return the Status member for a code, or None for unknown codes."""
    try:
        return Status(status_code)
    except ValueError:
        return None
