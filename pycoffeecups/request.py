# Copyright (c) 2026 Firefly Software Solutions Inc.
# Licensed under the Apache License, Version 2.0

"""
IPP request building.

Usage:

    request = IppRequest(Operation.PRINT_JOB)
    request.add_operation_attribute(Attribute.printer_uri(uri))
    request.add_job_attribute(Attribute.copies(2))
    request.set_data(document)
    body = request.build()
"""

from __future__ import annotations

import itertools
import threading

from .attribute import Attribute
from .encoder import encode_message
from .protocol import INT32_MAX, IPP_VERSION, GroupTag


class RequestIdAllocator:
    """
    Thread-safe source of request identifiers.

    Ids start at ``start`` and increase by one per request; after
    0x7FFFFFFF the sequence restarts at ``start`` so ids stay positive
    signed 32-bit integers.
    """

    def __init__(self, start: int = 1) -> None:
        if not 1 <= start <= INT32_MAX:
            raise ValueError(f"start must be in [1, {INT32_MAX}], got {start}")
        self._start = start
        self._lock = threading.Lock()
        self._ticker = itertools.count(start)

    def next_id(self) -> int:
        with self._lock:
            request_id = next(self._ticker)
            if request_id > INT32_MAX:
                self._ticker = itertools.count(self._start)
                request_id = next(self._ticker)
            return request_id

    def reset(self) -> None:
        """Restart the sequence at its first id."""
        with self._lock:
            self._ticker = itertools.count(self._start)


# Process-wide allocator used when a request is built without one
default_allocator = RequestIdAllocator()


class IppRequest:
    """
    Builder for one outbound IPP request.

    The operation attributes always start with attributes-charset
    ("utf-8") and attributes-natural-language ("en").

    Example:
        >>> request = IppRequest(Operation.GET_PRINTER_ATTRIBUTES)
        >>> request.add_operation_attribute(Attribute.printer_uri("ipp://localhost:631/printers/P1"))
        >>> body = request.build()
    """

    def __init__(
        self,
        operation: int,
        request_id: int = 0,
        *,
        version: tuple[int, int] = IPP_VERSION,
        allocator: RequestIdAllocator | None = None,
    ) -> None:
        """
        Initialize a request.

        Args:
            operation: Operation code (usually an Operation member).
            request_id: Request id; 0 takes the next id from the allocator.
            version: (major, minor) protocol version.
            allocator: Id source for request_id=0 (default: process-wide).
        """
        if request_id == 0:
            request_id = (allocator or default_allocator).next_id()

        self._operation = operation
        self._request_id = request_id
        self._version = version
        self._operation_attributes: list[Attribute] = [
            Attribute.charset("utf-8"),
            Attribute.natural_language("en"),
        ]
        self._job_attributes: list[Attribute] = []
        self._data = b""

    @property
    def operation(self) -> int:
        return self._operation

    @property
    def request_id(self) -> int:
        return self._request_id

    @property
    def version(self) -> tuple[int, int]:
        return self._version

    @property
    def operation_attributes(self) -> list[Attribute]:
        return list(self._operation_attributes)

    @property
    def job_attributes(self) -> list[Attribute]:
        return list(self._job_attributes)

    @property
    def data(self) -> bytes:
        return self._data

    def add_operation_attribute(self, attribute: Attribute) -> IppRequest:
        self._operation_attributes.append(attribute)
        return self

    def add_job_attribute(self, attribute: Attribute) -> IppRequest:
        self._job_attributes.append(attribute)
        return self

    def set_data(self, data: bytes | str) -> IppRequest:
        """Set the document payload sent after the attributes."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._data = bytes(data)
        return self

    def build(self) -> bytes:
        """
        Encode the request.

        Returns:
            The IPP message body.

        Raises:
            IppEncodeError: If the preamble cannot be encoded.
            ValueTooLongError: If a name or value exceeds 65535 bytes.
        """
        return encode_message(
            self._operation,
            self._request_id,
            [
                (GroupTag.OPERATION, self._operation_attributes),
                (GroupTag.JOB, self._job_attributes),
            ],
            self._data,
            version=self._version,
        )

    def __repr__(self) -> str:
        return (
            f"IppRequest(operation=0x{int(self._operation):04X}, request_id={self._request_id}, "
            f"operation_attributes={len(self._operation_attributes)}, "
            f"job_attributes={len(self._job_attributes)}, data={len(self._data)})"
        )
