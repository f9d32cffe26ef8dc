# Copyright (c) 2026 Firefly Software Solutions Inc.
# Licensed under the Apache License, Version 2.0

"""IPP response wrapper with typed accessors."""

from __future__ import annotations

from typing import Any

from .decoder import AttributeSet, DecodedMessage, decode_message
from .exceptions import IppError
from .protocol import Status, is_successful_status, lookup_status


class IppResponse:
    """
    A decoded IPP response.

    Built once from a complete response body; read-only afterwards.
    A status outside 0x0000-0x00FF is not an exception here: check
    is_successful() or call raise_for_status().

    Example:
        >>> response = IppResponse(body)
        >>> if response.is_successful():
        ...     print(response.job_id, response.job_uri)
    """

    def __init__(self, data: bytes) -> None:
        """
        Decode a response body.

        Raises:
            MalformedMessageError: If the body is not a valid IPP message.
        """
        self._message = decode_message(data)

    @classmethod
    def from_message(cls, message: DecodedMessage) -> IppResponse:
        response = cls.__new__(cls)
        response._message = message
        return response

    @property
    def version(self) -> tuple[int, int]:
        return self._message.version

    @property
    def status_code(self) -> int:
        return self._message.status_code

    @property
    def status(self) -> Status | None:
        """Status member for the status code, None for unknown codes."""
        return lookup_status(self._message.status_code)

    @property
    def request_id(self) -> int:
        return self._message.request_id

    @property
    def attributes(self) -> AttributeSet:
        """Copy of every group, keyed by group name."""
        return {name: self._group(name) for name in self._message.attributes}

    @property
    def data(self) -> bytes:
        """Bytes after the end-of-attributes tag (e.g. CUPS-Get-Document)."""
        return self._message.data

    def is_successful(self) -> bool:
        return is_successful_status(self._message.status_code)

    def raise_for_status(self, message: str | None = None) -> None:
        """
        Raise IppError if the status code is not successful.

        The error message is the server's status-message when present,
        otherwise ``message``, otherwise the status description.
        """
        if self.is_successful():
            return
        status = self.status
        detail = self.status_message or message
        if detail is None:
            detail = status.message if status is not None else "Unknown status"
        raise IppError(detail, self.status_code)

    def _group(self, name: str) -> dict[str, Any]:
        # Lists are copied too
        group = self._message.attributes.get(name, {})
        return {key: list(value) if isinstance(value, list) else value for key, value in group.items()}

    @property
    def operation_attributes(self) -> dict[str, Any]:
        return self._group("operation")

    @property
    def job_attributes(self) -> dict[str, Any]:
        return self._group("job")

    @property
    def printer_attributes(self) -> dict[str, Any]:
        return self._group("printer")

    @property
    def unsupported_attributes(self) -> dict[str, Any]:
        return self._group("unsupported")

    def get_attribute(self, group: str, name: str, default: Any = None) -> Any:
        return self._group(group).get(name, default)

    @property
    def job_id(self) -> int | None:
        return self.job_attributes.get("job-id")

    @property
    def job_uri(self) -> str | None:
        return self.job_attributes.get("job-uri")

    @property
    def job_state(self) -> int | None:
        return self.job_attributes.get("job-state")

    @property
    def status_message(self) -> str | None:
        return self.operation_attributes.get("status-message")

    def __repr__(self) -> str:
        return (
            f"IppResponse(status=0x{self.status_code:04X}, request_id={self.request_id}, "
            f"groups={list(self._message.attributes)})"
        )
