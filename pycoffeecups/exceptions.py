# Copyright (c) 2026 Firefly Software Solutions Inc.
# Licensed under the Apache License, Version 2.0

"""
Custom exceptions for the pycoffeecups IPP client.

All exceptions inherit from CupsError, making it easy to catch every
error raised by the library with a single except clause:

    try:
        client.print("Office", job)
    except CupsError as e:
        print(f"CUPS error: {e}")

Transport failures and protocol failures live in separate branches so
callers can decide what is worth retrying:

    try:
        printer = client.get_printer("Office")
    except ConnectionError as e:
        print(f"Could not reach {e.host}:{e.port}")
    except IppError as e:
        print(f"Server answered with status 0x{e.status_code:04X}")
"""

from __future__ import annotations


class CupsError(Exception):
    """
    Base exception for all pycoffeecups errors.

    All library exceptions inherit from this class, allowing you to catch
    all CUPS-related errors with a single except clause.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        self.hint = hint
        if hint:
            message = f"{message}\n\n  Hint: {hint}"
        super().__init__(message)


class ConnectionError(CupsError):
    """
    Raised when the CUPS server cannot be reached.

    Common causes:
    - CUPS is not running or not listening on the network
    - Wrong host or port
    - Firewall blocking port 631
    """

    def __init__(
        self,
        message: str,
        host: str | None = None,
        port: int | None = None,
        *,
        hint: str | None = None,
    ) -> None:
        self.host = host
        self.port = port
        if hint is None and host:
            hint = f"Check that CUPS is running and reachable on {host}:{port}"
        super().__init__(message, hint=hint)


class ConnectionTimeoutError(ConnectionError):
    """Raised when the HTTP exchange with the server times out."""

    def __init__(self, message: str, host: str | None = None, port: int | None = None) -> None:
        super().__init__(
            message,
            host,
            port,
            hint="Try increasing the client timeout or check network connectivity",
        )


class HTTPError(ConnectionError):
    """
    Raised when the server answers the IPP POST with a non-200 HTTP status.

    The IPP body is not decoded in this case.
    """

    def __init__(
        self,
        status_code: int,
        host: str | None = None,
        port: int | None = None,
        *,
        hint: str | None = None,
    ) -> None:
        self.status_code = status_code
        super().__init__(f"HTTP error: {status_code}", host, port, hint=hint)


class AuthenticationError(HTTPError):
    """
    Raised when the server rejects the request with HTTP 401.

    Common causes:
    - Missing or wrong username/password
    - The operation requires an administrator account
    """

    def __init__(self, host: str | None = None, port: int | None = None) -> None:
        super().__init__(
            401,
            host,
            port,
            hint="Check your username and password, e.g. connect(host, username=..., password=...)",
        )


class IppError(CupsError):
    """
    Raised for IPP protocol errors.

    Carries the IPP status code when the error comes from a server
    response (0 when the error is local, e.g. a malformed message).
    """

    def __init__(self, message: str, status_code: int = 0, *, hint: str | None = None) -> None:
        self.status_code = status_code
        super().__init__(message, hint=hint)


class MalformedMessageError(IppError):
    """
    Raised when a response body violates the IPP message structure.

    This happens when:
    - The body is shorter than the 8-byte preamble
    - An attribute appears before any group tag
    - A length field or value runs past the end of the body
    """

    def __init__(self, message: str, offset: int | None = None) -> None:
        self.offset = offset
        if offset is not None:
            message = f"{message} (at byte {offset})"
        super().__init__(f"Invalid IPP response: {message}")


class IppEncodeError(IppError):
    """Raised when a request cannot be represented on the wire."""


class ValueTooLongError(IppEncodeError):
    """
    Raised when a name or value exceeds the 16-bit IPP length field.

    IPP lengths are unsigned 16-bit, so nothing longer than 65535 bytes
    can be encoded.
    """

    def __init__(self, what: str, size: int, max_size: int) -> None:
        self.what = what
        self.size = size
        self.max_size = max_size
        super().__init__(
            f"{what} is {size} bytes, maximum is {max_size} bytes",
            hint="Send large content as the document payload instead of an attribute",
        )


class InvalidAttributeError(IppError):
    """Raised when an attribute's value does not fit its value tag."""

    def __init__(self, name: str, message: str) -> None:
        self.name = name
        super().__init__(f"Invalid attribute {name!r}: {message}")
