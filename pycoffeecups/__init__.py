# Copyright (c) 2026 Firefly Software Solutions Inc.
# Licensed under the Apache License, Version 2.0

"""
pycoffeecups - Python Client for CUPS print servers over IPP.

A client library speaking the Internet Printing Protocol binary format
with support for:
- Printing documents with job options
- Printer and job queries
- Job and printer control
- A standalone IPP message encoder/decoder

Quick Start (Simplest):
    >>> from pycoffeecups import connect, Job
    >>>
    >>> client = connect("localhost")
    >>> result = client.print("Office", Job("Hello").set_content("Hello, CUPS!").set_format("text/plain"))
    >>> print(result.job_id)

Context Manager (Recommended for applications):
    >>> from pycoffeecups import CupsClient
    >>>
    >>> with CupsClient("cups.local", username="alice", password="secret") as client:
    ...     printer = client.get_printer("Office")
    ...     print(printer.state, printer.supported_formats)

Low-level IPP:
    >>> from pycoffeecups import Attribute, IppRequest, IppResponse, Operation
    >>>
    >>> request = IppRequest(Operation.GET_PRINTER_ATTRIBUTES)
    >>> request.add_operation_attribute(Attribute.printer_uri("ipp://localhost:631/printers/Office"))
    >>> body = request.build()
    >>> response = IppResponse(body_from_server)
    >>> response.printer_attributes["printer-state"]
    3

TLS:
    >>> client = connect("cups.local", port=443, secure=True, verify_tls=True)
"""

from .attribute import Attribute, IntRange, Resolution, RESOLUTION_DPCM, RESOLUTION_DPI
from .client import CupsClient, connect
from .decoder import DecodedMessage, IppDecoder, decode_message
from .encoder import IppEncoder, encode_message
from .exceptions import (
    AuthenticationError,
    ConnectionError,
    ConnectionTimeoutError,
    CupsError,
    HTTPError,
    InvalidAttributeError,
    IppEncodeError,
    IppError,
    MalformedMessageError,
    ValueTooLongError,
)
from .job import Job
from .models import (
    ClientConfig,
    Orientation,
    Printer,
    PrinterState,
    PrintQuality,
    PrintResult,
    WhichJobs,
)
from .protocol import GroupTag, Operation, Status, ValueKind, ValueTag
from .request import IppRequest, RequestIdAllocator, default_allocator
from .response import IppResponse
from .transport import HttpTransport, Transport

__version__ = "1.0.0"
__author__ = "Firefly Software Solutions Inc."
__license__ = "Apache-2.0"

__all__ = [
    # Client
    "CupsClient",
    "connect",
    # Transport
    "Transport",
    "HttpTransport",
    # Jobs and printers
    "Job",
    "Printer",
    "PrinterState",
    "PrintResult",
    "Orientation",
    "PrintQuality",
    "WhichJobs",
    # Configuration
    "ClientConfig",
    # IPP messages
    "IppRequest",
    "IppResponse",
    "RequestIdAllocator",
    "default_allocator",
    "Attribute",
    "IntRange",
    "Resolution",
    "RESOLUTION_DPI",
    "RESOLUTION_DPCM",
    # Codec
    "IppEncoder",
    "IppDecoder",
    "DecodedMessage",
    "encode_message",
    "decode_message",
    # Protocol
    "ValueTag",
    "ValueKind",
    "GroupTag",
    "Operation",
    "Status",
    # Exceptions
    "CupsError",
    "ConnectionError",
    "ConnectionTimeoutError",
    "HTTPError",
    "AuthenticationError",
    "IppError",
    "MalformedMessageError",
    "IppEncodeError",
    "ValueTooLongError",
    "InvalidAttributeError",
]
