# Copyright (c) 2026 Firefly Software Solutions Inc.
# Licensed under the Apache License, Version 2.0

"""
CUPS Python Client.

A client for CUPS print servers speaking IPP over HTTP, with support for:
- Printing documents with job options (copies, duplex, media, ...)
- Printer discovery and printer attributes
- Job listing and job control (cancel, hold, release)
- Pausing and resuming printers
- Basic authentication and TLS

Usage Patterns:

    # Pattern 1: Simple usage (recommended for scripts)
    from pycoffeecups import connect, Job
    client = connect("localhost")
    result = client.print("Office", Job("hello").set_content("Hello!"))

    # Pattern 2: Context manager (recommended for applications)
    from pycoffeecups import CupsClient
    with CupsClient("cups.local", username="alice", password="secret") as client:
        printer = client.get_printer("Office")
    # HTTP session closes when exiting the block
"""

from __future__ import annotations

import logging
from typing import Any

from .attribute import Attribute
from .job import Job
from .models import ClientConfig, Printer, PrintResult, WhichJobs
from .protocol import Operation
from .request import IppRequest, RequestIdAllocator
from .response import IppResponse
from .transport import HttpTransport, Transport

logger = logging.getLogger(__name__)


class CupsClient:
    """
    Client for a CUPS server.

    Operations that report success return a bool or a PrintResult; the
    lookups (get_printer, get_jobs) raise IppError when the server
    answers with an unsuccessful status. Transport failures always raise
    ConnectionError.

    Example:
        >>> client = CupsClient("localhost")
        >>> printer = client.get_printer("Office")
        >>> print(printer.state)
        >>> client.close()
    """

    def __init__(
        self,
        host: str | None = None,
        port: int | None = None,
        *,
        config: ClientConfig | None = None,
        transport: Transport | None = None,
        allocator: RequestIdAllocator | None = None,
        **kwargs: Any,
    ) -> None:
        """
        Initialize the client.

        Args:
            host: CUPS server hostname (default: config host, else localhost).
            port: CUPS server port (default: config port, else 631).
            config: Optional ClientConfig object; explicit host/port/kwargs
                override it on a copy, the caller's object is left untouched.
            transport: Transport to use (default: HttpTransport).
            allocator: Request id source (default: process-wide allocator).
            **kwargs: Config options (secure, username, password, timeout, ...).
        """
        if host is not None:
            kwargs["host"] = host
        if port is not None:
            kwargs["port"] = port

        if config is None:
            config = ClientConfig(**kwargs)
        else:
            config = config.model_copy()
            for key, value in kwargs.items():
                if hasattr(config, key):
                    setattr(config, key, value)

        self._config = config
        self._transport = transport or HttpTransport(config)
        self._allocator = allocator

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def base_uri(self) -> str:
        """ipp://host:port (ipps:// when secure)."""
        return self._config.base_uri

    def printer_uri(self, printer_name: str) -> str:
        return f"{self.base_uri}/printers/{printer_name}"

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> CupsClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    # =========================================================================
    # Request plumbing
    # =========================================================================

    def _new_request(self, operation: Operation, printer_name: str | None = None) -> IppRequest:
        request = IppRequest(operation, allocator=self._allocator)
        if printer_name is not None:
            request.add_operation_attribute(Attribute.printer_uri(self.printer_uri(printer_name)))
        if self._config.username is not None:
            request.add_operation_attribute(Attribute.requesting_user_name(self._config.username))
        return request

    def send(self, request: IppRequest, path: str = "/") -> IppResponse:
        """
        Send a request and decode the response.

        Args:
            request: Request to send.
            path: Resource path, e.g. "/printers/Office" or "/".

        Raises:
            ConnectionError: If the transport fails.
            MalformedMessageError: If the response body is not valid IPP.
        """
        body = request.build()
        logger.debug("Sending %r to %s", request, path)
        response = IppResponse(self._transport.send(path, body))

        if response.request_id != request.request_id:
            logger.debug(
                "Response request id %d does not match request id %d",
                response.request_id,
                request.request_id,
            )
        if not response.is_successful():
            logger.debug("IPP status 0x%04X: %s", response.status_code, response.status_message)
        return response

    def _printer_operation(self, operation: Operation, printer_name: str, job_id: int | None = None) -> bool:
        request = self._new_request(operation, printer_name)
        if job_id is not None:
            request.add_operation_attribute(Attribute.job_id(job_id))
        return self.send(request, f"/printers/{printer_name}").is_successful()

    # =========================================================================
    # Printing
    # =========================================================================

    def print(self, printer_name: str, job: Job) -> PrintResult:
        """
        Print a job.

        Args:
            printer_name: CUPS queue name.
            job: Document and options.

        Returns:
            PrintResult with the job id and uri when the server accepted it.

        Example:
            >>> job = Job("Invoice").set_file("invoice.pdf").set_copies(2)
            >>> result = client.print("Office", job)
            >>> if result.is_successful():
            ...     print(f"Queued as job {result.job_id}")
        """
        request = self._new_request(Operation.PRINT_JOB, printer_name)

        if job.name:
            request.add_operation_attribute(Attribute.job_name(job.name))
        if job.document_name:
            request.add_operation_attribute(Attribute.document_name(job.document_name))
        request.add_operation_attribute(Attribute.document_format(job.document_format))

        for attribute in job.attributes():
            request.add_job_attribute(attribute)

        if job.has_content():
            request.set_data(job.get_content())

        response = self.send(request, f"/printers/{printer_name}")
        return PrintResult.from_response(response)

    # =========================================================================
    # Printers
    # =========================================================================

    def get_printers(self) -> list[Printer]:
        """
        List printers (CUPS-Get-Printers).

        Repeated printer groups are merged by the decoder, so this returns
        at most one Printer built from the combined attributes.
        """
        response = self.send(self._new_request(Operation.CUPS_GET_PRINTERS))

        attributes = response.printer_attributes
        if not attributes:
            return []
        return [Printer.from_attributes(_first(attributes.get("printer-uri-supported", "")), attributes)]

    def get_printer(self, printer_name: str) -> Printer:
        """
        Get a printer's attributes (Get-Printer-Attributes).

        Raises:
            IppError: If the server reports an unsuccessful status.
        """
        request = self._new_request(Operation.GET_PRINTER_ATTRIBUTES, printer_name)
        response = self.send(request, f"/printers/{printer_name}")
        response.raise_for_status("Failed to get printer attributes")
        return Printer.from_attributes(self.printer_uri(printer_name), response.printer_attributes)

    def get_default_printer(self) -> Printer | None:
        """Get the server's default printer, or None if there is none."""
        response = self.send(self._new_request(Operation.CUPS_GET_DEFAULT))

        if not response.is_successful():
            return None
        attributes = response.printer_attributes
        if not attributes:
            return None
        return Printer.from_attributes(_first(attributes.get("printer-uri-supported", "")), attributes)

    def pause_printer(self, printer_name: str) -> bool:
        return self._printer_operation(Operation.PAUSE_PRINTER, printer_name)

    def resume_printer(self, printer_name: str) -> bool:
        return self._printer_operation(Operation.RESUME_PRINTER, printer_name)

    # =========================================================================
    # Jobs
    # =========================================================================

    def get_jobs(
        self,
        printer_name: str,
        my_jobs: bool = False,
        which_jobs: WhichJobs | str = WhichJobs.NOT_COMPLETED,
    ) -> dict[str, Any]:
        """
        Get jobs of a printer (Get-Jobs).

        Args:
            printer_name: CUPS queue name.
            my_jobs: Only jobs owned by the requesting user.
            which_jobs: 'completed', 'not-completed' or 'all'.

        Returns:
            The job attribute group; attributes of several jobs are merged
            into lists by name.

        Raises:
            IppError: If the server reports an unsuccessful status.
        """
        request = self._new_request(Operation.GET_JOBS, printer_name)
        request.add_operation_attribute(Attribute.boolean("my-jobs", my_jobs))
        request.add_operation_attribute(Attribute.keyword("which-jobs", WhichJobs(which_jobs).value))

        response = self.send(request, f"/printers/{printer_name}")
        response.raise_for_status("Failed to get jobs")
        return response.job_attributes

    def cancel_job(self, printer_name: str, job_id: int) -> bool:
        return self._printer_operation(Operation.CANCEL_JOB, printer_name, job_id)

    def hold_job(self, printer_name: str, job_id: int) -> bool:
        return self._printer_operation(Operation.HOLD_JOB, printer_name, job_id)

    def release_job(self, printer_name: str, job_id: int) -> bool:
        return self._printer_operation(Operation.RELEASE_JOB, printer_name, job_id)


def _first(value: Any) -> Any:
    # printer-uri-supported is multi-valued when the queue has several URIs
    if isinstance(value, list):
        return value[0] if value else ""
    return value


def connect(host: str | None = None, port: int | None = None, **kwargs: Any) -> CupsClient:
    """
    Create a client for a CUPS server.

    Args:
        host: CUPS server hostname (default: localhost).
        port: CUPS server port (default: 631).
        **kwargs: Client options (config, secure, username, password, timeout, transport, ...).

    Example:
        >>> client = connect("cups.local", username="alice", password="secret")
        >>> client.get_default_printer()
    """
    return CupsClient(host, port, **kwargs)

