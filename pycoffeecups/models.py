# Copyright (c) 2026 Firefly Software Solutions Inc.
# Licensed under the Apache License, Version 2.0

"""
Pydantic models for the pycoffeecups client.

Provides validated configuration and the read-only results returned by
CupsClient operations.
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from .response import IppResponse


class PrinterState(str, Enum):
    """printer-state values (RFC 2911 section 4.4.11)."""
    IDLE = "idle"
    PROCESSING = "processing"
    STOPPED = "stopped"
    UNKNOWN = "unknown"

    @classmethod
    def from_code(cls, code: Any) -> PrinterState:
        return {3: cls.IDLE, 4: cls.PROCESSING, 5: cls.STOPPED}.get(code, cls.UNKNOWN)


class Orientation(IntEnum):
    """orientation-requested enum values."""
    PORTRAIT = 3
    LANDSCAPE = 4
    REVERSE_LANDSCAPE = 5
    REVERSE_PORTRAIT = 6


class PrintQuality(IntEnum):
    """print-quality enum values."""
    DRAFT = 3
    NORMAL = 4
    HIGH = 5


class WhichJobs(str, Enum):
    """which-jobs keyword for Get-Jobs."""
    COMPLETED = "completed"
    NOT_COMPLETED = "not-completed"
    ALL = "all"


# ============================================================================
# Configuration Models
# ============================================================================


class ClientConfig(BaseModel):
    """Configuration for the CUPS client."""

    model_config = ConfigDict(validate_assignment=True)

    host: str = Field(default="localhost", min_length=1)
    port: int = Field(default=631, ge=1, le=65535)
    secure: bool = Field(default=False, description="Use ipps:// and HTTPS")
    username: str | None = None
    password: str | None = None
    timeout: float = Field(default=30, gt=0, le=3600, description="Seconds")
    verify_tls: bool = True
    user_agent: str = "pycoffeecups"

    @property
    def scheme(self) -> str:
        """IPP URI scheme."""
        return "ipps" if self.secure else "ipp"

    @property
    def http_scheme(self) -> str:
        return "https" if self.secure else "http"

    @property
    def base_uri(self) -> str:
        return f"{self.scheme}://{self.host}:{self.port}"


# ============================================================================
# Result Models
# ============================================================================


class PrintResult(BaseModel):
    """Result of a print operation."""

    model_config = ConfigDict(frozen=True)

    success: bool
    job_id: int | None = None
    job_uri: str | None = None
    message: str | None = None
    status_code: int = 0

    def is_successful(self) -> bool:
        return self.success

    @classmethod
    def from_response(cls, response: IppResponse) -> PrintResult:
        return cls(
            success=response.is_successful(),
            job_id=response.job_id,
            job_uri=response.job_uri,
            message=response.status_message,
            status_code=response.status_code,
        )

    @classmethod
    def failed(cls, message: str, status_code: int = 0) -> PrintResult:
        return cls(success=False, message=message, status_code=status_code)


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    return value if isinstance(value, list) else [value]


class Printer(BaseModel):
    """A printer and the attributes the server reported for it."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    uri: str
    name: str
    state: PrinterState = PrinterState.UNKNOWN
    state_message: str = ""
    is_accepting_jobs: bool = True
    attributes: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_attributes(cls, uri: str, attributes: dict[str, Any]) -> Printer:
        """
        Build a Printer from a decoded printer attribute group.

        Args:
            uri: Printer URI; its last path segment is the fallback name.
            attributes: Printer attributes by name.
        """
        name = attributes.get("printer-name") or uri.rstrip("/").rsplit("/", 1)[-1]
        reasons = _as_list(attributes.get("printer-state-reasons"))

        return cls(
            uri=uri,
            name=name,
            state=PrinterState.from_code(attributes.get("printer-state", 0)),
            state_message=", ".join(str(r) for r in reasons),
            is_accepting_jobs=attributes.get("printer-is-accepting-jobs", True) is not False,
            attributes=attributes,
        )

    def is_idle(self) -> bool:
        return self.state is PrinterState.IDLE

    def is_processing(self) -> bool:
        return self.state is PrinterState.PROCESSING

    def is_stopped(self) -> bool:
        return self.state is PrinterState.STOPPED

    @property
    def location(self) -> str | None:
        return self.attributes.get("printer-location")

    @property
    def info(self) -> str | None:
        return self.attributes.get("printer-info")

    @property
    def make_and_model(self) -> str | None:
        return self.attributes.get("printer-make-and-model")

    @property
    def supported_formats(self) -> list[str]:
        return _as_list(self.attributes.get("document-format-supported"))

    @property
    def supported_media_sizes(self) -> list[str]:
        return _as_list(self.attributes.get("media-supported"))

    def supports_color(self) -> bool:
        return self.attributes.get("color-supported") is True

    def supports_duplex(self) -> bool:
        sides = _as_list(self.attributes.get("sides-supported"))
        return "two-sided-long-edge" in sides or "two-sided-short-edge" in sides
