# Copyright (c) 2026 Firefly Software Solutions Inc.
# Licensed under the Apache License, Version 2.0

"""
Print job configuration.

A Job collects the document and the printing options and turns them into
IPP job attributes:

    >>> job = (Job("Quarterly report")
    ...     .set_file("report.pdf")
    ...     .set_copies(2)
    ...     .set_duplex(True)
    ...     .set_media_size("a4"))
    >>> client.print("Office", job)
"""

from __future__ import annotations

import os
from pathlib import Path

from .attribute import Attribute
from .models import Orientation, PrintQuality

DEFAULT_FORMAT = "application/octet-stream"

FORMATS_BY_EXTENSION: dict[str, str] = {
    "pdf": "application/pdf",
    "ps": "application/postscript",
    "txt": "text/plain",
    "html": "text/html",
    "htm": "text/html",
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
    "tiff": "image/tiff",
    "tif": "image/tiff",
}

MEDIA_SIZES: dict[str, str] = {
    "a4": "iso_a4_210x297mm",
    "a3": "iso_a3_297x420mm",
    "a5": "iso_a5_148x210mm",
    "letter": "na_letter_8.5x11in",
    "legal": "na_legal_8.5x14in",
}

ORIENTATIONS: dict[str, Orientation] = {
    "portrait": Orientation.PORTRAIT,
    "landscape": Orientation.LANDSCAPE,
    "reverse-landscape": Orientation.REVERSE_LANDSCAPE,
    "reverse-portrait": Orientation.REVERSE_PORTRAIT,
}

QUALITIES: dict[str, PrintQuality] = {
    "draft": PrintQuality.DRAFT,
    "normal": PrintQuality.NORMAL,
    "high": PrintQuality.HIGH,
}


class Job:
    """
    A print job with a fluent configuration API.

    Every setter returns the job. Options left unset are not sent, so the
    printer's defaults apply.
    """

    def __init__(self, name: str | None = None) -> None:
        self._name = name or ""
        self._document_name = ""
        self._document_format = DEFAULT_FORMAT
        self._copies = 1
        self._sides: str | None = None
        self._orientation: Orientation | None = None
        self._print_quality: PrintQuality | None = None
        self._media_size: str | None = None
        self._media_type: str | None = None
        self._color_mode: str | None = None
        self._priority: int | None = None
        self._hold = False
        self._custom_attributes: list[Attribute] = []
        self._content: bytes | None = None
        self._file_path: Path | None = None

    # =========================================================================
    # Document
    # =========================================================================

    def set_name(self, name: str) -> Job:
        self._name = name
        return self

    def set_document_name(self, name: str) -> Job:
        self._document_name = name
        return self

    def set_content(self, content: bytes | str) -> Job:
        """Print the given content; replaces any file set earlier."""
        if isinstance(content, str):
            content = content.encode("utf-8")
        self._content = content
        self._file_path = None
        return self

    def set_file(self, file_path: str | os.PathLike[str]) -> Job:
        """
        Print a file; replaces any content set earlier.

        The document format is guessed from the extension and the document
        name defaults to the file name. The file is read when the job is
        sent.
        """
        path = Path(file_path)
        self._file_path = path
        self._content = None
        self._document_format = FORMATS_BY_EXTENSION.get(path.suffix.lower().lstrip("."), DEFAULT_FORMAT)
        if not self._document_name:
            self._document_name = path.name
        return self

    def set_format(self, mime_type: str) -> Job:
        """Set the document MIME type, e.g. 'application/pdf'."""
        self._document_format = mime_type
        return self

    # =========================================================================
    # Options
    # =========================================================================

    def set_copies(self, copies: int) -> Job:
        self._copies = max(1, copies)
        return self

    def set_duplex(self, enabled: bool, long_edge: bool = True) -> Job:
        """
        Enable or disable two-sided printing.

        Args:
            enabled: Print on both sides.
            long_edge: Flip on the long edge (True) or the short edge.
        """
        if not enabled:
            self._sides = "one-sided"
        elif long_edge:
            self._sides = "two-sided-long-edge"
        else:
            self._sides = "two-sided-short-edge"
        return self

    def set_orientation(self, orientation: str) -> Job:
        """One of 'portrait', 'landscape', 'reverse-portrait', 'reverse-landscape'."""
        self._orientation = ORIENTATIONS.get(orientation.lower())
        return self

    def set_quality(self, quality: str) -> Job:
        """One of 'draft', 'normal', 'high'."""
        self._print_quality = QUALITIES.get(quality.lower())
        return self

    def set_media_size(self, size: str) -> Job:
        """Media keyword, or a shortcut: 'a3', 'a4', 'a5', 'letter', 'legal'."""
        self._media_size = MEDIA_SIZES.get(size.lower(), size)
        return self

    def set_media_type(self, media_type: str) -> Job:
        self._media_type = media_type
        return self

    def set_color(self, color: bool) -> Job:
        self._color_mode = "color" if color else "monochrome"
        return self

    def set_priority(self, priority: int) -> Job:
        """Job priority, clamped to 1-100 (higher is more urgent)."""
        self._priority = max(1, min(100, priority))
        return self

    def set_hold(self, hold: bool) -> Job:
        """Hold the job until it is released."""
        self._hold = hold
        return self

    def add_attribute(self, attribute: Attribute) -> Job:
        self._custom_attributes.append(attribute)
        return self

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def name(self) -> str:
        return self._name

    @property
    def document_name(self) -> str:
        return self._document_name

    @property
    def document_format(self) -> str:
        return self._document_format

    def has_content(self) -> bool:
        return self._content is not None or self._file_path is not None

    def get_content(self) -> bytes:
        """
        Return the document bytes.

        Raises:
            FileNotFoundError: If the job prints a file that does not exist.
        """
        if self._content is not None:
            return self._content
        if self._file_path is not None:
            return self._file_path.read_bytes()
        return b""

    def attributes(self) -> list[Attribute]:
        """Job attributes for the IPP request, custom attributes last."""
        attributes: list[Attribute] = []

        if self._copies > 1:
            attributes.append(Attribute.copies(self._copies))
        if self._sides is not None:
            attributes.append(Attribute.sides(self._sides))
        if self._orientation is not None:
            attributes.append(Attribute.orientation(self._orientation))
        if self._print_quality is not None:
            attributes.append(Attribute.print_quality(self._print_quality))
        if self._media_size is not None:
            attributes.append(Attribute.keyword("media", self._media_size))
        if self._media_type is not None:
            attributes.append(Attribute.keyword("media-type", self._media_type))
        if self._color_mode is not None:
            attributes.append(Attribute.keyword("print-color-mode", self._color_mode))
        if self._priority is not None:
            attributes.append(Attribute.integer("job-priority", self._priority))
        if self._hold:
            attributes.append(Attribute.keyword("job-hold-until", "indefinite"))

        return [*attributes, *self._custom_attributes]

    def __repr__(self) -> str:
        return f"Job(name={self._name!r}, format={self._document_format!r})"
