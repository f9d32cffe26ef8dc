# Copyright (c) 2026 Firefly Software Solutions Inc.
# Licensed under the Apache License, Version 2.0

"""Tests for IPP request building and request id allocation."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from pycoffeecups.attribute import Attribute
from pycoffeecups.decoder import decode_message
from pycoffeecups.protocol import INT32_MAX, Operation
from pycoffeecups.request import IppRequest, RequestIdAllocator, default_allocator


class TestRequestIdAllocator:
    """Tests for RequestIdAllocator."""

    def test_sequential_ids(self) -> None:
        """Test ids start at 1 and increase by one."""
        allocator = RequestIdAllocator()
        assert [allocator.next_id() for _ in range(3)] == [1, 2, 3]

    def test_custom_start(self) -> None:
        """Test a custom first id."""
        assert RequestIdAllocator(start=100).next_id() == 100

    def test_wraps_after_int32_max(self) -> None:
        """Test the sequence restarts instead of leaving the int32 range."""
        allocator = RequestIdAllocator(start=INT32_MAX - 1)
        assert allocator.next_id() == INT32_MAX - 1
        assert allocator.next_id() == INT32_MAX
        assert allocator.next_id() == INT32_MAX - 1

    def test_reset(self) -> None:
        """Test reset restarts the sequence."""
        allocator = RequestIdAllocator()
        allocator.next_id()
        allocator.next_id()
        allocator.reset()
        assert allocator.next_id() == 1

    @pytest.mark.parametrize("start", [0, -1, INT32_MAX + 1])
    def test_invalid_start(self, start: int) -> None:
        """Test starts outside the positive int32 range are rejected."""
        with pytest.raises(ValueError):
            RequestIdAllocator(start=start)

    def test_unique_across_threads(self) -> None:
        """Test concurrent requests never share an id."""
        allocator = RequestIdAllocator()

        def build(_: int) -> int:
            return IppRequest(Operation.GET_JOBS, allocator=allocator).request_id

        with ThreadPoolExecutor(max_workers=8) as executor:
            ids = list(executor.map(build, range(2000)))

        assert len(set(ids)) == 2000
        assert sorted(ids) == list(range(1, 2001))


class TestIppRequest:
    """Tests for IppRequest."""

    def test_preamble_attributes(self) -> None:
        """Test charset and natural language lead the operation group."""
        request = IppRequest(Operation.GET_PRINTER_ATTRIBUTES, 1)
        assert request.operation_attributes == [
            Attribute.charset("utf-8"),
            Attribute.natural_language("en"),
        ]
        assert request.job_attributes == []
        assert request.data == b""

    def test_explicit_request_id(self) -> None:
        """Test a non-zero id is used as given."""
        allocator = RequestIdAllocator()
        assert IppRequest(Operation.GET_JOBS, 77, allocator=allocator).request_id == 77
        assert allocator.next_id() == 1

    def test_allocated_request_ids(self) -> None:
        """Test id 0 draws from the allocator."""
        allocator = RequestIdAllocator()
        first = IppRequest(Operation.GET_JOBS, allocator=allocator)
        second = IppRequest(Operation.GET_JOBS, allocator=allocator)
        assert (first.request_id, second.request_id) == (1, 2)

    def test_default_allocator(self) -> None:
        """Test requests without an allocator share the process-wide one."""
        default_allocator.reset()
        try:
            assert IppRequest(Operation.GET_JOBS).request_id == 1
            assert IppRequest(Operation.GET_JOBS).request_id == 2
        finally:
            default_allocator.reset()

    def test_fluent_builders(self) -> None:
        """Test builder methods return the request."""
        request = IppRequest(Operation.PRINT_JOB, 1)
        assert request.add_operation_attribute(Attribute.job_name("x")) is request
        assert request.add_job_attribute(Attribute.copies(2)) is request
        assert request.set_data("x") is request

    def test_attribute_lists_are_copies(self) -> None:
        """Test the returned lists do not alias the request."""
        request = IppRequest(Operation.GET_JOBS, 1)
        request.operation_attributes.append(Attribute.job_id(1))
        assert len(request.operation_attributes) == 2

    def test_text_data_is_utf8(self) -> None:
        """Test str payloads are UTF-8 encoded."""
        assert IppRequest(Operation.PRINT_JOB, 1).set_data("héllo").data == "héllo".encode("utf-8")

    def test_job_group_omitted_when_empty(self) -> None:
        """Test no job group is written without job attributes."""
        message = decode_message(IppRequest(Operation.GET_JOBS, 1).build())
        assert list(message.attributes) == ["operation"]

    def test_version(self) -> None:
        """Test the protocol version written in the header."""
        assert IppRequest(Operation.GET_JOBS, 1, version=(1, 1)).build()[:2] == b"\x01\x01"

    def test_print_job_end_to_end(self) -> None:
        """Test a Print-Job request decodes back to what was built."""
        request = (
            IppRequest(Operation.PRINT_JOB, 7)
            .add_operation_attribute(Attribute.printer_uri("ipp://host:631/printers/P1"))
            .add_operation_attribute(Attribute.requesting_user_name("alice"))
            .add_job_attribute(Attribute.copies(2))
            .set_data("hi")
        )
        message = decode_message(request.build())

        assert message.version == (2, 0)
        assert message.status_code == Operation.PRINT_JOB
        assert message.request_id == 7
        assert message.attributes == {
            "operation": {
                "attributes-charset": "utf-8",
                "attributes-natural-language": "en",
                "printer-uri": "ipp://host:631/printers/P1",
                "requesting-user-name": "alice",
            },
            "job": {"copies": 2},
        }
        assert message.data == b"hi"

    def test_repr(self) -> None:
        """Test the debug representation."""
        text = repr(IppRequest(Operation.PRINT_JOB, 7))
        assert "0x0002" in text
        assert "request_id=7" in text
