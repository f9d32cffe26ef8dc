#!/usr/bin/env python3
"""
03_raw_ipp.py - Low-level IPP Messages

This example demonstrates:
- Building an IppRequest by hand
- Multi-valued attributes (requested-attributes)
- Sending it with CupsClient.send() and reading the IppResponse
- Decoding a body offline with decode_message()

Prerequisites:
    - CUPS running on localhost:631 with a queue named "Office"
    - pycoffeecups installed

Run with:
    python 03_raw_ipp.py
"""

from pycoffeecups import Attribute, CupsClient, IppRequest, Operation, decode_message


def main():
    with CupsClient("localhost") as client:
        request = IppRequest(Operation.GET_PRINTER_ATTRIBUTES)
        request.add_operation_attribute(Attribute.printer_uri(client.printer_uri("Office")))
        request.add_operation_attribute(
            Attribute.requested_attributes(["printer-name", "printer-state", "media-supported"])
        )

        body = request.build()
        print(f"Request {request.request_id}: {len(body)} bytes")
        print(f"  {body[:16].hex(' ')} ...")

        # The same bytes decode back to the attributes we built
        echo = decode_message(body)
        print(f"  operation attributes: {sorted(echo.attributes['operation'])}")

        response = client.send(request, "/printers/Office")
        print(f"Response status 0x{response.status_code:04X} ({response.status})")
        for name, value in response.printer_attributes.items():
            print(f"  {name} = {value}")


if __name__ == "__main__":
    main()
