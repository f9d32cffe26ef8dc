#!/usr/bin/env python3
"""
01_print_text.py - Printing a Document

This is the foundational example for sending a job to a CUPS queue.

What this example demonstrates:
- Using connect() for one-liner connection
- Building a Job with the fluent setters
- Reading the PrintResult returned by the server

Key Concepts:
- Queue: a CUPS printer, addressed as ipp://host:631/printers/<name>
- Job: the document plus options such as copies and duplex
- Job id: the number CUPS assigns to an accepted job

Prerequisites:
    - CUPS running on localhost:631 with a queue named "Office"
    - pycoffeecups installed: pip install pycoffeecups

Expected Output:
    Connecting to CUPS at localhost:631...
    Printing to 'Office'...
    ✓ Queued as job 12 (ipp://localhost:631/jobs/12)

Run with:
    python 01_print_text.py [printer]
"""

import sys

from pycoffeecups import Job, connect


def main():
    printer_name = sys.argv[1] if len(sys.argv) > 1 else "Office"

    print("Connecting to CUPS at localhost:631...")
    with connect("localhost") as client:
        job = (
            Job("Hello from pycoffeecups")
            .set_content("Hello, CUPS!\n\nThis page was sent over IPP.\n")
            .set_format("text/plain")
            .set_copies(2)
            .set_duplex(True)
            .set_media_size("a4")
        )

        print(f"Printing to '{printer_name}'...")
        result = client.print(printer_name, job)

        if result.is_successful():
            print(f"✓ Queued as job {result.job_id} ({result.job_uri})")
        else:
            print(f"✗ Print failed (status 0x{result.status_code:04X}): {result.message}")


if __name__ == "__main__":
    main()
