#!/usr/bin/env python3
"""
02_printer_info.py - Printer Discovery and Job Control

This example demonstrates:
- Looking up the default printer
- Reading printer attributes (state, formats, duplex, color)
- Holding, listing and cancelling jobs
- Handling IppError and ConnectionError separately

Prerequisites:
    - CUPS running on localhost:631
    - pycoffeecups installed

Run with:
    python 02_printer_info.py
"""

from pycoffeecups import CupsClient, Job
from pycoffeecups.exceptions import ConnectionError, IppError


def show_printer(client, name):
    """Print a printer's attributes"""
    printer = client.get_printer(name)
    print(f"Printer:   {printer.name} ({printer.uri})")
    print(f"State:     {printer.state.value} {printer.state_message}")
    print(f"Accepting: {printer.is_accepting_jobs}")
    print(f"Model:     {printer.make_and_model}")
    print(f"Location:  {printer.location}")
    print(f"Formats:   {', '.join(printer.supported_formats)}")
    print(f"Duplex:    {printer.supports_duplex()}")
    print(f"Color:     {printer.supports_color()}")


def held_job_roundtrip(client, name):
    """Queue a held job, list it, then cancel it"""
    print("\nJob Control")
    print("-" * 50)

    job = Job("Held job").set_content("This job is cancelled before it prints.").set_format("text/plain").set_hold(True)
    result = client.print(name, job)
    if not result.is_successful():
        print(f"✗ Print failed: {result.message}")
        return

    print(f"✓ Held job {result.job_id}")
    jobs = client.get_jobs(name, my_jobs=True)
    print(f"  Pending jobs: {jobs.get('job-id')}")

    if client.cancel_job(name, result.job_id):
        print(f"✓ Cancelled job {result.job_id}")


def main():
    try:
        with CupsClient("localhost", 631, timeout=5) as client:
            printer = client.get_default_printer()
            if printer is None:
                print("No default printer configured")
                return

            show_printer(client, printer.name)
            held_job_roundtrip(client, printer.name)
    except IppError as e:
        print(f"✗ CUPS rejected the request (status 0x{e.status_code:04X}): {e}")
    except ConnectionError as e:
        print(f"✗ Could not reach CUPS: {e}")


if __name__ == "__main__":
    main()
