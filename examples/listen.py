#!/usr/bin/env python3
"""Example: read a Teleinfo link and print the current period and apparent power."""

import sys

from pyteleinfo import ApparentPower, CurrentTariffPeriod, TeleinfoReader
from pyteleinfo.errors import SerialIOError


def main() -> None:
    port = "/dev/ttyAMA0"  # change to your serial device

    try:
        with TeleinfoReader(port=port) as reader:
            print(f"Reading {port} (Ctrl+C to stop)...")
            for result in reader.iter_messages():
                if result.error is not None:
                    print(f"Bad group {result.record!r}: {result.error}", file=sys.stderr)
                elif isinstance(result.message, CurrentTariffPeriod):
                    period = result.message.period
                    print(f"Period: {period.hour.value} / {period.day_color.value}")
                elif isinstance(result.message, ApparentPower):
                    print(f"Apparent power: {result.message.value} VA")
    except KeyboardInterrupt:
        print("\nStopped.")
    except SerialIOError as e:
        print(f"Serial error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
