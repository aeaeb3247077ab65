"""TeleinfoReader: pyserial wrapper that trims frame-control bytes and feeds the group decoder."""

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Iterator

import serial

from .decode import decode
from .errors import ParseError, SerialIOError
from .types import Message

logger = logging.getLogger(__name__)

DEFAULT_PORT = "/dev/ttyAMA0"
DEFAULT_BAUDRATE = 1200
DEFAULT_TIMEOUT = 1.0

# Historic Teleinfo line format: 7E1, no flow control
_BYTESIZE = serial.SEVENBITS
_PARITY = serial.PARITY_EVEN
_STOPBITS = serial.STOPBITS_ONE

_STX = "\x02"
_ETX = "\x03"


def strip_frame_controls(line: str) -> str:
    """
    Remove frame-control bytes around one group.

    The last group of a frame is followed by ETX and the next frame's STX, so
    both may trail a line along with CR/LF; STX/ETX may also lead it.
    """
    return line.rstrip(_ETX + _STX + "\r\n").lstrip(_STX + _ETX)


@dataclass(frozen=True)
class DecodeResult:
    """Outcome for one record: a message, an ignored group (both None), or an error."""

    record: str
    message: Message | None = None
    error: ParseError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def ignored(self) -> bool:
        return self.error is None and self.message is None


def decode_record(record: str) -> DecodeResult:
    """Decode one trimmed record, capturing a ParseError instead of raising it."""
    try:
        message = decode(record)
    except ParseError as e:
        logger.debug("Error reading group %r: %s", record, e)
        return DecodeResult(record=record, error=e)
    if message is None:
        logger.debug("Group %r ignored", record)
    else:
        logger.debug("Group %r -> %r", record, message)
    return DecodeResult(record=record, message=message)


def decode_lines(lines: Iterable[str]) -> Iterator[DecodeResult]:
    """Trim and decode each non-empty line of a text source (file, stdin, list)."""
    for line in lines:
        record = strip_frame_controls(line)
        if not record:
            continue
        yield decode_record(record)


class TeleinfoReader:
    """
    Sequential reader for one Teleinfo serial link.
    Opens the port lazily; use as a context manager or call open()/close().
    """

    def __init__(
        self,
        port: str = DEFAULT_PORT,
        baudrate: int = DEFAULT_BAUDRATE,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._port = port
        self._baudrate = baudrate
        self._timeout = timeout
        self._serial: serial.Serial | None = None

    @property
    def port(self) -> str:
        return self._port

    def _get_serial(self) -> serial.Serial:
        if self._serial is None:
            try:
                self._serial = serial.Serial(
                    port=self._port,
                    baudrate=self._baudrate,
                    bytesize=_BYTESIZE,
                    parity=_PARITY,
                    stopbits=_STOPBITS,
                    xonxoff=False,
                    rtscts=False,
                    timeout=self._timeout,
                )
            except serial.SerialException as e:
                raise SerialIOError(f"Failed to open {self._port}: {e}", port=self._port, cause=e) from e
            logger.debug("Opened %s at %d baud", self._port, self._baudrate)
        return self._serial

    def open(self) -> None:
        """Open the serial port."""
        self._get_serial()

    def close(self) -> None:
        """Close the serial port."""
        if self._serial is not None:
            try:
                self._serial.close()
            except Exception as e:
                logger.warning("Error closing serial port %s: %s", self._port, e)
            self._serial = None
            logger.debug("Closed %s", self._port)

    def __enter__(self) -> "TeleinfoReader":
        self.open()
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def iter_records(self) -> Iterator[str]:
        """
        Yield trimmed, non-empty records indefinitely.
        The first line after opening is dropped (the link is joined mid-group);
        read timeouts are skipped.
        """
        port = self._get_serial()
        skip_first = True
        while True:
            try:
                raw = port.readline()
            except serial.SerialException as e:
                raise SerialIOError(f"Read failed on {self._port}: {e}", port=self._port, cause=e) from e
            if not raw:
                continue
            if skip_first:
                skip_first = False
                continue
            record = strip_frame_controls(raw.decode("ascii", errors="replace"))
            if record:
                yield record

    def iter_messages(self) -> Iterator[DecodeResult]:
        """Yield one DecodeResult per record; decode errors do not stop the stream."""
        for record in self.iter_records():
            yield decode_record(record)
