"""Exceptions for pyteleinfo: group/field decode errors and serial I/O errors."""


class PyTeleinfoError(Exception):
    """Base exception for pyteleinfo."""

    pass


class ParseError(PyTeleinfoError):
    """Base for every error the group decoder raises on caller-supplied data."""

    pass


class GroupError(ParseError):
    """Raised when a record is not CODE SEP DATA SEP CTRL, or its code is not whitelisted."""

    def __init__(self, record: str, message: str | None = None) -> None:
        self.record = record
        self._msg = message or f"Unrecognized group: {record!r}"
        super().__init__(self._msg)


class FieldError(ParseError):
    """Raised when a known code carries data its field grammar rejects."""

    def __init__(self, code: str, data: str, message: str | None = None) -> None:
        self.code = code
        self.data = data
        self._msg = message or f"Unable to parse {code} data: {data!r}"
        super().__init__(self._msg)


class OffPeakHoursError(ParseError):
    """Raised when the hour indicator of a period fragment is neither C nor P."""

    def __init__(self, fragment: str, message: str | None = None) -> None:
        self.fragment = fragment
        self._msg = message or f"Unable to parse hourly period from {fragment!r}"
        super().__init__(self._msg)


class DayColorError(ParseError):
    """Raised when the day color of a period fragment is not B, W or R."""

    def __init__(self, fragment: str, message: str | None = None) -> None:
        self.fragment = fragment
        self._msg = message or f"Unable to parse day color period from {fragment!r}"
        super().__init__(self._msg)


class ControlCharacterError(ParseError):
    """Reserved for checksum validation of the trailing control character; not raised yet."""

    def __init__(self, record: str, control: str, message: str | None = None) -> None:
        self.record = record
        self.control = control
        self._msg = message or f"Bad control character {control!r} in {record!r}"
        super().__init__(self._msg)


class SerialIOError(PyTeleinfoError):
    """Raised when the serial link cannot be opened or read (wraps pyserial errors)."""

    def __init__(
        self,
        message: str,
        *,
        port: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        self.port = port
        self.cause = cause
        super().__init__(message)
