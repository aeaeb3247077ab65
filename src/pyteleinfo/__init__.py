"""pyteleinfo: decode Teleinfo electricity-meter groups into typed messages."""

__version__ = "0.1.0"

from .decode import IGNORED_CODES, decode, parse_period
from .errors import (
    ControlCharacterError,
    DayColorError,
    FieldError,
    GroupError,
    OffPeakHoursError,
    ParseError,
    PyTeleinfoError,
    SerialIOError,
)
from .group import Group, split_group
from .reader import DecodeResult, TeleinfoReader, decode_lines, decode_record, strip_frame_controls
from .types import (
    ADCO,
    HHPHC,
    ApparentPower,
    CurrentTariffPeriod,
    DayColor,
    FieldCode,
    HHPHCValue,
    HourlyTarifPeriod,
    Index,
    InstantaneousPower,
    Message,
    TariffOption,
    TariffOptionValue,
    TarifPeriod,
    Tomorrow,
)

__all__ = [
    "__version__",
    "decode",
    "parse_period",
    "IGNORED_CODES",
    "split_group",
    "Group",
    "TeleinfoReader",
    "DecodeResult",
    "decode_lines",
    "decode_record",
    "strip_frame_controls",
    "PyTeleinfoError",
    "ParseError",
    "GroupError",
    "FieldError",
    "OffPeakHoursError",
    "DayColorError",
    "ControlCharacterError",
    "SerialIOError",
    "FieldCode",
    "Message",
    "ADCO",
    "TariffOption",
    "TariffOptionValue",
    "Tomorrow",
    "DayColor",
    "InstantaneousPower",
    "ApparentPower",
    "Index",
    "HHPHC",
    "HHPHCValue",
    "CurrentTariffPeriod",
    "TarifPeriod",
    "HourlyTarifPeriod",
]
