"""Core data model: field codes, tariff enums, and the decoded Message variants."""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class FieldCode(str, Enum):
    """Closed whitelist of Teleinfo group labels the decoder recognizes."""

    ADCO = "ADCO"
    OPTARIF = "OPTARIF"
    ISOUSC = "ISOUSC"
    BBRHCJB = "BBRHCJB"
    BBRHCJW = "BBRHCJW"
    BBRHCJR = "BBRHCJR"
    BBRHPJB = "BBRHPJB"
    BBRHPJW = "BBRHPJW"
    BBRHPJR = "BBRHPJR"
    IMAX1 = "IMAX1"
    IMAX2 = "IMAX2"
    IMAX3 = "IMAX3"
    PTEC = "PTEC"
    DEMAIN = "DEMAIN"
    IINST1 = "IINST1"
    IINST2 = "IINST2"
    IINST3 = "IINST3"
    PMAX = "PMAX"
    PAPP = "PAPP"
    HHPHC = "HHPHC"
    MOTDETAT = "MOTDETAT"
    PPOT = "PPOT"


class DayColor(str, Enum):
    """Tempo day color. No unknown member: absence is None."""

    BLUE = "blue"
    WHITE = "white"
    RED = "red"


class HourlyTarifPeriod(str, Enum):
    OFF_PEAK_HOURS = "off_peak_hours"
    PEAK_HOURS = "peak_hours"


class TariffOptionValue(str, Enum):
    """Subscribed tariff option (OPTARIF)."""

    BASE = "base"
    OFF_PEAK_HOURS = "off_peak_hours"
    EJP = "ejp"
    TEMPO = "tempo"


class HHPHCValue(str, Enum):
    """Schedule group code (HHPHC)."""

    A = "A"
    C = "C"
    D = "D"
    E = "E"
    Y = "Y"


@dataclass(frozen=True)
class TarifPeriod:
    """
    Hour class plus day color of a metering period.

    The color is always known here; the only place a color may be absent is
    Tomorrow.color, which holds an optional DayColor directly.
    """

    hour: HourlyTarifPeriod
    day_color: DayColor


@dataclass(frozen=True)
class ADCO:
    """Meter address group; the serial number itself is not carried."""


@dataclass(frozen=True)
class TariffOption:
    value: TariffOptionValue


@dataclass(frozen=True)
class Tomorrow:
    """Next-day color forecast; None while the meter does not know it yet."""

    color: DayColor | None


@dataclass(frozen=True)
class InstantaneousPower:
    """Instantaneous current (A) on one phase."""

    phase: int
    value: int

    def __post_init__(self) -> None:
        if self.phase not in (1, 2, 3):
            raise ValueError(f"phase must be 1, 2 or 3, got {self.phase}")
        if not 0 <= self.value <= 0xFF:
            raise ValueError(f"value must be in 0..255, got {self.value}")


@dataclass(frozen=True)
class ApparentPower:
    """Apparent power (VA)."""

    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value <= 0xFFFF:
            raise ValueError(f"value must be in 0..65535, got {self.value}")


@dataclass(frozen=True)
class Index:
    """Cumulative energy counter (Wh) for one tariff period."""

    period: TarifPeriod
    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value <= 0xFFFFFFFF:
            raise ValueError(f"value must be in 0..4294967295, got {self.value}")


@dataclass(frozen=True)
class HHPHC:
    value: HHPHCValue


@dataclass(frozen=True)
class CurrentTariffPeriod:
    """Tariff period in effect right now (PTEC)."""

    period: TarifPeriod


Message = Union[
    ADCO,
    TariffOption,
    Tomorrow,
    InstantaneousPower,
    ApparentPower,
    Index,
    HHPHC,
    CurrentTariffPeriod,
]
