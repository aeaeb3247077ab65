"""Group decoder: one trimmed Teleinfo record in, one typed Message (or None) out."""

import re

from typing_extensions import assert_never

from .errors import DayColorError, FieldError, OffPeakHoursError
from .group import split_group
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

# Unsigned ASCII decimal; int() alone would also take signs, blanks and "1_000"
_DECIMAL_PATTERN = re.compile(r"[0-9]+")

_U8_MAX = 0xFF
_U16_MAX = 0xFFFF
_U32_MAX = 0xFFFFFFFF

_TARIFF_OPTIONS: dict[str, TariffOptionValue] = {
    "BASE": TariffOptionValue.BASE,
    "HC..": TariffOptionValue.OFF_PEAK_HOURS,
    "EJP.": TariffOptionValue.EJP,
}

_TOMORROW_COLORS: dict[str, DayColor | None] = {
    "----": None,
    "BLEU": DayColor.BLUE,
    "BLAN": DayColor.WHITE,
    "ROUG": DayColor.RED,
}

_HOURS: dict[str, HourlyTarifPeriod] = {
    "C": HourlyTarifPeriod.OFF_PEAK_HOURS,
    "P": HourlyTarifPeriod.PEAK_HOURS,
}

_DAY_COLORS: dict[str, DayColor] = {
    "B": DayColor.BLUE,
    "W": DayColor.WHITE,
    "R": DayColor.RED,
}

_CURRENT_PERIODS = frozenset({"HCJB", "HCJW", "HCJR", "HPJB", "HPJW", "HPJR"})

_PHASES: dict[FieldCode, int] = {
    FieldCode.IINST1: 1,
    FieldCode.IINST2: 2,
    FieldCode.IINST3: 3,
}

# Recognized labels that carry nothing worth a Message (listed for callers; decode() branches on each)
IGNORED_CODES = frozenset(
    {
        FieldCode.MOTDETAT,
        FieldCode.IMAX1,
        FieldCode.IMAX2,
        FieldCode.IMAX3,
        FieldCode.PPOT,
        FieldCode.PMAX,
        FieldCode.ISOUSC,
    }
)


def parse_period(fragment: str) -> TarifPeriod:
    """
    Parse a 4-character H?J? fragment (e.g. "HCJB") into a TarifPeriod.

    Offset 1 is the hour class (C/P), offset 3 the day color (B/W/R). Each
    check raises its own error carrying the fragment it looked at.
    """
    hour = _HOURS.get(fragment[1:2])
    if hour is None:
        raise OffPeakHoursError(fragment)
    day_color = _DAY_COLORS.get(fragment[3:4])
    if day_color is None:
        raise DayColorError(fragment)
    return TarifPeriod(hour=hour, day_color=day_color)


def _parse_unsigned(code: FieldCode, data: str, maximum: int) -> int:
    if not _DECIMAL_PATTERN.fullmatch(data):
        raise FieldError(code.value, data)
    # Leading zeros are legal; bound the length before int() (which caps digit strings)
    digits = data.lstrip("0") or "0"
    if len(digits) > len(str(maximum)) or int(digits) > maximum:
        raise FieldError(code.value, data, f"{code.value} value out of range 0–{maximum}: {data!r}")
    return int(digits)


def _parse_tariff_option(data: str) -> TariffOption:
    value = _TARIFF_OPTIONS.get(data)
    if value is None:
        if not data.startswith("BBR"):
            raise FieldError(FieldCode.OPTARIF.value, data)
        value = TariffOptionValue.TEMPO
    return TariffOption(value)


def _parse_tomorrow(data: str) -> Tomorrow:
    if data not in _TOMORROW_COLORS:
        raise FieldError(FieldCode.DEMAIN.value, data)
    return Tomorrow(_TOMORROW_COLORS[data])


def _parse_hhphc(data: str) -> HHPHC:
    try:
        return HHPHC(HHPHCValue(data))
    except ValueError:
        raise FieldError(FieldCode.HHPHC.value, data) from None


def _parse_current_period(data: str) -> CurrentTariffPeriod:
    if data not in _CURRENT_PERIODS:
        raise FieldError(FieldCode.PTEC.value, data)
    return CurrentTariffPeriod(parse_period(data))


def decode(record: str) -> Message | None:
    """
    Decode one trimmed record (frame-control bytes already stripped).

    Returns the typed Message, or None for a recognized code that carries no
    message (MOTDETAT, IMAX1..3, PPOT, PMAX, ISOUSC).

    Raises GroupError, FieldError, OffPeakHoursError or DayColorError.
    """
    code, data, _control = split_group(record)

    if code is FieldCode.ADCO:
        return ADCO()
    elif code is FieldCode.OPTARIF:
        return _parse_tariff_option(data)
    elif code is FieldCode.DEMAIN:
        return _parse_tomorrow(data)
    elif code is FieldCode.IINST1 or code is FieldCode.IINST2 or code is FieldCode.IINST3:
        return InstantaneousPower(phase=_PHASES[code], value=_parse_unsigned(code, data, _U8_MAX))
    elif code is FieldCode.PAPP:
        return ApparentPower(_parse_unsigned(code, data, _U16_MAX))
    elif code is FieldCode.HHPHC:
        return _parse_hhphc(data)
    elif code is FieldCode.PTEC:
        return _parse_current_period(data)
    elif (
        code is FieldCode.BBRHCJB
        or code is FieldCode.BBRHCJW
        or code is FieldCode.BBRHCJR
        or code is FieldCode.BBRHPJB
        or code is FieldCode.BBRHPJW
        or code is FieldCode.BBRHPJR
    ):
        return Index(period=parse_period(code.value[-4:]), value=_parse_unsigned(code, data, _U32_MAX))
    elif (
        code is FieldCode.MOTDETAT
        or code is FieldCode.IMAX1
        or code is FieldCode.IMAX2
        or code is FieldCode.IMAX3
        or code is FieldCode.PPOT
        or code is FieldCode.PMAX
        or code is FieldCode.ISOUSC
    ):
        return None
    else:
        assert_never(code)
