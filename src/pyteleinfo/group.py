"""Split a Teleinfo record into code, data and control character; whitelist the code."""

import re
from typing import NamedTuple

from .errors import GroupError
from .types import FieldCode

# Tab on the wire; space is accepted as well (sample dumps and most loggers use it)
_SEPARATOR = r"[ \t]"

# Longest codes first so no label shadows another that extends it
_CODE_ALTERNATION = "|".join(
    re.escape(code.value) for code in sorted(FieldCode, key=lambda c: len(c.value), reverse=True)
)

# CODE SEP DATA SEP CTRL; CTRL may be a space (checksum alphabet starts at 0x20) but never a tab
_GROUP_PATTERN = re.compile(
    rf"({_CODE_ALTERNATION}){_SEPARATOR}([^ \t]+){_SEPARATOR}([^\t\n])",
)


class Group(NamedTuple):
    """One matched group. The control character is captured but not verified."""

    code: FieldCode
    data: str
    control: str


def split_group(record: str) -> Group:
    """
    Match a whole record against CODE SEP DATA SEP CTRL.

    Raises GroupError carrying the record verbatim when the shape does not
    match end-to-end or the code is not in the whitelist.
    """
    m = _GROUP_PATTERN.fullmatch(record)
    if not m:
        raise GroupError(record)
    return Group(code=FieldCode(m.group(1)), data=m.group(2), control=m.group(3))
