#!/usr/bin/env python3
"""Example: decode a captured frame and collect the energy indexes per tariff period."""

from pyteleinfo import Index, decode_lines

CAPTURE = """\
ADCO 020830022493 8
OPTARIF BBR( S
ISOUSC 30 9
BBRHCJB 023823656 @
BBRHPJB 045762037 L
BBRHCJW 007092953 U
BBRHPJW 013282053 W
BBRHCJR 004284807 N
BBRHPJR 007534260 U
PTEC HCJR S
DEMAIN ROUG +
IINST1 001 I
IINST2 000 I
IINST3 001 K
PAPP 00549 3
HHPHC Y D
MOTDETAT 000000 B
PPOT 00 #\x03
"""


def main() -> None:
    indexes: dict[str, int] = {}
    for result in decode_lines(CAPTURE.splitlines()):
        if result.error is not None:
            print(f"{result.record!r}: {result.error}")
        elif isinstance(result.message, Index):
            period = result.message.period
            indexes[f"{period.hour.value}/{period.day_color.value}"] = result.message.value
    for name, value in sorted(indexes.items()):
        print(f"{name:<25} {value:>10} Wh")


if __name__ == "__main__":
    main()
