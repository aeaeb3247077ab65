"""Tests for CLI module - message formatting and command structure."""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

from typer.testing import CliRunner

from pyteleinfo.cli import app, format_message, message_to_dict, result_to_dict
from pyteleinfo.errors import FieldError, SerialIOError
from pyteleinfo.reader import DecodeResult
from pyteleinfo.types import (
    ADCO,
    ApparentPower,
    DayColor,
    HourlyTarifPeriod,
    Index,
    TarifPeriod,
    Tomorrow,
)

runner = CliRunner()

RED_PEAK = TarifPeriod(hour=HourlyTarifPeriod.PEAK_HOURS, day_color=DayColor.RED)


# ============================================================================
# Formatting Tests
# ============================================================================


class TestMessageToDict:
    """Test plain-dict conversion of messages."""

    def test_nested_period(self) -> None:
        """Test enums become their values and the period nests."""
        assert message_to_dict(Index(period=RED_PEAK, value=7659709)) == {
            "period": {"hour": "peak_hours", "day_color": "red"},
            "value": 7659709,
        }

    def test_optional_color(self) -> None:
        """Test an unknown tomorrow color stays None."""
        assert message_to_dict(Tomorrow(None)) == {"color": None}
        assert message_to_dict(Tomorrow(DayColor.WHITE)) == {"color": "white"}

    def test_empty_and_none(self) -> None:
        """Test payload-less messages and ignored groups."""
        assert message_to_dict(ADCO()) == {}
        assert message_to_dict(None) is None


class TestFormatMessage:
    """Test one-line text rendering."""

    def test_flattens_period(self) -> None:
        assert format_message(Index(period=RED_PEAK, value=7659709)) == (
            "Index(hour=peak_hours, day_color=red, value=7659709)"
        )

    def test_simple_messages(self) -> None:
        assert format_message(ApparentPower(5355)) == "ApparentPower(value=5355)"
        assert format_message(ADCO()) == "ADCO()"
        assert format_message(Tomorrow(None)) == "Tomorrow(color=None)"

    def test_ignored(self) -> None:
        assert format_message(None) == "Ignored"


def test_result_to_dict_error() -> None:
    """Test JSON shape of a failed record."""
    result = DecodeResult(record="IINST2 A X", error=FieldError("IINST2", "A"))
    assert result_to_dict(result) == {
        "record": "IINST2 A X",
        "type": None,
        "message": None,
        "error": "Unable to parse IINST2 data: 'A'",
    }


# ============================================================================
# Command Tests
# ============================================================================


def test_decode_command() -> None:
    """Test decode command with a current-period group."""
    result = runner.invoke(app, ["decode", "PTEC HCJB S"])

    assert result.exit_code == 0
    assert "CurrentTariffPeriod(hour=off_peak_hours, day_color=blue)" in result.stdout


def test_decode_command_tab_separated() -> None:
    """Test decode command with wire-format tab separators."""
    result = runner.invoke(app, ["decode", "BBRHPJR\t007659709\tX"])

    assert result.exit_code == 0
    assert "value=7659709" in result.stdout


def test_decode_command_ignored() -> None:
    """Test decode command with a recognized but ignored group."""
    result = runner.invoke(app, ["decode", "MOTDETAT 000000 B"])

    assert result.exit_code == 0
    assert "Ignored" in result.stdout


def test_decode_command_json() -> None:
    """Test decode command with JSON output."""
    result = runner.invoke(app, ["decode", "IINST2 033 X", "--json"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["record"] == "IINST2 033 X"
    assert data["type"] == "InstantaneousPower"
    assert data["message"] == {"phase": 2, "value": 33}
    assert data["error"] is None


def test_decode_command_field_error() -> None:
    """Test decode command exits 2 on bad field data."""
    result = runner.invoke(app, ["decode", "DEMAIN ZZZZ X"])

    assert result.exit_code == 2
    assert "Unable to parse DEMAIN data: 'ZZZZ'" in result.output


def test_decode_command_group_error() -> None:
    """Test decode command exits 2 on an unknown label."""
    result = runner.invoke(app, ["decode", "IINST4 3 S"])

    assert result.exit_code == 2
    assert "Unrecognized group" in result.output


def test_parse_command_stdin() -> None:
    """Test parse command reading stdin, skipping blank lines."""
    capture = "ADCO 020830022493 8\r\n\r\nPTEC HCJR S\r\nPPOT 00 #\r\x03\x02\n"
    result = runner.invoke(app, ["parse"], input=capture)

    assert result.exit_code == 0
    lines = result.stdout.strip().split("\n")
    assert len(lines) == 3
    assert lines[0].startswith("Message: ADCO 020830022493 8")
    assert lines[0].endswith("-> ADCO()")
    assert "CurrentTariffPeriod(hour=off_peak_hours, day_color=red)" in lines[1]
    assert lines[2].endswith("-> Ignored")


def test_parse_command_skip_ignored() -> None:
    """Test parse command dropping ignored groups."""
    result = runner.invoke(app, ["parse", "-", "--skip-ignored"], input="MOTDETAT 000000 B\nPAPP 00549 3\n")

    assert result.exit_code == 0
    assert "MOTDETAT" not in result.stdout
    assert "ApparentPower(value=549)" in result.stdout


def test_parse_command_json_with_errors() -> None:
    """Test parse command NDJSON output and exit 1 when a record fails."""
    result = runner.invoke(app, ["parse", "--json"], input="HHPHC Y D\nIINST2 A X\n")

    assert result.exit_code == 1
    rows = [json.loads(line) for line in result.stdout.strip().split("\n")]
    assert rows[0]["type"] == "HHPHC"
    assert rows[0]["message"] == {"value": "Y"}
    assert rows[1]["type"] is None
    assert rows[1]["error"] == "Unable to parse IINST2 data: 'A'"


def test_parse_command_file(tmp_path: Path) -> None:
    """Test parse command reading a capture file."""
    capture = tmp_path / "frame.txt"
    capture.write_bytes(b"OPTARIF BBR( S\r\nXXX AAA\r\n")

    result = runner.invoke(app, ["parse", str(capture)])

    assert result.exit_code == 1
    assert "TariffOption(value=tempo)" in result.output
    assert "Error reading group: 'XXX AAA'" in result.output


def test_parse_command_missing_file(tmp_path: Path) -> None:
    """Test parse command with a missing file."""
    result = runner.invoke(app, ["parse", str(tmp_path / "missing.txt")])

    assert result.exit_code == 2
    assert "File not found" in result.output


@patch("pyteleinfo.cli.TeleinfoReader")
def test_listen_command_count(mock_reader_class: MagicMock) -> None:
    """Test listen command stops after --count records."""
    mock_reader = MagicMock()
    mock_reader_class.return_value = mock_reader
    mock_reader.__enter__.return_value = mock_reader
    mock_reader.iter_messages.return_value = iter(
        [
            DecodeResult(record="PAPP 00549 3", message=ApparentPower(549)),
            DecodeResult(record="MOTDETAT 000000 B"),
            DecodeResult(record="ADCO 020830022493 8", message=ADCO()),
        ]
    )

    result = runner.invoke(app, ["listen", "--port", "/dev/ttyUSB0", "--count", "2"])

    assert result.exit_code == 0
    assert "ApparentPower(value=549)" in result.stdout
    assert "Ignored" in result.stdout
    assert "ADCO()" not in result.stdout
    mock_reader_class.assert_called_once_with(port="/dev/ttyUSB0", baudrate=1200, timeout=1.0)


@patch("pyteleinfo.cli.TeleinfoReader")
def test_listen_command_env_config(mock_reader_class: MagicMock) -> None:
    """Test listen command reads port settings from the environment."""
    mock_reader = MagicMock()
    mock_reader_class.return_value = mock_reader
    mock_reader.__enter__.return_value = mock_reader
    mock_reader.iter_messages.return_value = iter([DecodeResult(record="HHPHC Y D")])

    result = runner.invoke(
        app,
        ["listen", "--count", "1", "--json"],
        env={"PYTELEINFO_PORT": "/dev/ttyS1", "PYTELEINFO_BAUDRATE": "9600", "PYTELEINFO_TIMEOUT": "2.5"},
    )

    assert result.exit_code == 0
    mock_reader_class.assert_called_once_with(port="/dev/ttyS1", baudrate=9600, timeout=2.5)
    assert json.loads(result.stdout)["record"] == "HHPHC Y D"


@patch("pyteleinfo.cli.TeleinfoReader")
def test_listen_command_serial_error(mock_reader_class: MagicMock) -> None:
    """Test listen command exits 3 when the port cannot be opened."""
    mock_reader = MagicMock()
    mock_reader_class.return_value = mock_reader
    mock_reader.__enter__.side_effect = SerialIOError("Failed to open /dev/ttyAMA0", port="/dev/ttyAMA0")

    result = runner.invoke(app, ["listen"])

    assert result.exit_code == 3
    assert "Serial error" in result.output


def test_listen_invalid_count() -> None:
    """Test listen command rejects a non-positive count."""
    result = runner.invoke(app, ["listen", "--count", "0"])
    assert result.exit_code == 2
    assert "Count must be positive" in result.output


def test_codes_command() -> None:
    """Test codes command lists every label with its kind."""
    result = runner.invoke(app, ["codes", "--json"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert len(data) == 22
    assert data["PTEC"] == "decoded"
    assert data["MOTDETAT"] == "ignored"


def test_command_help() -> None:
    """Test that help text is available for all commands."""
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "decode" in result.stdout
    assert "parse" in result.stdout
    assert "listen" in result.stdout
    assert "codes" in result.stdout


def test_version_flag() -> None:
    """Test --version flag."""
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "pyteleinfo" in result.stdout


def test_codes_command_verbose() -> None:
    """Test codes command accepts --verbose like every other command."""
    result = runner.invoke(app, ["codes", "--verbose"])

    assert result.exit_code == 0
    assert "PTEC" in result.stdout
    assert "ignored" in result.stdout
