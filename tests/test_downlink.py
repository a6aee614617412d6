import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from insite_codec import downlink
from insite_codec.schemas import AlertCommand, ScanCommand, TimeCommand, UplinkCommand


def test_uplink_command_bytes():
    result = downlink.encode_downlink(
        {"data_type": "UPLINK", "uplink_interval_vitals": 5, "uplink_interval_gps": 60}
    )
    assert result.errors is None
    assert bytes(result.bytes) == b"UPLINK:1,5\r\n"
    assert result.bytes[-2:] == [13, 10]


@pytest.mark.parametrize(
    "minutes, code",
    [(1, "7"), (5, "1"), (10, "2"), (15, "3"), (30, "4"), (60, "5"), (120, "6")],
)
def test_uplink_interval_codes(minutes, code):
    payload = downlink.encode(UplinkCommand(uplink_interval_vitals=minutes, uplink_interval_gps=minutes))
    assert payload == f"UPLINK:{code},{code}\r\n".encode()


@pytest.mark.parametrize("vitals, gps, bad", [(7, 60, 7), (5, 7, 7), (0, 0, 0), (-5, 5, -5)])
def test_uplink_unmapped_interval_raises(vitals, gps, bad):
    with pytest.raises(downlink.InvalidUplinkInterval) as excinfo:
        downlink.encode_downlink(
            {"data_type": "UPLINK", "uplink_interval_vitals": vitals, "uplink_interval_gps": gps}
        )
    assert excinfo.value.interval == bad
    assert isinstance(excinfo.value, ValueError)


def test_time_command_passes_string_through():
    result = downlink.encode_downlink({"data_type": "TIME", "time": "2024-03-14-09-15-30"})
    assert bytes(result.bytes) == b"TIME:2024-03-14-09-15-30\r\n"


def test_time_command_is_not_format_checked():
    assert downlink.encode(TimeCommand(time="whenever")) == b"TIME:whenever\r\n"


def test_time_command_rejects_non_ascii():
    with pytest.raises(ValueError):
        downlink.encode(TimeCommand(time="12:00 Uhr ü"))


@pytest.mark.parametrize("flag, text", [(True, b"true"), (False, b"false")])
def test_scan_command_stringifies_flag(flag, text):
    assert downlink.encode(ScanCommand(scan=flag)) == b"SCAN:" + text + b"\r\n"


@pytest.mark.parametrize("sound, expected", [(True, b"ALERT:1,0\r\n"), (False, b"ALERT:2,0\r\n")])
def test_alert_command(sound, expected):
    assert downlink.encode(AlertCommand(alert_sound=sound)) == expected


def test_alert_type_is_not_encoded():
    plain = downlink.encode(AlertCommand(alert_sound=True))
    typed = downlink.encode(AlertCommand(alert_sound=True, alert_type=5))
    assert plain == typed


@pytest.mark.parametrize(
    "data",
    [
        {"data_type": "REBOOT"},
        {"data_type": "uplink", "uplink_interval_vitals": 5, "uplink_interval_gps": 5},
        {"data_type": None},
        {},
    ],
)
def test_unknown_data_type_returns_errors(data):
    result = downlink.encode_downlink(data)
    assert result.bytes is None
    assert result.errors == ["Invalid data type"]


def test_unknown_data_type_is_logged(caplog):
    with caplog.at_level("WARNING", logger="insite_codec.downlink"):
        downlink.encode_downlink({"data_type": "REBOOT"})
    assert "REBOOT" in caplog.text


def test_known_command_with_missing_fields_raises():
    with pytest.raises(ValidationError):
        downlink.encode_downlink({"data_type": "SCAN"})


def test_variables_do_not_change_output():
    data = {"data_type": "ALERT", "alert_sound": False, "alert_type": 3}
    assert downlink.encode_downlink(data, {"x": 1}) == downlink.encode_downlink(data)


def test_alert_type_of_any_shape_is_accepted():
    result = downlink.encode_downlink({"data_type": "ALERT", "alert_sound": True, "alert_type": "high"})
    assert bytes(result.bytes) == b"ALERT:1,0\r\n"


@pytest.mark.parametrize("vitals, gps", [(True, 60), (5, True), ("5", 60), (5.0, 60)])
def test_uplink_interval_must_be_an_integer(vitals, gps):
    with pytest.raises(ValidationError):
        downlink.encode_downlink(
            {"data_type": "UPLINK", "uplink_interval_vitals": vitals, "uplink_interval_gps": gps}
        )
