import sys
from datetime import datetime
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from insite_codec.simulation import frames


def test_frame_lengths_match_decoder_dispatch():
    assert len(frames.build_sos_frame("SOS", "00:11:22:33:44:55")) == 9
    assert len(frames.build_gps_frame(1.0, 2.0)) == 22
    assert len(frames.build_vitals_frame({}, datetime(2024, 1, 1))) == 49


def test_sos_frame_layout():
    frame = frames.build_sos_frame("FIRE", "00:11:22:33:44:55")
    assert frame == bytes([2, 0x55, 0x44, 0x33, 0x22, 0x11, 0x00, 13, 10])


def test_gps_frame_hemisphere_markers():
    frame = frames.build_gps_frame(-10.0, -20.0)
    assert frame[8:9] == b"W"
    assert frame[17:18] == b"S"
    assert frame[-2:] == b"\r\n"


def test_vitals_frame_puts_clock_at_36():
    frame = frames.build_vitals_frame({}, datetime(2024, 1, 1, 13, 14, 15))
    assert frame[36:39] == bytes([13, 14, 15])
    assert frame[19] == 0xFF


def test_bad_mac_rejected():
    with pytest.raises(ValueError):
        frames.build_sos_frame("SOS", "00:11:22")


def test_to_hex_is_uppercase():
    assert frames.to_hex(b"\x0a\xbc") == "0ABC"
