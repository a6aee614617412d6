# frames.py
# Build InSite 4.0 uplink frames from engineering values, the way the helmet
# packs them. Used by the uplink simulator and the tests.

from __future__ import annotations
import struct
from datetime import datetime

STOP_MARK = b"\r\n"

ALARM_CODES = {"N/A": 0, "SOS": 1, "FIRE": 2}
REGION_CODES = {"AS923-1": 0, "AU915": 1, "EU868": 2, "KR920": 3, "IN865": 4, "US915": 5, "RU864": 6}


def _mac_le(mac: str) -> bytes:
    raw = bytes.fromhex(mac.replace(":", ""))
    if len(raw) != 6:
        raise ValueError(f"MAC address must be 6 bytes, got {len(raw)}")
    return raw[::-1]


def _u16_le(v: float) -> bytes:
    return struct.pack("<H", max(0, min(65535, int(round(v)))))


def decimal_to_ddmm(value: float) -> float:
    """Signed decimal degrees -> unsigned DDMM.MMMMM."""

    value = abs(value)
    degrees = int(value)
    minutes = (value - degrees) * 60
    return degrees * 100 + minutes


def build_sos_frame(alarm: str, device_mac: str) -> bytes:
    frame = bytes([ALARM_CODES.get(alarm, 0)]) + _mac_le(device_mac)
    return frame + STOP_MARK


def build_gps_frame(latitude: float, longitude: float) -> bytes:
    lng = struct.pack("<d", decimal_to_ddmm(longitude)) + (b"W" if longitude < 0 else b"E")
    lat = struct.pack("<d", decimal_to_ddmm(latitude)) + (b"S" if latitude < 0 else b"N")
    frame = lng + lat + b"\x00\x00"
    return frame + STOP_MARK


def build_vitals_frame(vitals: dict, at: datetime | None = None) -> bytes:
    """
    Layout (49 bytes, little-endian u16 fields):
      [spo2][wear][stress][rri u16][activity][sbp][dbp][kcal u16]
      [surface_temp u16 ×100][steps u16][body_temp u16 ×100][hr][alarm]
      [battery][region][beacon1 u16][rssi1][beacon2 u16][rssi2]
      [beacon3 u16][rssi3][movement][red][black][board_temp][uv][fw]
      [fall][hh][mm][ss][pad ×2][mac ×6][CR][LF]
    The hour byte doubles as the time-calibration flag on the device.
    """
    at = at or datetime.now()
    v = vitals.get
    buf = bytearray()
    buf += bytes([v("blood_oxygen", 0), int(bool(v("wear_status", False))), v("stress_level", 0)])
    buf += _u16_le(v("rri", 0))
    buf += bytes([v("activity_intensity", 0), v("blood_pressure_sbp", 0), v("blood_pressure_dbp", 0)])
    buf += _u16_le(v("calories", 0))
    buf += _u16_le(v("surface_temperature", 0.0) * 100)
    buf += _u16_le(v("steps_today", 0))
    buf += _u16_le(v("body_temperature", 0.0) * 100)
    buf += bytes([v("heart_rate", 0), ALARM_CODES.get(v("alarm", "N/A"), 0), v("battery", 0)])
    buf += bytes([REGION_CODES.get(v("lorawan_region", ""), 0xFF)])
    for n in (1, 2, 3):
        buf += _u16_le(v(f"beacon_id{n}", 0))
        buf += bytes([v(f"beacon_id{n}_rssi", 0)])
    buf += bytes([
        int(bool(v("movement_detection", False))),
        int(bool(v("red_key", False))),
        int(bool(v("black_key", False))),
        v("mainboard_temperature", 0),
        v("uv_value", 0),
        v("fw_version", 0),
        int(bool(v("fall_detection", False))),
        at.hour, at.minute, at.second,
        0, 0,
    ])
    buf += _mac_le(v("device_mac", "00:00:00:00:00:00"))
    buf += STOP_MARK
    return bytes(buf)


def to_hex(payload: bytes) -> str:
    return payload.hex().upper()

