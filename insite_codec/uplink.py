# uplink.py
# Decode InSite 4.0 uplink frames. The frame kind is chosen by length alone:
#   9 bytes  -> SOS alarm
#   22 bytes -> GPS fix
#   49 bytes -> vitals telemetry

from __future__ import annotations
import logging
import math
from datetime import datetime, timedelta
from typing import Any, Callable, Optional, Union

from .binary import (
    ByteSeq,
    alarm_type,
    bytes_to_float64_le,
    bytes_to_unsigned_int,
    format_mac,
    lorawan_region,
    reverse_byte_order,
)
from .schemas import DecodeErrorData, DecodedRecord, GPSData, SOSData, UplinkResult, VitalsData

logger = logging.getLogger(__name__)

INVALID_LENGTH = "Invalid payload length"

LNG_HEMISPHERES = {0x45: "E", 0x57: "W"}
LAT_HEMISPHERES = {0x4E: "N", 0x53: "S"}
UNKNOWN = "Unknown"

Clock = Union[datetime, Callable[[], datetime], None]


def _resolve_now(now: Clock) -> datetime:
    if now is None:
        return datetime.now()
    if callable(now):
        return now()
    return now


def _u16(frame: bytes, start: int) -> int:
    # wire order is little-endian; flip, then read big-endian
    return bytes_to_unsigned_int(reverse_byte_order(frame[start:start + 2]))


def _flag(value: int) -> bool:
    return value == 1


# -------------------- SOS --------------------

def decode_sos(frame: bytes) -> SOSData:
    return SOSData(alarm=alarm_type(frame[0]), device_mac=format_mac(frame[1:7]))


# -------------------- GPS --------------------

def parse_ddmm(raw: ByteSeq) -> tuple[float, float]:
    """Split a little-endian ``DDMM.MMMMM`` double into (degrees, minutes)."""

    value = bytes_to_float64_le(raw)
    # nan/inf pass through as nan rather than raising
    degrees = math.floor(value / 100) if math.isfinite(value) else value / 100
    minutes = value - degrees * 100
    return degrees, minutes


def dm_to_decimal(degrees: float, minutes: float, direction: str) -> float:
    """Degrees + decimal minutes -> signed decimal degrees (S and W are negative)."""

    decimal = degrees + minutes / 60
    if direction in ("S", "W"):
        decimal = -decimal
    return decimal


def decode_gps(frame: bytes) -> GPSData:
    lng_dir = LNG_HEMISPHERES.get(frame[8], UNKNOWN)
    lat_dir = LAT_HEMISPHERES.get(frame[17], UNKNOWN)
    lng_deg, lng_min = parse_ddmm(frame[0:8])
    lat_deg, lat_min = parse_ddmm(frame[9:17])
    return GPSData(
        latitude=dm_to_decimal(lat_deg, lat_min, lat_dir),
        longitude=dm_to_decimal(lng_deg, lng_min, lng_dir),
    )


# -------------------- Vitals --------------------

def stamp_time_of_day(now: datetime, hour: int, minute: int, second: int) -> datetime:
    """Put hour/minute/second onto *now*'s calendar day, sub-seconds zeroed.

    Out-of-range components carry into the next unit instead of raising,
    e.g. minute=75 lands at hour+1:15.
    """

    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight + timedelta(hours=hour, minutes=minute, seconds=second)


def decode_vitals(frame: bytes, now: datetime) -> VitalsData:
    return VitalsData(
        blood_oxygen=frame[0],
        wear_status=_flag(frame[1]),
        stress_level=frame[2],
        rri=_u16(frame, 3),
        activity_intensity=frame[5],
        blood_pressure_sbp=frame[6],
        blood_pressure_dbp=frame[7],
        calories=_u16(frame, 8),
        surface_temperature=_u16(frame, 10) * 0.01,
        steps_today=_u16(frame, 12),
        body_temperature=_u16(frame, 14) * 0.01,
        heart_rate=frame[16],
        alarm=alarm_type(frame[17]),
        battery=frame[18],
        lorawan_region=lorawan_region(frame[19]),
        beacon_id1=_u16(frame, 20),
        beacon_id1_rssi=frame[22],
        beacon_id2=_u16(frame, 23),
        beacon_id2_rssi=frame[25],
        beacon_id3=_u16(frame, 26),
        beacon_id3_rssi=frame[28],
        movement_detection=_flag(frame[29]),
        red_key=_flag(frame[30]),
        black_key=_flag(frame[31]),
        mainboard_temperature=frame[32],
        uv_value=frame[33],
        fw_version=frame[34],
        fall_detection=_flag(frame[35]),
        # byte 36 is both the calibration flag and the hour
        time_calibration=_flag(frame[36]),
        time=stamp_time_of_day(now, frame[36], frame[37], frame[38]),
        device_mac=format_mac(frame[41:47]),
        # bytes 47..48 are the stop marks
    )


# -------------------- Dispatch --------------------

def decode(payload: ByteSeq, now: Clock = None) -> DecodedRecord:
    """Decode one uplink frame.

    A frame of any length other than 9, 22 or 49 yields a
    :class:`DecodeErrorData` record rather than an exception.
    """

    frame = bytes(payload)
    match len(frame):
        case 9:
            record: DecodedRecord = decode_sos(frame)
        case 22:
            record = decode_gps(frame)
        case 49:
            record = decode_vitals(frame, _resolve_now(now))
        case _:
            logger.warning("Rejecting uplink frame of %d bytes", len(frame))
            return DecodeErrorData(error=INVALID_LENGTH)

    logger.debug("Decoded %s frame (%d bytes)", record.data_type, len(frame))
    return record


def decode_uplink(
    bytes: ByteSeq,
    f_port: Optional[int] = None,
    recv_time: Optional[datetime] = None,
    variables: Optional[dict[str, Any]] = None,
    now: Clock = None,
) -> UplinkResult:
    """Network-server entry point. Port, receive time and variables do not affect decoding."""

    return UplinkResult(data=decode(bytes, now=now))
