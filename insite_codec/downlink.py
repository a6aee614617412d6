# downlink.py
# Encode application commands into InSite 4.0 downlink frames.
# Every frame is ASCII text closed by CR LF, e.g. b"UPLINK:1,5\r\n".

from __future__ import annotations
import logging
from typing import Any, Mapping, Optional

from pydantic import TypeAdapter

from .binary import flatten, string_to_bytes
from .schemas import (
    AlertCommand,
    DownlinkCommand,
    DownlinkResult,
    ScanCommand,
    TimeCommand,
    UplinkCommand,
)

logger = logging.getLogger(__name__)

END_MARK = bytes([13, 10])

INVALID_DATA_TYPE = "Invalid data type"

# uplink interval in minutes -> device code
UPLINK_INTERVAL_CODES: dict[int, str] = {
    1: "7",
    5: "1",
    10: "2",
    15: "3",
    30: "4",
    60: "5",
    120: "6",
}

COMMAND_TYPES = ("UPLINK", "TIME", "SCAN", "ALERT")

_command_adapter: TypeAdapter[DownlinkCommand] = TypeAdapter(DownlinkCommand)


class InvalidUplinkInterval(ValueError):
    """Raised for an uplink interval the device has no code for."""

    def __init__(self, interval: Any):
        super().__init__(f"Invalid uplink interval: {interval!r}")
        self.interval = interval


def uplink_interval_code(interval: int) -> int:
    code = UPLINK_INTERVAL_CODES.get(interval)
    if code is None:
        raise InvalidUplinkInterval(interval)
    return ord(code)


def encode(command: DownlinkCommand) -> bytes:
    match command:
        case UplinkCommand():
            # both codes are resolved before anything is assembled
            vitals = uplink_interval_code(command.uplink_interval_vitals)
            gps = uplink_interval_code(command.uplink_interval_gps)
            parts = [string_to_bytes("UPLINK:"), vitals, string_to_bytes(","), gps]
        case TimeCommand():
            parts = [string_to_bytes("TIME:"), string_to_bytes(command.time)]
        case ScanCommand():
            parts = [string_to_bytes("SCAN:"), string_to_bytes("true" if command.scan else "false")]
        case AlertCommand():
            # alert_type is not part of the frame
            parts = [
                string_to_bytes("ALERT:"),
                string_to_bytes("1" if command.alert_sound else "2"),
                string_to_bytes(","),
                string_to_bytes("0"),
            ]
        case _:
            raise TypeError(f"Unsupported downlink command: {type(command).__name__}")
    return flatten([*parts, END_MARK])


def encode_downlink(data: Mapping[str, Any], variables: Optional[dict[str, Any]] = None) -> DownlinkResult:
    """Network-server entry point.

    An unknown ``data_type`` is reported in ``errors``. A known command with
    bad fields (missing keys, unmapped interval) raises.
    """

    data_type = data.get("data_type") if isinstance(data, Mapping) else None
    if data_type not in COMMAND_TYPES:
        logger.warning("Rejecting downlink with data_type=%r", data_type)
        return DownlinkResult(errors=[INVALID_DATA_TYPE])

    command = _command_adapter.validate_python(dict(data))
    payload = encode(command)
    logger.debug("Encoded %s downlink (%d bytes)", data_type, len(payload))
    return DownlinkResult(bytes=list(payload))
