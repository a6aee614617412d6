from datetime import datetime
from typing import Annotated, Any, Literal, Optional, Union
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictInt

# -------------------- Uplink records --------------------

class SOSData(BaseModel):
    data_type: Literal["SOS"] = "SOS"
    alarm: str
    device_mac: str


class GPSData(BaseModel):
    data_type: Literal["GPS"] = "GPS"
    latitude: float
    longitude: float


class VitalsData(BaseModel):
    data_type: Literal["VITALS"] = "VITALS"
    blood_oxygen: int
    wear_status: bool
    stress_level: int
    rri: int
    activity_intensity: int
    blood_pressure_sbp: int
    blood_pressure_dbp: int
    calories: int
    surface_temperature: float   # °C, wire value ×0.01
    steps_today: int
    body_temperature: float      # °C, wire value ×0.01
    heart_rate: int
    alarm: str
    battery: int
    lorawan_region: str
    beacon_id1: int
    beacon_id1_rssi: int
    beacon_id2: int
    beacon_id2_rssi: int
    beacon_id3: int
    beacon_id3_rssi: int
    movement_detection: bool
    red_key: bool
    black_key: bool
    mainboard_temperature: int
    uv_value: int
    fw_version: int
    fall_detection: bool
    time_calibration: bool
    time: datetime
    device_mac: str


class DecodeErrorData(BaseModel):
    error: str


DecodedRecord = Union[SOSData, GPSData, VitalsData, DecodeErrorData]


class UplinkResult(BaseModel):
    data: DecodedRecord


# -------------------- Downlink commands --------------------

class UplinkCommand(BaseModel):
    data_type: Literal["UPLINK"] = "UPLINK"
    uplink_interval_vitals: StrictInt   # minutes
    uplink_interval_gps: StrictInt      # minutes


class TimeCommand(BaseModel):
    data_type: Literal["TIME"] = "TIME"
    time: str   # "YYYY-MM-DD-HH-MM-SS", passed through untouched


class ScanCommand(BaseModel):
    data_type: Literal["SCAN"] = "SCAN"
    scan: bool


class AlertCommand(BaseModel):
    data_type: Literal["ALERT"] = "ALERT"
    alert_sound: bool
    alert_type: Any = None   # documented as 0-6, not carried on the wire


DownlinkCommand = Annotated[
    Union[UplinkCommand, TimeCommand, ScanCommand, AlertCommand],
    Field(discriminator="data_type"),
]


class DownlinkResult(BaseModel):
    bytes: Optional[list[int]] = None
    errors: Optional[list[str]] = None


# -------------------- HTTP bodies --------------------

class UplinkIn(BaseModel):
    bytes: list[Annotated[int, Field(ge=0, le=255)]] = Field(validation_alias=AliasChoices("bytes", "payload"))
    f_port: Optional[int] = Field(default=None, validation_alias=AliasChoices("fPort", "f_port"))
    recv_time: Optional[datetime] = Field(default=None, validation_alias=AliasChoices("recvTime", "recv_time"))
    variables: Optional[dict[str, Any]] = None


class DownlinkIn(BaseModel):
    data: dict[str, Any]
    variables: Optional[dict[str, Any]] = None
    model_config = ConfigDict(extra="ignore")
