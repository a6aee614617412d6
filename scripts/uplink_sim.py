from datetime import datetime, timedelta
import os
import random

import requests

from insite_codec.simulation.frames import build_gps_frame, build_sos_frame, build_vitals_frame, to_hex

SERVER_URL = os.getenv("CODEC_URL", "http://localhost:8000") + "/uplink/raw"
DEVICE_MAC = os.getenv("DEVICE_MAC", "a4:c1:38:0b:22:7f")
F_PORT = 1


def vitals_reading(rng: random.Random) -> dict:
    return {
        "blood_oxygen": rng.randint(94, 99),
        "wear_status": True,
        "stress_level": rng.randint(10, 60),
        "rri": rng.randint(650, 950),
        "activity_intensity": rng.randint(0, 5),
        "blood_pressure_sbp": rng.randint(110, 135),
        "blood_pressure_dbp": rng.randint(70, 88),
        "calories": rng.randint(200, 1800),
        "surface_temperature": round(rng.uniform(31.0, 34.5), 2),
        "steps_today": rng.randint(0, 12000),
        "body_temperature": round(rng.uniform(36.2, 37.3), 2),
        "heart_rate": rng.randint(60, 110),
        "alarm": "N/A",
        "battery": rng.randint(20, 100),
        "lorawan_region": "EU868",
        "beacon_id1": rng.randint(1, 500),
        "beacon_id1_rssi": rng.randint(40, 90),
        "mainboard_temperature": rng.randint(25, 40),
        "uv_value": rng.randint(0, 8),
        "fw_version": 1,
        "device_mac": DEVICE_MAC,
    }


def main():
    rng = random.Random(123)
    start = datetime.now().replace(hour=7, minute=0, second=0, microsecond=0)
    lat, lng = 25.2048, 55.2708

    for i in range(36):
        dt = start + timedelta(minutes=5 * i)
        if i % 12 == 11:
            frame = build_sos_frame("SOS", DEVICE_MAC)
        elif i % 3 == 0:
            lat += rng.uniform(-0.0005, 0.0005)
            lng += rng.uniform(-0.0005, 0.0005)
            frame = build_gps_frame(lat, lng)
        else:
            frame = build_vitals_frame(vitals_reading(rng), dt)

        headers = {
            "X-FPort": str(F_PORT),
            "X-Timestamp": dt.isoformat(),
            "Content-Type": "application/octet-stream",
        }
        r = requests.post(SERVER_URL, data=frame, headers=headers, timeout=5)
        r.raise_for_status()
        print(dt.strftime("%H:%M"), to_hex(frame), "->", r.json()["data"].get("data_type"))


if __name__ == "__main__":
    main()
