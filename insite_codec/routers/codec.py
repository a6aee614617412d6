import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Header, HTTPException, Request, Response
from pydantic import ValidationError

from ..downlink import encode_downlink
from ..schemas import DownlinkIn, UplinkIn, UplinkResult
from ..uplink import decode_uplink

logger = logging.getLogger(__name__)

router = APIRouter(tags=["codec"])


def _json_response(result: UplinkResult) -> Response:
    # pydantic writes nan/inf coordinates as null; JSONResponse would refuse them
    return Response(content=result.model_dump_json(), media_type="application/json")


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    normalized = value.strip()
    if normalized.endswith("Z"):
        normalized = normalized[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(normalized)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail="Invalid X-Timestamp. Use ISO-8601 format.") from exc


@router.post("/uplink/decode")
def decode(payload: UplinkIn):
    result = decode_uplink(payload.bytes, payload.f_port, payload.recv_time, payload.variables)
    return _json_response(result)


@router.post("/uplink/raw")
async def decode_raw(
    request: Request,
    x_fport: Optional[int] = Header(default=None),
    x_timestamp: Optional[str] = Header(default=None),
):
    body = await request.body()
    recv_time = _parse_timestamp(x_timestamp)
    result = decode_uplink(body, x_fport, recv_time)
    return _json_response(result)


@router.post("/downlink/encode")
def encode(payload: DownlinkIn):
    try:
        result = encode_downlink(payload.data, payload.variables)
    except ValidationError as exc:
        logger.warning("Malformed %s downlink: %s", payload.data.get("data_type"), exc.errors())
        raise HTTPException(status_code=422, detail=exc.errors(include_url=False, include_context=False))
    except ValueError as exc:
        logger.warning("Cannot encode downlink: %s", exc)
        raise HTTPException(status_code=422, detail=str(exc))
    return result.model_dump(exclude_none=True)
