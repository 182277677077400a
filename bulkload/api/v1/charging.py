"""装车系统API路由

装车系统凭激活码获取计划装载量，并逐条上报流量计数据
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.orm import Session

from ... import schemas
from ...core import telemetry
from ...database.connection import get_db
from ...notifications import get_notifier

router = APIRouter(prefix="/charging", tags=["charging"])


@router.get("/orders/{number}/preset", response_model=schemas.PresetRead)
def get_preset(number: str, code: str = Query(..., description="5位激活码"), db: Session = Depends(get_db)):
    preset = telemetry.get_preset(db, number, code)
    return schemas.PresetRead(number=number, preset=preset)


@router.post("/orders/{number}/telemetry", response_model=schemas.TelemetryResult)
def post_telemetry(
    number: str,
    payload: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    notifier=Depends(get_notifier),
):
    """接收一条流量计数据"""
    reading = telemetry.parse_telemetry_payload(payload)
    detail, outcome = telemetry.ingest_telemetry(db, number, notifier=notifier, **reading)
    return schemas.TelemetryResult(detail=detail, alert=outcome)
