"""温度告警API路由"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ... import crud, schemas
from ...core import alerting
from ...database.connection import get_db

router = APIRouter(tags=["alarms"])


@router.get("/alarms", response_model=List[schemas.AlarmRead])
def list_alarms(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    """获取告警列表（最新的在前）"""
    return crud.list_alarms(db, skip=skip, limit=limit)


@router.patch("/alarms/{alarm_id}/acknowledge", response_model=schemas.AlarmRead)
def acknowledge_alarm(alarm_id: int, request: schemas.AlarmAcknowledge, db: Session = Depends(get_db)):
    return alerting.acknowledge_alarm(db, alarm_id, request.user, request.observations)


@router.get("/alerts/config", response_model=schemas.AlertConfigRead)
def get_alert_config(db: Session = Depends(get_db)):
    return alerting.get_alert_config(db)


@router.put("/alerts/config", response_model=schemas.AlertConfigRead)
def update_alert_config(request: schemas.AlertConfigUpdate, db: Session = Depends(get_db)):
    """更新阈值和接收人"""
    recipients = [str(r) for r in request.recipients] if request.recipients is not None else None
    return alerting.update_alert_config(db, threshold=request.threshold, recipients=recipients)


@router.post("/alerts/config/reset", status_code=204)
def reset_alert_flag(db: Session = Depends(get_db)):
    """清除告警去重标志"""
    alerting.reset_alert_dedup(db)
