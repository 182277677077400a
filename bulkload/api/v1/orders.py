"""订单API路由

ERP/B2B 与装车系统的订单接入，以及订单、遥测明细、审计记录、对账的查询
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from ... import crud, schemas
from ...core import intake, lifecycle, reconciliation
from ...database.connection import get_db

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("/b2b", response_model=schemas.OrderRead, status_code=201)
def create_erp_order(payload: Dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    """ERP/B2B 下单（严格校验必填字段）"""
    return intake.create_order_from_payload(db, payload, intake.SCHEMA_ERP)


@router.post("/charging", response_model=schemas.OrderRead, status_code=201)
def create_charging_order(payload: Dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    """装车系统下单（只做别名提取，不做严格校验）"""
    return intake.create_order_from_payload(db, payload, intake.SCHEMA_CHARGING)


@router.get("/", response_model=List[schemas.OrderRead])
def list_orders(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    return crud.list_orders(db, skip=skip, limit=limit)


@router.get("/{number}", response_model=schemas.OrderRead)
def get_order(number: str, db: Session = Depends(get_db)):
    return lifecycle.load_order(db, number)


@router.get("/{number}/details", response_model=List[schemas.OrderDetailRead])
def get_order_details(number: str, db: Session = Depends(get_db)):
    """订单的遥测明细（按时间排序）"""
    order = lifecycle.load_order(db, number)
    return crud.list_order_details(db, order.id)


@router.get("/{number}/status-log", response_model=List[schemas.StatusLogRead])
def get_order_status_log(number: str, db: Session = Depends(get_db)):
    lifecycle.load_order(db, number)
    return crud.list_status_logs(db, number)


@router.get("/{number}/alarms", response_model=List[schemas.AlarmRead])
def get_order_alarms(number: str, db: Session = Depends(get_db)):
    lifecycle.load_order(db, number)
    return crud.list_alarms_by_order(db, number)


@router.get("/{number}/conciliation", response_model=schemas.Conciliation)
def get_order_conciliation(number: str, db: Session = Depends(get_db)):
    """已完成订单的对账结果"""
    return reconciliation.get_reconciliation(db, number)
