"""地磅（TMS）API路由"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ... import schemas
from ...core import lifecycle
from ...database.connection import get_db

router = APIRouter(prefix="/tms", tags=["tms"])


@router.post("/weighing/initial", response_model=schemas.OrderRead)
def register_initial_weighing(request: schemas.WeighingRequest, db: Session = Depends(get_db)):
    """登记皮重，返回带激活码的订单"""
    return lifecycle.register_initial_weighing(db, request.number, request.weight)


@router.post("/weighing/final", response_model=schemas.OrderRead)
def register_final_weighing(request: schemas.WeighingRequest, db: Session = Depends(get_db)):
    """登记毛重"""
    return lifecycle.register_final_weighing(db, request.number, request.weight)
