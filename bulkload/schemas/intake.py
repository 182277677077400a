"""外部订单解析结果

ERP/B2B 与装车系统的报文经别名提取后得到的中间结构，
字段都可能为空，校验由 core.intake 负责。
"""

from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class DriverIntake(BaseModel):
    name: Optional[str] = None
    surname: Optional[str] = None
    document_number: Optional[str] = None
    external_code: Optional[str] = None


class ClientIntake(BaseModel):
    company_name: Optional[str] = None
    contact_name: Optional[str] = None
    external_code: Optional[str] = None


class TruckIntake(BaseModel):
    domain: Optional[str] = None
    description: Optional[str] = None
    cisterns: Optional[List[int]] = None
    external_code: Optional[str] = None


class ProductIntake(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    external_code: Optional[str] = None


class OrderIntake(BaseModel):
    number: Optional[str] = None
    external_code: Optional[str] = None
    scheduled_date: datetime
    preset: float = 0.0
    driver: DriverIntake = DriverIntake()
    client: ClientIntake = ClientIntake()
    truck: TruckIntake = TruckIntake()
    product: ProductIntake = ProductIntake()
