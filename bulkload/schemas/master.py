"""主数据结构定义

定义客户、司机、车辆、产品的Pydantic模型
"""

from pydantic import BaseModel
from typing import List, Optional


class ClientRead(BaseModel):
    id: int
    company_name: str
    contact_name: Optional[str] = None
    external_code: Optional[str] = None

    class Config:
        from_attributes = True


class DriverRead(BaseModel):
    id: int
    name: Optional[str] = None
    surname: Optional[str] = None
    document_number: str
    external_code: Optional[str] = None

    class Config:
        from_attributes = True


class TruckRead(BaseModel):
    id: int
    domain: str
    description: Optional[str] = None
    cisterns: Optional[List[int]] = None
    external_code: Optional[str] = None

    class Config:
        from_attributes = True


class ProductRead(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    external_code: Optional[str] = None

    class Config:
        from_attributes = True
