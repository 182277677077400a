"""主数据模型定义

客户、司机、车辆、产品。订单只引用这些主数据，不负责其生命周期。
每个表的自然键都带唯一约束，供 find-or-create 在并发插入时检测冲突。
"""

from sqlalchemy import Column, Integer, String, JSON
from ..database.connection import Base


class Client(Base):
    """客户表"""
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    company_name = Column(String(255), unique=True, nullable=False, index=True)  # 自然键
    contact_name = Column(String(255), nullable=True)
    external_code = Column(String(100), unique=True, nullable=True)  # ERP 编码


class Driver(Base):
    """司机表"""
    __tablename__ = "drivers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=True)
    surname = Column(String(255), nullable=True)
    document_number = Column(String(50), unique=True, nullable=False, index=True)  # 自然键
    external_code = Column(String(100), unique=True, nullable=True)


class Truck(Base):
    """车辆表"""
    __tablename__ = "trucks"

    id = Column(Integer, primary_key=True, index=True)
    domain = Column(String(20), unique=True, nullable=False, index=True)  # 车牌，自然键
    description = Column(String(255), nullable=True)
    cisterns = Column(JSON, nullable=True)  # 各罐容量列表
    external_code = Column(String(100), unique=True, nullable=True)


class Product(Base):
    """产品表"""
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False, index=True)  # 自然键
    description = Column(String(500), nullable=True)
    external_code = Column(String(100), unique=True, nullable=True)
