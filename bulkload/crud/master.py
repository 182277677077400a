"""数据库操作（CRUD）- 主数据

按自然键查找客户、司机、车辆、产品；查不到时返回 None，由调用方决定是否创建。
find_or_create_* 在唯一约束冲突时认为是并发请求刚刚创建了同一条记录，回滚后重查一次。
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from .. import models

logger = logging.getLogger(__name__)


def get_client_by_company_name(db: Session, company_name: str):
    return db.query(models.Client).filter(models.Client.company_name == company_name).first()


def get_driver_by_document_number(db: Session, document_number: str):
    return db.query(models.Driver).filter(models.Driver.document_number == document_number).first()


def get_truck_by_domain(db: Session, domain: str):
    return db.query(models.Truck).filter(models.Truck.domain == domain).first()


def get_product_by_name(db: Session, name: str):
    return db.query(models.Product).filter(models.Product.name == name).first()


def _find_or_create(db: Session, model, key_field: str, key_value: str, lookup, **fields):
    existing = lookup(db, key_value)
    if existing is not None:
        return existing

    candidate = model(**{key_field: key_value}, **fields)
    db.add(candidate)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info("%s %s was created concurrently, reloading", model.__name__, key_value)
        existing = lookup(db, key_value)
        if existing is None:
            # the conflict came from another unique column (e.g. external_code)
            raise
        return existing
    db.refresh(candidate)
    logger.info("Created %s %s", model.__name__, key_value)
    return candidate


def find_or_create_client(db: Session, company_name: str, contact_name=None, external_code=None):
    """按公司名称查找客户，不存在则创建"""
    return _find_or_create(
        db, models.Client, "company_name", company_name, get_client_by_company_name,
        contact_name=contact_name, external_code=external_code,
    )


def find_or_create_driver(db: Session, document_number: str, name=None, surname=None, external_code=None):
    """按证件号查找司机，不存在则创建"""
    return _find_or_create(
        db, models.Driver, "document_number", document_number, get_driver_by_document_number,
        name=name, surname=surname, external_code=external_code,
    )


def find_or_create_truck(db: Session, domain: str, description=None, cisterns=None, external_code=None):
    """按车牌查找车辆，不存在则创建"""
    return _find_or_create(
        db, models.Truck, "domain", domain, get_truck_by_domain,
        description=description, cisterns=cisterns, external_code=external_code,
    )


def find_or_create_product(db: Session, name: str, description=None, external_code=None):
    """按产品名称查找产品，不存在则创建"""
    return _find_or_create(
        db, models.Product, "name", name, get_product_by_name,
        description=description, external_code=external_code,
    )
