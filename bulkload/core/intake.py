"""外部订单接入

把 ERP/B2B 或装车系统发来的报文转换为标准订单：
- 每个逻辑字段按别名列表取值（第一个存在的键生效）
- ERP 报文需要通过必填字段校验，装车系统报文跳过严格校验
- 客户/司机/车辆/产品按自然键查找，不存在则创建
- 新订单状态为 PENDING
"""

import json
import logging
from typing import Mapping

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .. import crud, schemas
from ..utils.helpers import is_blank, utcnow
from . import aliases
from .exceptions import DuplicateOrder, MissingRequiredField, ProcessingFailure, db_failure_guard

logger = logging.getLogger(__name__)

SCHEMA_ERP = "erp"
SCHEMA_CHARGING = "charging"
SCHEMA_KINDS = (SCHEMA_ERP, SCHEMA_CHARGING)

# 订单字段
ORDER_NUMBER = ("order", "number", "order_number", "numero", "numero_orden", "orderNumber")
ORDER_EXTERNAL_CODE = ("external_code", "code", "externalCode", "codigo_externo")
SCHEDULED_DATE = ("scheduled_date", "scheduledDate", "date_scheduled", "dateScheduled", "fecha_prevista")
PRESET = ("preset", "pre_set", "preSet")

# 子对象
DRIVER_NODE = ("driver", "chofer", "conductor")
CLIENT_NODE = ("client", "cliente")
TRUCK_NODE = ("truck", "camion")
PRODUCT_NODE = ("product", "producto", "order_product", "product_order")

DRIVER_NAME = ("name", "nombre")
DRIVER_SURNAME = ("surname", "apellido")
DRIVER_DOCUMENT = ("document_number", "dni", "documento", "documentNumber")
DRIVER_EXTERNAL_CODE = ("externalCodeDriver", "external_code_driver", "codigo_sap_driver", "external_code")

CLIENT_COMPANY = ("name", "nombre", "company_name", "name_company", "nombre_compania",
                  "compania_nombre", "companyName")
CLIENT_CONTACT = ("contact_name", "contacto", "contact", "name_contact", "contactName")
CLIENT_EXTERNAL_CODE = ("externalCodeClient", "external_code_client", "codigo_sap_client", "external_code")

TRUCK_DOMAIN = ("domain", "dominio", "patente", "plate")
TRUCK_DESCRIPTION = ("description", "description_truck", "truck_description", "descripcion_camion",
                     "camion_descripcion")
TRUCK_CISTERNS = ("cisterns", "cisterna", "cisternas", "cistern")
TRUCK_EXTERNAL_CODE = ("externalCodeTruck", "external_code_truck", "codigo_sap_truck", "external_code")

PRODUCT_NAME = ("name", "nombre", "nombre_producto", "product_name")
PRODUCT_DESCRIPTION = ("description_product", "descripcion_producto", "product_description", "description")
PRODUCT_EXTERNAL_CODE = ("externalCodeProduct", "external_code_product", "codigo_sap_product", "external_code")


def _as_document(raw) -> Mapping:
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except ValueError as exc:
            raise ProcessingFailure("Order payload is not valid JSON", cause=exc) from exc
    if not isinstance(raw, Mapping):
        raise ProcessingFailure("Order payload must be a JSON object")
    return raw


def parse_order_payload(document: Mapping) -> schemas.OrderIntake:
    """按别名从报文中提取订单及其主数据"""
    driver = aliases.get_node(document, DRIVER_NODE)
    client = aliases.get_node(document, CLIENT_NODE)
    truck = aliases.get_node(document, TRUCK_NODE)
    product = aliases.get_node(document, PRODUCT_NODE)

    return schemas.OrderIntake(
        number=aliases.get_string(document, ORDER_NUMBER),
        external_code=aliases.get_string(document, ORDER_EXTERNAL_CODE),
        scheduled_date=aliases.get_datetime(document, SCHEDULED_DATE, utcnow()),
        preset=aliases.get_float(document, PRESET, 0.0),
        driver=schemas.DriverIntake(
            name=aliases.get_string(driver, DRIVER_NAME),
            surname=aliases.get_string(driver, DRIVER_SURNAME),
            document_number=aliases.get_string(driver, DRIVER_DOCUMENT),
            external_code=aliases.get_string(driver, DRIVER_EXTERNAL_CODE),
        ),
        client=schemas.ClientIntake(
            company_name=aliases.get_string(client, CLIENT_COMPANY),
            contact_name=aliases.get_string(client, CLIENT_CONTACT),
            external_code=aliases.get_string(client, CLIENT_EXTERNAL_CODE),
        ),
        truck=schemas.TruckIntake(
            domain=aliases.get_string(truck, TRUCK_DOMAIN),
            description=aliases.get_string(truck, TRUCK_DESCRIPTION),
            cisterns=aliases.get_int_list(truck, TRUCK_CISTERNS),
            external_code=aliases.get_string(truck, TRUCK_EXTERNAL_CODE),
        ),
        product=schemas.ProductIntake(
            name=aliases.get_string(product, PRODUCT_NAME),
            description=aliases.get_string(product, PRODUCT_DESCRIPTION),
            external_code=aliases.get_string(product, PRODUCT_EXTERNAL_CODE),
        ),
    )


def validate_erp_order(intake: schemas.OrderIntake) -> None:
    """ERP 报文必填字段校验，第一个缺失的字段抛出 MissingRequiredField"""
    required = (
        ("number", intake.number),
        ("driver.document_number", intake.driver.document_number),
        ("client.company_name", intake.client.company_name),
        ("truck.domain", intake.truck.domain),
        ("product.name", intake.product.name),
    )
    for field, value in required:
        if is_blank(value):
            raise MissingRequiredField(field)
    if intake.preset is None or intake.preset <= 0:
        raise MissingRequiredField("preset", "Field 'preset' is required and must be greater than 0")


def resolve_masters(db: Session, intake: schemas.OrderIntake) -> dict:
    """查找或创建订单引用的主数据，返回外键字段

    自然键为空的主数据不创建，订单上对应的引用留空。
    """
    refs = {"client_id": None, "driver_id": None, "truck_id": None, "product_id": None}

    if not is_blank(intake.client.company_name):
        refs["client_id"] = crud.find_or_create_client(
            db, intake.client.company_name.strip(),
            contact_name=intake.client.contact_name,
            external_code=intake.client.external_code,
        ).id
    if not is_blank(intake.driver.document_number):
        refs["driver_id"] = crud.find_or_create_driver(
            db, intake.driver.document_number.strip(),
            name=intake.driver.name,
            surname=intake.driver.surname,
            external_code=intake.driver.external_code,
        ).id
    if not is_blank(intake.truck.domain):
        refs["truck_id"] = crud.find_or_create_truck(
            db, intake.truck.domain.strip(),
            description=intake.truck.description,
            cisterns=intake.truck.cisterns,
            external_code=intake.truck.external_code,
        ).id
    if not is_blank(intake.product.name):
        refs["product_id"] = crud.find_or_create_product(
            db, intake.product.name.strip(),
            description=intake.product.description,
            external_code=intake.product.external_code,
        ).id
    return refs


def create_order_from_payload(db: Session, raw_document, schema_kind: str = SCHEMA_ERP):
    """从外部报文创建订单

    返回新建的订单（PENDING）；订单号已存在时抛出 DuplicateOrder，
    必填字段缺失时抛出 MissingRequiredField，其他底层错误包装为 ProcessingFailure。
    """
    if schema_kind not in SCHEMA_KINDS:
        raise ProcessingFailure(f"Unknown payload schema '{schema_kind}'")

    document = _as_document(raw_document)
    intake = parse_order_payload(document)
    logger.info("Received %s order payload, number=%s", schema_kind, intake.number)

    if schema_kind == SCHEMA_ERP:
        validate_erp_order(intake)
    elif is_blank(intake.number):
        # the order number is the order's identity for every schema
        raise MissingRequiredField("number")

    number = intake.number.strip()
    external_code = None if is_blank(intake.external_code) else intake.external_code.strip()

    with db_failure_guard(db, f"creating order {number}"):
        if crud.get_order_by_number(db, number) is not None:
            raise DuplicateOrder(f"Order {number} already exists")
        if external_code and crud.get_order_by_external_code(db, external_code) is not None:
            raise DuplicateOrder(f"An order with external code {external_code} already exists")

        refs = resolve_masters(db, intake)
        try:
            order = crud.create_order(
                db,
                number=number,
                external_code=external_code,
                scheduled_date=intake.scheduled_date,
                preset=intake.preset or 0.0,
                initial_reception=utcnow(),
                **refs,
            )
        except IntegrityError as exc:
            db.rollback()
            if crud.get_order_by_number(db, number) is not None:
                raise DuplicateOrder(f"Order {number} already exists") from exc
            raise

    logger.info("Order %s created from %s payload (preset=%s)", order.number, schema_kind, order.preset)
    return order
