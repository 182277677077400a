import pytest

from bulkload import crud, models
from bulkload.core import intake
from bulkload.core.exceptions import DuplicateOrder, MissingRequiredField, ProcessingFailure
from bulkload.models import OrderState

from conftest import erp_payload


def test_erp_order_created_pending_with_masters(db, make_order):
    order = make_order("ORD-001")
    assert order.state == OrderState.PENDING
    assert order.preset == 9000.0
    assert order.external_code == "SAP-ORD-001"
    assert order.activation_code is None
    assert order.initial_reception is not None
    assert order.client.company_name == "YPF"
    assert order.driver.document_number == "30111222"
    assert order.truck.domain == "AB123CD"
    assert order.truck.cisterns == [5000, 5000]
    assert order.product.name == "Propano"


def test_number_aliases_are_equivalent(db):
    payload = erp_payload("ignored")
    del payload["number"]
    payload["numero"] = "ORD-ES"
    order = intake.create_order_from_payload(db, payload)
    assert order.number == "ORD-ES"


def test_spanish_master_aliases(db):
    payload = {
        "numero_orden": "ORD-ES2",
        "preset": "500",
        "chofer": {"nombre": "Luis", "apellido": "Gomez", "documento": "20999888"},
        "cliente": {"nombre_compania": "Gas SA"},
        "camion": {"patente": "XY987ZW", "cisternas": [250, 250]},
        "producto": {"nombre_producto": "Butano"},
    }
    order = intake.create_order_from_payload(db, payload)
    assert order.preset == 500.0
    assert order.driver.surname == "Gomez"
    assert order.client.company_name == "Gas SA"
    assert order.truck.domain == "XY987ZW"
    assert order.product.name == "Butano"


def test_json_string_payload(db):
    import json
    order = intake.create_order_from_payload(db, json.dumps(erp_payload("ORD-JSON")))
    assert order.number == "ORD-JSON"


def test_invalid_json_is_processing_failure(db):
    with pytest.raises(ProcessingFailure):
        intake.create_order_from_payload(db, "{not json")


def test_unknown_schema_rejected(db):
    with pytest.raises(ProcessingFailure):
        intake.create_order_from_payload(db, erp_payload(), "csv")


@pytest.mark.parametrize(
    "mutate, field",
    [
        (lambda p: p.pop("number"), "number"),
        (lambda p: p["driver"].pop("dni"), "driver.document_number"),
        (lambda p: p["client"].pop("company_name"), "client.company_name"),
        (lambda p: p["truck"].pop("domain"), "truck.domain"),
        (lambda p: p["product"].pop("name"), "product.name"),
        (lambda p: p.update(preset=0), "preset"),
        (lambda p: p.pop("preset"), "preset"),
    ],
)
def test_erp_required_fields(db, mutate, field):
    payload = erp_payload("ORD-REQ")
    mutate(payload)
    with pytest.raises(MissingRequiredField) as excinfo:
        intake.create_order_from_payload(db, payload)
    assert excinfo.value.field == field
    assert crud.get_order_by_number(db, "ORD-REQ") is None


def test_blank_number_rejected(db):
    with pytest.raises(MissingRequiredField):
        intake.create_order_from_payload(db, erp_payload("   "))


def test_duplicate_number(db, make_order):
    make_order("ORD-DUP")
    with pytest.raises(DuplicateOrder):
        make_order("ORD-DUP", external_code="OTHER")
    assert db.query(models.Order).count() == 1


def test_duplicate_external_code(db, make_order):
    make_order("ORD-A", external_code="SAP-1")
    with pytest.raises(DuplicateOrder):
        make_order("ORD-B", external_code="SAP-1")


def test_masters_are_reused(db, make_order):
    first = make_order("ORD-1")
    second = make_order("ORD-2")
    assert first.client_id == second.client_id
    assert first.driver_id == second.driver_id
    assert db.query(models.Client).count() == 1
    assert db.query(models.Truck).count() == 1


def test_charging_schema_skips_strict_validation(db):
    order = intake.create_order_from_payload(db, {"order_number": "CH-1"}, intake.SCHEMA_CHARGING)
    assert order.state == OrderState.PENDING
    assert order.preset == 0.0
    assert order.client_id is None
    assert order.truck_id is None


def test_charging_schema_still_needs_number(db):
    with pytest.raises(MissingRequiredField) as excinfo:
        intake.create_order_from_payload(db, {"preset": 100}, intake.SCHEMA_CHARGING)
    assert excinfo.value.field == "number"


def test_scheduled_date_defaults_to_now(db):
    payload = erp_payload("ORD-NODATE")
    del payload["scheduled_date"]
    order = intake.create_order_from_payload(db, payload)
    assert order.scheduled_date is not None


def test_non_finite_preset_is_missing(db):
    with pytest.raises(MissingRequiredField) as excinfo:
        intake.create_order_from_payload(db, erp_payload("ORD-NAN", preset="nan"))
    assert excinfo.value.field == "preset"
