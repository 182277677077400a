import re

import pytest
from sqlalchemy.exc import OperationalError

import bulkload.crud
from bulkload import crud
from bulkload.core import lifecycle
from bulkload.core.exceptions import InvalidState, InvalidWeight, OrderNotFound
from bulkload.models import OrderState
from bulkload.utils import helpers


def test_transition_table_is_linear():
    assert lifecycle.can_transition(OrderState.PENDING, OrderState.TARA_REGISTERED)
    assert lifecycle.can_transition(OrderState.LOADING, OrderState.FINALIZED)
    assert not lifecycle.can_transition(OrderState.PENDING, OrderState.LOADING)
    assert not lifecycle.can_transition(OrderState.LOADING, OrderState.TARA_REGISTERED)
    assert not lifecycle.can_transition(OrderState.FINALIZED, OrderState.PENDING)


def test_initial_weighing_registers_tare_and_code(db, make_order):
    make_order("ORD-1")
    order = lifecycle.register_initial_weighing(db, "ORD-1", 1000.0)
    assert order.state == OrderState.TARA_REGISTERED
    assert order.initial_weight == 1000.0
    assert order.initial_weighing is not None
    assert re.fullmatch(r"\d{5}", order.activation_code)

    logs = crud.list_status_logs(db, "ORD-1")
    assert len(logs) == 1
    assert logs[0].from_state == OrderState.PENDING
    assert logs[0].to_state == OrderState.TARA_REGISTERED
    assert logs[0].actor == lifecycle.ACTOR_TMS
    assert "1000 kg" in logs[0].note


def test_activation_code_keeps_leading_zeros(monkeypatch):
    monkeypatch.setattr(helpers.secrets, "randbelow", lambda n: 42)
    assert helpers.generate_activation_code() == "00042"
    monkeypatch.setattr(helpers.secrets, "randbelow", lambda n: n - 1)
    assert helpers.generate_activation_code() == "99999"


def test_initial_weighing_twice_is_rejected(db, make_order):
    make_order("ORD-1")
    first = lifecycle.register_initial_weighing(db, "ORD-1", 1000.0)
    code = first.activation_code
    with pytest.raises(InvalidState):
        lifecycle.register_initial_weighing(db, "ORD-1", 1200.0)
    order = crud.get_order_by_number(db, "ORD-1")
    assert order.initial_weight == 1000.0
    assert order.activation_code == code
    assert len(crud.list_status_logs(db, "ORD-1")) == 1


def test_unknown_order(db):
    with pytest.raises(OrderNotFound):
        lifecycle.register_initial_weighing(db, "NOPE", 1000.0)
    with pytest.raises(OrderNotFound):
        lifecycle.register_final_weighing(db, "NOPE", 1000.0)


def test_final_weighing_requires_loading(db, make_order):
    make_order("ORD-1")
    lifecycle.register_initial_weighing(db, "ORD-1", 1000.0)
    with pytest.raises(InvalidState):
        lifecycle.register_final_weighing(db, "ORD-1", 9500.0)
    order = crud.get_order_by_number(db, "ORD-1")
    assert order.state == OrderState.TARA_REGISTERED
    assert order.final_weight is None


def test_final_weighing_below_tare_is_invalid_weight(db, make_order):
    make_order("ORD-1")
    lifecycle.register_initial_weighing(db, "ORD-1", 1000.0)
    lifecycle.begin_loading(db, "ORD-1")
    with pytest.raises(InvalidWeight):
        lifecycle.register_final_weighing(db, "ORD-1", 999.0)
    order = crud.get_order_by_number(db, "ORD-1")
    assert order.state == OrderState.LOADING
    assert order.final_weight is None
    assert order.end_weighing is None


def test_full_lifecycle(db, make_order):
    make_order("ORD-1")
    lifecycle.register_initial_weighing(db, "ORD-1", 1000.0)
    loading = lifecycle.begin_loading(db, "ORD-1")
    assert loading.state == OrderState.LOADING
    assert loading.start_loading is not None

    # equal weights are accepted
    order = lifecycle.register_final_weighing(db, "ORD-1", 1000.0)
    assert order.state == OrderState.FINALIZED
    assert order.final_weight == 1000.0
    assert order.end_weighing is not None

    logs = crud.list_status_logs(db, "ORD-1")
    assert [log.to_state for log in logs] == [
        OrderState.TARA_REGISTERED, OrderState.LOADING, OrderState.FINALIZED,
    ]
    assert logs[1].actor == lifecycle.ACTOR_TELEMETRY

    with pytest.raises(InvalidState):
        lifecycle.register_final_weighing(db, "ORD-1", 2000.0)


def test_audit_failure_does_not_undo_transition(db, make_order, monkeypatch):
    make_order("ORD-1")

    def broken_log(*args, **kwargs):
        raise OperationalError("INSERT INTO order_status_log", {}, Exception("disk full"))

    monkeypatch.setattr(bulkload.crud, "create_status_log", broken_log)
    order = lifecycle.register_initial_weighing(db, "ORD-1", 1000.0)
    assert order.state == OrderState.TARA_REGISTERED
    monkeypatch.undo()
    assert crud.list_status_logs(db, "ORD-1") == []


def test_non_finite_tare_is_rejected(db, make_order):
    make_order("ORD-1")
    with pytest.raises(InvalidWeight):
        lifecycle.register_initial_weighing(db, "ORD-1", float("nan"))
    order = crud.get_order_by_number(db, "ORD-1")
    assert order.state == OrderState.PENDING
    assert order.initial_weight is None
    assert order.activation_code is None
    assert crud.list_status_logs(db, "ORD-1") == []


def test_non_finite_gross_is_rejected(db, make_order):
    make_order("ORD-1")
    lifecycle.register_initial_weighing(db, "ORD-1", 1000.0)
    lifecycle.begin_loading(db, "ORD-1")
    with pytest.raises(InvalidWeight):
        lifecycle.register_final_weighing(db, "ORD-1", float("inf"))
    assert crud.get_order_by_number(db, "ORD-1").state == OrderState.LOADING
