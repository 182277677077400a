from datetime import datetime

from bulkload.core import aliases
from bulkload.core.intake import ORDER_NUMBER


def test_first_present_alias_wins():
    doc = {"numero": "A-1", "order_number": "B-2"}
    # "order_number" comes before "numero" in the alias list
    assert aliases.get_string(doc, ORDER_NUMBER) == "B-2"


def test_missing_alias_returns_default():
    assert aliases.get_string({}, ORDER_NUMBER) is None
    assert aliases.get_string({}, ORDER_NUMBER, "x") == "x"
    assert aliases.get_string(None, ORDER_NUMBER, "x") == "x"


def test_get_string_skips_objects():
    doc = {"order": {"nested": True}, "number": 42}
    assert aliases.get_string(doc, ORDER_NUMBER) == "42"


def test_get_float_accepts_numbers_and_numeric_strings():
    assert aliases.get_float({"preset": 10}, ("preset",)) == 10.0
    assert aliases.get_float({"preset": " 12.5 "}, ("preset",)) == 12.5
    assert aliases.get_float({"preset": True}, ("preset",)) is None
    assert aliases.get_float({"preset": "abc", "preSet": 3}, ("preset", "preSet")) == 3.0


def test_get_int_list():
    assert aliases.get_int_list({"cisternas": [1000, "2000"]}, ("cisterns", "cisternas")) == [1000, 2000]
    assert aliases.get_int_list({"cisterns": ["x"]}, ("cisterns",)) is None


def test_get_node_only_returns_objects():
    doc = {"driver": "Juan", "chofer": {"dni": "1"}}
    assert aliases.get_node(doc, ("driver", "chofer")) == {"dni": "1"}
    assert aliases.get_node(doc, ("conductor",)) is None


def test_get_datetime_parses_iso_and_normalizes_to_utc():
    assert aliases.get_datetime({"t": "2025-03-01T08:00:00"}, ("t",)) == datetime(2025, 3, 1, 8, 0)
    assert aliases.get_datetime({"t": "2025-03-01T08:00:00Z"}, ("t",)) == datetime(2025, 3, 1, 8, 0)
    assert aliases.get_datetime({"t": "2025-03-01T08:00:00-03:00"}, ("t",)) == datetime(2025, 3, 1, 11, 0)


def test_get_datetime_invalid_uses_default():
    fallback = datetime(2020, 1, 1)
    assert aliases.get_datetime({"t": "yesterday"}, ("t",), fallback) == fallback


def test_get_float_skips_non_finite_values():
    assert aliases.get_float({"t": "nan"}, ("t",)) is None
    assert aliases.get_float({"t": "inf", "temp": "-7.5"}, ("t", "temp")) == -7.5
    assert aliases.get_float({"t": float("nan"), "temp": 4}, ("t", "temp")) == 4.0
    assert aliases.get_float({"t": 10 ** 400}, ("t",), 1.0) == 1.0
