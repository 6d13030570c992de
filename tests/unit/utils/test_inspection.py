from datetime import date
from decimal import Decimal

import pytest

from request_params.schemas.field_spec import Within
from request_params.utils.inspection import describe_raw, inspect_value


@pytest.mark.unit
@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (["a", "b", "c"], '["a", "b", "c"]'),
        ({"a": "b", "c": "d"}, '{"a"=>"b", "c"=>"d"}'),
        ({"a": [1, None]}, '{"a"=>[1, nil]}'),
        (None, "nil"),
        (True, "true"),
        (False, "false"),
        (Decimal("1000.00"), "1000.00"),
        (date(2024, 2, 29), "2024-02-29"),
        ('say "hi"\n', '"say \\"hi\\"\\n"'),
        (range(1, 11), "1..10"),
        (Within(1, 10), "1..10"),
        ((), "[]"),
    ],
)
def test_inspect_value(value, expected) -> None:
    assert inspect_value(value) == expected


@pytest.mark.unit
def test_inspect_value_keeps_mapping_insertion_order() -> None:
    assert inspect_value({"z": "1", "a": "2"}) == '{"z"=>"1", "a"=>"2"}'


@pytest.mark.unit
def test_describe_raw_leaves_strings_unquoted() -> None:
    assert describe_raw("abc") == "abc"
    assert describe_raw(["a"]) == '["a"]'
    assert describe_raw(Decimal("1.50")) == "1.50"
    assert describe_raw(None) == "nil"
