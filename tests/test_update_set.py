# tests/test_update_set.py
import pytest

from update_set import build_update


def test_single_column():
    update = build_update({"quantity": 5}, 1)
    assert update.sql == "UPDATE products SET quantity = %s WHERE id = %s"
    assert update.params == (5, 1)


def test_columns_follow_allow_list_order_and_params_match_placeholders():
    update = build_update({"quantity": 2, "name": "Widget", "price": 1.5}, 7)
    assert update.sql == "UPDATE products SET name = %s, price = %s, quantity = %s WHERE id = %s"
    assert update.params == ("Widget", 1.5, 2, 7)
    assert update.sql.count("%s") == len(update.params)
    assert [a.column for a in update.assignments] == ["name", "price", "quantity"]


def test_values_never_reach_the_sql_text():
    update = build_update({"name": "x'; DROP TABLE products; --"}, 3)
    assert "DROP" not in update.sql
    assert update.params[0] == "x'; DROP TABLE products; --"


def test_unknown_columns_are_refused():
    with pytest.raises(ValueError):
        build_update({"name = 'a', price": 1}, 1)


def test_empty_field_set_is_refused():
    with pytest.raises(ValueError):
        build_update({}, 1)
