import pytest
import requests

from conftest import FakeApi, StepClock

from prodman.domain.errors import RemoteUnavailableError, WriteRejectedError
from prodman.domain.models import Product
from prodman.services.inventory_service import InventoryService


def _product(pid: int, name: str, price=10.0, type_=None) -> Product:
    return Product.from_dict({
        "id": pid,
        "name": name,
        "idType": 2,
        "costPrice": 4.5,
        "price": price,
        "minStock": 3,
        "stock": 12,
        "createdAt": "2024-01-01T00:00:00.000Z",
        "updatedAt": "2024-01-01T00:00:00.000Z",
        "type": type_ if type_ is not None else {"id": 2, "name": "Ferretería"},
    })


def _loaded(products=None, write_mode="optimistic", **api_kwargs):
    api = FakeApi(products=products, **api_kwargs)
    inv = InventoryService(api, write_mode=write_mode, clock=StepClock())
    inv.load()
    return inv, api


def test_loading_n_products_yields_n_rows_with_all_columns():
    products = [_product(i, f"P{i}") for i in range(1, 6)]
    inv, _ = _loaded(products)

    rows = inv.table_rows()

    assert inv.loading is False
    assert len(rows) == 5
    assert rows[0] == (1, "P1", 2, "Ferretería", "$4.5", "$10.0", 3, 12)


def test_row_without_embedded_type_shows_blank_type_name():
    p = Product.from_dict({"id": 1, "name": "Bare", "idType": 4, "costPrice": 1, "price": 2, "minStock": 0, "stock": 0})
    inv, _ = _loaded([p])

    assert inv.table_rows()[0][3] == ""


def test_row_with_missing_numeric_fields_shows_blank_cells():
    inv, _ = _loaded([Product.from_dict({"id": 1, "name": "Bare"})])

    row = inv.table_rows()[0]

    assert row == (1, "Bare", "", "", "$", "$", "", "")
    assert not any("None" in str(cell) for cell in row)


def test_failed_initial_load_leaves_empty_list_and_stops_loading():
    inv, api = _loaded(load_error=RemoteUnavailableError("network down"))

    assert inv.products == []
    assert inv.loading is False
    assert inv.table_rows() == []
    assert api.calls == [("list",)]


def test_add_with_only_name_applies_defaults():
    inv, api = _loaded([])
    inv.change_field("name", "Martillo")

    added = inv.add()

    op, payload = api.calls[-1]
    assert op == "create"
    assert payload["name"] == "Martillo"
    assert payload["idType"] == 1
    assert payload["costPrice"] == 0
    assert payload["price"] == 0
    assert payload["minStock"] == 0
    assert payload["stock"] == 0
    assert payload["type"] == {"id": 1, "name": "General"}
    assert payload["createdAt"] == "2024-03-01T12:00:00.000Z"
    assert payload["updatedAt"] == payload["createdAt"]
    assert payload["id"] == 1709294400000
    assert "isActive" not in payload and "isDeleted" not in payload

    assert inv.products == [added]
    assert inv.form == {}


def test_form_values_stay_raw_text():
    inv, api = _loaded([])
    inv.change_field("name", "Cinta")
    inv.change_field("price", "12.50")
    inv.change_field("stock", "")

    inv.add()

    payload = api.calls[-1][1]
    assert payload["price"] == "12.50"
    assert payload["stock"] == ""


def test_type_falls_back_to_general_even_when_id_type_is_set():
    inv, api = _loaded([])
    inv.change_field("name", "Clavo")
    inv.change_field("idType", "3")

    inv.add()

    payload = api.calls[-1][1]
    assert payload["idType"] == "3"
    assert payload["type"] == {"id": 1, "name": "General"}


def test_edit_price_replaces_only_that_row_and_exits_edit_mode():
    first, second, third = _product(1, "A"), _product(2, "B"), _product(3, "C")
    inv, api = _loaded([first, second, third])

    inv.start_edit(second)
    assert inv.editing_id == 2
    assert inv.form["name"] == "B"

    inv.change_field("price", "99.5")
    inv.submit()

    op, pid, payload = api.calls[-1]
    assert (op, pid) == ("update", 2)
    assert payload["id"] == 2
    assert payload["createdAt"] == "2024-01-01T00:00:00.000Z"
    assert payload["type"] == {"id": 2, "name": "Ferretería"}

    assert inv.products[0] is first
    assert inv.products[2] is third
    assert inv.products[1].price == "99.5"
    assert inv.products[1].name == "B"
    assert inv.form == {}
    assert inv.editing_id is None
    assert [r[5] for r in inv.table_rows()] == ["$10.0", "$99.5", "$10.0"]


def test_update_without_edit_target_is_a_noop():
    inv, api = _loaded([_product(1, "A")])

    assert inv.update() is None
    assert api.calls == [("list",)]


def test_delete_removes_exactly_the_matching_row():
    products = [_product(1, "A"), _product(2, "B"), _product(3, "C")]
    inv, api = _loaded(products)

    inv.delete(2)

    assert api.calls[-1] == ("delete", 2)
    assert [p.id for p in inv.products] == [1, 3]
    assert inv.products[0] is products[0]


def test_two_rapid_adds_append_two_distinct_entries():
    inv, api = _loaded([])

    inv.change_field("name", "Doble")
    first = inv.submit()
    inv.change_field("name", "Doble")
    second = inv.submit()

    assert [c[0] for c in api.calls[1:]] == ["create", "create"]
    assert len(inv.products) == 2
    assert first.id != second.id


def test_optimistic_mode_patches_state_even_when_server_rejects():
    inv, _ = _loaded([_product(1, "A")], status_code=500)
    inv.change_field("name", "Nuevo")

    inv.add()
    inv.delete(1)

    assert [p.name for p in inv.products] == ["Nuevo"]


def test_optimistic_mode_keeps_local_id_over_server_id():
    inv, _ = _loaded([], status_code=201, body={"id": 42})
    inv.change_field("name", "Local")

    added = inv.add()

    assert added.id == 1709294400000


def test_network_error_on_write_propagates_and_leaves_list_untouched():
    class DownApi(FakeApi):
        def create_product(self, payload):
            raise requests.ConnectionError("network down")

    api = DownApi(products=[_product(1, "A")])
    inv = InventoryService(api, clock=StepClock())
    inv.load()
    inv.change_field("name", "Lost")

    with pytest.raises(requests.ConnectionError):
        inv.add()

    assert [p.id for p in inv.products] == [1]
    assert inv.form == {"name": "Lost"}


def test_confirmed_mode_rejected_write_leaves_state_untouched():
    inv, _ = _loaded([_product(1, "A")], status_code=500, write_mode="confirmed")
    inv.start_edit(inv.products[0])
    inv.change_field("price", "1")

    with pytest.raises(WriteRejectedError) as exc:
        inv.submit()

    assert exc.value.status_code == 500
    assert inv.products[0].price == 10.0
    assert inv.editing_id == 1

    with pytest.raises(WriteRejectedError):
        inv.delete(1)
    assert [p.id for p in inv.products] == [1]


def test_confirmed_mode_adopts_server_assigned_id():
    inv, _ = _loaded([], status_code=201, body={"id": 42, "name": "Server"}, write_mode="confirmed")
    inv.change_field("name", "Local")

    added = inv.add()

    assert added.id == 42
    assert added.name == "Local"
    assert inv.find(42) is added


def test_confirmed_mode_without_json_body_keeps_local_id():
    inv, _ = _loaded([], status_code=204, write_mode="confirmed")
    inv.change_field("name", "Local")

    added = inv.add()

    assert added.id == 1709294400000
