import pytest

from repositories.orders_repository import OrdersRepository


class StubResponse:
    def __init__(self, data):
        self.data = data


class StubQuery:
    def __init__(self, table, data):
        self.table = table
        self.data = data
        self.inserted = None

    def insert(self, record):
        self.inserted = record
        return self

    def execute(self):
        return StubResponse(self.data)


class StubSupabase:
    def __init__(self, data):
        self.data = data
        self.queries = []

    def table(self, name):
        query = StubQuery(name, self.data)
        self.queries.append(query)
        return query


def test_insert_order_returns_stored_row():
    client = StubSupabase([{"id": 42, "payment_reference": "ref_1"}])
    repo = OrdersRepository(client)

    row = repo.insert_order({"payment_reference": "ref_1"})

    assert row == {"id": 42, "payment_reference": "ref_1"}
    assert client.queries[0].table == "orders"
    assert client.queries[0].inserted == {"payment_reference": "ref_1"}


def test_insert_order_uses_configured_table():
    client = StubSupabase([{"id": 1}])
    OrdersRepository(client, table_name="shop_orders").insert_order({})
    assert client.queries[0].table == "shop_orders"


@pytest.mark.parametrize("data", [[], None])
def test_empty_representation_is_an_error(data):
    repo = OrdersRepository(StubSupabase(data))
    with pytest.raises(RuntimeError):
        repo.insert_order({"payment_reference": "ref_1"})
