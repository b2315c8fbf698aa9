from typing import Any, Dict

from supabase import Client

ORDERS_TABLE = "orders"


class OrdersRepository:
    def __init__(self, client: Client, table_name: str = ORDERS_TABLE) -> None:
        self._client = client
        self._table_name = table_name

    def insert_order(self, record: Dict[str, Any]) -> Dict[str, Any]:
        response = self._client.table(self._table_name).insert(record).execute()
        if not response.data:
            raise RuntimeError("Order insert returned no representation")
        return response.data[0]
