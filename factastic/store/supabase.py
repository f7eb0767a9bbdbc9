import httpx
from postgrest.exceptions import APIError
import structlog
from supabase import create_client, Client as SupabaseClient
from typing import Any, Dict, List, Optional


from factastic.store import Store, StoreError
from factastic.types import Fact


class SupabaseStore(Store):
    def __init__(self, url: str = "", key: str = "", table: str = "facts", client: Optional[SupabaseClient] = None) -> None:
        if client is None:
            if not url or not key:
                raise StoreError("A Supabase project url and key are required")
            client = create_client(url, key)
        self._client = client
        self._table = table
        self._log = structlog.get_logger('SupabaseStore').bind(table=table)

    def _execute(self, action: str, query: Any) -> List[Dict[str, Any]]:
        log = self._log.bind(action=action)
        try:
            response = query.execute()
        except APIError as e:
            log.error('Store request failed', error=e.message, code=e.code)
            raise StoreError(f'{action} failed: {e.message}') from e
        except httpx.HTTPError as e:
            log.error('Store unreachable', error=str(e))
            raise StoreError(f'{action} failed: {e}') from e
        return response.data or []

    def _read_facts(self, category: Optional[str], limit: int) -> List[Fact]:
        query = self._client.table(self._table).select("*")
        if category:
            query = query.eq("category", category)
        rows = self._execute('read', query.order("likes", desc=True).limit(limit))
        return [Fact.from_row(r) for r in rows]

    def _insert_fact(self, row: Dict[str, Any]) -> Fact:
        rows = self._execute('insert', self._client.table(self._table).insert([row]))
        if not rows:
            raise StoreError('insert failed: no row returned')
        return Fact.from_row(rows[0])

    def _update_fact(self, fact_id: int, values: Dict[str, Any]) -> Fact:
        rows = self._execute('update', self._client.table(self._table).update(values).eq("id", fact_id))
        if not rows:
            raise StoreError(f'update failed: fact {fact_id} not found')
        return Fact.from_row(rows[0])
