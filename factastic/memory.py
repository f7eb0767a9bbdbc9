import datetime
from typing import Any, Dict, Iterable, List, Optional


from factastic.store import Store, StoreError
from factastic.types import COUNTERS, Fact


class MemoryStore(Store):
    def __init__(self, rows: Optional[Iterable[Dict[str, Any]]] = None) -> None:
        self._rows: Dict[int, Fact] = {}
        self._next_id = 1

        for row in rows or []:
            self._insert_fact(row)

    def _read_facts(self, category: Optional[str], limit: int) -> List[Fact]:
        matches = [f for f in self._rows.values() if not category or f.category == category]
        # sorted() is stable, so ties stay in insertion order
        return sorted(matches, key=lambda f: f.likes, reverse=True)[:limit]

    def _insert_fact(self, row: Dict[str, Any]) -> Fact:
        new_id = self._next_id
        self._next_id += 1

        values = {c: 0 for c in COUNTERS}
        values.update(row)
        values['id'] = new_id
        values.setdefault('created_at', str(datetime.datetime.now()))

        fact = Fact.from_row(values)
        self._rows[new_id] = fact
        return fact

    def _update_fact(self, fact_id: int, values: Dict[str, Any]) -> Fact:
        fact = self._rows.get(fact_id)
        if not fact:
            raise StoreError(f"Could not find fact {fact_id} being updated")
        updated = fact._replace(**values)
        self._rows[fact_id] = updated
        return updated
