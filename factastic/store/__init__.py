from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


from factastic.types import Fact, MAX_FACTS


class StoreError(Exception):
    "The store could not complete a request"
    pass


class Store(ABC):
    """
    Thin pass-through to the table holding every fact.

    Implementations turn rows into Fact values and raise StoreError for any
    failed request. Nothing is retried.
    """

    def read_facts(self, category: Optional[str] = None, limit: int = MAX_FACTS) -> List[Fact]:
        return self._read_facts(category, limit)

    def insert_fact(self, text: str, source: str, category: str) -> Fact:
        return self._insert_fact({'text': text, 'source': source, 'category': category})

    def increment_counter(self, fact: Fact, counter: str) -> Fact:
        # Last write wins, the increment is based on the value we last saw
        return self._update_fact(fact.id, {counter: getattr(fact, counter) + 1})

    @abstractmethod
    def _read_facts(self, category: Optional[str], limit: int) -> List[Fact]:
        pass

    @abstractmethod
    def _insert_fact(self, row: Dict[str, Any]) -> Fact:
        pass

    @abstractmethod
    def _update_fact(self, fact_id: int, values: Dict[str, Any]) -> Fact:
        pass
