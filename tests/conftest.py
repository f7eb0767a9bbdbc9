import pytest
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Set


from factastic.client import Client
from factastic.memory import MemoryStore
from factastic.store import Store, StoreError
from factastic.store.supabase import SupabaseStore
from factastic.types import CATEGORIES, Fact
from factastic.view import ViewState
from fakesupabase import FakeSupabase


pytest.register_assert_rewrite("generator")


Rows = Iterable[Dict[str, Any]]


def memory_store(rows: Rows = ()) -> Store:
    return MemoryStore(rows=rows)


def supabase_store(rows: Rows = ()) -> Store:
    return SupabaseStore(client=FakeSupabase({'facts': rows}))  # type: ignore


class FlakyStore(MemoryStore):
    "A memory store that refuses the operations listed in fail"

    def __init__(self, rows: Rows = ()) -> None:
        # Seeding goes through _insert_fact, so fail must exist first
        self.fail: Set[str] = set()
        super().__init__(rows=rows)

    def _read_facts(self, category: Optional[str], limit: int) -> List[Fact]:
        if 'read' in self.fail:
            raise StoreError('read refused')
        return super()._read_facts(category, limit)

    def _insert_fact(self, row: Dict[str, Any]) -> Fact:
        if 'insert' in self.fail:
            raise StoreError('insert refused')
        return super()._insert_fact(row)

    def _update_fact(self, fact_id: int, values: Dict[str, Any]) -> Fact:
        if 'update' in self.fail:
            raise StoreError('update refused')
        return super()._update_fact(fact_id, values)


def sample_rows(count: int = 30) -> List[Dict[str, Any]]:
    "Facts spread over every category with a mix of vote counts"
    rows = []
    for i in range(count):
        rows.append({
            'text': f'Fact number {i}',
            'source': f'https://example.com/facts/{i}',
            'category': CATEGORIES[i % len(CATEGORIES)],
            'likes': (i * 7) % 13,
            'upvotes': i % 4,
            'downvotes': i % 5,
        })
    return rows


class factsclass:
    new_store: Callable[..., Store]
    store: Store
    client: Client
    view: ViewState

    def seed(self, rows: Rows = ()) -> ViewState:
        self.store = self.new_store(rows)
        self.client = Client(store=self.store, client="pytest:testuser")
        self.view = self.client.new_view()
        return self.view

    def find(self, text: str) -> Fact:
        return next(f for f in self.view.facts if f.text == text)


@pytest.fixture
def store(request) -> Store:  # type: ignore
    return request.param(sample_rows())


@pytest.fixture
def facts(request) -> Iterator[factsclass]:  # type: ignore
    wrapper = factsclass()
    wrapper.new_store = request.param
    wrapper.seed()
    yield wrapper


@pytest.fixture
def flaky() -> Iterator[ViewState]:
    store = FlakyStore(rows=sample_rows())
    client = Client(store=store, client="pytest:testuser")
    yield client.new_view()


def pytest_generate_tests(metafunc) -> None:  # type: ignore
    for name in ("store", "facts"):
        if name in metafunc.fixturenames:
            metafunc.parametrize(name, [memory_store, supabase_store], ids=["memory", "supabase"], indirect=True)
