from collections import OrderedDict
import logging
import os
from typing import Optional
import uuid
from flask import session


from factastic.client import Client
from factastic.memory import MemoryStore
from factastic.store import Store
from factastic.store.supabase import SupabaseStore
from factastic.view import ViewState


SAMPLE_FACTS = [
    {
        'text': "React is being developed by Meta (formerly facebook)",
        'source': "https://opensource.fb.com/",
        'category': "technology",
        'likes': 24,
        'upvotes': 9,
        'downvotes': 4,
    },
    {
        'text': "Millennial dads spend 3 times as much time with their kids than their fathers spent with them. In 1982, 43% of fathers had never changed a diaper. Today, that number is down to 3%",
        'source': "https://www.mother.ly/parenting/millennial-dads-spend-more-time-with-their-kids",
        'category': "society",
        'likes': 11,
        'upvotes': 2,
        'downvotes': 0,
    },
    {
        'text': "Lisbon is the capital of Portugal",
        'source': "https://en.wikipedia.org/wiki/Lisbon",
        'category': "society",
        'likes': 8,
        'upvotes': 3,
        'downvotes': 1,
    },
]

STORE: Optional[Store] = None
MAX_VIEWS = int(os.getenv('FACTS_MAX_VIEWS', '1000'))
VIEWS: 'OrderedDict[str, ViewState]' = OrderedDict()


def create_store() -> Store:
    backend = os.getenv('FACTS_STORE', 'supabase')

    if backend == 'memory':
        return MemoryStore(rows=SAMPLE_FACTS)

    if backend == 'supabase':
        url = os.getenv('SUPABASE_URL', '')
        key = os.getenv('SUPABASE_ANON_KEY', '')
        if not url or not key:
            raise Exception('SUPABASE_URL and SUPABASE_ANON_KEY must be set')
        return SupabaseStore(url=url, key=key, table=os.getenv('FACTS_TABLE', 'facts'))

    raise Exception(f'Unknown FACTS_STORE {backend}')


def get_store() -> Store:
    global STORE
    if STORE is None:
        STORE = create_store()
    return STORE


def set_store(store: Optional[Store]) -> None:
    "Swap the store every new view is built on, forgetting existing views"
    global STORE
    STORE = store
    VIEWS.clear()


def log_level() -> int:
    return logging.DEBUG if os.getenv("DEBUG") else logging.ERROR


def get_view() -> ViewState:
    """
    Return the view for the current browser session, creating and loading a
    new one on first visit. Only the MAX_VIEWS most recently used views are
    kept, an evicted session starts again from a fresh load
    """
    key = session.get('view')
    if key and key in VIEWS:
        VIEWS.move_to_end(key)
        return VIEWS[key]

    key = str(uuid.uuid4())
    session['view'] = key

    client = Client(store=get_store(), client=f"web:{key}", log_level=log_level())
    view = client.new_view()
    VIEWS[key] = view
    # Forget the least recently used sessions
    while len(VIEWS) > MAX_VIEWS:
        VIEWS.popitem(last=False)
    view.load()
    return view
