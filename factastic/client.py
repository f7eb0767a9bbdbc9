import logging
import structlog
from structlog.stdlib import LoggerFactory
import sys
from typing import List, Optional

from factastic.store import Store
from factastic.types import ALL, Fact, category_filter
from factastic.view import ViewState


class Client:
    ref: str
    name: str
    user: str
    store: Store

    def __init__(self, store: Store, client: str, log_level: int = logging.INFO):
        self.ref = client
        self.name, self.user = client.split(':')
        self.store = store

        logging.basicConfig(
            stream=sys.stdout,
            level=log_level,
        )

        structlog.configure(
            processors=[
                structlog.processors.add_log_level,
                structlog.processors.StackInfoRenderer(),
                structlog.dev.set_exc_info,
                structlog.dev.ConsoleRenderer()
            ],
            wrapper_class=structlog.make_filtering_bound_logger(logging.NOTSET),
            context_class=dict,
            logger_factory=LoggerFactory(),
            cache_logger_on_first_use=False
        )

    def __repr__(self) -> str:
        return f"Client({self.ref})"

    def new_view(self, category: Optional[str] = None) -> ViewState:
        return ViewState(self, self.store, category=category or ALL)

    def read(self, category: str = ALL) -> List[Fact]:
        return self.store.read_facts(category_filter(category))
