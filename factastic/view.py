from __future__ import annotations
from dataclasses import dataclass, field
import itertools
import structlog
from typing import List, Optional, Set, TYPE_CHECKING

if TYPE_CHECKING:
    from factastic.client import Client
    from factastic.store import Store

from factastic.store import StoreError
from factastic.types import ALL, CATEGORIES, Fact, MAX_FACTS, MAX_TEXT_LENGTH, category_filter, require_category, require_counter, validate_fact


logger = structlog.get_logger()

LOAD_ALERT = "A problem was encountered while fetching data..."

OK = "ok"
INVALID = "invalid"
FAILED = "failed"
STALE = "stale"


@dataclass()
class Result:
    status: str
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status == OK


@dataclass()
class FactForm:
    text: str = ""
    source: str = ""
    category: str = ""

    def clear(self) -> None:
        self.text = ""
        self.source = ""
        self.category = ""


class ViewState:
    """
    Everything one browser session sees: the loaded facts, the category
    filter, the form and the flags that drive rendering.

    The store is the source of truth, the facts held here are a possibly
    stale copy that is only changed by this view's own requests.
    """

    def __init__(self, client: Client, store: Store, category: str = ALL):
        self._client = client
        self._store = store

        self.facts: List[Fact] = []
        self.current_category = require_category(category, allow_all=True)
        self.is_loading = False
        self.show_form = False
        self.form = FactForm()
        self.is_uploading = False
        self.updating: Set[int] = set()

        # Message to show in a blocking alert, and the last surfaced error
        self.alert: Optional[str] = None
        self.error: Optional[str] = None

        self._load_tickets = itertools.count(1)
        self._latest_load = 0
        self.log = logger.bind(client=client.name, user=client.user)

    def __repr__(self) -> str:
        return f"ViewState({self.current_category}, facts={len(self.facts)})"

    @property
    def categories(self) -> List[str]:
        return list(CATEGORIES)

    @property
    def count(self) -> int:
        return len(self.facts)

    @property
    def remaining_chars(self) -> int:
        return MAX_TEXT_LENGTH - len(self.form.text)

    def pop_alert(self) -> Optional[str]:
        alert, self.alert = self.alert, None
        return alert

    def pop_error(self) -> Optional[str]:
        error, self.error = self.error, None
        return error

    def load(self, category: Optional[str] = None) -> Result:
        category = require_category(category or self.current_category, allow_all=True)
        ticket = next(self._load_tickets)
        self._latest_load = ticket

        log = self.log.bind(category=category, ticket=ticket)
        log.msg("view.load()")
        self.is_loading = True

        try:
            facts = self._store.read_facts(category_filter(category), limit=MAX_FACTS)
        except StoreError as e:
            if ticket != self._latest_load:
                log.info("Ignoring failure of superseded load", error=str(e))
                return Result(STALE, [str(e)])
            log.error("Could not load facts", error=str(e))
            self.alert = LOAD_ALERT
            return Result(FAILED, [str(e)])
        finally:
            # Only the latest load owns the loading flag
            if ticket == self._latest_load:
                self.is_loading = False

        if ticket != self._latest_load:
            log.info("Discarding superseded load", latest=self._latest_load)
            return Result(STALE)

        self.facts = facts
        return Result(OK)

    def set_category(self, category: str) -> Result:
        self.current_category = require_category(category, allow_all=True)
        return self.load(self.current_category)

    def toggle_form(self) -> Result:
        self.show_form = not self.show_form
        return Result(OK)

    def submit_fact(self, text: str, source: str, category: str) -> Result:
        self.form = FactForm(text=text, source=source, category=category)

        problems = validate_fact(text, source, category)
        if problems:
            return Result(INVALID, problems)

        log = self.log.bind(category=category)
        log.msg("view.submit_fact()", text=text, source=source)

        self.is_uploading = True
        try:
            new_fact = self._store.insert_fact(text, source, category)
        except StoreError as e:
            log.error("Error inserting new fact", error=str(e))
            self.error = f"Could not share your fact: {e}"
            return Result(FAILED, [str(e)])
        finally:
            self.is_uploading = False

        self.facts = [new_fact] + self.facts
        self.form.clear()
        self.show_form = False
        return Result(OK)

    def vote(self, fact_id: int, counter: str) -> Result:
        require_counter(counter)
        fact = self.get_fact(fact_id)

        log = self.log.bind(fact=fact_id, counter=counter)
        log.msg("view.vote()")

        self.updating.add(fact_id)
        try:
            updated = self._store.increment_counter(fact, counter)
        except StoreError as e:
            log.error("Error updating votes", error=str(e))
            self.error = f"Could not record your vote: {e}"
            return Result(FAILED, [str(e)])
        finally:
            self.updating.discard(fact_id)

        self.facts = [updated if f.id == fact_id else f for f in self.facts]
        return Result(OK)

    def get_fact(self, fact_id: int) -> Fact:
        for f in self.facts:
            if f.id == fact_id:
                return f
        raise KeyError(f'Fact {fact_id} is not loaded')
