from __future__ import annotations
from typing import Any, Dict, Iterable, List, NamedTuple, Optional
import urllib.parse


ALL = "all"
MAX_TEXT_LENGTH = 200
MAX_FACTS = 20
COUNTERS = ("likes", "upvotes", "downvotes")

CATEGORIES = (
    "technology",
    "science",
    "finance",
    "society",
    "entertainment",
    "health",
    "history",
    "news",
)

CATEGORY_COLORS: Dict[str, str] = {
    "technology": "#3b82f6",
    "science": "#16a34a",
    "finance": "#ef4444",
    "society": "#eab308",
    "entertainment": "#db2777",
    "health": "#14b8a6",
    "history": "#f97316",
    "news": "#8b5cf6",
}

UNKNOWN_CATEGORY_COLOR = "#78716c"


class CategoryException(Exception):
    pass


def check_category_colors(categories: Iterable[str], colors: Dict[str, str]) -> None:
    "Raise if the colour mapping does not cover exactly the category set"
    missing = set(categories) - set(colors)
    extra = set(colors) - set(categories)
    if missing or extra:
        raise CategoryException(f'Category colours out of sync, missing: {sorted(missing)}, unknown: {sorted(extra)}')


check_category_colors(CATEGORIES, CATEGORY_COLORS)


class Fact(NamedTuple):
    id: int
    text: str
    source: str
    category: str
    likes: int = 0
    upvotes: int = 0
    downvotes: int = 0
    created_at: Optional[str] = None

    def __str__(self) -> str:
        return f'@{self.id} {self.text} #{self.category}'

    def __repr__(self) -> str:
        return f"Fact(id={self.id}, category='{self.category}', likes={self.likes}, upvotes={self.upvotes}, downvotes={self.downvotes})"

    def counter(self, name: str) -> int:
        require_counter(name)
        return int(getattr(self, name))

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> Fact:
        return cls(
            id=row['id'],
            text=row['text'],
            source=row['source'],
            category=row['category'],
            likes=int(row.get('likes') or 0),
            upvotes=int(row.get('upvotes') or 0),
            downvotes=int(row.get('downvotes') or 0),
            created_at=row.get('created_at'),
        )

    def to_row(self) -> Dict[str, Any]:
        return self._asdict()


def is_disputed(fact: Fact) -> bool:
    return fact.likes + fact.upvotes < fact.downvotes


def is_category(name: str) -> bool:
    return name in CATEGORY_COLORS


def require_category(name: str, allow_all: bool = False) -> str:
    if allow_all and name == ALL:
        return name
    if not is_category(name):
        raise ValueError(f"Unknown category '{name}'")
    return name


def require_counter(name: str) -> str:
    if name not in COUNTERS:
        raise ValueError(f"Unknown counter '{name}', expected one of {', '.join(COUNTERS)}")
    return name


def category_color(name: str) -> str:
    "Colour for a category, rows written with an unknown category get a neutral grey"
    return CATEGORY_COLORS.get(name, UNKNOWN_CATEGORY_COLOR)


def category_filter(category: str) -> Optional[str]:
    "Return the store filter for a category selection, None meaning every category"
    return None if category == ALL else require_category(category)


def is_valid_http_url(value: str) -> bool:
    """
    An absolute http or https URL with a host. Surrounding whitespace is
    ignored, whitespace inside the URL is not allowed
    """
    value = value.strip()
    if any(c.isspace() for c in value):
        return False
    try:
        url = urllib.parse.urlparse(value)
    except ValueError:
        return False
    return url.scheme in ("http", "https") and bool(url.netloc)


def validate_fact(text: str, source: str, category: str) -> List[str]:
    """
    Check a new fact before it is sent to the store, returning a list of
    problems (empty when the fact can be posted)
    """
    problems = []
    if not text:
        problems.append("Text is required")
    elif len(text) > MAX_TEXT_LENGTH:
        problems.append(f"Text is longer than {MAX_TEXT_LENGTH} characters")
    if not is_valid_http_url(source):
        problems.append("Source must be an http or https URL")
    if not category:
        problems.append("Category is required")
    elif not is_category(category):
        problems.append(f"Unknown category '{category}'")
    return problems
