# fittrack/pagination.py
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Sequence, Tuple

DEFAULT_PAGE = 1
MAX_PAGE = 100000
MAX_LIMIT = 100


def _safe_int(v: Any, default: int) -> int:
    try:
        return int(v)
    except (TypeError, ValueError):
        return default


def parse_page_args(args: Mapping[str, Any], default_limit: int) -> Tuple[int, int]:
    """
    Read ``page``/``limit`` from query args.
    Unparseable values fall back to the defaults; both are clamped to
    [1, MAX_PAGE] and [1, MAX_LIMIT] so offsets always fit the database.
    """
    page = max(1, min(_safe_int(args.get("page"), DEFAULT_PAGE), MAX_PAGE))
    limit = max(1, min(_safe_int(args.get("limit"), default_limit), MAX_LIMIT))
    return page, limit


@dataclass
class Page:
    items: List[Any]
    page: int
    limit: int
    total: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.total else 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    def to_dict(self, total_key: str = "totalCount") -> Dict[str, Any]:
        return {
            "currentPage": self.page,
            "totalPages": self.total_pages,
            total_key: self.total,
            "hasNext": self.has_next,
            "hasPrev": self.has_prev,
        }

    @classmethod
    def from_sequence(cls, items: Sequence[Any], page: int, limit: int) -> "Page":
        start = (page - 1) * limit
        return cls(items=list(items[start:start + limit]), page=page, limit=limit, total=len(items))

    @classmethod
    def from_query(cls, query, page: int, limit: int, *order_by) -> "Page":
        """Count the filtered query, then fetch one sorted slice of it."""
        total = query.order_by(None).count()
        rows = (
            query.order_by(*order_by)
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return cls(items=rows, page=page, limit=limit, total=total)
