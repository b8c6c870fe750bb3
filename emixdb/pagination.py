"""
Pagination over raw SQL.

A Pager runs two statements against the same bind: a COUNT(1) over the query
wrapped as a subquery, then the query itself windowed with LIMIT. The two are
not run in one transaction, so rows written in between can shift pages.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Generic, NamedTuple, TypeVar

from sqlalchemy import text
from sqlalchemy.engine import Engine, RowMapping
from sqlalchemy.sql.elements import TextClause

from emixdb.core.config import settings
from emixdb.core.errors import NoRowsError

_log = logging.getLogger(__name__)

T = TypeVar("T")


class CountResult(NamedTuple):
    """Row returned by the count query."""

    counts: int


@dataclass(frozen=True, slots=True)
class Page(Generic[T]):
    """A single page of items plus meta-data."""

    items: Sequence[T]
    total: int  # rows in the whole result set
    pages: int
    page: int  # 1-based
    page_size: int

    def has_next(self) -> bool:
        return self.page < self.pages

    def has_prev(self) -> bool:
        return self.page > 1


def _fetch(bind: Any, stmt: TextClause, params: Mapping[str, Any]) -> list[RowMapping]:
    """Execute on an Engine (checking out a connection), a Connection or a Session."""
    if isinstance(bind, Engine):
        with bind.connect() as conn:
            return list(conn.execute(stmt, params).mappings())
    return list(bind.execute(stmt, params).mappings())


def _dialect_name(bind: Any) -> str:
    dialect = getattr(bind, "dialect", None)
    if dialect is None and hasattr(bind, "get_bind"):
        dialect = bind.get_bind().dialect
    return getattr(dialect, "name", "")


def window_clause(dialect: str, offset: int, size: int) -> str:
    """LIMIT clause for *dialect*: ``LIMIT offset,size``, or LIMIT/OFFSET on PostgreSQL."""
    if dialect == "postgresql":
        return f" LIMIT {size} OFFSET {offset}"
    return f" LIMIT {offset},{size}"


class Pager:
    """
    One paged query against *bind* (Engine, Connection or Session).

    Not safe to share between threads; build one per request.
    """

    def __init__(self, bind: Any, page_num: int = 1, page_size: int = 0) -> None:
        if page_num < 1:
            page_num = 1
        if page_size <= 0:
            page_size = settings.DEFAULT_PAGE_SIZE
        self.bind = bind
        self.page_num = page_num
        self.page_size = page_size
        self.pages = 0
        self.counts = 0
        self._query: TextClause | None = None
        self._params: dict[str, Any] = {}

    @property
    def offset(self) -> int:
        return (self.page_num - 1) * self.page_size

    @property
    def query(self) -> str | None:
        """SQL of the prepared data query, or None when there is nothing to fetch."""
        return self._query.text if self._query is not None else None

    def with_query(
        self, sql: str, params: Mapping[str, Any] | None = None, **kwargs: Any
    ) -> Pager:
        """
        Count the rows of *sql* and prepare the data query for the current page.

        Bind parameters use SQLAlchemy ``:name`` placeholders and are applied
        to both statements. Database errors propagate unchanged.
        """
        bound = {**(params or {}), **kwargs}
        self.counts = 0
        self.pages = 0
        self._query = None
        self._params = bound

        count_sql = text(f"SELECT COUNT(1) AS counts FROM ({sql}) c")
        rows = _fetch(self.bind, count_sql, bound)
        result = CountResult(counts=int(rows[0]["counts"] or 0) if rows else 0)
        self.counts = result.counts
        _log.debug("Pager count=%s page_size=%s", self.counts, self.page_size)
        if self.counts == 0:
            return self

        if self.counts <= self.page_size:
            self.pages = 1
            self.page_num = 1
            self._query = text(sql)
            return self

        self.pages, rest = divmod(self.counts, self.page_size)
        if rest:
            self.pages += 1
        if self.page_num > self.pages:
            self.page_num = self.pages
        windowed = sql + window_clause(_dialect_name(self.bind), self.offset, self.page_size)
        _log.debug("Pager page %s/%s: %s", self.page_num, self.pages, windowed)
        self._query = text(windowed)
        return self

    def scan(self, model: Callable[..., T] | None = None) -> list[Any]:
        """
        Run the prepared data query.

        Returns a list of dicts, or ``model(**row)`` per row when *model* is
        given. Raises NoRowsError when the query matched nothing.
        """
        if self.counts == 0 or self._query is None:
            raise NoRowsError()
        rows = _fetch(self.bind, self._query, self._params)
        if model is None:
            return [dict(r) for r in rows]
        return [model(**dict(r)) for r in rows]

    def to_page(self, items: Sequence[T]) -> Page[T]:
        return Page(
            items=items,
            total=self.counts,
            pages=self.pages,
            page=self.page_num,
            page_size=self.page_size,
        )

    def fetch_page(self, model: Callable[..., T] | None = None) -> Page[Any]:
        """scan() wrapped in a Page; an empty result gives a Page with no items."""
        try:
            items = self.scan(model)
        except NoRowsError:
            items = []
        return self.to_page(items)


def new_pager(bind: Any, page_num: int = 1, page_size: int = 0) -> Pager:
    return Pager(bind, page_num, page_size)
