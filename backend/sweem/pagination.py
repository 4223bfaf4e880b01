"""Generic offset pagination over SQLModel select statements."""

from typing import Tuple

from sqlalchemy import func
from sqlmodel import Session, select

from .schemas import PaginatedResult

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def normalize_page(page: int, page_size: int) -> Tuple[int, int]:
    """Clamp paging input: page >= 1, page_size in 1..MAX_PAGE_SIZE (<=0 means default)."""
    if page < 1:
        page = 1
    if page_size < 1:
        page_size = DEFAULT_PAGE_SIZE
    if page_size > MAX_PAGE_SIZE:
        page_size = MAX_PAGE_SIZE
    return page, page_size


def paginate(session: Session, statement, page: int, page_size: int) -> PaginatedResult:
    """Return one page of `statement` with the count of the whole result set.

    `statement` must already be ordered deterministically (repositories
    order by primary key), otherwise pages may overlap between calls. A
    page past the end yields no items but still reports the full count.
    """
    page, page_size = normalize_page(page, page_size)
    total_count = session.exec(select(func.count()).select_from(statement.subquery())).one()
    offset = (page - 1) * page_size
    if offset >= total_count:
        return PaginatedResult(items=[], page=page, page_size=page_size, total_count=total_count)
    items = session.exec(statement.offset(offset).limit(page_size)).all()
    return PaginatedResult(items=list(items), page=page, page_size=page_size, total_count=total_count)
