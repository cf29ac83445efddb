"""Offset pagination shared by every list endpoint."""

from typing import Any, List, Tuple

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ugc_backend.schemas.common import PaginationMeta


async def count_rows(db: AsyncSession, stmt: Select) -> int:
    """COUNT(*) over `stmt` with its ORDER BY stripped."""
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    return (await db.execute(count_stmt)).scalar_one()


async def paginate(
    db: AsyncSession, stmt: Select, page: int, limit: int
) -> Tuple[List[Any], PaginationMeta]:
    """
    Run `stmt` for one page and return (rows, metadata).

    Rows are whatever the statement selects: ORM entities for a single-entity
    select, Row tuples otherwise.
    """
    total = await count_rows(db, stmt)
    result = await db.execute(stmt.offset((page - 1) * limit).limit(limit))
    if len(stmt.column_descriptions) == 1:
        rows = list(result.scalars().all())
    else:
        rows = list(result.all())
    return rows, PaginationMeta.build(page=page, limit=limit, total=total)
