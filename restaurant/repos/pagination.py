# restaurant/repos/pagination.py
import math
from dataclasses import dataclass
from typing import Any, List

from sqlalchemy import func, select
from sqlalchemy.orm import Session


@dataclass
class Page:
    items: List[Any]
    total: int
    per_page: int
    page: int

    @property
    def last_page(self) -> int:
        return max(math.ceil(self.total / self.per_page), 1)


def paginate(db: Session, stmt, order_column, direction: str, per_page: int, page: int) -> Page:
    total = db.execute(
        select(func.count()).select_from(stmt.order_by(None).subquery())
    ).scalar_one()

    ordering = order_column.desc() if direction == "desc" else order_column.asc()
    items = (
        db.execute(
            stmt.order_by(ordering)
            .limit(per_page)
            .offset((page - 1) * per_page)
        )
        .scalars()
        .all()
    )
    return Page(items=list(items), total=total, per_page=per_page, page=page)
