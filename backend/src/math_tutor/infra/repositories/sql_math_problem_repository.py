from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from math_tutor.domain.math_problem import MathProblem, MathProblemType
from math_tutor.infra.db.models import MathProblemModel
from math_tutor.infra.repositories.math_problem_repository import (
    DEFAULT_LIMIT,
    DEFAULT_OFFSET,
    MathProblemRepository,
    utcnow,
)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; they were written as UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class SqlMathProblemRepository(MathProblemRepository):
    def __init__(self, db: Session) -> None:
        self._db = db

    @contextmanager
    def _statement(self) -> Iterator[None]:
        """Roll the session back when a statement fails."""
        try:
            yield
        except SQLAlchemyError:
            self._db.rollback()
            raise

    def _to_record(self, model: MathProblemModel) -> MathProblem:
        return MathProblem(
            id=model.id,
            title=model.title,
            question=model.question,
            type=model.type,
            explanation=model.explanation,
            svg_content=model.svg_content,
            created_at=_as_utc(model.created_at),
            updated_at=_as_utc(model.updated_at),
        )

    def insert(self, data: dict[str, Any]) -> MathProblem:
        now = utcnow()
        model = MathProblemModel(**data, created_at=now, updated_at=now)
        with self._statement():
            self._db.add(model)
            self._db.commit()
            self._db.refresh(model)
            return self._to_record(model)

    def get(self, problem_id: int) -> MathProblem | None:
        with self._statement():
            row = self._db.get(MathProblemModel, problem_id)
            if row is None:
                return None
            return self._to_record(row)

    def list(
        self,
        *,
        type: MathProblemType | None = None,
        limit: int = DEFAULT_LIMIT,
        offset: int = DEFAULT_OFFSET,
    ) -> list[MathProblem]:
        stmt = select(MathProblemModel)
        if type is not None:
            stmt = stmt.where(MathProblemModel.type == type)
        stmt = (
            stmt.order_by(MathProblemModel.created_at.desc(), MathProblemModel.id.desc())
            .limit(limit)
            .offset(offset)
        )
        with self._statement():
            return [self._to_record(row) for row in self._db.scalars(stmt)]

    def random(self, *, type: MathProblemType | None = None) -> MathProblem | None:
        stmt = select(MathProblemModel)
        if type is not None:
            stmt = stmt.where(MathProblemModel.type == type)
        with self._statement():
            row = self._db.scalars(stmt.order_by(func.random()).limit(1)).first()
            if row is None:
                return None
            return self._to_record(row)

    def update(self, problem_id: int, changes: dict[str, Any]) -> MathProblem | None:
        stmt = (
            update(MathProblemModel)
            .where(MathProblemModel.id == problem_id)
            .values(**changes, updated_at=utcnow())
            .returning(MathProblemModel)
            .execution_options(populate_existing=True)
        )
        with self._statement():
            row = self._db.scalars(stmt).one_or_none()
            record = self._to_record(row) if row is not None else None
            self._db.commit()
            return record

    def delete(self, problem_id: int) -> bool:
        with self._statement():
            result = self._db.execute(delete(MathProblemModel).where(MathProblemModel.id == problem_id))
            removed = result.rowcount > 0
            self._db.commit()
            return removed
