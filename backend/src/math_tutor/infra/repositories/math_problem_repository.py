from __future__ import annotations

import random
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from itertools import count
from threading import Lock
from typing import Any, Protocol

from math_tutor.domain.math_problem import MathProblem, MathProblemType

DEFAULT_LIMIT = 50
DEFAULT_OFFSET = 0


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MathProblemRepository(Protocol):
    def insert(self, data: dict[str, Any]) -> MathProblem: ...

    def get(self, problem_id: int) -> MathProblem | None: ...

    def list(
        self,
        *,
        type: MathProblemType | None = None,
        limit: int = DEFAULT_LIMIT,
        offset: int = DEFAULT_OFFSET,
    ) -> list[MathProblem]: ...

    def random(self, *, type: MathProblemType | None = None) -> MathProblem | None: ...

    def update(self, problem_id: int, changes: dict[str, Any]) -> MathProblem | None: ...

    def delete(self, problem_id: int) -> bool: ...


class InMemoryMathProblemRepository:
    def __init__(self) -> None:
        self._lock = Lock()
        self._ids = count(1)
        self._problems: dict[int, MathProblem] = {}

    def insert(self, data: dict[str, Any]) -> MathProblem:
        now = utcnow()
        with self._lock:
            problem = MathProblem(id=next(self._ids), created_at=now, updated_at=now, **data)
            self._problems[problem.id] = problem
        return problem

    def get(self, problem_id: int) -> MathProblem | None:
        return self._problems.get(problem_id)

    def list(
        self,
        *,
        type: MathProblemType | None = None,
        limit: int = DEFAULT_LIMIT,
        offset: int = DEFAULT_OFFSET,
    ) -> list[MathProblem]:
        rows = sorted(
            self._matching(type),
            key=lambda problem: (problem.created_at, problem.id),
            reverse=True,
        )
        return rows[offset : offset + limit]

    def random(self, *, type: MathProblemType | None = None) -> MathProblem | None:
        rows = self._matching(type)
        if not rows:
            return None
        return random.choice(rows)

    def update(self, problem_id: int, changes: dict[str, Any]) -> MathProblem | None:
        with self._lock:
            current = self._problems.get(problem_id)
            if current is None:
                return None
            now = utcnow()
            if now <= current.updated_at:
                now = current.updated_at + timedelta(microseconds=1)
            updated = replace(current, **changes, updated_at=now)
            self._problems[problem_id] = updated
            return updated

    def delete(self, problem_id: int) -> bool:
        with self._lock:
            return self._problems.pop(problem_id, None) is not None

    def _matching(self, type: MathProblemType | None) -> list[MathProblem]:
        problems = list(self._problems.values())
        if type is None:
            return problems
        return [problem for problem in problems if problem.type == type]
