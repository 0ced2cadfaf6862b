from __future__ import annotations

from collections.abc import Generator

from math_tutor.infra.repositories.math_problem_repository import InMemoryMathProblemRepository
from math_tutor.services.math_problem_service import MathProblemService
from math_tutor.settings import load_settings

settings = load_settings()
_memory_repository = InMemoryMathProblemRepository()


def _get_memory_math_problem_service() -> MathProblemService:
    return MathProblemService(repository=_memory_repository)


def _get_sql_math_problem_service() -> Generator[MathProblemService, None, None]:
    from math_tutor.infra.db.session import get_db
    from math_tutor.infra.repositories.sql_math_problem_repository import SqlMathProblemRepository

    for db in get_db():
        yield MathProblemService(repository=SqlMathProblemRepository(db))


if settings.db_backend == "sql":
    get_math_problem_service = _get_sql_math_problem_service
else:
    get_math_problem_service = _get_memory_math_problem_service
