from collections.abc import Iterator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from math_tutor.infra.db.models import Base
from math_tutor.infra.repositories.math_problem_repository import InMemoryMathProblemRepository
from math_tutor.infra.repositories.sql_math_problem_repository import SqlMathProblemRepository
from math_tutor.services.math_problem_service import MathProblemService


@pytest.fixture
def sql_session() -> Iterator[Session]:
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(engine)
    session = Session(engine)
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture(params=["memory", "sql"])
def service(request: pytest.FixtureRequest) -> MathProblemService:
    if request.param == "sql":
        return MathProblemService(repository=SqlMathProblemRepository(request.getfixturevalue("sql_session")))
    return MathProblemService(repository=InMemoryMathProblemRepository())


@pytest.fixture
def problem_payload() -> dict:
    return {
        "title": "Right Triangle Area",
        "question": "Find the area of a right triangle with legs 3 and 4.",
        "type": "triangle_rectangle",
        "explanation": "Area = (3 * 4) / 2\nArea = 6",
        "svg_content": '<svg xmlns="http://www.w3.org/2000/svg"><polygon points="0,0 30,0 0,40"/></svg>',
    }
