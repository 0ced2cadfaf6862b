from math_tutor.infra.repositories.math_problem_repository import (
    InMemoryMathProblemRepository,
    MathProblemRepository,
)

__all__ = [
    "InMemoryMathProblemRepository",
    "MathProblemRepository",
]
