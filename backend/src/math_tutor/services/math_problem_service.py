from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from math_tutor.domain.math_problem import (
    CreateMathProblemInput,
    MathProblem,
    MathProblemByIdInput,
    MathProblemListInput,
    MathProblemType,
    RandomProblemInput,
    SvgDownload,
    UpdateMathProblemInput,
)
from math_tutor.infra.repositories.math_problem_repository import (
    DEFAULT_LIMIT,
    DEFAULT_OFFSET,
    MathProblemRepository,
)
from math_tutor.services.errors import InputValidationError
from math_tutor.services.svg_export import build_svg_download

logger = logging.getLogger(__name__)

InputT = TypeVar("InputT", bound=BaseModel)


def parse_input(model: type[InputT], payload: InputT | Mapping[str, Any] | None) -> InputT:
    """Validate a raw payload against ``model``; typed inputs pass through untouched."""
    if isinstance(payload, model):
        return payload
    try:
        return model.model_validate(dict(payload or {}))
    except PydanticValidationError as exc:
        raise InputValidationError.from_pydantic(exc) from exc


@contextmanager
def _store_call(action: str) -> Iterator[None]:
    try:
        yield
    except Exception:
        logger.exception("Math problem %s failed", action)
        raise


class MathProblemService:
    def __init__(self, repository: MathProblemRepository) -> None:
        self._repository = repository

    def create(self, payload: CreateMathProblemInput | Mapping[str, Any]) -> MathProblem:
        data = parse_input(CreateMathProblemInput, payload)
        with _store_call("creation"):
            problem = self._repository.insert(data.model_dump())
        logger.info("Created math problem id=%s type=%s", problem.id, problem.type.value)
        return problem

    def list(self, payload: MathProblemListInput | Mapping[str, Any] | None = None) -> list[MathProblem]:
        query = parse_input(MathProblemListInput, payload)
        limit = query.limit if query.limit is not None else DEFAULT_LIMIT
        offset = query.offset if query.offset is not None else DEFAULT_OFFSET
        with _store_call("listing"):
            return self._repository.list(type=query.type, limit=limit, offset=offset)

    def get_by_id(self, payload: MathProblemByIdInput | Mapping[str, Any]) -> MathProblem | None:
        query = parse_input(MathProblemByIdInput, payload)
        with _store_call("lookup"):
            return self._repository.get(query.id)

    def update(self, payload: UpdateMathProblemInput | Mapping[str, Any]) -> MathProblem | None:
        data = parse_input(UpdateMathProblemInput, payload)
        changes = data.changes()
        with _store_call("update"):
            problem = self._repository.update(data.id, changes)
        if problem is None:
            logger.debug("Math problem id=%s not found for update", data.id)
        else:
            logger.info("Updated math problem id=%s fields=%s", data.id, sorted(changes))
        return problem

    def delete(self, payload: MathProblemByIdInput | Mapping[str, Any]) -> bool:
        query = parse_input(MathProblemByIdInput, payload)
        with _store_call("deletion"):
            removed = self._repository.delete(query.id)
        if removed:
            logger.info("Deleted math problem id=%s", query.id)
        return removed

    def get_random(
        self,
        payload: RandomProblemInput | MathProblemType | str | Mapping[str, Any] | None = None,
    ) -> MathProblem | None:
        if isinstance(payload, str):
            payload = {"type": payload}
        query = parse_input(RandomProblemInput, payload)
        with _store_call("random pick"):
            return self._repository.random(type=query.type)

    def download_svg(self, payload: MathProblemByIdInput | Mapping[str, Any]) -> SvgDownload | None:
        problem = self.get_by_id(payload)
        if problem is None:
            return None
        return build_svg_download(problem)
