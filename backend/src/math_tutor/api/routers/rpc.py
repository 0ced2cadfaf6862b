from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Body, Depends

from math_tutor.api.deps import get_math_problem_service
from math_tutor.api.schemas import HealthResponse, MathProblemResponse, SvgDownloadResponse
from math_tutor.domain.math_problem import (
    CreateMathProblemInput,
    MathProblem,
    MathProblemByIdInput,
    MathProblemListInput,
    MathProblemType,
    RandomProblemInput,
    UpdateMathProblemInput,
)
from math_tutor.services.math_problem_service import MathProblemService

router = APIRouter(prefix="/rpc", tags=["rpc"])


def _to_response(problem: MathProblem) -> MathProblemResponse:
    return MathProblemResponse(
        id=problem.id,
        title=problem.title,
        question=problem.question,
        type=problem.type,
        explanation=problem.explanation,
        svg_content=problem.svg_content,
        created_at=problem.created_at,
        updated_at=problem.updated_at,
    )


def _to_optional_response(problem: MathProblem | None) -> MathProblemResponse | None:
    return _to_response(problem) if problem is not None else None


@router.get("/healthcheck", response_model=HealthResponse)
def healthcheck() -> HealthResponse:
    return HealthResponse(status="ok", timestamp=datetime.now(timezone.utc))


@router.post("/createMathProblem", response_model=MathProblemResponse)
def create_math_problem(
    body: CreateMathProblemInput,
    service: MathProblemService = Depends(get_math_problem_service),
) -> MathProblemResponse:
    return _to_response(service.create(body))


@router.post("/getMathProblems", response_model=list[MathProblemResponse])
def get_math_problems(
    body: MathProblemListInput | None = Body(default=None),
    service: MathProblemService = Depends(get_math_problem_service),
) -> list[MathProblemResponse]:
    return [_to_response(problem) for problem in service.list(body)]


@router.post("/getMathProblemById", response_model=MathProblemResponse | None)
def get_math_problem_by_id(
    body: MathProblemByIdInput,
    service: MathProblemService = Depends(get_math_problem_service),
) -> MathProblemResponse | None:
    return _to_optional_response(service.get_by_id(body))


@router.post("/updateMathProblem", response_model=MathProblemResponse | None)
def update_math_problem(
    body: UpdateMathProblemInput,
    service: MathProblemService = Depends(get_math_problem_service),
) -> MathProblemResponse | None:
    return _to_optional_response(service.update(body))


@router.post("/deleteMathProblem", response_model=bool)
def delete_math_problem(
    body: MathProblemByIdInput,
    service: MathProblemService = Depends(get_math_problem_service),
) -> bool:
    return service.delete(body)


@router.post("/downloadSvg", response_model=SvgDownloadResponse | None)
def download_svg(
    body: MathProblemByIdInput,
    service: MathProblemService = Depends(get_math_problem_service),
) -> SvgDownloadResponse | None:
    download = service.download_svg(body)
    if download is None:
        return None
    return SvgDownloadResponse(filename=download.filename, content=download.content, mime_type=download.mime_type)


@router.post("/getRandomProblem", response_model=MathProblemResponse | None)
def get_random_problem(
    body: RandomProblemInput | MathProblemType | None = Body(default=None),
    service: MathProblemService = Depends(get_math_problem_service),
) -> MathProblemResponse | None:
    return _to_optional_response(service.get_random(body))
