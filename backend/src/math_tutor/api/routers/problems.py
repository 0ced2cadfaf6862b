from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from math_tutor.api.deps import get_math_problem_service
from math_tutor.api.schemas import ErrorResponse
from math_tutor.services.errors import NotFoundError
from math_tutor.services.math_problem_service import MathProblemService

router = APIRouter(prefix="/problems", tags=["problems"])


@router.get("/{problem_id}/svg", response_class=Response, responses={404: {"model": ErrorResponse}})
def download_problem_svg(
    problem_id: int,
    service: MathProblemService = Depends(get_math_problem_service),
) -> Response:
    download = service.download_svg({"id": problem_id})
    if download is None:
        raise NotFoundError("Math problem", problem_id)
    return Response(
        content=download.content,
        media_type=download.mime_type,
        headers={"Content-Disposition": f'attachment; filename="{download.filename}"'},
    )
