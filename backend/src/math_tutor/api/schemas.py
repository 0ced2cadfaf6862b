from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from math_tutor.domain.math_problem import MathProblemType


class ErrorResponse(BaseModel):
    detail: str | list[str]


class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"
    timestamp: datetime


class MathProblemResponse(BaseModel):
    id: int
    title: str
    question: str
    type: MathProblemType
    explanation: str
    svg_content: str
    created_at: datetime
    updated_at: datetime


class SvgDownloadResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    filename: str
    content: str
    mime_type: str = Field(alias="mimeType")
