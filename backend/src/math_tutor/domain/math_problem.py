from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

SVG_MIME_TYPE = "image/svg+xml"

# Upper bound of a 32-bit INTEGER column on PostgreSQL.
MAX_ID = 2**31 - 1


class MathProblemType(str, Enum):
    TRIANGLE_RECTANGLE = "triangle_rectangle"
    TRIANGLE_EQUILATERAL = "triangle_equilateral"
    SQUARE = "square"
    RECTANGLE = "rectangle"
    CIRCLE = "circle"
    ARC = "arc"


@dataclass(frozen=True)
class MathProblem:
    id: int
    title: str
    question: str
    type: MathProblemType
    explanation: str
    svg_content: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class SvgDownload:
    filename: str
    content: str
    mime_type: str = SVG_MIME_TYPE


class _Input(BaseModel):
    model_config = ConfigDict(extra="forbid")


class CreateMathProblemInput(_Input):
    title: str = Field(min_length=1)
    question: str = Field(min_length=1)
    type: MathProblemType
    explanation: str = Field(min_length=1)
    svg_content: str = Field(min_length=1)


class UpdateMathProblemInput(_Input):
    """Sparse update: only the fields present in the payload are written."""

    id: int = Field(gt=0, le=MAX_ID, strict=True)
    title: str | None = Field(default=None, min_length=1)
    question: str | None = Field(default=None, min_length=1)
    type: MathProblemType | None = None
    explanation: str | None = Field(default=None, min_length=1)
    svg_content: str | None = Field(default=None, min_length=1)

    @model_validator(mode="after")
    def _reject_explicit_nulls(self) -> UpdateMathProblemInput:
        nulls = sorted(name for name in self.model_fields_set if getattr(self, name) is None)
        if nulls:
            raise ValueError(f"fields cannot be null: {', '.join(nulls)}")
        return self

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True, exclude={"id"})


class MathProblemByIdInput(_Input):
    id: int = Field(gt=0, le=MAX_ID, strict=True)


class MathProblemListInput(_Input):
    type: MathProblemType | None = None
    limit: int | None = Field(default=None, gt=0, le=100, strict=True)
    offset: int | None = Field(default=None, ge=0, le=MAX_ID, strict=True)


class RandomProblemInput(_Input):
    type: MathProblemType | None = None
