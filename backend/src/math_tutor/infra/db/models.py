from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Enum, Integer, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from math_tutor.domain.math_problem import MathProblemType


class Base(DeclarativeBase):
    pass


class MathProblemModel(Base):
    __tablename__ = "math_problems"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    question: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[MathProblemType] = mapped_column(
        Enum(
            MathProblemType,
            name="math_problem_type",
            values_callable=lambda enum: [member.value for member in enum],
            create_constraint=True,
        ),
        nullable=False,
    )
    explanation: Mapped[str] = mapped_column(Text, nullable=False)
    svg_content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
