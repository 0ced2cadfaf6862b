from __future__ import annotations

import re

from math_tutor.domain.math_problem import SVG_MIME_TYPE, MathProblem, SvgDownload

_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")


def sanitize_title(title: str) -> str:
    return _NON_ALNUM_RUN.sub("_", title.lower()).strip("_")


def svg_filename(problem_id: int, title: str) -> str:
    # An empty sanitized title still keeps the separator: math_problem_7_.svg
    return f"math_problem_{problem_id}_{sanitize_title(title)}.svg"


def build_svg_download(problem: MathProblem) -> SvgDownload:
    return SvgDownload(
        filename=svg_filename(problem.id, problem.title),
        content=problem.svg_content,
        mime_type=SVG_MIME_TYPE,
    )
