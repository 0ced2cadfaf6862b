from math_tutor.domain.math_problem import MathProblem, MathProblemType, UpdateMathProblemInput
from math_tutor.services.math_problem_service import MathProblemService


def _create(service: MathProblemService, payload: dict, **overrides) -> MathProblem:
    return service.create({**payload, **overrides})


def test_create_returns_persisted_problem(service: MathProblemService, problem_payload: dict) -> None:
    created = service.create(problem_payload)

    assert created.id > 0
    assert created.title == problem_payload["title"]
    assert created.question == problem_payload["question"]
    assert created.type is MathProblemType.TRIANGLE_RECTANGLE
    assert created.explanation == problem_payload["explanation"]
    assert created.svg_content == problem_payload["svg_content"]
    assert created.created_at == created.updated_at
    assert created.created_at.tzinfo is not None


def test_create_assigns_distinct_ids(service: MathProblemService, problem_payload: dict) -> None:
    first = service.create(problem_payload)
    second = service.create(problem_payload)

    assert first.id != second.id


def test_get_by_id_returns_none_when_missing(service: MathProblemService, problem_payload: dict) -> None:
    created = service.create(problem_payload)

    assert service.get_by_id({"id": created.id}) == created
    assert service.get_by_id({"id": 999999}) is None


def test_list_is_empty_without_rows(service: MathProblemService) -> None:
    assert service.list() == []


def test_list_orders_most_recent_first(service: MathProblemService, problem_payload: dict) -> None:
    ids = [_create(service, problem_payload, title=f"Problem {n}").id for n in range(3)]

    listed = service.list()

    assert [problem.id for problem in listed] == list(reversed(ids))


def test_list_filters_by_type_and_paginates(service: MathProblemService, problem_payload: dict) -> None:
    circles = [_create(service, problem_payload, type="circle", title=f"Circle {n}") for n in range(4)]
    _create(service, problem_payload, type="square")

    only_circles = service.list({"type": "circle"})
    assert len(only_circles) == 4
    assert all(problem.type is MathProblemType.CIRCLE for problem in only_circles)

    page = service.list({"type": "circle", "limit": 2, "offset": 1})
    assert [problem.id for problem in page] == [circles[2].id, circles[1].id]


def test_update_changes_only_supplied_fields(service: MathProblemService, problem_payload: dict) -> None:
    original = service.create(problem_payload)

    updated = service.update({"id": original.id, "title": "X"})

    assert updated is not None
    assert updated.title == "X"
    assert updated.question == original.question
    assert updated.type == original.type
    assert updated.explanation == original.explanation
    assert updated.svg_content == original.svg_content
    assert updated.created_at == original.created_at
    assert updated.updated_at > original.updated_at


def test_update_with_only_id_refreshes_timestamp(service: MathProblemService, problem_payload: dict) -> None:
    original = service.create(problem_payload)

    updated = service.update(UpdateMathProblemInput(id=original.id))

    assert updated is not None
    assert updated.updated_at > original.updated_at
    assert (updated.title, updated.question, updated.type) == (original.title, original.question, original.type)


def test_update_multiple_fields_including_type(service: MathProblemService, problem_payload: dict) -> None:
    original = service.create(problem_payload)

    updated = service.update(
        {"id": original.id, "type": "circle", "question": "Find the area of this circle", "explanation": "A = pi r^2"}
    )

    assert updated is not None
    assert updated.type is MathProblemType.CIRCLE
    assert updated.question == "Find the area of this circle"
    assert updated.explanation == "A = pi r^2"
    assert updated.svg_content == original.svg_content
    assert service.get_by_id({"id": original.id}) == updated


def test_update_missing_problem_returns_none(service: MathProblemService) -> None:
    assert service.update({"id": 999999, "title": "Nope"}) is None


def test_delete_reports_whether_a_row_was_removed(service: MathProblemService, problem_payload: dict) -> None:
    doomed = service.create(problem_payload)
    survivor = _create(service, problem_payload, title="Survivor")

    assert service.delete({"id": doomed.id}) is True
    assert service.get_by_id({"id": doomed.id}) is None
    assert service.delete({"id": doomed.id}) is False
    assert service.delete({"id": 999999}) is False
    assert service.get_by_id({"id": survivor.id}) == survivor


def test_get_random_respects_type_filter(service: MathProblemService, problem_payload: dict) -> None:
    assert service.get_random("square") is None

    _create(service, problem_payload, type="circle")
    assert service.get_random(MathProblemType.SQUARE) is None

    square = _create(service, problem_payload, type="square")
    for _ in range(10):
        assert service.get_random({"type": "square"}) == square


def test_get_random_without_filter_eventually_varies(service: MathProblemService, problem_payload: dict) -> None:
    assert service.get_random() is None
    for n in range(3):
        _create(service, problem_payload, title=f"Problem {n}")

    seen = {service.get_random().id for _ in range(50)}

    assert len(seen) > 1


def test_download_svg_builds_filename_from_title(service: MathProblemService, problem_payload: dict) -> None:
    created = _create(service, problem_payload, title="Circle & Arc Problem #1!")

    download = service.download_svg({"id": created.id})

    assert download is not None
    assert download.filename == f"math_problem_{created.id}_circle_arc_problem_1.svg"
    assert download.content == problem_payload["svg_content"]
    assert download.mime_type == "image/svg+xml"


def test_download_svg_missing_problem_returns_none(service: MathProblemService) -> None:
    assert service.download_svg({"id": 999999}) is None


def test_list_defaults_to_fifty_rows(service: MathProblemService, problem_payload: dict) -> None:
    for n in range(51):
        _create(service, problem_payload, title=f"Problem {n}")

    assert len(service.list()) == 50
    assert len(service.list({"offset": 50})) == 1
