"""Variable ordering for the search."""

from collections.abc import Mapping, Sequence

from ..models import CourseCode, Section


def order_courses(
    course_codes: Sequence[CourseCode],
    candidates: Mapping[CourseCode, Sequence[Section]],
) -> list[CourseCode]:
    """Order courses by number of candidate sections, fewest first.

    Most-constrained-variable heuristic: the course with the fewest options
    is placed first so dead ends show up near the root of the search tree.
    The sort is stable, so ties keep the requested order.
    """
    return sorted(course_codes, key=lambda code: len(candidates.get(code, ())))
