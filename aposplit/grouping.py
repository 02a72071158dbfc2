"""
Grouping module: partitions transcript pages into per-student page groups.
"""

import logging
from typing import Callable, Iterable, List, Optional

from aposplit.boundary import extract_student_info
from aposplit.schema import PageText, StudentGroup, StudentInfo

logger = logging.getLogger(__name__)


def starts_new_student(current: Optional[StudentGroup], info: StudentInfo) -> bool:
    """
    Decide whether a page opens a new student group.

    Rules:
    - The first page always opens a group
    - A student number different from the current one opens a group
    - A page without a number closes a numbered student

    Two consecutive pages without a number stay in the same group, even if
    they belong to different students. Nothing on the page tells them apart.
    """
    if current is None:
        return True

    current_number = current.info.student_number
    if info.student_number is not None:
        return info.student_number != current_number
    return current_number is not None


def group_student_pages(
    pages: Iterable[PageText],
    detector: Callable[[str], StudentInfo] = extract_student_info,
) -> List[StudentGroup]:
    """
    Partition transcript pages (cover page excluded) into student groups.

    Pages are scanned once, in order; each decision only depends on the
    previous page's group.

    Args:
        pages: Transcript pages in source order
        detector: Identity extraction applied to each page's text

    Returns:
        Sealed groups in discovery order
    """
    groups: List[StudentGroup] = []
    current: Optional[StudentGroup] = None

    for page in pages:
        info = detector(page.text)

        if starts_new_student(current, info):
            if current is not None:
                groups.append(current)
            current = StudentGroup(info=info)
            if info.student_number is None:
                logger.warning(f"Page {page.index + 1}: no student number, starting an unknown-student group")

        current.add_page(page.index)

    if current is not None:
        groups.append(current)

    return groups
