from fnmatch import fnmatchcase

from teach.project import Course
from teach.utils import natural_sorted

import logging
logger = logging.getLogger(__name__)

from typing import Iterable, List, Sequence


def list_problems( course: Course, patterns: Iterable[str] = (),
) -> List[str]:
    """
    Return names of problems matching any of shell patterns.

    No patterns means all problems. Names are naturally sorted.
    """
    patterns = list(patterns) or ['*']
    problems_path = course.problems_path
    if not problems_path.is_dir():
        logger.warning(
            "Problems directory <YELLOW>%(path)s<NOCOLOUR> does not exist",
            dict(path=problems_path) )
        return []
    return natural_sorted(
        path.name for path in problems_path.iterdir()
        if path.is_dir() and any(
            fnmatchcase(path.name, pattern) for pattern in patterns )
    )

def format_columns( names: Sequence[str], width: int = 80,
    *, spacing: int = 2,
) -> str:
    """
    Lay out names in columns, filled top to bottom like ls(1) does.
    """
    if not names:
        return ''
    column_width = max(len(name) for name in names) + spacing
    n_columns = max(1, (width + spacing) // column_width)
    n_rows = -(-len(names) // n_columns)
    lines = []
    for row in range(n_rows):
        row_names = names[row::n_rows]
        lines.append(''.join(
            name.ljust(column_width) for name in row_names ).rstrip())
    return '\n'.join(lines)
