"""
Creating and editing problem sources and the course file.

Each problem is a directory <problems>/<name>/ holding 'problem.tex'
and 'solution.tex'.
"""

from pathlib import Path

from teach.course import CourseError, FilesystemError
from teach.project import Course

from . import open_editor

import logging
logger = logging.getLogger(__name__)

from typing import Tuple


PROBLEM_FILE_NAME = 'problem.tex'
SOLUTION_FILE_NAME = 'solution.tex'
SOURCE_FILE_NAMES: Tuple[str, ...] = (PROBLEM_FILE_NAME, SOLUTION_FILE_NAME)


def _check_problem_name(name: str) -> None:
    if not name or name in ('.', '..') or '/' in name or '\\' in name:
        raise CourseError("Invalid problem name {!r}".format(name))

def ensure_problem(course: Course, name: str) -> Path:
    """
    Create the problem directory with empty sources, if missing.

    Return the problem directory.

    Raises:
      CourseError: if the name is not a valid directory name, or if
        the problems directory or the problem path is a file.
      FilesystemError: if a directory or file could not be created.
    """
    _check_problem_name(name)
    problems_path = course.problems_path
    if problems_path.is_file():
        raise CourseError("Path {} is a file".format(problems_path))
    if not problems_path.exists():
        logger.warning(
            "Directory <YELLOW>%(path)s<NOCOLOUR> does not exist, creating",
            dict(path=problems_path) )
        try:
            problems_path.mkdir()
        except OSError as error:
            raise FilesystemError( problems_path, name,
                reason=error.strerror or str(error) ) from error
    problem_path = problems_path / name
    if problem_path.is_file():
        raise CourseError(
            "Cannot create {}, exists as file".format(problem_path) )
    try:
        if not problem_path.exists():
            logger.info( "Creating problem <MAGENTA>%(name)s<NOCOLOUR>",
                dict(name=name) )
            problem_path.mkdir()
        for file_name in SOURCE_FILE_NAMES:
            (problem_path / file_name).touch(exist_ok=True)
    except OSError as error:
        raise FilesystemError( problem_path, name,
            reason=error.strerror or str(error) ) from error
    return problem_path

def _edit(course: Course, name: str, file_name: str, *, touch: bool) -> None:
    problem_path = ensure_problem(course, name)
    if touch:
        return
    open_editor(course.settings.editor, problem_path / file_name)

def edit_problem(course: Course, name: str, *, touch: bool = False) -> None:
    """
    Create the problem if needed and open its statement in the editor.

    With touch, only create the problem.
    """
    _edit(course, name, PROBLEM_FILE_NAME, touch=touch)

def edit_solution(course: Course, name: str, *, touch: bool = False) -> None:
    _edit(course, name, SOLUTION_FILE_NAME, touch=touch)

def edit_course_file(course: Course) -> None:
    open_editor(course.settings.editor, course.project.course_file_path)
