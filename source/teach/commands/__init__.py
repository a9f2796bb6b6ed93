"""
Auxiliary commands operating on a course: editing problems and the course
file, listing problems.
"""

import shlex
import subprocess
from pathlib import Path

from teach.course import CourseError

import logging
logger = logging.getLogger(__name__)


class EditorError(CourseError):
    pass


def open_editor(editor: str, path: Path) -> None:
    """
    Open path in the editor and wait for it to exit.

    The editor setting may contain arguments, e.g. 'code --wait'.
    """
    editor_args = shlex.split(editor)
    if not editor_args:
        raise EditorError("No editor configured")
    args = [*editor_args, str(path)]
    logger.debug( "Running <CYAN>%(command)s<NOCOLOUR>",
        dict(command=' '.join(args)) )
    try:
        completed = subprocess.run(args)
    except OSError as error:
        raise EditorError(
            "Failed to start editor {}: {}".format(args[0], error)
        ) from error
    if completed.returncode != 0:
        logger.warning(
            "Editor <YELLOW>%(editor)s<NOCOLOUR> exited with code %(code)d",
            dict(editor=args[0], code=completed.returncode) )
