"""
Course root discovery and building of the course tree.

Course root is a directory containing 'course.yaml'. Building writes, for
every component C and item I of the course:
    <root>/C/I/I-problems.tex
    <root>/C/I/I-solutions.tex
    <root>/C/I/I.mk
    <root>/C/Makefile
and finally <root>/Makefile.
"""

from contextlib import contextmanager
from pathlib import Path

from teach.course import ( CourseFile, CourseItem, Coursework,
    FilesystemError, COURSE_FILE_NAME, )
from teach.document import Document
from teach.latex import print_document
from teach.latexdoc import build_sheet_document, build_coursework_document
from teach.makefile import ( write_sheet_makefile,
    write_component_makefile, write_toplevel_makefile,
    FRAGMENT_SUFFIX, MAKEFILE_NAME, )
from teach.preview import Previewer, INCLUDE_DIR_NAME
from teach.settings import AppSettings

import logging
logger = logging.getLogger(__name__)

from typing import Union, Optional, Iterator, Sequence


SOLUTIONS_TITLE_SUFFIX = ' -- Solutions'


class RootNotFoundError(FileNotFoundError):
    pass


class Project:
    """
    Attributes:
      root (Path): the course root directory.
      course_file_path (Path):
    """

    root: Path

    def __init__(self, root: Union[None, str, Path] = None) -> None:
        """
        Find the course root.

        Args:
          root (Path or str, optional): predefined course root.

        If root is not given, try current working directory, then its
        parent, etc.

        Raises:
          RootNotFoundError: if root is given but does not contain the
            course file, or if no course root is found when walking up
            the filesystem.
        """
        if root is not None:
            root_path = Path(root)
            try:
                root_path = root_path.resolve(strict=True)
            except FileNotFoundError as error:
                raise RootNotFoundError(root_path) from error
            if not self.is_root(root_path):
                raise RootNotFoundError(root_path)
        else:
            root_path = Path.cwd()
            while not self.is_root(root_path):
                if root_path.parent == root_path:
                    raise RootNotFoundError()
                root_path = root_path.parent
        self.root = root_path

    @classmethod
    def is_root(cls, root: Path) -> bool:
        return (root / COURSE_FILE_NAME).is_file()

    @property
    def course_file_path(self) -> Path:
        return self.root / COURSE_FILE_NAME

    def __repr__(self) -> str:
        return "{}(root={!r})".format(self.__class__.__name__, str(self.root))


def report_missing_root() -> None:
    logger.critical(
        "Missing <RED>%(name)s<NOCOLOUR> file "
        "that would indicate a course root.",
        dict(name=COURSE_FILE_NAME) )


@contextmanager
def _wrap_os_error( path: Path, item: Optional[str] = None,
) -> Iterator[None]:
    try:
        yield
    except OSError as error:
        raise FilesystemError( path, item,
            reason=error.strerror or str(error) ) from error


class Course:
    """
    Loaded course of a project, with application settings.

    Attributes:
      project (Project):
      settings (AppSettings):
      course_file (CourseFile):
    """

    include_dirs: Sequence[str] = ('../' + INCLUDE_DIR_NAME,)

    project: Project
    settings: AppSettings
    course_file: CourseFile

    def __init__( self, project: Project, settings: AppSettings,
        course_file: Optional[CourseFile] = None,
    ) -> None:
        self.project = project
        self.settings = settings
        if course_file is None:
            course_file = CourseFile.load(project.course_file_path)
        self.course_file = course_file

    @property
    def root(self) -> Path:
        return self.project.root

    @property
    def problems_path(self) -> Path:
        return self.root / self.course_file.sources.problems

    def build(self) -> None:
        """
        Write documents and Makefiles of the whole course.

        Raises:
          FilesystemError: when a directory or a file could not be
            written. Files written before the failure are left in place.
        """
        component_names = []
        for component_name, component in \
                self.course_file.ordered_components():
            component_path = self.root / component_name
            logger.info( "Building component <BOLD>%(name)s<REGULAR>",
                dict(name=component_name) )
            self._make_dir(component_path, component_name)
            for item_name, item in component.ordered_items():
                self._build_item( item_name, item,
                    component_path / item_name,
                    qualified_name=component_name + '/' + item_name )
            with _wrap_os_error(
                    component_path / MAKEFILE_NAME, component_name ):
                write_component_makefile( component_path,
                    self.course_file.sources.problems, self.include_dirs,
                    self.settings )
            component_names.append(component_name)
        with _wrap_os_error(self.root / MAKEFILE_NAME):
            write_toplevel_makefile(self.root, component_names)
        logger.info( "Built %(count)d components in %(root)s",
            dict(count=len(component_names), root=self.root) )

    def _build_item( self, name: str, item: CourseItem, path: Path,
        *, qualified_name: str,
    ) -> None:
        logger.debug( "Building item <CYAN>%(name)s<NOCOLOUR>",
            dict(name=qualified_name) )
        self._make_dir(path, qualified_name)
        course_file = self.course_file
        metadata = course_file.metadata
        if isinstance(item, Coursework):
            problems_document = build_coursework_document(
                item.title, item.intro, metadata.date, metadata,
                item.problems, item.marks, course_file.coursework_style )
        else:
            problems_document = build_sheet_document(
                item.title, item.intro, metadata.date, metadata,
                item.problems, course_file.sheet_style )
        solutions_document = build_sheet_document(
            item.title + SOLUTIONS_TITLE_SUFFIX, item.intro,
            metadata.date, metadata,
            item.problems, course_file.solution_style, kind='solutions' )
        self._write_document(
            path / (name + '-problems.tex'), problems_document,
            qualified_name )
        self._write_document(
            path / (name + '-solutions.tex'), solutions_document,
            qualified_name )
        with _wrap_os_error(
                path / (name + FRAGMENT_SUFFIX), qualified_name ):
            write_sheet_makefile(name, path, item.problems)

    @staticmethod
    def _make_dir(path: Path, item: str) -> None:
        with _wrap_os_error(path, item):
            path.mkdir(exist_ok=True)

    @staticmethod
    def _write_document(path: Path, document: Document, item: str) -> None:
        with _wrap_os_error(path, item):
            with path.open('w', encoding='utf-8', newline='\n') as tex_file:
                tex_file.write(print_document(document))

    def previewer(self, problem: str) -> Previewer:
        return Previewer( self.root, problem, self.course_file,
            self.settings )

    def __repr__(self) -> str:
        return "{}(root={!r})".format(self.__class__.__name__, str(self.root))
