r"""
Course definition: metadata, styles and the tree of course items.

Course file keys:
* metadata:
    - author (string), date (string);
    - any other key defines a preamble command
      \<key>{<value>}, emitted in file order.
* sources:
    - problems (string): directory holding one subdirectory per problem;
    - other keys are kept but not interpreted.
* sheets, solutions, courseworks (optional):
    - document_class, problem_macro, include_preamble (strings, optional).
* any other key:
    - a component, mapping item names to items:
        - title, topic (strings), intro (string, optional);
        - problems (list of strings);
        - marks (list of integers, optional); presence of this key
          makes the item a coursework.
"""

from pathlib import Path

import yaml

import teach.yaml
from teach.utils import mapping_ordered_items

import logging
logger = logging.getLogger(__name__)

from typing import ( Any, Union, Optional,
    Iterable, Mapping, Sequence,
    Tuple, Dict, )
from typing_extensions import Literal

StyleKind = Literal['sheets', 'solutions', 'courseworks']
STYLE_KINDS: Tuple[StyleKind, ...] = ('sheets', 'solutions', 'courseworks')

COURSE_FILE_NAME = 'course.yaml'


class CourseError(Exception):
    pass

class ConfigShapeError(CourseError, ValueError):
    """Course file content does not match the expected structure."""
    pass

class FilesystemError(CourseError):
    """
    Creating or writing a file of the course tree failed.

    Attributes:
      path (Path): the path that could not be written.
      item (str or None): name of the course item being built.
    """

    def __init__( self, path: Path, item: Optional[str] = None,
        *, reason: str = '',
    ) -> None:
        self.path = path
        self.item = item
        message = "Failed to write {}".format(path)
        if item is not None:
            message += " (item {})".format(item)
        if reason:
            message += ": " + reason
        super().__init__(message)


def _expect_mapping(value: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigShapeError(
            "{} must be a mapping, got {}"
            .format(where, type(value).__name__) )
    for key in value:
        if not isinstance(key, str):
            raise ConfigShapeError(
                "{} must have string keys, got {!r}".format(where, key) )
    return value

def _expect_string(value: Any, where: str) -> str:
    if not isinstance(value, str):
        raise ConfigShapeError(
            "{} must be a string, got {}"
            .format(where, type(value).__name__) )
    return value

def _expect_optional_string(value: Any, where: str) -> Optional[str]:
    if value is None:
        return None
    return _expect_string(value, where)

def _expect_scalar_string(value: Any, where: str) -> str:
    # YAML turns unquoted dates and numbers into non-strings
    if isinstance(value, (str, int, float)) or hasattr(value, 'isoformat'):
        return str(value)
    raise ConfigShapeError(
        "{} must be a scalar, got {}".format(where, type(value).__name__) )

def _check_keys( record: Mapping[str, Any], where: str,
    *, required: Iterable[str] = (), allowed: Optional[Iterable[str]] = None,
) -> None:
    missing = [key for key in required if key not in record]
    if missing:
        raise ConfigShapeError( "{} is missing required keys: {}"
            .format(where, ', '.join(missing)) )
    if allowed is None:
        return
    allowed = set(allowed)
    unknown = [key for key in record if key not in allowed]
    if unknown:
        raise ConfigShapeError( "{} has unknown keys: {}"
            .format(where, ', '.join(unknown)) )


class Metadata:
    """
    Attributes:
      author (str):
      date (str): date as written in the course file, not interpreted.
      extras (tuple of (str, str) pairs):
        custom preamble commands, in course file order.
    """

    __slots__ = ['author', 'date', 'extras']

    author: str
    date: str
    extras: Tuple[Tuple[str, str], ...]

    def __init__( self, author: str, date: str,
        extras: Iterable[Tuple[str, str]] = (),
    ) -> None:
        self.author = author
        self.date = date
        self.extras = tuple(extras)

    @classmethod
    def from_record(cls, record: Any) -> 'Metadata':
        record = _expect_mapping(record, "metadata")
        _check_keys( record, "metadata",
            required=('author', 'date') )
        extras = []
        for key, value in record.items():
            if key in ('author', 'date'):
                continue
            extras.append(
                (key, _expect_scalar_string(value, "metadata." + key)) )
        return cls(
            author=_expect_string(record['author'], "metadata.author"),
            date=_expect_scalar_string(record['date'], "metadata.date"),
            extras=extras )

    def __repr__(self) -> str:
        return ( f"{self.__class__.__name__}(author={self.author!r}, "
            f"date={self.date!r}, extras={self.extras!r})" )


class Sources:

    __slots__ = ['problems', 'extras']

    problems: str
    extras: Tuple[Tuple[str, str], ...]

    def __init__( self, problems: str,
        extras: Iterable[Tuple[str, str]] = (),
    ) -> None:
        self.problems = problems
        self.extras = tuple(extras)

    @classmethod
    def from_record(cls, record: Any) -> 'Sources':
        record = _expect_mapping(record, "sources")
        _check_keys(record, "sources",
            required=('problems',) )
        return cls(
            problems=_expect_string(record['problems'], "sources.problems"),
            extras=[
                (key, _expect_string(value, "sources." + key))
                for key, value in record.items() if key != 'problems' ]
        )


class StyleConfig:
    """
    Style options of one kind of documents.

    Every attribute is optional; None means the default is used.
    """

    __slots__ = ['document_class', 'problem_macro', 'include_preamble']

    document_class: Optional[str]
    problem_macro: Optional[str]
    include_preamble: Optional[str]

    def __init__( self,
        *, document_class: Optional[str] = None,
        problem_macro: Optional[str] = None,
        include_preamble: Optional[str] = None,
    ) -> None:
        self.document_class = document_class
        self.problem_macro = problem_macro
        self.include_preamble = include_preamble

    @classmethod
    def from_record(cls, record: Any, kind: StyleKind) -> 'StyleConfig':
        if record is None:
            return cls()
        record = _expect_mapping(record, kind)
        _check_keys(record, kind, allowed=cls.__slots__)
        return cls(**{
            key: _expect_optional_string(value, kind + '.' + key)
            for key, value in record.items() })

    def __repr__(self) -> str:
        return "{}({})".format( self.__class__.__name__,
            ', '.join( '{}={!r}'.format(name, getattr(self, name))
                for name in self.__slots__ ))


class CourseItem:
    """
    Base class of course items.

    Attributes:
      title (str):
      topic (str):
      intro (str or None): text put after the title.
      problems (tuple of str): problem identifiers, in enumeration order.
    """

    __slots__ = ['title', 'topic', 'intro', 'problems']

    title: str
    topic: str
    intro: Optional[str]
    problems: Tuple[str, ...]

    _keys: Tuple[str, ...] = ('title', 'topic', 'intro', 'problems')

    def __init__( self, title: str, topic: str, problems: Iterable[str],
        *, intro: Optional[str] = None,
    ) -> None:
        self.title = title
        self.topic = topic
        self.intro = intro
        self.problems = tuple(problems)

    @classmethod
    def from_record(cls, record: Any, where: str) -> 'CourseItem':
        """
        Decode an item record, choosing the variant.

        Record with 'marks' key is a Coursework, otherwise a Sheet.
        """
        record = _expect_mapping(record, where)
        if 'marks' in record:
            return Coursework._from_record(record, where)
        return Sheet._from_record(record, where)

    @classmethod
    def _decode_fields( cls, record: Mapping[str, Any], where: str,
    ) -> Dict[str, Any]:
        _check_keys( record, where,
            required=('title', 'topic', 'problems'), allowed=cls._keys )
        problems = record['problems']
        if problems is None:
            problems = []
        if not isinstance(problems, list):
            raise ConfigShapeError( "{}.problems must be a list, got {}"
                .format(where, type(problems).__name__) )
        return dict(
            title=_expect_string(record['title'], where + '.title'),
            topic=_expect_string(record['topic'], where + '.topic'),
            intro=_expect_optional_string(
                record.get('intro'), where + '.intro' ),
            problems=[
                _expect_scalar_string(problem, where + '.problems')
                for problem in problems ],
        )

    def __repr__(self) -> str:
        return ( f"{self.__class__.__name__}(title={self.title!r}, "
            f"problems={self.problems!r})" )


class Sheet(CourseItem):
    __slots__ = ()

    @classmethod
    def _from_record( cls, record: Mapping[str, Any], where: str,
    ) -> 'Sheet':
        fields = cls._decode_fields(record, where)
        return cls( fields['title'], fields['topic'], fields['problems'],
            intro=fields['intro'] )


class Coursework(CourseItem):
    """
    Course item with marks.

    Marks are paired with problems by position. If the lists differ in
    length, the excess of the longer one is ignored.
    """

    __slots__ = ['marks']

    marks: Tuple[int, ...]

    _keys = CourseItem._keys + ('marks',)

    def __init__( self, title: str, topic: str, problems: Iterable[str],
        marks: Iterable[int],
        *, intro: Optional[str] = None,
    ) -> None:
        super().__init__(title, topic, problems, intro=intro)
        self.marks = tuple(marks)

    @classmethod
    def _from_record( cls, record: Mapping[str, Any], where: str,
    ) -> 'Coursework':
        fields = cls._decode_fields(record, where)
        marks = record['marks']
        if not isinstance(marks, list) or not marks:
            raise ConfigShapeError(
                "{}.marks must be a non-empty list".format(where) )
        for mark in marks:
            if isinstance(mark, bool) or not isinstance(mark, int) \
                    or mark < 0:
                raise ConfigShapeError(
                    "{}.marks must contain non-negative integers, got {!r}"
                    .format(where, mark) )
        if len(marks) != len(fields['problems']):
            logger.warning(
                "<YELLOW>%(where)s<NOCOLOUR> has %(n_problems)d problems "
                "but %(n_marks)d marks, unpaired entries are dropped",
                dict( where=where,
                    n_problems=len(fields['problems']),
                    n_marks=len(marks) )
            )
        return cls( fields['title'], fields['topic'], fields['problems'],
            marks, intro=fields['intro'] )

    def __repr__(self) -> str:
        return ( f"{self.__class__.__name__}(title={self.title!r}, "
            f"problems={self.problems!r}, marks={self.marks!r})" )


class Component:
    """
    Named group of course items sharing one Makefile.
    """

    __slots__ = ['name', 'items']

    name: str
    items: Dict[str, CourseItem]

    def __init__(self, name: str, items: Mapping[str, CourseItem]) -> None:
        self.name = name
        self.items = dict(items)

    def ordered_items(self) -> Sequence[Tuple[str, CourseItem]]:
        return mapping_ordered_items(self.items)

    @classmethod
    def from_record(cls, name: str, record: Any) -> 'Component':
        record = _expect_mapping(record, name)
        return cls(name, {
            item_name: CourseItem.from_record(
                item_record, name + '.' + item_name )
            for item_name, item_record in record.items() })

    def __repr__(self) -> str:
        return ( f"{self.__class__.__name__}(name={self.name!r}, "
            f"items={sorted(self.items)!r})" )


class CourseFile:
    """
    Parsed content of the course file.

    Attributes:
      metadata (Metadata):
      sources (Sources):
      styles (dict): StyleConfig for each of 'sheets', 'solutions',
        'courseworks'.
      components (dict): component name to Component.
    """

    reserved_keys = ('metadata', 'sources') + STYLE_KINDS

    metadata: Metadata
    sources: Sources
    styles: Dict[StyleKind, StyleConfig]
    components: Dict[str, Component]

    def __init__( self, metadata: Metadata, sources: Sources,
        components: Optional[Mapping[str, Component]] = None,
        *, styles: Optional[Mapping[StyleKind, StyleConfig]] = None,
    ) -> None:
        self.metadata = metadata
        self.sources = sources
        self.styles = {kind: StyleConfig() for kind in STYLE_KINDS}
        if styles is not None:
            self.styles.update(styles)
        self.components = dict(components or {})

    @property
    def sheet_style(self) -> StyleConfig:
        return self.styles['sheets']

    @property
    def solution_style(self) -> StyleConfig:
        return self.styles['solutions']

    @property
    def coursework_style(self) -> StyleConfig:
        return self.styles['courseworks']

    def ordered_components(self) -> Sequence[Tuple[str, Component]]:
        return mapping_ordered_items(self.components)

    @classmethod
    def from_record(cls, record: Any) -> 'CourseFile':
        """
        Raises:
          ConfigShapeError: if record does not describe a course.
        """
        record = _expect_mapping(record, "course file")
        _check_keys( record, "course file",
            required=('metadata', 'sources') )
        return cls(
            metadata=Metadata.from_record(record['metadata']),
            sources=Sources.from_record(record['sources']),
            styles={
                kind: StyleConfig.from_record(record.get(kind), kind)
                for kind in STYLE_KINDS },
            components={
                name: Component.from_record(name, component_record)
                for name, component_record in record.items()
                if name not in cls.reserved_keys }
        )

    @classmethod
    def load(cls, path: Union[str, Path]) -> 'CourseFile':
        """
        Load the course file.

        Args:
          path (Path): either the course file or a directory containing
            'course.yaml'.

        Raises:
          FileNotFoundError: if there is no course file.
          ConfigShapeError: if the file is not valid YAML or does not
            describe a course.
        """
        path = Path(path)
        if path.is_dir():
            path = path / COURSE_FILE_NAME
        with path.open(encoding='utf-8') as course_file:
            try:
                record = teach.yaml.load(course_file)
            except yaml.YAMLError as error:
                raise ConfigShapeError(
                    "Failed to parse {}: {}".format(path, error) ) from error
        logger.debug("Loaded course file %(path)s", dict(path=path))
        return cls.from_record(record)
