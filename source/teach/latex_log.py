"""
Parsing of TeX terminal output.

TeX wraps its terminal output at a fixed line length, so messages may
span several lines. The parser only extracts what is needed to decide
whether another run is required, and to show the user what went wrong.
"""

import re

import logging
logger = logging.getLogger(__name__)

from typing import ClassVar, Optional, Iterator, List, Tuple, Pattern
from typing_extensions import Literal

MessageKind = Literal[ 'error', 'warning', 'badbox',
    'missing_citation', 'missing_reference' ]

# TeX breaks lines of terminal output at this length (max_print_line)
MAX_PRINT_LINE = 79


class LogParseError(ValueError):
    pass


class LaTeXLogMessage:
    """
    Attributes:
      kind (str): one of 'error', 'warning', 'badbox', 'missing_citation',
        'missing_reference'.
      text (str): the message, unwrapped.
      label (str or None): the key of missing citation or reference.
    """

    __slots__ = ['kind', 'text', 'label']

    kind: MessageKind
    text: str
    label: Optional[str]

    def __init__( self, kind: MessageKind, text: str,
        label: Optional[str] = None,
    ) -> None:
        self.kind = kind
        self.text = text
        self.label = label

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LaTeXLogMessage):
            return NotImplemented
        return ( (self.kind, self.text, self.label) ==
            (other.kind, other.text, other.label) )

    def __hash__(self) -> int:
        return hash((self.kind, self.text, self.label))

    def __repr__(self) -> str:
        return ( f"{self.__class__.__name__}({self.kind!r}, {self.text!r}, "
            f"label={self.label!r})" )


class LaTeXLogReport:
    """
    Messages found in TeX output, and their counts.
    """

    __slots__ = ['messages']

    messages: Tuple[LaTeXLogMessage, ...]

    def __init__(self, messages: Tuple[LaTeXLogMessage, ...] = ()) -> None:
        self.messages = tuple(messages)

    def _count(self, kind: MessageKind) -> int:
        return sum(1 for message in self.messages if message.kind == kind)

    @property
    def errors(self) -> int:
        return self._count('error')

    @property
    def warnings(self) -> int:
        return self._count('warning')

    @property
    def badboxes(self) -> int:
        return self._count('badbox')

    @property
    def missing_citations(self) -> int:
        return self._count('missing_citation')

    @property
    def missing_references(self) -> int:
        return self._count('missing_reference')

    @property
    def needs_rerun(self) -> bool:
        return self.missing_citations > 0 or self.missing_references > 0

    @classmethod
    def from_output(cls, output: bytes) -> 'LaTeXLogReport':
        """
        Parse captured TeX output.

        Unparseable output gives an empty report.
        """
        text = output.decode('utf-8', errors='replace')
        try:
            return parse_latex_log(text)
        except LogParseError as error:
            logger.warning(
                "<YELLOW>Failed to parse TeX output<NOCOLOUR>: %(error)s",
                dict(error=error) )
            return cls()

    def __str__(self) -> str:
        return ( "{errors} errors, {warnings} warnings, "
            "{badboxes} badboxes, "
            "{missing_references} missing references, "
            "{missing_citations} missing citations"
            .format( errors=self.errors, warnings=self.warnings,
                badboxes=self.badboxes,
                missing_references=self.missing_references,
                missing_citations=self.missing_citations )
        )

    def __repr__(self) -> str:
        return "{}({})".format(self.__class__.__name__, self)


class LaTeXLogParser:

    banner_regex: ClassVar[Pattern] = re.compile(r'(?m)^This is \S')

    error_regex: ClassVar[Pattern] = re.compile(r'^! ')
    error_end_regex: ClassVar[Pattern] = re.compile(r'^l\.\d+ ')
    warning_regex: ClassVar[Pattern] = re.compile(
        r'^(?:LaTeX(?: Font)? Warning|(?:Package|Class) \S+ Warning)'
        r'|^Missing character: ' )
    badbox_regex: ClassVar[Pattern] = re.compile(
        r'^(?:Overfull|Underfull) \\[hv]box ' )
    citation_regex: ClassVar[Pattern] = re.compile(
        r"Citation [`'](?P<label>[^']*)' .*undefined" )
    reference_regex: ClassVar[Pattern] = re.compile(
        r"Reference [`'](?P<label>[^']*)' .*undefined" )

    def parse(self, output: str) -> LaTeXLogReport:
        if self.banner_regex.search(output) is None:
            raise LogParseError("No TeX banner found in output")
        return LaTeXLogReport(tuple(self._iter_messages(output)))

    def _iter_messages(self, output: str) -> Iterator[LaTeXLogMessage]:
        lines = output.splitlines()
        index = 0
        while index < len(lines):
            line = lines[index]
            if self.error_regex.match(line):
                index, text = self._collect_error(lines, index)
                yield LaTeXLogMessage('error', text)
            elif self.warning_regex.match(line):
                index, text = self._collect_paragraph(lines, index)
                yield self._classify_warning(text)
            elif self.badbox_regex.match(line):
                index, text = self._collect_paragraph(lines, index)
                yield LaTeXLogMessage('badbox', text)
            else:
                index += 1

    def _classify_warning(self, text: str) -> LaTeXLogMessage:
        match = self.citation_regex.search(text)
        if match is not None:
            return LaTeXLogMessage( 'missing_citation', text,
                label=match.group('label') )
        match = self.reference_regex.search(text)
        if match is not None:
            return LaTeXLogMessage( 'missing_reference', text,
                label=match.group('label') )
        return LaTeXLogMessage('warning', text)

    def _collect_error(self, lines: List[str], index: int) -> Tuple[int, str]:
        """Error lasts until the line number line, inclusive."""
        collected = [lines[index]]
        index += 1
        while index < len(lines):
            line = lines[index]
            if not line or self.error_regex.match(line):
                break
            collected.append(line)
            index += 1
            if self.error_end_regex.match(line):
                break
        return index, self._unwrap(collected)

    def _collect_paragraph( self, lines: List[str], index: int,
    ) -> Tuple[int, str]:
        """Message lasts until an empty line or a new message."""
        collected = [lines[index]]
        index += 1
        while index < len(lines):
            line = lines[index]
            if not line or self._starts_message(line):
                break
            collected.append(line)
            index += 1
        return index, self._unwrap(collected)

    def _starts_message(self, line: str) -> bool:
        return any( regex.match(line) is not None
            for regex in (
                self.error_regex, self.warning_regex, self.badbox_regex ))

    @staticmethod
    def _unwrap(lines: List[str]) -> str:
        pieces: List[str] = []
        for line in lines:
            if pieces and len(pieces[-1]) < MAX_PRINT_LINE:
                pieces.append(' ')
            pieces.append(line)
        return ''.join(pieces)


def parse_latex_log(output: str) -> LaTeXLogReport:
    """
    Extract errors, warnings, badboxes and missing labels from TeX output.

    Raises:
      LogParseError: if output does not look like TeX output.
    """
    return LaTeXLogParser().parse(output)
