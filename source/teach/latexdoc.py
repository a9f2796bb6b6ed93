r"""
Assembling abstract documents for course items.

The functions here are pure: they take already decoded course data and
return a teach.document.Document, falling back to defaults for every
style option that is not given.

Problem inclusion:
* with problem_macro M configured, an entry is M{<id>}, or
  M[<mark>]{<id>} if the entry carries a mark;
* otherwise an entry is \item \input{<id>/problem} (or <id>/solution
  for solutions documents), with a mark appended as
  \hfill\textbf{[<mark>]}.
"""

from string import Template

from teach.course import Metadata, StyleConfig, StyleKind
from teach.document import ( Document,
    PreambleElement, AuthorField, TitleField, RawPreamble,
    BodyElement, TitleMarker, Paragraph, Enumerate, )

import logging
logger = logging.getLogger(__name__)

from typing import Optional, Iterable, Sequence, List


DEFAULT_DOCUMENT_CLASS = 'article'

PREVIEW_AUTHOR = 'preview'


date_template = Template(r'\date{$date}')
custom_field_template = Template(r'\$name{$value}')

input_template = Template(r'\input{$problem_id/$part}')
item_template = Template(r'\item $entry')
item_mark_template = Template(r'\hfill\textbf{[$mark]}')
macro_template = Template(r'$macro{$problem_id}')
macro_mark_template = Template(r'$macro[$mark]{$problem_id}')

preview_separator = r'\par\medskip\hrule\medskip'
preview_solution_label = r'\textbf{Solution}\par'
preview_title_template = Template(r'\texttt{\detokenize{$problem_id}}')


def _document_class(style: StyleConfig) -> str:
    if style.document_class:
        return style.document_class
    return DEFAULT_DOCUMENT_CLASS

def _source_part(kind: StyleKind) -> str:
    if kind == 'solutions':
        return 'solution'
    return 'problem'

def format_inclusion( problem_id: str, style: StyleConfig,
    *, kind: StyleKind = 'sheets', mark: Optional[int] = None,
) -> str:
    """Return the enumeration entry for one problem."""
    macro = style.problem_macro
    if macro:
        if mark is None:
            return macro_template.substitute(
                macro=macro, problem_id=problem_id )
        return macro_mark_template.substitute(
            macro=macro, mark=mark, problem_id=problem_id )
    entry = item_template.substitute(entry=input_template.substitute(
        problem_id=problem_id, part=_source_part(kind) ))
    if mark is not None:
        entry += item_mark_template.substitute(mark=mark)
    return entry


def _constitute_preamble( title: str, date: str, metadata: Metadata,
    style: StyleConfig,
) -> List[PreambleElement]:
    preamble: List[PreambleElement] = [
        AuthorField(metadata.author),
        TitleField(title),
        RawPreamble(date_template.substitute(date=date)),
    ]
    preamble.extend(
        RawPreamble(custom_field_template.substitute(name=name, value=value))
        for name, value in metadata.extras )
    if style.include_preamble:
        preamble.append(RawPreamble(style.include_preamble))
    return preamble

def _constitute_body( intro: Optional[str], entries: Sequence[str],
) -> List[BodyElement]:
    body: List[BodyElement] = [TitleMarker()]
    if intro:
        body.append(Paragraph(intro))
    if entries:
        body.append(Enumerate(entries))
    return body


def build_sheet_document( title: str, intro: Optional[str], date: str,
    metadata: Metadata, problem_ids: Iterable[str], style: StyleConfig,
    *, kind: StyleKind = 'sheets',
) -> Document:
    """
    Build the document of a sheet.

    The same function builds solutions documents (kind='solutions'),
    where entries refer to solution sources.
    """
    entries = [
        format_inclusion(problem_id, style, kind=kind)
        for problem_id in problem_ids ]
    return Document( _document_class(style),
        _constitute_preamble(title, date, metadata, style),
        _constitute_body(intro, entries) )

def build_coursework_document( title: str, intro: Optional[str], date: str,
    metadata: Metadata, problem_ids: Iterable[str], marks: Iterable[int],
    style: StyleConfig,
) -> Document:
    """
    Build the document of a coursework.

    Problems and marks are paired by position; the excess of the longer
    sequence is dropped.
    """
    entries = [
        format_inclusion(problem_id, style, kind='courseworks', mark=mark)
        for problem_id, mark in zip(problem_ids, marks) ]
    return Document( _document_class(style),
        _constitute_preamble(title, date, metadata, style),
        _constitute_body(intro, entries) )

def build_preview_document(problem_id: str, style: StyleConfig) -> Document:
    """
    Build a throwaway document showing a problem and its solution.
    """
    entry = '\n'.join((
        format_inclusion(problem_id, style, kind='sheets'),
        preview_separator,
        preview_solution_label,
        input_template.substitute(problem_id=problem_id, part='solution'),
    ))
    metadata = Metadata(author=PREVIEW_AUTHOR, date='')
    return Document( _document_class(style),
        _constitute_preamble(
            preview_title_template.substitute(problem_id=problem_id),
            '', metadata, style ),
        _constitute_body(None, [entry]) )
