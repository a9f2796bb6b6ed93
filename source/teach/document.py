"""
Abstract description of a generated LaTeX document.

A Document does not know how it is printed; see teach.latex for that.
"""

from typing import Iterable, Tuple


class PreambleElement:
    __slots__ = ()

class AuthorField(PreambleElement):
    __slots__ = ['value']
    value: str

    def __init__(self, value: str) -> None:
        super().__init__()
        if not isinstance(value, str):
            raise TypeError(type(value))
        self.value = value

class TitleField(PreambleElement):
    __slots__ = ['value']
    value: str

    def __init__(self, value: str) -> None:
        super().__init__()
        if not isinstance(value, str):
            raise TypeError(type(value))
        self.value = value

class RawPreamble(PreambleElement):
    """These elements represent a piece of LaTeX code in the preamble."""
    __slots__ = ['value']
    value: str

    def __init__(self, value: str) -> None:
        super().__init__()
        if not isinstance(value, str):
            raise TypeError(type(value))
        self.value = value


class BodyElement:
    __slots__ = ()

class TitleMarker(BodyElement):
    """Position where the title is typeset."""
    __slots__ = ()

class Paragraph(BodyElement):
    __slots__ = ['text']
    text: str

    def __init__(self, text: str) -> None:
        super().__init__()
        if not isinstance(text, str):
            raise TypeError(type(text))
        self.text = text

class Enumerate(BodyElement):
    """
    Enumerated list.

    Entries are complete LaTeX lines, including the item command if any.
    """
    __slots__ = ['entries']
    entries: Tuple[str, ...]

    def __init__(self, entries: Iterable[str]) -> None:
        super().__init__()
        self.entries = tuple(entries)
        if not self.entries:
            raise ValueError("Enumerate requires at least one entry")
        for entry in self.entries:
            if not isinstance(entry, str):
                raise TypeError(type(entry))


class Document:
    """
    Attributes:
      document_class (str):
      preamble (tuple of PreambleElement):
      body (tuple of BodyElement):
    """

    __slots__ = ['document_class', 'preamble', 'body']

    document_class: str
    preamble: Tuple[PreambleElement, ...]
    body: Tuple[BodyElement, ...]

    def __init__( self, document_class: str,
        preamble: Iterable[PreambleElement] = (),
        body: Iterable[BodyElement] = (),
    ) -> None:
        self.document_class = document_class
        self.preamble = tuple(preamble)
        self.body = tuple(body)
        for element in self.preamble:
            if not isinstance(element, PreambleElement):
                raise TypeError(type(element))
        for element in self.body:
            if not isinstance(element, BodyElement):
                raise TypeError(type(element))

    def __repr__(self) -> str:
        return ( f"{self.__class__.__name__}("
            f"document_class={self.document_class!r}, "
            f"preamble={len(self.preamble)} elements, "
            f"body={len(self.body)} elements)" )
