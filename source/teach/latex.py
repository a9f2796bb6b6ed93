"""
Printing abstract documents as LaTeX source.
"""

from string import Template

from teach.document import ( Document,
    PreambleElement, AuthorField, TitleField, RawPreamble,
    BodyElement, TitleMarker, Paragraph, Enumerate, )

from typing import List


class DocumentPrinter:

    def print_document(self, document: Document) -> str:
        parts: List[str] = []
        parts.append( self.documentclass_template.substitute(
            document_class=document.document_class ))
        for element in document.preamble:
            parts.append(self._print_preamble_element(element))
        parts.append(self.document_begin_template.substitute())
        parts.append('\n\n'.join(
            self._print_body_element(element)
            for element in document.body ))
        parts.append(self.document_end_template.substitute())
        return '\n'.join(parts) + '\n'

    documentclass_template = Template(r'\documentclass{$document_class}')
    document_begin_template = Template(r'\begin{document}' '\n')
    document_end_template = Template('\n' r'\end{document}')

    def _print_preamble_element(self, element: PreambleElement) -> str:
        if isinstance(element, AuthorField):
            return self.author_template.substitute(author=element.value)
        if isinstance(element, TitleField):
            return self.title_template.substitute(title=element.value)
        if isinstance(element, RawPreamble):
            return element.value
        raise TypeError(type(element))

    author_template = Template(r'\author{$author}')
    title_template = Template(r'\title{$title}')

    def _print_body_element(self, element: BodyElement) -> str:
        if isinstance(element, TitleMarker):
            return self.maketitle_template.substitute()
        if isinstance(element, Paragraph):
            return element.text
        if isinstance(element, Enumerate):
            return '\n'.join([
                self.enumerate_begin_template.substitute(),
                *element.entries,
                self.enumerate_end_template.substitute() ])
        raise TypeError(type(element))

    maketitle_template = Template(r'\maketitle')
    enumerate_begin_template = Template(r'\begin{enumerate}')
    enumerate_end_template = Template(r'\end{enumerate}')


def print_document(document: Document) -> str:
    """Return LaTeX source of the document, ending with a newline."""
    return DocumentPrinter().print_document(document)
