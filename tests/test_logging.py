"""Tests for the terminal output of the teach logger."""

import io
import logging

import pytest

from teach.logging import ( setup_logging, fancify, unfancify,
    TeachFormatter, ProblemLoggerAdapter, )


@pytest.fixture
def stream() -> io.StringIO:
    output = io.StringIO()
    setup_logging(level=logging.DEBUG, stream=output)
    return output


class TestMarkup:

    def test_fancify(self):
        assert fancify('<RED>x<NOCOLOUR>') == '\033[31mx\033[39m'

    def test_unfancify(self):
        assert unfancify('<BOLD><CYAN>x<NOCOLOUR><REGULAR>') == 'x'


class TestFormatter:

    def test_plain_record(self, stream):
        logging.getLogger('teach.project').info(
            "Built %(count)d components", dict(count=2) )
        assert stream.getvalue() == "teach.project: Built 2 components\n"

    def test_markup_is_stripped_without_terminal(self, stream):
        logging.getLogger('teach.makefile').warning(
            "Writing <CYAN>%(path)s<NOCOLOUR>", dict(path='Makefile') )
        assert stream.getvalue() == "teach.makefile: Writing Makefile\n"

    def test_problem_record(self, stream):
        adapter = ProblemLoggerAdapter(
            logging.getLogger('teach.preview'), 'rings-1' )
        adapter.debug("Engine pass %(number)d", dict(number=1))
        assert stream.getvalue() == "[rings-1] Engine pass 1\n"

    def test_problem_name_is_coloured_by_level(self):
        formatter = TeachFormatter(colour=True)
        record = logging.LogRecord( 'teach.preview', logging.WARNING,
            __file__, 1, "Failed", None, None )
        record.problem = 'rings-1'
        text = formatter.format(record)
        assert '\033[33mrings-1\033[39m' in text
        assert text.startswith('\033[1m')


class TestProgramOutput:

    def test_output_follows_message(self, stream):
        adapter = ProblemLoggerAdapter(
            logging.getLogger('teach.preview'), 'rings-1' )
        adapter.log_prog_output(logging.WARNING, 'pdflatex', "a\nb\n")
        assert stream.getvalue() == (
            "[rings-1] Command pdflatex output:\n"
            "a\n"
            "b\n"
            "(end of pdflatex output)\n" )

    def test_long_output_is_cut_to_its_tail(self):
        formatter = TeachFormatter(colour=False, output_tail=3)
        record = logging.LogRecord( 'teach.preview', logging.DEBUG,
            __file__, 1, "Command output:", None, None )
        record.problem = 'rings-1'
        record.prog = 'lualatex'
        record.prog_output = '\n'.join(
            'line {}'.format(number) for number in range(10) )
        lines = formatter.format(record).splitlines()
        assert lines == [
            "[rings-1] Command output:",
            "... (7 lines skipped)",
            "line 7", "line 8", "line 9",
            "(end of lualatex output)" ]
