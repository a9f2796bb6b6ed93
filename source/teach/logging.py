"""
Terminal output of the 'teach' logger.

Messages may contain colour markup like '<RED>' and '<NOCOLOUR>'; it is
turned into terminal escape codes, or stripped when colour is disabled
or the stream is not a terminal.

Records emitted on behalf of a problem (see ProblemLoggerAdapter) are
prefixed with the problem name instead of the logger name. A record may
also carry captured output of a program; TeX output is long, so only its
last lines are shown.
"""

import sys
import logging

import teach
teach_logger = logging.getLogger(teach.__name__)

from typing import Any, Dict, List, Optional, TextIO, Tuple

# Terminal colour codes
# http://en.wikipedia.org/wiki/ANSI_escape_code#Colors
FANCIFY_REPLACEMENTS = (
    ('<RESET>',    '\033[0m'),
    ('<NOCOLOUR>', '\033[39m'),

    ('<BOLD>',     '\033[1m'),
    ('<REGULAR>',  '\033[22m'),

    ('<ITALIC>',   '\033[3m'),
    ('<UPRIGHT>',  '\033[23m'),

    ('<RED>',      '\033[31m'),
    ('<GREEN>',    '\033[32m'),
    ('<YELLOW>',   '\033[33m'),
    ('<MAGENTA>',  '\033[35m'),
    ('<CYAN>',     '\033[36m'),
)
UNFANCIFY_REPLACEMENTS = tuple(
    (key, '')
    for key, value in FANCIFY_REPLACEMENTS )

def fancify(text, replacements=FANCIFY_REPLACEMENTS):
    for key, value in replacements:
        text = text.replace(key, value)
    return text

def unfancify(text):
    return fancify(text, replacements=UNFANCIFY_REPLACEMENTS)

# colour of the problem name, by the highest level it applies to
PROBLEM_NAME_COLOURS: Tuple[Tuple[int, str], ...] = (
    (logging.DEBUG, '<CYAN>'),
    (logging.INFO, '<MAGENTA>'),
    (logging.WARNING, '<YELLOW>'),
)
PROBLEM_NAME_DEFAULT_COLOUR = '<RED>'

# lines of captured program output shown
OUTPUT_TAIL = 40


def setup_logging( level: int = logging.INFO, colour: bool = True,
    stream: Optional[TextIO] = None,
) -> logging.Handler:
    """
    Attach a stream handler to the 'teach' logger.

    Args:
      level (int): minimal level of messages that are shown.
      colour (bool): if False, colour markup is stripped from messages.
      stream (file, optional): defaults to sys.stderr.
    """
    if stream is None:
        stream = sys.stderr
    if colour and not stream.isatty():
        colour = False
    handler = logging.StreamHandler(stream)
    handler.setFormatter(TeachFormatter(colour=colour))
    handler.setLevel(level)
    teach_logger.setLevel(level)
    teach_logger.addHandler(handler)
    return handler


class TeachFormatter(logging.Formatter):
    """
    Formatter for both plain records and records about a problem.

    Messages above INFO level are shown in bold.
    """

    def __init__( self, *, colour: bool = True,
        output_tail: Optional[int] = OUTPUT_TAIL,
    ) -> None:
        super().__init__(
            fmt='{term_bold}{origin}{message}{term_regular}', style='{' )
        self.fancify = fancify if colour else unfancify
        self.output_tail = output_tail

    def format(self, record: logging.LogRecord) -> str:
        record.msg = self.fancify(str(record.msg))
        record.term_bold, record.term_regular = self._emphasis(record.levelno)
        problem = getattr(record, 'problem', None)
        if problem is not None:
            record.origin = '[{}] '.format(
                self._problem_name(problem, record.levelno) )
        else:
            record.origin = record.name + ': '
        message = super().format(record)
        output = getattr(record, 'prog_output', None)
        if output is None:
            return message
        assert not record.exc_info and not record.stack_info
        return '\n'.join([
            message,
            *self._output_lines(output),
            '{bold}(end of {prog} output){regular}'.format(
                prog=getattr(record, 'prog', 'program'),
                bold=record.term_bold, regular=record.term_regular ),
        ])

    def _emphasis(self, level: int) -> Tuple[str, str]:
        if level <= logging.INFO:
            return '', ''
        return self.fancify('<BOLD>'), self.fancify('<REGULAR>')

    def _problem_name(self, problem: str, level: int) -> str:
        colour = PROBLEM_NAME_DEFAULT_COLOUR
        for max_level, level_colour in PROBLEM_NAME_COLOURS:
            if level <= max_level:
                colour = level_colour
                break
        return self.fancify('{}{}<NOCOLOUR>'.format(colour, problem))

    def _output_lines(self, output: str) -> List[str]:
        lines = output.splitlines()
        if self.output_tail is None or len(lines) <= self.output_tail:
            return lines
        skipped = len(lines) - self.output_tail
        return [ '... ({} lines skipped)'.format(skipped),
            *lines[-self.output_tail:] ]


class ProblemLoggerAdapter(logging.LoggerAdapter):
    """Attach the problem name to every record."""

    def __init__(self, logger: logging.Logger, problem: str) -> None:
        super().__init__(logger, extra=dict(problem=problem))

    # override
    def process( self, msg: Any, kwargs: Dict[str, Any],
    ) -> Tuple[Any, Dict[str, Any]]:
        extra = kwargs.setdefault('extra', {})
        extra.update(self.extra)
        return msg, kwargs

    def log_prog_output(self, level: int, prog: str, output: str) -> None:
        self.log( level,
            "Command %(prog)s output:",
            dict(prog=prog),
            extra=dict(prog_output=output, prog=prog) )
