"""
Quick preview of a single problem.

A preview document, showing the problem and its solution, is fed to the
TeX engine on its standard input inside a temporary directory. TeX is
run a second time only if the first run reported undefined citations or
references. Then the resulting texput.pdf is shown in the PDF viewer.
The temporary directory is removed when the Previewer is closed.

Usage:
    with Previewer(root, 'limits-1', course_file, settings) as previewer:
        previewer.preview()
"""

import os
import subprocess
import tempfile
from pathlib import Path

from teach.course import CourseFile, FilesystemError
from teach.latex import print_document
from teach.latexdoc import build_preview_document
from teach.latex_log import LaTeXLogReport
from teach.logging import ProblemLoggerAdapter
from teach.settings import AppSettings

import logging
logger = logging.getLogger(__name__)

from typing import Any, Callable, Dict, List, Optional


MAX_PASSES = 2

# name of the output when TeX reads the document from stdin
OUTPUT_NAME = 'texput.pdf'

INCLUDE_DIR_NAME = 'include'


class PreviewError(Exception):
    pass

class ProcessSpawnError(PreviewError):
    pass

class ProcessIOError(PreviewError):
    pass

class EngineTimeoutError(PreviewError):
    pass

class ViewerError(PreviewError):
    pass


class Previewer:
    """
    Preview session of one problem.

    Attributes:
      root (Path): course root.
      problem (str): problem name.
      course_file (CourseFile):
      settings (AppSettings):
    """

    root: Path
    problem: str
    course_file: CourseFile
    settings: AppSettings

    def __init__( self, root: Path, problem: str, course_file: CourseFile,
        settings: AppSettings,
        *, popen: Callable[..., Any] = subprocess.Popen,
    ) -> None:
        self.root = root
        self.problem = problem
        self.course_file = course_file
        self.settings = settings
        self._popen = popen
        self._temp_dir: Optional[tempfile.TemporaryDirectory] = None
        self.logger = ProblemLoggerAdapter(logger, problem)

    def __enter__(self) -> 'Previewer':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def close(self) -> None:
        if self._temp_dir is not None:
            self.logger.debug( "Removing scratch directory %(path)s",
                dict(path=self._temp_dir.name) )
            self._temp_dir.cleanup()
            self._temp_dir = None

    @property
    def scratch_dir(self) -> Path:
        """
        Temporary directory of the session, created on first access.
        """
        if self._temp_dir is None:
            try:
                self._temp_dir = tempfile.TemporaryDirectory(
                    prefix='teach-preview-' )
            except OSError as error:
                raise FilesystemError( Path(tempfile.gettempdir()),
                    self.problem, reason=error.strerror or str(error)
                ) from error
            self.logger.debug( "Created scratch directory %(path)s",
                dict(path=self._temp_dir.name) )
        return Path(self._temp_dir.name)

    @property
    def problems_path(self) -> Path:
        return self.root.resolve() / self.course_file.sources.problems

    @property
    def include_path(self) -> Path:
        return self.root.resolve() / INCLUDE_DIR_NAME

    def preview(self) -> None:
        """
        Compile the preview document and open the viewer.

        Raises:
          PreviewError: on any failure; in particular,
            ProcessSpawnError if the engine or the viewer could not be
            started, ProcessIOError if the document could not be fed to
            the engine, EngineTimeoutError if the engine ran too long,
            ViewerError if the viewer failed.
        """
        self.compile()
        self.open_viewer()

    def compile(self) -> int:
        """
        Run the engine until labels are resolved, at most MAX_PASSES times.

        Return the number of engine runs.

        Raises:
          PreviewError: if the problem directory does not exist, or if the
            engine left no texput.pdf; preview() then does not start the
            viewer.
        """
        problem_path = self.problems_path / self.problem
        if not problem_path.is_dir():
            raise PreviewError(
                "Problem directory {} does not exist".format(problem_path) )
        document = build_preview_document(
            self.problem, self.course_file.sheet_style )
        source = print_document(document).encode('utf-8')
        for pass_number in range(1, MAX_PASSES + 1):
            self.logger.debug( "Engine pass %(pass_number)d",
                dict(pass_number=pass_number) )
            report = self._run_engine(source)
            self._report_log(report)
            if not report.needs_rerun:
                break
        if not (self.scratch_dir / OUTPUT_NAME).exists():
            raise PreviewError(
                "{} produced no {}"
                .format(self.settings.tex_engine, OUTPUT_NAME) )
        return pass_number

    def _engine_args(self) -> List[str]:
        return [self.settings.tex_engine, *self.settings.tex_flags]

    def _engine_env(self) -> Dict[str, str]:
        env = dict(os.environ)
        env['TEXINPUTS'] = '{}:{}:'.format(
            self.problems_path, self.include_path )
        return env

    def _run_engine(self, source: bytes) -> LaTeXLogReport:
        args = self._engine_args()
        try:
            process = self._popen( args,
                cwd=str(self.scratch_dir), env=self._engine_env(),
                stdin=subprocess.PIPE, stdout=subprocess.PIPE,
                stderr=subprocess.PIPE )
        except OSError as error:
            raise ProcessSpawnError(
                "Failed to start {}: {}".format(args[0], error)
            ) from error
        if process.stdin is None:
            process.kill()
            process.wait()
            raise ProcessIOError(
                "{} has no input channel".format(args[0]) )
        # communicate() flushes and closes stdin itself
        try:
            process.stdin.write(source)
            process.stdin.flush()
        except BrokenPipeError as error:
            process.kill()
            process.wait()
            raise ProcessIOError(
                "Failed to feed the document to {}".format(args[0])
            ) from error
        try:
            output, _ = process.communicate(
                timeout=self.settings.tex_timeout )
        except subprocess.TimeoutExpired as error:
            process.kill()
            process.communicate()
            raise EngineTimeoutError(
                "{} did not finish in {} seconds"
                .format(args[0], self.settings.tex_timeout)
            ) from error
        report = LaTeXLogReport.from_output(output or b'')
        if process.returncode != 0:
            self.logger.warning(
                "<YELLOW>%(prog)s<NOCOLOUR> exited with code %(code)d",
                dict(prog=args[0], code=process.returncode) )
            self.logger.log_prog_output( logging.DEBUG,
                args[0], (output or b'').decode('utf-8', errors='replace') )
        return report

    def _report_log(self, report: LaTeXLogReport) -> None:
        self.logger.info("%(report)s", dict(report=report))
        for message in report.messages:
            if message.kind == 'error':
                self.logger.warning( "<RED>Error<NOCOLOUR>: %(text)s",
                    dict(text=message.text) )
            elif message.kind == 'warning':
                self.logger.info( "Warning: %(text)s",
                    dict(text=message.text) )
            elif message.kind == 'missing_citation':
                self.logger.info( "Missing citation: %(label)s",
                    dict(label=message.label) )
            elif message.kind == 'missing_reference':
                self.logger.info( "Missing reference: %(label)s",
                    dict(label=message.label) )
            elif message.kind == 'badbox':
                self.logger.debug( "Badbox: %(text)s",
                    dict(text=message.text) )

    def open_viewer(self) -> None:
        """
        Show the compiled document, blocking until the viewer exits.
        """
        args = [self.settings.pdf_viewer, OUTPUT_NAME]
        try:
            process = self._popen( args,
                cwd=str(self.scratch_dir),
                stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL )
        except OSError as error:
            raise ProcessSpawnError(
                "Failed to start {}: {}".format(args[0], error)
            ) from error
        returncode = process.wait()
        if returncode != 0:
            raise ViewerError(
                "{} exited with code {}".format(args[0], returncode) )
