"""Tests for editing and listing problems."""

import logging
import shutil
import subprocess
from pathlib import Path

import pytest

import teach.commands
import teach.commands.edit
from teach.commands import EditorError, open_editor
from teach.commands.edit import ( ensure_problem, edit_problem,
    edit_solution, edit_course_file, )
from teach.commands.list_problems import list_problems, format_columns
from teach.course import CourseError
from teach.project import Project, Course


@pytest.fixture
def course(course_root: Path, settings) -> Course:
    return Course(Project(course_root), settings)

@pytest.fixture
def opened(monkeypatch):
    """Record calls of the editor instead of running it."""
    calls = []
    def fake_open_editor(editor, path):
        calls.append((editor, path))
    monkeypatch.setattr(teach.commands.edit, 'open_editor', fake_open_editor)
    return calls


class TestEnsureProblem:

    def test_new_problem(self, course: Course):
        path = ensure_problem(course, 'series-1')
        assert path == course.problems_path / 'series-1'
        assert (path / 'problem.tex').read_text() == ''
        assert (path / 'solution.tex').read_text() == ''

    def test_existing_sources_are_kept(self, course: Course):
        path = ensure_problem(course, 'rings-1')
        assert (path / 'problem.tex').read_text() == 'Prove it.\n'

    def test_missing_solution_is_added(self, course: Course):
        (course.problems_path / 'rings-2' / 'solution.tex').unlink()
        path = ensure_problem(course, 'rings-2')
        assert (path / 'solution.tex').exists()

    def test_problems_directory_is_created(
            self, course: Course, caplog ):
        problems_path = course.problems_path
        shutil.rmtree(problems_path)
        with caplog.at_level(logging.WARNING, logger='teach.commands'):
            ensure_problem(course, 'series-1')
        assert (problems_path / 'series-1' / 'problem.tex').exists()
        assert 'does not exist, creating' in caplog.text

    def test_problems_path_is_file(self, course: Course):
        course.course_file.sources.problems = 'notes.txt'
        (course.root / 'notes.txt').write_text('')
        with pytest.raises(CourseError, match='is a file'):
            ensure_problem(course, 'series-1')

    def test_problem_path_is_file(self, course: Course):
        (course.problems_path / 'stray').write_text('')
        with pytest.raises(CourseError, match='exists as file'):
            ensure_problem(course, 'stray')

    @pytest.mark.parametrize('name', ['', '..', 'a/b'])
    def test_invalid_name(self, course: Course, name):
        with pytest.raises(CourseError):
            ensure_problem(course, name)


class TestEdit:

    def test_edit_problem_opens_statement(self, course: Course, opened):
        edit_problem(course, 'series-1')
        assert opened == [
            ('true', course.problems_path / 'series-1' / 'problem.tex') ]

    def test_edit_solution_opens_solution(self, course: Course, opened):
        edit_solution(course, 'rings-1')
        assert opened == [
            ('true', course.problems_path / 'rings-1' / 'solution.tex') ]

    def test_touch_does_not_open(self, course: Course, opened):
        edit_problem(course, 'series-2', touch=True)
        assert opened == []
        assert (course.problems_path / 'series-2' / 'problem.tex').exists()

    def test_edit_course_file(self, course: Course, opened):
        edit_course_file(course)
        assert opened == [('true', course.root / 'course.yaml')]


class TestOpenEditor:

    def test_editor_arguments_are_split(self, monkeypatch, tmp_path: Path):
        calls = []
        def fake_run(args):
            calls.append(args)
            return subprocess.CompletedProcess(args, 0)
        monkeypatch.setattr(teach.commands.subprocess, 'run', fake_run)
        open_editor('code --wait', tmp_path / 'problem.tex')
        assert calls == [['code', '--wait', str(tmp_path / 'problem.tex')]]

    def test_missing_editor(self, tmp_path: Path):
        with pytest.raises(EditorError):
            open_editor('teach-test-no-such-editor', tmp_path / 'x.tex')

    def test_empty_editor(self, tmp_path: Path):
        with pytest.raises(EditorError):
            open_editor('', tmp_path / 'x.tex')


class TestListProblems:

    def test_all_problems_in_natural_order(self, course: Course):
        assert list_problems(course) == [
            'groups-1', 'groups-2', 'rings-1', 'rings-2', 'rings-10' ]

    def test_patterns(self, course: Course):
        assert list_problems(course, ['rings-?', 'groups-2']) == [
            'groups-2', 'rings-1', 'rings-2' ]

    def test_files_are_ignored(self, course: Course):
        (course.problems_path / 'README').write_text('')
        assert 'README' not in list_problems(course)

    def test_missing_directory(self, course: Course):
        course.course_file.sources.problems = 'absent'
        assert list_problems(course) == []


class TestFormatColumns:

    def test_columns_fill_downwards(self):
        assert format_columns(['a', 'bb', 'ccc', 'd'], width=12) == (
            "a    ccc\n"
            "bb   d" )

    def test_narrow_terminal_gives_one_column(self):
        assert format_columns(['alpha', 'beta'], width=3) == "alpha\nbeta"

    def test_empty(self):
        assert format_columns([]) == ''
