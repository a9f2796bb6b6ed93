"""Tests for the command line interface."""

from pathlib import Path

import pytest

from teach.__main__ import run


def _run(*argv):
    with pytest.raises(SystemExit) as info:
        run(list(argv))
    return info.value.code


class TestCommands:

    def test_build(self, course_root: Path):
        run(['-C', '-p', str(course_root), 'build'])
        assert (course_root / 'Makefile').is_file()
        assert (course_root / 'algebra' / 'sheet2' / 'sheet2.mk').is_file()

    def test_build_from_working_directory(
            self, course_root: Path, monkeypatch ):
        monkeypatch.chdir(course_root)
        run(['-q', 'build'])
        assert (course_root / 'geometry' / 'Makefile').is_file()

    def test_problem_touch(self, course_root: Path):
        run(['-p', str(course_root), 'problem', '--touch', 'series-1'])
        problem_dir = course_root / 'problems' / 'series-1'
        assert (problem_dir / 'problem.tex').is_file()
        assert (problem_dir / 'solution.tex').is_file()

    def test_solution_runs_editor(self, course_root: Path):
        # EDITOR is 'true' in tests
        run(['-p', str(course_root), 'solution', 'rings-1'])

    def test_problems_one_per_line(self, course_root: Path, capsys):
        run(['-p', str(course_root), 'problems', '-1', 'groups-*'])
        assert capsys.readouterr().out == "groups-1\ngroups-2\n"

    def test_settings_option(self, course_root: Path, tmp_path: Path):
        settings_path = tmp_path / 'custom.yaml'
        settings_path.write_text("tex_engine: xelatex\n", encoding='utf-8')
        run([ '-p', str(course_root), '--settings', str(settings_path),
            'build' ])
        text = (course_root / 'algebra' / 'Makefile').read_text()
        assert text.startswith('TEX = xelatex\n')


class TestFailures:

    def test_no_command(self, course_root: Path):
        assert _run('-p', str(course_root)) == 1

    def test_missing_root(self, tmp_path: Path, caplog):
        assert _run('-p', str(tmp_path), 'build') == 1
        assert 'course.yaml' in caplog.text

    def test_malformed_course_file(self, course_root: Path, caplog):
        (course_root / 'course.yaml').write_text(
            "metadata: {author: A}\nsources: {problems: problems}\n" )
        assert _run('-p', str(course_root), 'build') == 1
        assert 'missing required keys: date' in caplog.text

    def test_malformed_settings(self, course_root: Path, tmp_path: Path):
        settings_path = tmp_path / 'bad.yaml'
        settings_path.write_text("colour: yes\n", encoding='utf-8')
        assert _run( '-p', str(course_root),
            '--settings', str(settings_path), 'build' ) == 1

    def test_unrepresentable_name(self, course_root: Path, caplog):
        (course_root / 'course.yaml').write_text(
            "metadata: {author: A, date: d}\n"
            "sources: {problems: problems}\n"
            "algebra:\n"
            "  sheet 1: {title: T, topic: t, problems: [p1]}\n" )
        assert _run('-p', str(course_root), 'build') == 1
        assert 'cannot be used in a Makefile' in caplog.text

    def test_preview_of_unknown_problem(self, course_root: Path):
        assert _run('-p', str(course_root), 'preview', 'no-such') == 1
