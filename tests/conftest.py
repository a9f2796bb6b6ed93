"""Shared fixtures: a small course on disk and neutral settings."""

import logging
from pathlib import Path

import pytest

import teach
from teach.settings import AppSettings


COURSE_YAML = r"""
metadata:
  author: A. Teacher
  date: 2024-09-01
  course: Calculus
  semester: Autumn
sources:
  problems: problems
sheets:
  document_class: article
solutions:
  include_preamble: \usepackage{amsmath}
algebra:
  sheet1:
    title: Groups
    topic: algebra
    problems: [groups-1, groups-2]
  test10:
    title: Test
    topic: algebra
    intro: Answer all questions.
    problems: [groups-1, rings-1]
    marks: [5, 10]
  sheet2:
    title: Rings
    topic: algebra
    problems: [rings-1]
geometry:
  sheet1:
    title: Triangles
    topic: geometry
    problems: []
"""

PROBLEM_NAMES = ('groups-1', 'groups-2', 'rings-1', 'rings-10', 'rings-2')


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path_factory, monkeypatch):
    """Never read the settings file of the user running the tests."""
    settings_dir = tmp_path_factory.mktemp('settings')
    monkeypatch.setenv('TEACH_SETTINGS', str(settings_dir / 'settings.yaml'))
    monkeypatch.setenv('EDITOR', 'true')


@pytest.fixture(autouse=True)
def restore_teach_logger():
    """Remove handlers installed by setup_logging() during a test."""
    teach_logger = logging.getLogger(teach.__name__)
    handlers = list(teach_logger.handlers)
    level = teach_logger.level
    yield
    teach_logger.handlers[:] = handlers
    teach_logger.setLevel(level)


@pytest.fixture
def course_root(tmp_path: Path) -> Path:
    root = tmp_path / '2024'
    root.mkdir()
    (root / 'course.yaml').write_text(COURSE_YAML, encoding='utf-8')
    problems = root / 'problems'
    problems.mkdir()
    for name in PROBLEM_NAMES:
        (problems / name).mkdir()
        (problems / name / 'problem.tex').write_text(
            'Prove it.\n', encoding='utf-8' )
        (problems / name / 'solution.tex').write_text(
            'Obvious.\n', encoding='utf-8' )
    (root / 'include').mkdir()
    return root


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        editor='true', pdf_viewer='evince',
        tex_engine='pdflatex', tex_flags=['-interaction=nonstopmode'] )
