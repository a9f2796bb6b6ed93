"""
Generating Makefiles for the course tree.

Three levels of Makefiles are generated:
* sheet level: <item>/<item>.mk, compiling the problems and solutions
  documents of one item;
* component level: <component>/Makefile, defining the TeX command and
  search paths and including every sheet level file below it;
* top level: Makefile in the course root, delegating to components
  with recursive make.

Every Makefile is written as a whole, and generating it from the same
input always gives the same text.
"""

import re
from pathlib import Path

from teach.settings import AppSettings

import logging
logger = logging.getLogger(__name__)

from typing import Iterable, Sequence, Tuple


FRAGMENT_SUFFIX = '.mk'
MAKEFILE_NAME = 'Makefile'

TEX_RECIPE = (
    '$(TEX) $(TEXFLAGS) $<',
    '$(TEX) $(TEXFLAGS) $<',
    '$(RM) *.log *.aux',
)

_prohibited_name_pattern = re.compile(r'[\s#:$%]')


class UnrepresentableName(ValueError):
    pass

def check_name(name: str) -> str:
    """
    Return name if it may appear in a Makefile as a word.

    Raises:
      UnrepresentableName: if name is empty or contains whitespace,
        '#', ':', '$' or '%'.
    """
    if not isinstance(name, str):
        raise TypeError(type(name))
    if not name or _prohibited_name_pattern.search(name) is not None:
        raise UnrepresentableName(
            "Name {!r} cannot be used in a Makefile".format(name) )
    return name


class MakeRule:
    """
    Attributes:
      targets (tuple of str): at least one target.
      prereqs (tuple of str):
      recipe (tuple of str): lines of the recipe, without the leading tab.
    """

    __slots__ = ['targets', 'prereqs', 'recipe']

    targets: Tuple[str, ...]
    prereqs: Tuple[str, ...]
    recipe: Tuple[str, ...]

    def __init__( self, targets: Iterable[str],
        prereqs: Iterable[str] = (), recipe: Iterable[str] = (),
    ) -> None:
        self.targets = tuple(targets)
        self.prereqs = tuple(prereqs)
        self.recipe = tuple(recipe)
        if not self.targets:
            raise ValueError("Rule must have at least one target")
        for line in self.recipe:
            if '\n' in line:
                raise ValueError(
                    "Recipe line must not contain newlines: {!r}"
                    .format(line) )

    def represent(self) -> str:
        header = ' '.join(self.targets) + ':' + ''.join(
            ' ' + prereq for prereq in self.prereqs )
        return ''.join([
            header, '\n',
            *('\t' + line + '\n' for line in self.recipe),
        ])

    def __str__(self) -> str:
        return self.represent()

    def __repr__(self) -> str:
        return ( f"{self.__class__.__name__}(targets={self.targets!r}, "
            f"prereqs={self.prereqs!r}, recipe={self.recipe!r})" )


class Makefile:
    """
    Variables first, one per line, then a blank line, then the rules,
    each followed by a blank line, then include directives.
    """

    __slots__ = ['variables', 'rules', 'includes']

    variables: Tuple[str, ...]
    rules: Tuple[MakeRule, ...]
    includes: Tuple[str, ...]

    def __init__( self, variables: Iterable[str] = (),
        rules: Iterable[MakeRule] = (), includes: Iterable[str] = (),
    ) -> None:
        self.variables = tuple(variables)
        self.rules = tuple(rules)
        self.includes = tuple(includes)

    def represent(self) -> str:
        parts = []
        if self.variables:
            parts.extend(variable + '\n' for variable in self.variables)
            parts.append('\n')
        for rule in self.rules:
            parts.append(rule.represent())
            parts.append('\n')
        parts.extend(
            'include ' + pattern + '\n' for pattern in self.includes )
        return ''.join(parts)

    def __str__(self) -> str:
        return self.represent()

    def __repr__(self) -> str:
        return ( f"{self.__class__.__name__}("
            f"variables={self.variables!r}, rules={self.rules!r}, "
            f"includes={self.includes!r})" )


def emit_sheet_fragment(name: str, problem_ids: Iterable[str]) -> Makefile:
    """
    Makefile fragment compiling <name>-problems.pdf and
    <name>-solutions.pdf.

    PROBDIR is defined by the including component Makefile.
    """
    check_name(name)
    problem_ids = [check_name(problem_id) for problem_id in problem_ids]
    return Makefile(
        variables=[
            'PROBS = $(addprefix $(PROBDIR)/,{})'.format(''.join(
                ' ' + problem_id for problem_id in problem_ids )),
            'PROBLEMS = $(addsuffix /problem.tex, $(PROBS))',
            'SOLUTIONS = $(addsuffix /solution.tex, $(PROBS))',
        ],
        rules=[
            MakeRule(
                [name + '-problems.pdf'],
                [name + '-problems.tex', '$(PROBLEMS)'],
                TEX_RECIPE ),
            MakeRule(
                [name + '-solutions.pdf'],
                [name + '-solutions.tex', '$(SOLUTIONS)'],
                TEX_RECIPE ),
        ] )

def _texinputs(directories: Sequence[str]) -> str:
    return ''.join(directory + ':' for directory in directories)

def emit_component_fragment( problems_dir: str, include_dirs: Sequence[str],
    settings: AppSettings,
) -> Makefile:
    check_name(problems_dir)
    for include_dir in include_dirs:
        check_name(include_dir)
    probdir = '../' + problems_dir
    return Makefile(
        variables=[
            'TEX = ' + settings.tex_engine,
            'TEXFLAGS = ' + ' '.join(settings.tex_flags),
            'DIRS = $(wildcard */.)',
            'PDF_FILES = $(notdir $(patsubst %.tex, %.pdf, '
                '$(wildcard */*.tex)))',
            'PROBDIR=' + probdir,
            'vpath %.tex $(DIRS)',
            'export TEXINPUTS=' + _texinputs([probdir, *include_dirs]),
        ],
        rules=[
            MakeRule(['.PHONY'], ['all']),
            MakeRule(['all'], ['$(PDF_FILES)']),
        ],
        includes=['*/*' + FRAGMENT_SUFFIX] )

def emit_toplevel_fragment(component_names: Iterable[str]) -> Makefile:
    component_names = [check_name(name) for name in component_names]
    return Makefile(
        variables=[
            'COMPONENTS =' + ''.join(' ' + name for name in component_names),
        ],
        rules=[
            MakeRule(['.PHONY'], ['all', *component_names]),
            MakeRule(['all'], component_names),
            *(
                MakeRule( [name], (),
                    ['$(MAKE) -C {} $(filter-out all $(COMPONENTS), '
                        '$(MAKECMDGOALS))'.format(name)] )
                for name in component_names ),
            # goals forwarded to components are no-ops at this level
            MakeRule(['%'], (), ['@:']),
        ] )


def _write_makefile(path: Path, makefile: Makefile) -> None:
    logger.debug("Writing <CYAN>%(path)s<NOCOLOUR>", dict(path=path))
    with path.open('w', encoding='utf-8', newline='\n') as makefile_file:
        makefile_file.write(makefile.represent())

def write_sheet_makefile( name: str, root: Path,
    problems: Iterable[str],
) -> Path:
    """
    Write <root>/<name>.mk and return its path.
    """
    path = root / (name + FRAGMENT_SUFFIX)
    _write_makefile(path, emit_sheet_fragment(name, problems))
    return path

def write_component_makefile( path: Path, problems_dir: str,
    include_dirs: Sequence[str], settings: AppSettings,
) -> Path:
    """
    Write the Makefile of the component directory path and return its
    path.
    """
    makefile_path = path / MAKEFILE_NAME
    _write_makefile( makefile_path,
        emit_component_fragment(problems_dir, include_dirs, settings) )
    return makefile_path

def write_toplevel_makefile( path: Path,
    components: Iterable[str],
) -> Path:
    makefile_path = path / MAKEFILE_NAME
    _write_makefile(makefile_path, emit_toplevel_fragment(components))
    return makefile_path
