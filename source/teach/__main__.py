import argparse
from pathlib import Path

import teach
import teach.logging
from teach.course import CourseError
from teach.makefile import UnrepresentableName
from teach.preview import PreviewError
from teach.project import Project, Course, RootNotFoundError, \
    report_missing_root
from teach.settings import AppSettings, SettingsError

# use 'teach' logger instead of '__main__'
import logging
logger = logging.getLogger(teach.__name__)


def _get_base_arg_parser( prog='teach',
    description="Build problem sheets and courseworks of a course"
):
    parser = argparse.ArgumentParser(prog=prog, description=description)
    parser.add_argument( '-p', '--path',
        help="explicit course root (directory holding course.yaml)",
        type=Path )
    parser.add_argument( '-S', '--settings',
        help="explicit settings file",
        type=Path )
    verbosity_group = parser.add_mutually_exclusive_group()
    verbosity_group.add_argument( '-v', '--verbose',
        help="show debug messages",
        action='store_const', dest='log_level', const=logging.DEBUG )
    verbosity_group.add_argument( '-q', '--quiet',
        help="show only warnings and errors",
        action='store_const', dest='log_level', const=logging.WARNING )
    parser.add_argument( '-C', '--no-colour',
        help="disable colour output",
        action='store_false', dest='colour' )
    parser.set_defaults(log_level=logging.INFO)
    return parser

def main(args):
    teach.logging.setup_logging(level=args.log_level, colour=args.colour)
    if args.command is None:
        logger.error("No command selected.")
        raise SystemExit(1)
    try:
        settings = AppSettings.load(args.settings)
    except SettingsError as error:
        logger.critical("%(error)s", dict(error=error))
        raise SystemExit(1)
    try:
        project = Project(root=args.path)
    except RootNotFoundError:
        report_missing_root()
        raise SystemExit(1)
    try:
        course = Course(project, settings)
        return args.command_func(args, course=course)
    except (CourseError, PreviewError, UnrepresentableName) as error:
        logger.critical("%(error)s", dict(error=error))
        raise SystemExit(1)


# pylint: disable=unused-variable,unused-argument


####################
# build

def _add_build_arg_subparser(subparsers):
    parser = subparsers.add_parser( 'build',
        help="generate documents and Makefiles of the course" )
    parser.set_defaults(command_func=main_build)

def main_build(args, *, course):
    course.build()


####################
# problem, solution

def _add_edit_arg_subparsers(subparsers):
    for command, help_text, command_func in (
        ('problem', "create or edit a problem statement", main_problem),
        ('solution', "create or edit a problem solution", main_solution),
    ):
        parser = subparsers.add_parser(command, help=help_text)
        parser.add_argument('name', metavar='NAME')
        parser.add_argument( '-t', '--touch',
            help="only create the problem files, do not open the editor",
            action='store_true' )
        parser.set_defaults(command_func=command_func)

def main_problem(args, *, course):
    from teach.commands.edit import edit_problem
    edit_problem(course, args.name, touch=args.touch)

def main_solution(args, *, course):
    from teach.commands.edit import edit_solution
    edit_solution(course, args.name, touch=args.touch)


####################
# preview

def _add_preview_arg_subparser(subparsers):
    parser = subparsers.add_parser( 'preview',
        help="compile a problem with its solution and show it" )
    parser.add_argument('name', metavar='NAME')
    parser.set_defaults(command_func=main_preview)

def main_preview(args, *, course):
    logger.info( "Previewing problem <MAGENTA>%(name)s<NOCOLOUR>",
        dict(name=args.name) )
    with course.previewer(args.name) as previewer:
        previewer.preview()


####################
# course

def _add_course_arg_subparser(subparsers):
    parser = subparsers.add_parser( 'course',
        help="edit the course file" )
    parser.set_defaults(command_func=main_course)

def main_course(args, *, course):
    from teach.commands.edit import edit_course_file
    edit_course_file(course)


####################
# problems

def _add_problems_arg_subparser(subparsers):
    parser = subparsers.add_parser( 'problems',
        help="list problems matching shell patterns" )
    parser.add_argument( 'patterns',
        nargs='*', metavar='PATTERN' )
    parser.add_argument( '-1', '--one-per-line',
        help="list one problem per line",
        action='store_true' )
    parser.set_defaults(command_func=main_problems)

def main_problems(args, *, course):
    import shutil
    from teach.commands.list_problems import list_problems, format_columns
    names = list_problems(course, args.patterns)
    if not names:
        logger.warning("No problems found")
        return
    if args.one_per_line:
        print('\n'.join(names))
    else:
        width = shutil.get_terminal_size().columns
        print(format_columns(names, width))


# pylint: enable=unused-variable,unused-argument


def _get_arg_parser():
    parser = _get_base_arg_parser()
    subparsers = parser.add_subparsers(title='commands', dest='command')
    _add_build_arg_subparser(subparsers)
    _add_edit_arg_subparsers(subparsers)
    _add_preview_arg_subparser(subparsers)
    _add_course_arg_subparser(subparsers)
    _add_problems_arg_subparser(subparsers)
    return parser

def _get_args(argv=None):
    parser = _get_arg_parser()
    args = parser.parse_args(argv)
    return args

def run(argv=None):
    main(args=_get_args(argv))

if __name__ == '__main__':
    run()
