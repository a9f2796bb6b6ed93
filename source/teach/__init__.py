"""
This application manages teaching courses, that consist of problem
sheets and coursework items handed out to course listeners over time.

A course is described in a single 'course.yaml' file. The application
generates LaTeX documents for every sheet, Makefiles that compile them,
and provides quick preview of individual problems.
"""

import logging as the_logging

logger = the_logging.getLogger(__name__)
logger.setLevel(the_logging.DEBUG)
logger.addHandler(the_logging.NullHandler())
