"""RFC7807 Problem details: an immutable Problem value, its builder, and
canonical HTTP status titles.
"""

__title__ = 'problem-details'
__version__ = '1.0.0'
__description__ = 'Immutable RFC7807 Problem values with FastAPI integration'
__author__ = 'Vapor IO'
__author_email__ = 'vapor@vapor.io'
__url__ = 'https://github.com/vapor-ware/problem-details'
__license__ = 'GNU General Public License v3.0'

from .builder import ProblemBuilder, builder
from .context import ProblemContext
from .escape import escape
from .exceptions import (InvalidExtensionKeyError, InvalidURIError,
                         ProblemException)
from .problem import BLANK_TYPE, CONTENT_TYPE, Extension, Problem, extension
from .render import render
from .status import ProblemStatus, find_title, find_value

__all__ = [
    'BLANK_TYPE',
    'CONTENT_TYPE',
    'Extension',
    'InvalidExtensionKeyError',
    'InvalidURIError',
    'Problem',
    'ProblemBuilder',
    'ProblemContext',
    'ProblemException',
    'ProblemStatus',
    'builder',
    'escape',
    'extension',
    'find_title',
    'find_value',
    'render',
]
