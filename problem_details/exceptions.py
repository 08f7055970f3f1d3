"""Errors raised by the problem_details package, and the ProblemException
which wraps a Problem so it can be raised.
"""

from typing import TYPE_CHECKING, Dict, Optional

if TYPE_CHECKING:
    from .problem import Problem


class InvalidURIError(ValueError):
    """A string given as a problem ``type`` or ``instance`` is not a valid URI."""


class InvalidExtensionKeyError(ValueError):
    """An extension was created without a key."""


class ProblemException(Exception):
    """An exception carrying a Problem.

    The exception message is derived from the problem's title, detail, and
    status, unless one is given explicitly. The formats are:

        Title
        Title: Detail
        Title: Detail (code: STATUS)

    where each part is only included if it is present. If nothing is available
    the message is None.

    Subclasses may define ``headers`` which should be sent along with an HTTP
    response generated for the exception.
    """

    headers: Dict[str, str] = {}

    def __init__(self, problem: 'Problem', message: Optional[str] = None) -> None:
        if message is None:
            message = produce_exception_message(problem)

        self.problem: 'Problem' = problem
        self.message: Optional[str] = message

        if message is None:
            super(ProblemException, self).__init__()
        else:
            super(ProblemException, self).__init__(message)

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}(problem={self.problem!r})'


def produce_exception_message(problem: 'Problem') -> Optional[str]:
    """Build an exception message from the problem's title, detail and status.

    Args:
        problem: The problem to describe.

    Returns:
        The formatted message, or None if the problem carries none of the fields.
    """
    message = ''

    if problem.title is not None:
        message += problem.title

    if problem.detail is not None:
        if message:
            message += ': '
        message += problem.detail

    if problem.status != 0:
        if message:
            message += ' '
        message += f'(code: {problem.status})'

    return message or None
