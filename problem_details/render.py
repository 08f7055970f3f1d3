"""Rendering of Problems into a single-line, JSON-like diagnostic text.

The rendered text is meant for logs and exception messages, e.g.

    { "type" : "about:blank", "title" : "Not Found", "status" : 404 }

It is not intended to be sent over the wire; use ``Problem.to_dict`` with a
JSON serializer for that.
"""

import math
from decimal import Decimal
from typing import TYPE_CHECKING, Any, List

from .escape import escape

if TYPE_CHECKING:
    from .problem import Problem


def quote(value: str) -> str:
    return f'"{escape(value)}"'


def render_float(value: float) -> str:
    """Render a float, writing non-finite values as NaN, Infinity and -Infinity."""
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'Infinity' if value > 0 else '-Infinity'
    return str(value)


def render_value(value: Any) -> str:
    """Render a single extension value.

    Booleans and numbers are written as bare literals and strings are quoted.
    Any other value is written as a quoted string made of its type name and
    its str() form, e.g. ``"UUID:0b6d2b0a-..."``.
    """
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, int):
        return str(int(value))
    if isinstance(value, float):
        return render_float(float(value))
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, str):
        return quote(value)
    return quote(f'{type(value).__name__}:{value}')


def render(problem: 'Problem') -> str:
    """Render the Problem as a single line of text.

    Fields which are not set, and extensions whose value is None, are
    omitted. The status is always included.

    Args:
        problem: The problem to render.

    Returns:
        The rendered problem.
    """
    lines: List[str] = []

    if problem.type is not None:
        lines.append(f'"type" : {quote(problem.type)}')
    if problem.title is not None:
        lines.append(f'"title" : {quote(problem.title)}')
    lines.append(f'"status" : {problem.status}')
    if problem.detail is not None:
        lines.append(f'"detail" : {quote(problem.detail)}')
    if problem.instance is not None:
        lines.append(f'"instance" : {quote(problem.instance)}')

    for key, value in problem.extension_members.items():
        if value is None:
            continue
        lines.append(f'{quote(key)} : {render_value(value)}')

    return '{ ' + ', '.join(lines) + ' }'
