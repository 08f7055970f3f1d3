"""Syntax checks for URI references used as problem types and instances.

See: https://tools.ietf.org/html/rfc3986
"""

import re
from urllib.parse import urlsplit

from .exceptions import InvalidURIError

# ASCII characters which may never appear literally in a URI reference.
_ILLEGAL_CHARACTERS = re.compile(r'[\x00-\x20\x7f"<>\\^`{|}]')

# A '%' which does not start a two hex digit escape.
_BAD_PERCENT_ESCAPE = re.compile(r'%(?![0-9A-Fa-f]{2})')

_SCHEME = re.compile(r'^[A-Za-z][A-Za-z0-9+.\-]*$')


def parse_uri(value: str) -> str:
    """Check that a string is a syntactically valid URI reference.

    Absolute URIs (``https://example.com/problems/out-of-stock``,
    ``about:blank``, ``urn:uuid:...``) and relative references
    (``/orders/42``) are both accepted. Non-ASCII characters are allowed, as
    they are for IRIs.

    Args:
        value: The URI string.

    Returns:
        The URI string, unchanged.

    Raises:
        InvalidURIError: The string is not a valid URI reference.
    """
    match = _ILLEGAL_CHARACTERS.search(value)
    if match:
        raise InvalidURIError(f'Illegal character {match.group()!r} in URI: {value!r}')

    if _BAD_PERCENT_ESCAPE.search(value):
        raise InvalidURIError(f'Malformed escape sequence in URI: {value!r}')

    # A colon before the first '/', '?' or '#' terminates the scheme.
    head = re.split(r'[/?#]', value, maxsplit=1)[0]
    if ':' in head:
        scheme = head.split(':', 1)[0]
        if not _SCHEME.match(scheme):
            raise InvalidURIError(f'Expected scheme name in URI: {value!r}')

    try:
        parts = urlsplit(value)
        # Accessing the port validates it.
        parts.port
    except ValueError as e:
        raise InvalidURIError(f'Invalid URI: {value!r} ({e})') from e

    return value
