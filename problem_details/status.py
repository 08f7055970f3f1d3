"""Canonical HTTP status codes and their titles.

ProblemStatus lets a Problem be built from a well-known status without having
to set both the status code and the title:

    Problem.builder().status(ProblemStatus.NOT_FOUND).build()

Several codes have been renamed over time (for example 413 went from
"Request Entity Too Large" to "Payload Too Large" in RFC 7231 and to
"Content Too Large" in RFC 9110). Every historical name is kept as its own
member and flagged as deprecated, and lookups by code always resolve to the
current, non-deprecated name.

Referenced RFCs: 2295, 2324, 2518, 2616, 2774, 3229, 4918, 5842, 6585, 7231,
7538, 7540, 7725, 8297, 8470 and 9110.
"""

import enum
import functools
from typing import Dict, Iterable, Optional


class ProblemStatus(enum.Enum):
    """A well-known HTTP status code with its canonical title.

    Member values are ``(status, title)`` or ``(status, title, deprecated)``
    tuples, so that members sharing a status code remain distinct members
    rather than becoming aliases of one another.
    """

    # 1xx Informational
    CONTINUE = (100, 'Continue')
    SWITCHING_PROTOCOLS = (101, 'Switching Protocols')
    PROCESSING = (102, 'Processing')
    # Renamed to EARLY_HINTS by RFC 8297.
    CHECKPOINT = (103, 'Checkpoint', True)
    EARLY_HINTS = (103, 'Early Hints')

    # 2xx Success
    OK = (200, 'OK')
    CREATED = (201, 'Created')
    ACCEPTED = (202, 'Accepted')
    NON_AUTHORITATIVE_INFORMATION = (203, 'Non-Authoritative Information')
    NO_CONTENT = (204, 'No Content')
    RESET_CONTENT = (205, 'Reset Content')
    PARTIAL_CONTENT = (206, 'Partial Content')
    MULTI_STATUS = (207, 'Multi-Status')
    ALREADY_REPORTED = (208, 'Already Reported')
    IM_USED = (226, 'IM Used')

    # 3xx Redirection
    MULTIPLE_CHOICES = (300, 'Multiple Choices')
    MOVED_PERMANENTLY = (301, 'Moved Permanently')
    FOUND = (302, 'Found')
    SEE_OTHER = (303, 'See Other')
    NOT_MODIFIED = (304, 'Not Modified')
    # Obsoleted by RFC 7231.
    USE_PROXY = (305, 'Use Proxy', True)
    TEMPORARY_REDIRECT = (307, 'Temporary Redirect')
    PERMANENT_REDIRECT = (308, 'Permanent Redirect')

    # 4xx Client Error
    BAD_REQUEST = (400, 'Bad Request')
    UNAUTHORIZED = (401, 'Unauthorized')
    PAYMENT_REQUIRED = (402, 'Payment Required')
    FORBIDDEN = (403, 'Forbidden')
    NOT_FOUND = (404, 'Not Found')
    METHOD_NOT_ALLOWED = (405, 'Method Not Allowed')
    NOT_ACCEPTABLE = (406, 'Not Acceptable')
    PROXY_AUTHENTICATION_REQUIRED = (407, 'Proxy Authentication Required')
    REQUEST_TIMEOUT = (408, 'Request Timeout')
    CONFLICT = (409, 'Conflict')
    GONE = (410, 'Gone')
    LENGTH_REQUIRED = (411, 'Length Required')
    PRECONDITION_FAILED = (412, 'Precondition Failed')
    # Renamed to PAYLOAD_TOO_LARGE by RFC 7231, then CONTENT_TOO_LARGE by RFC 9110.
    REQUEST_ENTITY_TOO_LARGE = (413, 'Request Entity Too Large', True)
    PAYLOAD_TOO_LARGE = (413, 'Payload Too Large', True)
    CONTENT_TOO_LARGE = (413, 'Content Too Large')
    # Renamed to URI_TOO_LONG by RFC 7231.
    REQUEST_URI_TOO_LONG = (414, 'Request-URI Too Long', True)
    URI_TOO_LONG = (414, 'URI Too Long')
    UNSUPPORTED_MEDIA_TYPE = (415, 'Unsupported Media Type')
    # Renamed to RANGE_NOT_SATISFIABLE by RFC 9110.
    REQUESTED_RANGE_NOT_SATISFIABLE = (416, 'Requested Range Not Satisfiable', True)
    RANGE_NOT_SATISFIABLE = (416, 'Range Not Satisfiable')
    EXPECTATION_FAILED = (417, 'Expectation Failed')
    I_AM_A_TEAPOT = (418, "I'm a teapot")
    MISDIRECTED_REQUEST = (421, 'Misdirected Request')
    # Renamed to UNPROCESSABLE_CONTENT by RFC 9110.
    UNPROCESSABLE_ENTITY = (422, 'Unprocessable Entity', True)
    UNPROCESSABLE_CONTENT = (422, 'Unprocessable Content')
    LOCKED = (423, 'Locked')
    FAILED_DEPENDENCY = (424, 'Failed Dependency')
    TOO_EARLY = (425, 'Too Early')
    UPGRADE_REQUIRED = (426, 'Upgrade Required')
    PRECONDITION_REQUIRED = (428, 'Precondition Required')
    TOO_MANY_REQUESTS = (429, 'Too Many Requests')
    REQUEST_HEADER_FIELDS_TOO_LARGE = (431, 'Request Header Fields Too Large')
    UNAVAILABLE_FOR_LEGAL_REASONS = (451, 'Unavailable For Legal Reasons')

    # 5xx Server Error
    INTERNAL_SERVER_ERROR = (500, 'Internal Server Error')
    NOT_IMPLEMENTED = (501, 'Not Implemented')
    BAD_GATEWAY = (502, 'Bad Gateway')
    SERVICE_UNAVAILABLE = (503, 'Service Unavailable')
    GATEWAY_TIMEOUT = (504, 'Gateway Timeout')
    HTTP_VERSION_NOT_SUPPORTED = (505, 'HTTP Version Not Supported')
    VARIANT_ALSO_NEGOTIATES = (506, 'Variant Also Negotiates')
    INSUFFICIENT_STORAGE = (507, 'Insufficient Storage')
    LOOP_DETECTED = (508, 'Loop Detected')
    # Unofficial.
    BANDWIDTH_LIMIT_EXCEEDED = (509, 'Bandwidth Limit Exceeded')
    NOT_EXTENDED = (510, 'Not Extended')
    NETWORK_AUTHENTICATION_REQUIRED = (511, 'Network Authentication Required')

    def __init__(self, status: int, title: str, deprecated: bool = False) -> None:
        self.status: int = status
        self.title: str = title
        self.deprecated: bool = deprecated

    def __str__(self) -> str:
        return f'{self.status} {self.title}'

    @classmethod
    def find_value(cls, status: int) -> Optional['ProblemStatus']:
        """Get the canonical ProblemStatus for an integer status code."""
        return find_value(status)


def resolve_deprecations(existing: ProblemStatus, replacement: ProblemStatus) -> ProblemStatus:
    """Pick which of two statuses sharing a code is kept in the lookup table.

    The existing status is kept unless it is deprecated and the replacement
    is not. Ties keep the existing (first listed) status.
    """
    if existing.deprecated and not replacement.deprecated:
        return replacement
    return existing


def build_registry(statuses: Iterable[ProblemStatus]) -> Dict[int, ProblemStatus]:
    """Fold an ordered sequence of statuses into a lookup table keyed by code.

    Args:
        statuses: The statuses, in their canonical order.

    Returns:
        A dictionary mapping each status code to the status which should be
        used for it.
    """
    def fold(registry: Dict[int, ProblemStatus], status: ProblemStatus) -> Dict[int, ProblemStatus]:
        existing = registry.get(status.status)
        if existing is None:
            registry[status.status] = status
        else:
            registry[status.status] = resolve_deprecations(existing, status)
        return registry

    return functools.reduce(fold, statuses, {})


# Built once at import and never modified afterwards.
_STATUSES_BY_CODE: Dict[int, ProblemStatus] = build_registry(ProblemStatus)


def find_value(status: int) -> Optional[ProblemStatus]:
    """Look up the canonical ProblemStatus for an integer status code.

    Args:
        status: The HTTP status code, e.g. 404.

    Returns:
        The matching ProblemStatus, or None if the code is not a known status.
    """
    return _STATUSES_BY_CODE.get(status)


def find_title(status: int) -> Optional[str]:
    """Look up the canonical title for an integer status code.

    Args:
        status: The HTTP status code, e.g. 404.

    Returns:
        The title, e.g. "Not Found", or None if the code is not a known status.
    """
    value = find_value(status)
    if value is None:
        return None
    return value.title
