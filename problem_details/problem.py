"""The RFC 7807 Problem value.

For details on the Problem format, see: https://tools.ietf.org/html/rfc7807
and https://www.rfc-editor.org/rfc/rfc9110.html
"""

import types
from typing import (TYPE_CHECKING, Any, Dict, KeysView, Mapping, NamedTuple,
                    Optional, Tuple)

from .exceptions import InvalidExtensionKeyError
from .render import quote, render, render_value

if TYPE_CHECKING:
    from .builder import ProblemBuilder

# The media type for JSON-serialized problems.
CONTENT_TYPE = 'application/problem+json'

# The problem type used when none is given. It means the problem has no
# semantics beyond those of the HTTP status code.
BLANK_TYPE = 'about:blank'


class Extension(NamedTuple):
    """A single key/value extension member of a Problem."""

    key: str
    value: Any

    def __str__(self) -> str:
        value = 'null' if self.value is None else render_value(self.value)
        return f'{{ "key" : {quote(self.key)}, "value" : {value} }}'


def extension(key: str, value: Any) -> Extension:
    """Create a named extension for use in a Problem.

    Args:
        key: The extension key. Must not be None.
        value: The extension value. May be None.

    Returns:
        A new Extension.

    Raises:
        InvalidExtensionKeyError: The key is None.
    """
    if key is None:
        raise InvalidExtensionKeyError('key cannot be None')
    return Extension(key, value)


class Problem:
    """An RFC 7807 Problem.

    A Problem identifies a single occurrence of a problem, with the standard
    members:

    * type: a URI identifying the type of the problem
    * title: a short, human-readable summary of the problem
    * status: the HTTP status code generated for this problem (0 if unknown)
    * detail: a human-readable explanation specific to this occurrence
    * instance: a URI identifying the specific occurrence of the problem

    along with any number of extension members providing extra context.

    Problems are immutable. They are normally created with a ProblemBuilder,
    which applies defaults for the type and title:

        problem = Problem.builder().status(404).detail('no such order').build()

    To create a modified copy, convert the problem back into a builder:

        problem.to_builder().detail('another detail').build()

    Creating a Problem directly stores the given values as-is, without any
    defaults applied.
    """

    __slots__ = ('_type', '_title', '_status', '_detail', '_instance', '_extensions')

    CONTENT_TYPE = CONTENT_TYPE
    BLANK_TYPE = BLANK_TYPE

    def __init__(
            self,
            type: Optional[str] = None,
            title: Optional[str] = None,
            status: int = 0,
            detail: Optional[str] = None,
            instance: Optional[str] = None,
            extensions: Optional[Mapping[str, Any]] = None,
    ) -> None:
        members: Dict[str, Any] = {}
        if extensions:
            members = {k: v for k, v in extensions.items() if k is not None}

        object.__setattr__(self, '_type', type)
        object.__setattr__(self, '_title', title)
        object.__setattr__(self, '_status', int(status))
        object.__setattr__(self, '_detail', detail)
        object.__setattr__(self, '_instance', instance)
        object.__setattr__(self, '_extensions', members)

    @staticmethod
    def builder() -> 'ProblemBuilder':
        """Create a new, empty ProblemBuilder."""
        from .builder import ProblemBuilder
        return ProblemBuilder()

    def to_builder(self) -> 'ProblemBuilder':
        """Get a builder pre-populated with the values of this Problem.

        This is used to create a modified copy of the Problem.
        """
        from .builder import ProblemBuilder
        return ProblemBuilder(self)

    @property
    def type(self) -> Optional[str]:
        return self._type

    @property
    def title(self) -> Optional[str]:
        return self._title

    @property
    def status(self) -> int:
        return self._status

    @property
    def detail(self) -> Optional[str]:
        return self._detail

    @property
    def instance(self) -> Optional[str]:
        return self._instance

    @property
    def extensions(self) -> KeysView[str]:
        """The names of the extension members, in insertion order."""
        return self._extensions.keys()

    @property
    def extension_members(self) -> Mapping[str, Any]:
        """A read-only view of the extension members, in insertion order."""
        return types.MappingProxyType(self._extensions)

    def get_extension_value(self, name: str) -> Any:
        """Get the value of an extension member, or None if there is no such member."""
        return self._extensions.get(name)

    def has_extension(self, name: str) -> bool:
        return name in self._extensions

    def to_dict(self) -> Dict[str, Any]:
        """Get a dictionary representation of the Problem.

        Standard members which are set are included first, followed by the
        extension members whose values are not None. An extension member with
        the same name as a standard member never overrides it.

        Returns:
            A dictionary representation of the Problem. This can be serialized
            out to JSON and used as a response body.
        """
        d: Dict[str, Any] = {}

        if self.type is not None:
            d['type'] = self.type
        if self.title is not None:
            d['title'] = self.title
        if self.status:
            d['status'] = self.status
        if self.detail is not None:
            d['detail'] = self.detail
        if self.instance is not None:
            d['instance'] = self.instance

        for name, value in self._extensions.items():
            if value is not None and name not in STANDARD_MEMBERS:
                d[name] = value
        return d

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f'{self.__class__.__name__} is immutable')

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f'{self.__class__.__name__} is immutable')

    def __reduce__(self) -> Tuple[Any, ...]:
        # Rebuild through __init__, since attribute assignment is blocked.
        return (
            self.__class__,
            (self.type, self.title, self.status, self.detail, self.instance, dict(self._extensions)),
        )

    def __str__(self) -> str:
        return render(self)

    def __repr__(self) -> str:
        return f'Problem:<{self}>'

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Problem):
            return NotImplemented
        return (
            self.type == other.type
            and self.title == other.title
            and self.status == other.status
            and self.detail == other.detail
            and self.instance == other.instance
            and self._extensions == other._extensions
        )

    def __hash__(self) -> int:
        # Extension values may be unhashable, so only their names are hashed.
        return hash((
            self.type,
            self.title,
            self.status,
            self.detail,
            self.instance,
            frozenset(self._extensions),
        ))


STANDARD_MEMBERS = frozenset(('type', 'title', 'status', 'detail', 'instance'))
