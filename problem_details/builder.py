"""Builder for Problem instances."""

from typing import Any, Dict, Iterable, Mapping, Optional, Union

from .problem import BLANK_TYPE, Extension, Problem
from .status import ProblemStatus, find_title
from .uri import parse_uri

ExtensionSource = Union[Mapping[str, Any], Iterable[Optional[Extension]], None]


class ProblemBuilder:
    """A mutable accumulator for the members of a Problem.

    Setters return the builder so calls can be chained. Defaults are only
    applied when the Problem is built:

    * the type defaults to "about:blank"
    * the title defaults to the canonical title of the status code, if the
      code is a known one

    A builder is meant to be used by a single thread; the Problems it builds
    are immutable and can be shared freely.
    """

    def __init__(self, problem: Optional[Problem] = None) -> None:
        self._type: Optional[str] = None
        self._title: Optional[str] = None
        self._status: int = 0
        self._detail: Optional[str] = None
        self._instance: Optional[str] = None
        self._extensions: Dict[str, Any] = {}

        # Pre-populate from an existing problem. Its values are taken as-is,
        # without being validated again.
        if problem is not None:
            self._type = problem.type
            self._title = problem.title
            self._status = problem.status
            self._detail = problem.detail
            self._instance = problem.instance
            self._extensions.update(problem.extension_members)

    def type(self, type: Optional[str]) -> 'ProblemBuilder':
        """Set the problem type URI. None clears it.

        Raises:
            InvalidURIError: The string is not a valid URI.
        """
        self._type = parse_uri(type) if type is not None else None
        return self

    def title(self, title: Optional[str]) -> 'ProblemBuilder':
        self._title = title
        return self

    def status(self, status: Union[int, ProblemStatus, None]) -> 'ProblemBuilder':
        """Set the status code.

        An integer is stored as-is, including zero and negative values. A
        ProblemStatus sets its status code and, unless a title was already set,
        its title. None leaves the status and title untouched.
        """
        if status is None:
            return self

        if isinstance(status, ProblemStatus):
            self._status = status.status
            if self._title is None:
                self._title = status.title
        else:
            self._status = int(status)
        return self

    def detail(self, detail: Optional[str]) -> 'ProblemBuilder':
        self._detail = detail
        return self

    def instance(self, instance: Optional[str]) -> 'ProblemBuilder':
        """Set the URI of the problem occurrence. None clears it.

        Raises:
            InvalidURIError: The string is not a valid URI.
        """
        self._instance = parse_uri(instance) if instance is not None else None
        return self

    def extension(self, name: Optional[str], value: Any) -> 'ProblemBuilder':
        """Add an extension member.

        An extension with a None name is ignored. A None value is stored, but
        is left out when the problem is rendered or serialized.
        """
        if name is not None:
            self._extensions[name] = value
        return self

    def extensions(self, extensions: ExtensionSource) -> 'ProblemBuilder':
        """Add extension members in bulk.

        Args:
            extensions: Either a mapping of names to values, or an iterable of
                Extension. A None argument is ignored, as are None elements and
                entries with a None name.
        """
        if extensions is None:
            return self

        if isinstance(extensions, Mapping):
            for name, value in extensions.items():
                self.extension(name, value)
        else:
            for e in extensions:
                if e is not None:
                    self.extension(e.key, e.value)
        return self

    def build(self) -> Problem:
        """Build a new Problem from the current state of the builder."""
        type = self._type
        if type is None:
            type = BLANK_TYPE

        title = self._title
        if title is None:
            title = find_title(self._status)

        return Problem(
            type=type,
            title=title,
            status=self._status,
            detail=self._detail,
            instance=self._instance,
            extensions=self._extensions,
        )


def builder() -> ProblemBuilder:
    """Create a new, empty ProblemBuilder."""
    return ProblemBuilder()
