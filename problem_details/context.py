"""A key/value context for problem processing.

A ProblemContext holds string values (a user ID, a trace ID, ...) which can be
interpolated into problem text, e.g. when mapping exceptions to Problems.
"""

import re
from typing import Dict, Iterator, Mapping, MutableMapping, Optional

_PLACEHOLDER = re.compile(r'\{([^{}]+)\}')


class ProblemContext(MutableMapping[str, str]):
    """A mutable mapping of context values for problem processing.

    Setting a key to None removes it, so the context never holds None values.

        context = ProblemContext().put('userId', '12345').put('traceId', 'abcde')
    """

    def __init__(self, values: Optional[Mapping[str, Optional[str]]] = None) -> None:
        self._values: Dict[str, str] = {}
        if values:
            for key, value in values.items():
                self[key] = value

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __setitem__(self, key: str, value: Optional[str]) -> None:
        if value is None:
            self._values.pop(key, None)
        else:
            self._values[key] = value

    def __delitem__(self, key: str) -> None:
        del self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f'ProblemContext({self._values!r})'

    def contains_key(self, key: str) -> bool:
        return key in self._values

    def put(self, key: str, value: Optional[str]) -> 'ProblemContext':
        """Set a context value, returning the context to allow chaining.

        A None value removes the key.
        """
        self[key] = value
        return self

    def to_dict(self) -> Dict[str, str]:
        """Get a snapshot of the current context values."""
        return dict(self._values)

    def format(self, template: Optional[str]) -> Optional[str]:
        """Replace ``{key}`` placeholders in the template with context values.

        Placeholders with no matching key are left untouched.

        Args:
            template: The text to interpolate. None is returned as-is.

        Returns:
            The interpolated text.
        """
        if template is None:
            return None

        def _replace(match: 're.Match[str]') -> str:
            return self._values.get(match.group(1), match.group(0))

        return _PLACEHOLDER.sub(_replace, template)
