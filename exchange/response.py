"""
Response Tree
Read-only view over a decoded JSON response with dotted-path lookups
"""

import json
from typing import Any, Iterator, Tuple

from .errors import MalformedResponse

_MISSING = object()


class ResponseTree:
    """
    Wraps a decoded JSON value

    Paths are dot-separated keys ('return.funds'). Key order of the source
    document is preserved when iterating.
    """

    def __init__(self, data: Any, path: str = ''):
        self.data = data
        self.path = path

    @classmethod
    def parse(cls, text: str) -> 'ResponseTree':
        """Parse a JSON document"""
        try:
            return cls(json.loads(text))
        except (TypeError, ValueError) as e:
            raise MalformedResponse('<root>', f"invalid JSON: {e}") from e

    def _lookup(self, path: str) -> Any:
        node = self.data
        for key in path.split('.'):
            if not isinstance(node, dict) or key not in node:
                return _MISSING
            node = node[key]
        return node

    def _full_path(self, path: str) -> str:
        return f"{self.path}.{path}" if self.path else path

    def get(self, path: str, default: Any = None) -> Any:
        """Value at path, or default when absent"""
        value = self._lookup(path)
        return default if value is _MISSING else value

    def child(self, path: str) -> 'ResponseTree':
        """Subtree at path. Raises MalformedResponse when absent."""
        value = self._lookup(path)
        if value is _MISSING:
            raise MalformedResponse(self._full_path(path))
        return ResponseTree(value, self._full_path(path))

    def require(self, path: str, kind: type = str) -> Any:
        """Mandatory field converted to kind"""
        value = self._lookup(path)
        if value is _MISSING or value is None:
            raise MalformedResponse(self._full_path(path))
        try:
            return kind(value)
        except (TypeError, ValueError) as e:
            raise MalformedResponse(self._full_path(path), str(e)) from e

    def items(self) -> Iterator[Tuple[str, 'ResponseTree']]:
        """Child key/subtree pairs in source order"""
        if isinstance(self.data, dict):
            for key, value in self.data.items():
                yield key, ResponseTree(value, self._full_path(key))
        elif isinstance(self.data, list):
            for index, value in enumerate(self.data):
                yield str(index), ResponseTree(value, self._full_path(str(index)))

    def keys(self):
        return [key for key, _ in self.items()]

    @property
    def error(self) -> str:
        """Exchange error string, empty when the call succeeded"""
        value = self.get('error', '')
        return str(value) if value else ''

    def __len__(self):
        return len(self.data) if isinstance(self.data, (dict, list)) else 0

    def __repr__(self):
        return f"ResponseTree(path={self.path!r}, data={self.data!r})"
