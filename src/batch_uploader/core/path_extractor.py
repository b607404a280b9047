"""Dotted field-path lookup over parsed JSON values."""

from typing import Any, Dict, List, Union

from .exceptions import EmptyResultError, MissingFieldError, NotIndexableError

JSONValue = Union[Dict[str, Any], List[Any], str, int, float, bool, None]

PATH_SEPARATOR = "."


def _json_type_name(value: JSONValue) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return type(value).__name__


class PathExtractor:
    """Resolves a dotted path such as ``data.url`` against a JSON value."""

    def __init__(self, separator: str = PATH_SEPARATOR):
        self._separator = separator

    def split(self, path: str) -> List[str]:
        return path.split(self._separator)

    def walk(self, value: JSONValue, path: str) -> JSONValue:
        """Follow ``path`` through nested objects and return whatever is there.

        Raises:
            MissingFieldError: an object along the way lacks the next field.
            NotIndexableError: a non-object value is reached before the path ends.
        """
        if not path:
            return value

        current = value
        for field in self.split(path):
            if not isinstance(current, dict):
                raise NotIndexableError(field, _json_type_name(current), path)
            if field not in current:
                raise MissingFieldError(field, path)
            current = current[field]
        return current

    def extract(self, value: JSONValue, path: str) -> JSONValue:
        """Resolve ``path`` and require a non-empty string at the end of it.

        An empty path returns ``value`` unchanged.

        Raises:
            MissingFieldError, NotIndexableError: see ``walk``.
            EmptyResultError: the resolved value is empty, null or not a string.
        """
        if not path:
            return value

        resolved = self.walk(value, path)
        if not resolved:
            raise EmptyResultError(f"Value at JSON path '{path}' is empty")
        if not isinstance(resolved, str):
            raise EmptyResultError(
                f"Value at JSON path '{path}' is a {_json_type_name(resolved)}, not a URL string"
            )
        return resolved


_default_extractor = PathExtractor()


def extract_path(value: JSONValue, path: str) -> JSONValue:
    """Module-level shortcut for ``PathExtractor().extract``."""
    return _default_extractor.extract(value, path)
