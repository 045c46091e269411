"""Query-string options attached to importer and formatter parameters."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional
from urllib.parse import parse_qsl

_TRUE_VALUES = {"true", "yes", "1"}
_FALSE_VALUES = {"false", "no", "0"}


class OptionError(ValueError):
    """Raised when an option value cannot be converted to the requested type."""


class QueryOptions(Mapping[str, str]):
    """Immutable, case-insensitive view over a ``key=value&...`` query string."""

    def __init__(self, query: Optional[str] = None) -> None:
        values: Dict[str, str] = {}
        for key, value in parse_qsl(query or "", keep_blank_values=True):
            values.setdefault(key.lower(), value)
        self._values = MappingProxyType(values)

    def __getitem__(self, key: str) -> str:
        return self._values[key.lower()]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, QueryOptions):
            return dict(self._values) == dict(other._values)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self._values.items()))

    def __repr__(self) -> str:
        return f"QueryOptions({dict(self._values)!r})"

    def get_str(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._values.get(key.lower(), default)

    def get_bool(self, key: str, default: bool = False) -> bool:
        raw = self._values.get(key.lower())
        if raw is None:
            return default
        lowered = raw.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise OptionError(f"Option '{key}' expects a boolean value, got '{raw}'.")

    def get_int(self, key: str, default: int = 0) -> int:
        raw = self._values.get(key.lower())
        if raw is None:
            return default
        try:
            return int(raw.strip())
        except ValueError as exc:
            raise OptionError(f"Option '{key}' expects an integer value, got '{raw}'.") from exc

    def get_float(self, key: str, default: float = 0.0) -> float:
        raw = self._values.get(key.lower())
        if raw is None:
            return default
        try:
            return float(raw.strip())
        except ValueError as exc:
            raise OptionError(f"Option '{key}' expects a numeric value, got '{raw}'.") from exc

    def get(self, key: str, default: Any = None) -> Any:  # type: ignore[override]
        """Return the value for ``key`` coerced to the type of ``default``."""
        if isinstance(default, bool):
            return self.get_bool(key, default)
        if isinstance(default, int):
            return self.get_int(key, default)
        if isinstance(default, float):
            return self.get_float(key, default)
        return self.get_str(key, default)


__all__ = ["OptionError", "QueryOptions"]
