"""Plugin discovery shared by the extractor and renderer registries."""

from __future__ import annotations

from importlib import metadata
from typing import Any, Callable, Iterable, List, Mapping, Sequence, Set, Type, TypeVar

P = TypeVar("P")


def discover_plugins(
    builtins: Mapping[str, Callable[..., P]],
    *,
    group: str,
    base: Type[P],
    enabled: Sequence[str] | None = None,
    args: Sequence[Any] = (),
) -> List[P]:
    """Instantiate built-in plugins followed by entry point plugins, in order.

    ``enabled`` restricts the result to the named plugins; naming a plugin
    that does not exist raises ``ValueError``.
    """

    enabled_set: Set[str] | None = None
    if enabled is not None:
        enabled_set = {name.lower() for name in enabled}

    plugins: List[P] = []
    seen: Set[str] = set()

    def _add(name: str, factory: Callable[..., P]) -> None:
        key = name.lower()
        if enabled_set is not None and key not in enabled_set:
            return
        if key in seen:
            return
        instance = factory(*args)
        if not isinstance(instance, base):
            raise TypeError(
                f"Plugin factory for '{name}' did not return a {base.__name__} instance"
            )
        plugins.append(instance)
        seen.add(key)
        if enabled_set is not None:
            enabled_set.discard(key)

    for name, factory in builtins.items():
        _add(name, factory)

    for entry in _iter_entry_points(group):
        try:
            loaded = entry.load()
        except Exception as exc:  # pragma: no cover
            raise RuntimeError(f"Failed to load plugin entry point '{entry.name}': {exc}") from exc
        if not callable(loaded):
            raise TypeError(f"Plugin entry point '{entry.name}' must be a class or factory")
        _add(entry.name, loaded)

    if enabled_set:
        missing = ", ".join(sorted(enabled_set))
        raise ValueError(f"Unknown plugins requested for {group}: {missing}")

    return plugins


def _iter_entry_points(group: str) -> Iterable[metadata.EntryPoint]:
    try:
        entry_points = metadata.entry_points()
    except Exception:  # pragma: no cover
        return []
    return entry_points.select(group=group)


__all__ = ["discover_plugins"]
