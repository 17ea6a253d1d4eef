"""A small entity-component store and an entity handle bound to it."""

from __future__ import annotations

import operator
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, TypeVar

T = TypeVar("T")


class Registry:
    """Entities are integers; each holds at most one component per type."""

    def __init__(self) -> None:
        self._next_id = 0
        self._entities: dict[int, None] = {}
        self._pools: dict[type, dict[int, Any]] = {}

    def create(self) -> int:
        """Create a new entity and return its id."""
        entity = self._next_id
        self._next_id += 1
        self._entities[entity] = None
        return entity

    def _checked(self, entity) -> int:
        handle = operator.index(entity)
        if handle not in self._entities:
            raise KeyError(f"no such entity: {handle}")
        return handle

    def destroy(self, entity) -> None:
        """Remove an entity and all its components."""
        handle = self._checked(entity)
        for pool in self._pools.values():
            pool.pop(handle, None)
        del self._entities[handle]

    def valid(self, entity) -> bool:
        return operator.index(entity) in self._entities

    def emplace(self, entity, component: T) -> T:
        """Attach ``component``; an entity may hold one of each type."""
        handle = self._checked(entity)
        pool = self._pools.setdefault(type(component), {})
        if handle in pool:
            raise ValueError(
                f"entity {handle} already has a {type(component).__name__}"
            )
        pool[handle] = component
        return component

    def get(self, entity, component_type: type[T]) -> T:
        handle = self._checked(entity)
        try:
            return self._pools[component_type][handle]
        except KeyError:
            raise KeyError(
                f"entity {handle} has no {component_type.__name__}"
            ) from None

    def has(self, entity, component_type: type) -> bool:
        handle = operator.index(entity)
        return handle in self._pools.get(component_type, {})

    def remove(self, entity, component_type: type) -> bool:
        """Detach a component; return whether there was one."""
        handle = self._checked(entity)
        return self._pools.get(component_type, {}).pop(handle, None) is not None

    def view(self, *args: type) -> Iterator[tuple]:
        """Yield ``(entity, component, ...)`` for entities holding every type.

        Newest entities come first. Entities destroyed or stripped during
        iteration are skipped.
        """
        if not args:
            raise TypeError("view needs at least one component type")
        pools = [self._pools.get(component_type, {}) for component_type in args]
        leading = min(pools, key=len)
        for entity in reversed(list(leading)):
            try:
                components = tuple(pool[entity] for pool in pools)
            except KeyError:
                continue
            yield (entity, *components)

    def clear(self) -> None:
        """Destroy every entity."""
        self._entities.clear()
        self._pools.clear()

    def __len__(self) -> int:
        return len(self._entities)


@dataclass(frozen=True)
class Entity:
    """An entity id together with the registry that owns it."""

    handle: int
    registry: Registry = field(compare=False, repr=False)

    def add_component(self, component: T) -> T:
        return self.registry.emplace(self.handle, component)

    def get_component(self, component_type: type[T]) -> T:
        return self.registry.get(self.handle, component_type)

    def remove_component(self, component_type: type) -> bool:
        return self.registry.remove(self.handle, component_type)

    def __index__(self) -> int:
        return self.handle

    def __int__(self) -> int:
        return self.handle