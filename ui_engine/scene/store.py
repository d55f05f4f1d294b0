"""
In-memory entity/component store.

Components are plain objects filed under their class. An entity is just an
integer id that can carry at most one component of each class.
"""

import logging
from typing import Any, Dict, Iterator, NamedTuple, Optional, Tuple, Type, TypeVar

from ..layout.box import EntityId

logger = logging.getLogger(__name__)

T = TypeVar('T')


class Entity(NamedTuple):
    """An entity yielded by Scene.iter together with the requested components."""
    id: EntityId
    components: Tuple[Any, ...]


class Scene:
    """Stores components by type and entity id."""

    def __init__(self):
        self._next_id: EntityId = 1
        self._stores: Dict[type, Dict[EntityId, Any]] = {}

    def create(self, *components: Any) -> EntityId:
        """
        Create an entity holding the given components.

        Args:
            *components: Components to attach, at most one per type

        Returns:
            EntityId: Id of the new entity
        """
        eid = self._next_id
        self._next_id += 1
        for component in components:
            self.add(eid, component)
        return eid

    def add(self, eid: EntityId, component: Any) -> None:
        """Attach a component to an entity, replacing one of the same type."""
        if eid <= 0 or eid >= self._next_id:
            raise KeyError(f"Unknown entity {eid}")
        self._stores.setdefault(type(component), {})[eid] = component

    def remove(self, eid: EntityId) -> bool:
        """
        Remove every component of an entity.

        Returns:
            bool: True if the entity held any component
        """
        removed = False
        for store in self._stores.values():
            if store.pop(eid, None) is not None:
                removed = True
        return removed

    def get_one(self, component_type: Type[T], eid: EntityId) -> Optional[T]:
        """Get a component of an entity, or None if it has none of that type."""
        store = self._stores.get(component_type)
        if store is None:
            return None
        return store.get(eid)

    def iter(self, *component_types: type) -> Iterator[Entity]:
        """
        Iterate over entities holding all the given component types.

        Entities are yielded in creation order with their components in the
        order the types were requested.
        """
        if not component_types:
            return
        primary = self._stores.get(component_types[0], {})
        others = [self._stores.get(t, {}) for t in component_types[1:]]
        for eid, component in primary.items():
            if all(eid in store for store in others):
                yield Entity(eid, (component,) + tuple(store[eid] for store in others))

    def count(self, component_type: type) -> int:
        """Count the entities holding a component type."""
        return len(self._stores.get(component_type, {}))

    def __contains__(self, eid: EntityId) -> bool:
        return any(eid in store for store in self._stores.values())
