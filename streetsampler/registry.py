"""Registry of street maps and the components that display them.

Maps are owned by the registry and keyed by a stable id.  Components are
tracked through weak references, so the registry never keeps one alive;
dead references are pruned whenever the component list is walked.
Observers subscribe with a callback and get a handle to unsubscribe.
"""

import itertools
import logging
import weakref
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .models import GeometrySnapshot
from . import queries

logger = logging.getLogger(__name__)


class RegistryEventKind(str, Enum):
    registered = "registered"
    unregistered = "unregistered"
    replaced = "replaced"


@dataclass(frozen=True)
class RegistryEvent:
    kind: RegistryEventKind
    map_id: str


Observer = Callable[[RegistryEvent], None]


class StreetMapRegistry:
    def __init__(self):
        self._maps: Dict[str, GeometrySnapshot] = {}
        self._components: List[weakref.ref] = []
        self._observers: Dict[int, Observer] = {}
        self._handles = itertools.count(1)

    # ── Observers ──────────────────────────────────────────────────────

    def subscribe(self, callback: Observer) -> int:
        handle = next(self._handles)
        self._observers[handle] = callback
        return handle

    def unsubscribe(self, handle: int) -> bool:
        return self._observers.pop(handle, None) is not None

    def _notify(self, kind: RegistryEventKind, map_id: str) -> None:
        event = RegistryEvent(kind=kind, map_id=map_id)
        for handle, callback in list(self._observers.items()):
            try:
                callback(event)
            except Exception as e:
                logger.error(f"Registry observer {handle} failed on {kind.value} "
                             f"'{map_id}': {e}")

    # ── Maps ───────────────────────────────────────────────────────────

    def register_map(self, map_id: str, snapshot: Optional[GeometrySnapshot]) -> bool:
        """Add a map.  False if the snapshot is missing or the id is taken."""
        if snapshot is None or map_id in self._maps:
            return False
        self._maps[map_id] = snapshot
        logger.info(f"Registered street map '{map_id}' "
                    f"({len(snapshot.roads)} roads, {len(snapshot.buildings)} buildings)")
        self._notify(RegistryEventKind.registered, map_id)
        return True

    def unregister_map(self, map_id: str) -> bool:
        if self._maps.pop(map_id, None) is None:
            return False
        logger.info(f"Unregistered street map '{map_id}'")
        self._notify(RegistryEventKind.unregistered, map_id)
        return True

    def replace_map(self, map_id: str, snapshot: Optional[GeometrySnapshot]) -> bool:
        """Swap in a new snapshot (e.g. after a re-import); registers if new.

        False if the snapshot is missing; the current map is kept.
        """
        if snapshot is None:
            return False
        if map_id not in self._maps:
            return self.register_map(map_id, snapshot)
        self._maps[map_id] = snapshot
        self._notify(RegistryEventKind.replaced, map_id)
        return True

    def get_map(self, map_id: str) -> Optional[GeometrySnapshot]:
        return self._maps.get(map_id)

    def maps(self) -> List[Tuple[str, GeometrySnapshot]]:
        return list(self._maps.items())

    def primary_map(self) -> Optional[GeometrySnapshot]:
        """The first registered map, or None."""
        return next(iter(self._maps.values()), None)

    # ── Components ─────────────────────────────────────────────────────

    def register_component(self, component) -> bool:
        if component is None:
            return False
        if any(ref() is component for ref in self._components):
            return False
        self._components.append(weakref.ref(component))

        map_id = getattr(component, 'map_id', None)
        snapshot = getattr(component, 'snapshot', None)
        if map_id is not None and snapshot is not None:
            self.register_map(map_id, snapshot)
        return True

    def unregister_component(self, component) -> None:
        self._components = [
            ref for ref in self._components
            if ref() is not None and ref() is not component
        ]

    def components(self) -> list:
        """Live components; dead references are dropped on discovery."""
        alive = []
        kept = []
        for ref in self._components:
            comp = ref()
            if comp is None:
                continue
            kept.append(ref)
            alive.append(comp)
        pruned = len(self._components) - len(kept)
        if pruned:
            logger.debug(f"Pruned {pruned} dead street map component(s)")
        self._components = kept
        return alive

    # ── Queries on the primary map ─────────────────────────────────────

    def find_nearest_road_point(self, location: Sequence[float],
                                max_search_distance: float = 0.0):
        return queries.find_nearest_road_point(
            self.primary_map(), location, max_search_distance)

    def find_buildings_in_radius(self, location: Sequence[float],
                                 radius: float) -> List[int]:
        return queries.find_buildings_in_radius(
            self.primary_map(), location, radius)

    def clear(self) -> None:
        for map_id in list(self._maps):
            self.unregister_map(map_id)
        self._components.clear()
