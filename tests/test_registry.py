import gc

from streetsampler.models import GeometrySnapshot
from streetsampler.registry import RegistryEventKind, StreetMapRegistry


class FakeComponent:
    def __init__(self, map_id=None, snapshot=None):
        self.map_id = map_id
        self.snapshot = snapshot


def test_register_and_primary(snapshot):
    registry = StreetMapRegistry()
    assert registry.primary_map() is None
    assert registry.register_map("a", snapshot)
    assert not registry.register_map("a", snapshot)
    assert not registry.register_map("b", None)

    other = GeometrySnapshot.from_geometry([], [])
    assert registry.register_map("b", other)
    assert registry.primary_map() is snapshot
    assert [m for m, _ in registry.maps()] == ["a", "b"]

    assert registry.unregister_map("a")
    assert not registry.unregister_map("a")
    assert registry.primary_map() is other


def test_observers(snapshot):
    registry = StreetMapRegistry()
    seen = []
    handle = registry.subscribe(seen.append)

    def broken(event):
        raise RuntimeError("boom")

    registry.subscribe(broken)
    registry.register_map("a", snapshot)
    registry.replace_map("a", GeometrySnapshot.from_geometry([], []))
    registry.unregister_map("a")
    assert [(e.kind, e.map_id) for e in seen] == [
        (RegistryEventKind.registered, "a"),
        (RegistryEventKind.replaced, "a"),
        (RegistryEventKind.unregistered, "a"),
    ]

    assert registry.unsubscribe(handle)
    assert not registry.unsubscribe(handle)
    registry.register_map("b", snapshot)
    assert len(seen) == 3


def test_replace_registers_new_id(snapshot):
    registry = StreetMapRegistry()
    registry.replace_map("new", snapshot)
    assert registry.get_map("new") is snapshot


def test_components_are_weak(snapshot):
    registry = StreetMapRegistry()
    keep = FakeComponent()
    drop = FakeComponent(map_id="from-component", snapshot=snapshot)
    assert registry.register_component(keep)
    assert registry.register_component(drop)
    assert not registry.register_component(keep)
    assert not registry.register_component(None)
    assert registry.get_map("from-component") is snapshot

    del drop
    gc.collect()
    assert registry.components() == [keep]

    registry.unregister_component(keep)
    assert registry.components() == []


def test_queries_use_primary_map(snapshot):
    registry = StreetMapRegistry()
    assert registry.find_nearest_road_point((0, 0)) is None
    assert registry.find_buildings_in_radius((0, 0), 10) == []

    registry.register_map("a", snapshot)
    assert registry.find_nearest_road_point((9, 1)) == (0, 1)
    assert registry.find_buildings_in_radius((5, 5), 1) == [0]

    registry.clear()
    assert registry.maps() == []


def test_replace_rejects_missing_snapshot(snapshot):
    registry = StreetMapRegistry()
    seen = []
    registry.subscribe(seen.append)
    registry.register_map("a", snapshot)

    assert not registry.replace_map("a", None)
    assert not registry.replace_map("b", None)
    assert registry.get_map("a") is snapshot
    assert registry.primary_map() is snapshot
    assert [m for m, _ in registry.maps()] == ["a"]
    assert [e.kind for e in seen] == [RegistryEventKind.registered]
