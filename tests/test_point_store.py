import dataclasses

import pytest

from core.fade_point import FadePoint
from core.point_store import PointStore


def test_append_keeps_insertion_order():
    store = PointStore()
    a = store.append((1, 2), 0.0)
    b = store.append((3, 4), 0.1)
    c = store.append((5, 6), 0.2)
    assert store.snapshot() == (a, b, c)
    assert len(store) == 3
    assert a.location == (1.0, 2.0)
    assert a.timestamp == 0.0


def test_points_are_distinct_by_identity():
    store = PointStore()
    a = store.append((10, 10), 1.0)
    b = store.append((10, 10), 1.0)
    assert a != b
    assert a.id != b.id
    assert a == a
    assert len({a, b}) == 2


def test_fade_point_is_immutable():
    point = FadePoint(location=(0.0, 0.0), timestamp=0.0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        point.location = (1.0, 1.0)


def test_location_outside_bounds_is_accepted():
    store = PointStore()
    p = store.append((-500, 99999), 0.0)
    assert p in store


def test_concrete_decay_timeline():
    store = PointStore()
    a = store.append((0, 0), 0.0)
    b = store.append((1, 1), 0.1)

    store.evict_expired(0.2, 0.25)
    assert a in store and b in store

    store.evict_expired(0.3, 0.25)
    assert a not in store
    assert b in store

    store.evict_expired(0.4, 0.25)
    assert len(store) == 0


def test_eviction_is_strictly_greater_than():
    store = PointStore()
    p = store.append((0, 0), 0.0)
    store.evict_expired(0.25, 0.25)
    assert p in store

    q = store.append((0, 0), 5.0)
    store.evict_expired(5.0, 0.0)
    assert q in store


def test_eviction_never_drops_live_points_among_many_expired():
    store = PointStore()
    old = [store.append((i, i), 0.0) for i in range(200)]
    fresh = store.append((7, 7), 1.0)
    late = [store.append((i, 0), 0.5) for i in range(50)]

    store.evict_expired(1.0, 0.75)
    assert all(p not in store for p in old)
    assert fresh in store
    assert all(p in store for p in late)
    assert store.snapshot() == (fresh, *late)


def test_remove_by_id_removes_exactly_one():
    store = PointStore()
    a = store.append((0, 0), 0.0)
    b = store.append((0, 0), 0.0)
    store.remove_by_id(a.id)
    assert store.snapshot() == (b,)


def test_convergent_operations_are_silent_noops():
    store = PointStore()
    a = store.append((0, 0), 0.0)
    store.remove_by_id(a.id)
    version = store.version

    store.remove_by_id(a.id)
    store.evict_expired(10.0, 0.25)
    store.clear_all()
    assert len(store) == 0
    assert store.version == version


def test_version_tracks_mutations():
    store = PointStore()
    v0 = store.version
    store.append((0, 0), 0.0)
    assert store.version > v0

    v1 = store.version
    store.evict_expired(0.1, 0.25)
    assert store.version == v1

    store.clear_all()
    assert store.version > v1
    assert len(store) == 0
