"""Tests for DropRegistry insert, remove, sweep, reset and reconfiguration.

Critical Invariants:
- Live records never exceed capacity after an operation completes
- Capacity eviction removes exactly the oldest record, and destroys it
- Remove and reset never destroy backing objects
- Sweep destroys expired objects but only forgets externally destroyed ones
"""

import pytest

from dropreaper import DuplicateReferenceError, EvictionReason, ObjectRef

# Example scenarios


def test_capacity_eviction_destroys_oldest(make_registry, host, clock):
    """CRITICAL: Inserting into a full registry evicts and destroys the oldest.

    capacity=2, lifetime=0: A at t=0, B at t=1, C at t=2 leaves [B, C].
    """
    registry = make_registry(capacity=2)
    a, b, c = host.spawn(), host.spawn(), host.spawn()

    assert registry.insert(a)
    clock.advance(1)
    assert registry.insert(b)
    clock.advance(1)
    assert registry.insert(c)

    assert registry.references() == [b, c]
    assert not host.is_valid(a), "Evicted object must be destroyed"
    assert host.is_valid(b) and host.is_valid(c)
    assert registry.stats.evicted_capacity == 1


def test_age_eviction_at_lifetime_boundary(make_registry, host, clock):
    """Sweep evicts once now - created_at reaches lifetime, not before."""
    registry = make_registry(capacity=5, lifetime=10)
    a = host.spawn()
    registry.insert(a)

    assert registry.sweep(9) == 0
    assert a in registry

    assert registry.sweep(10) == 1
    assert a not in registry
    assert not host.is_valid(a), "Age-evicted object must be destroyed"
    assert registry.stats.evicted_age == 1


def test_remove_frees_slot_without_eviction(make_registry, host):
    """capacity=3: A, B, remove A, then C, D fits without eviction."""
    registry = make_registry(capacity=3)
    a, b, c, d = (host.spawn() for _ in range(4))

    registry.insert(a)
    registry.insert(b)
    assert registry.remove(a)
    assert registry.references() == [b]

    registry.insert(c)
    registry.insert(d)

    assert registry.references() == [b, c, d]
    assert registry.stats.evicted == 0
    assert all(host.is_valid(ref) for ref in (a, b, c, d)), "Nothing is destroyed"


def test_disabled_registry_rejects_everything(make_registry, host):
    """capacity=0: every insert returns False and nothing is tracked."""
    registry = make_registry(capacity=0)

    results = [registry.insert(host.spawn()) for _ in range(50)]

    assert results == [False] * 50
    assert len(registry) == 0
    assert not registry.enabled


def test_shrinking_capacity_evicts_oldest_in_order(make_registry, host, clock, caplog):
    """update_config(capacity=1) over [B, C, D] evicts B then C, leaving [D]."""
    registry = make_registry(capacity=3)
    b, c, d = host.spawn(), host.spawn(), host.spawn()
    for ref in (b, c, d):
        registry.insert(ref)
        clock.advance(1)

    with caplog.at_level("DEBUG", logger="dropreaper.registry.registry"):
        registry.update_config(capacity=1, lifetime=0)

    assert registry.references() == [d]
    assert not host.is_valid(b)
    assert not host.is_valid(c)
    evictions = [r.getMessage() for r in caplog.records if r.getMessage().startswith("Evicted")]
    assert evictions[0].startswith(f"Evicted {b}")
    assert evictions[1].startswith(f"Evicted {c}")
    assert registry.stats.evicted_shrink == 2


# Remove


def test_remove_untracked_returns_false(make_registry, host):
    """Removing a map-placed object that was never inserted is silent."""
    registry = make_registry()
    registry.insert(host.spawn())

    assert not registry.remove(host.spawn())
    assert len(registry) == 1


def test_insert_then_remove(make_registry, host):
    registry = make_registry()
    ref = host.spawn()

    assert registry.insert(ref)
    assert registry.remove(ref)
    assert ref not in registry
    assert host.is_valid(ref), "Remove must not destroy"


# Insert preconditions


def test_duplicate_insert_is_rejected(make_registry, host):
    """Reporting the same object twice is a caller error, state unchanged."""
    registry = make_registry(capacity=2)
    ref = host.spawn()
    registry.insert(ref)

    with pytest.raises(DuplicateReferenceError, match="already tracked"):
        registry.insert(ref)

    assert registry.references() == [ref]
    assert registry.stats.inserted == 1


def test_duplicate_insert_does_not_evict_when_full(make_registry, host):
    registry = make_registry(capacity=1)
    ref = host.spawn()
    registry.insert(ref)

    with pytest.raises(DuplicateReferenceError):
        registry.insert(ref)

    assert host.is_valid(ref)


def test_reinsert_after_remove_is_allowed(make_registry, host, clock):
    registry = make_registry()
    ref = host.spawn()
    registry.insert(ref)
    registry.remove(ref)
    clock.advance(3)

    assert registry.insert(ref)
    assert registry.oldest().created_at == 3


def test_insert_records_clock_time(make_registry, host, clock):
    registry = make_registry()
    clock.advance(7.5)
    ref = host.spawn()
    registry.insert(ref)

    record = registry.oldest()
    assert record.reference == ref
    assert record.created_at == 7.5


def test_capacity_eviction_of_externally_destroyed_oldest(make_registry, host):
    """Evicting a record whose object is already gone is a safe no-op destroy."""
    registry = make_registry(capacity=1)
    a, b = host.spawn(), host.spawn()
    registry.insert(a)
    host.destroy(a)

    assert registry.insert(b)
    assert registry.references() == [b]


def test_recycled_index_is_not_destroyed_through_stale_handle(make_registry, host):
    """CRITICAL: A stale handle must never destroy the object reusing its index.

    Why: The simulation recycles indices; destroying through the old handle
    would delete some unrelated new object.
    """
    registry = make_registry(capacity=1)
    old = host.spawn()
    registry.insert(old)
    host.destroy(old)
    newcomer = host.spawn()
    assert newcomer.index == old.index
    assert newcomer.generation == old.generation + 1

    registry.insert(host.spawn())

    assert host.is_valid(newcomer), "INVARIANT: recycled slot survives stale eviction"


# Sweep


def test_sweep_empty_registry(make_registry):
    registry = make_registry(lifetime=1)
    assert registry.sweep(1000) == 0
    assert registry.stats.evicted == 0


def test_sweep_without_lifetime_keeps_old_records(make_registry, host):
    registry = make_registry(lifetime=0)
    refs = [host.spawn() for _ in range(3)]
    for ref in refs:
        registry.insert(ref)

    assert registry.sweep(1e9) == 0
    assert registry.references() == refs


def test_sweep_drops_invalid_references_without_destroy(make_registry, host, clock):
    """Objects destroyed externally are forgotten; their recycled slot is untouched."""
    registry = make_registry(lifetime=100)
    gone, kept = host.spawn(), host.spawn()
    registry.insert(gone)
    registry.insert(kept)
    host.destroy(gone)
    recycled = host.spawn()

    assert registry.sweep(clock()) == 1

    assert registry.references() == [kept]
    assert host.is_valid(recycled)
    assert registry.stats.dropped_invalid == 1


def test_sweep_expired_and_invalid_counts_as_invalid(make_registry, host):
    registry = make_registry(lifetime=5)
    ref = host.spawn()
    registry.insert(ref)
    host.destroy(ref)

    assert registry.sweep(10) == 1
    stats = registry.stats
    assert stats.dropped_invalid == 1
    assert stats.evicted_age == 0


def test_sweep_evicts_only_expired(make_registry, host, clock):
    registry = make_registry(lifetime=10)
    early = host.spawn()
    registry.insert(early)
    clock.advance(6)
    late = host.spawn()
    registry.insert(late)

    assert registry.sweep(12) == 1
    assert registry.references() == [late]


def test_second_sweep_is_idempotent(make_registry, host, clock):
    registry = make_registry(lifetime=2)
    for _ in range(3):
        registry.insert(host.spawn())
        clock.advance(1)

    first = registry.sweep(clock())
    second = registry.sweep(clock())

    assert first == 2
    assert second == 0


# Reset


def test_reset_clears_without_destroying(make_registry, host):
    """CRITICAL: Reset forgets every record and destroys nothing.

    Why: The simulation tears objects down itself at round start; destroying
    here would race with that teardown.
    """
    registry = make_registry(capacity=4)
    refs = [host.spawn() for _ in range(4)]
    for ref in refs:
        registry.insert(ref)

    registry.reset()

    assert len(registry) == 0
    assert all(host.is_valid(ref) for ref in refs)
    assert registry.stats.resets == 1


def test_reset_on_empty_registry(make_registry):
    registry = make_registry()
    registry.reset()
    assert len(registry) == 0


# Reconfiguration


def test_smaller_lifetime_is_not_retroactive(make_registry, host, clock):
    registry = make_registry(lifetime=100)
    ref = host.spawn()
    registry.insert(ref)
    clock.advance(50)

    registry.update_config(capacity=5, lifetime=10)

    assert ref in registry, "Lowering lifetime must not evict on its own"
    assert registry.sweep(clock()) == 1


def test_disable_via_update_config_evicts_all(make_registry, host):
    registry = make_registry(capacity=3)
    refs = [host.spawn() for _ in range(3)]
    for ref in refs:
        registry.insert(ref)

    registry.update_config(capacity=0, lifetime=0)

    assert len(registry) == 0
    assert not any(host.is_valid(ref) for ref in refs)
    assert not registry.insert(host.spawn())


def test_growing_capacity_keeps_records(make_registry, host):
    registry = make_registry(capacity=2)
    refs = [host.spawn() for _ in range(2)]
    for ref in refs:
        registry.insert(ref)

    registry.update_config(capacity=4, lifetime=0)
    registry.insert(host.spawn())

    assert registry.references()[:2] == refs
    assert registry.capacity == 4


def test_update_config_logs_change(make_registry, caplog):
    registry = make_registry(capacity=2, lifetime=5)

    with caplog.at_level("INFO", logger="dropreaper.registry.registry"):
        registry.update_config(capacity=3, lifetime=5)
        registry.update_config(capacity=3, lifetime=5)

    changes = [r for r in caplog.records if "bounds changed" in r.getMessage()]
    assert len(changes) == 1


# Read-only helpers


def test_iteration_is_oldest_first_snapshot(make_registry, host):
    registry = make_registry()
    refs = [host.spawn() for _ in range(3)]
    for ref in refs:
        registry.insert(ref)

    seen = []
    for record in registry:
        seen.append(record.reference)
        registry.remove(record.reference)

    assert seen == refs
    assert len(registry) == 0


def test_stats_is_a_snapshot(make_registry, host):
    registry = make_registry()
    before = registry.stats
    registry.insert(host.spawn())

    assert before.inserted == 0
    assert registry.stats.inserted == 1


def test_opaque_references_are_supported(host, clock):
    """The registry accepts any hashable handle the host understands."""
    from dropreaper import DropRegistry

    class IntHost:
        def __init__(self):
            self.alive = {1, 2}

        def is_valid(self, reference):
            return reference in self.alive

        def destroy(self, reference):
            self.alive.discard(reference)

    int_host = IntHost()
    registry = DropRegistry(int_host, capacity=1, clock=clock)
    registry.insert(1)
    registry.insert(2)

    assert int_host.alive == {2}
    assert registry.references() == [2]


def test_eviction_reason_destroy_policy():
    assert EvictionReason.CAPACITY.destroys
    assert EvictionReason.AGE.destroys
    assert EvictionReason.SHRINK.destroys
    assert not EvictionReason.INVALID.destroys


def test_object_ref_str():
    assert str(ObjectRef(index=70, generation=2)) == "#70:2"


# Host failures during sweep


class RefusingHost:
    """Host that raises when asked to destroy or check selected references."""

    def __init__(self, refuse_destroy=(), refuse_check=()):
        self.alive = set()
        self.refuse_destroy = set(refuse_destroy)
        self.refuse_check = set(refuse_check)

    def is_valid(self, reference):
        if reference in self.refuse_check:
            raise RuntimeError("engine lookup failed")
        return reference in self.alive

    def destroy(self, reference):
        if reference in self.refuse_destroy:
            raise RuntimeError("engine refused")
        self.alive.discard(reference)


def test_sweep_continues_past_failed_destroy(clock, caplog):
    """CRITICAL: A destroy that raises drops that record and the sweep carries on.

    Why: One misbehaving object must not pin every later expired object in place.
    """
    from dropreaper import DropRegistry

    host = RefusingHost(refuse_destroy={1})
    host.alive.update({1, 2, 3})
    registry = DropRegistry(host, capacity=5, lifetime=1, clock=clock)
    for ref in (1, 2, 3):
        registry.insert(ref)

    with caplog.at_level("ERROR", logger="dropreaper.registry.registry"):
        assert registry.sweep(10) == 3

    assert len(registry) == 0
    assert host.alive == {1}, "Only the refused object survives"
    assert registry.stats.evicted_age == 3
    assert any("Destroying 1 failed" in r.getMessage() for r in caplog.records)


def test_sweep_keeps_record_when_validity_check_raises(clock):
    from dropreaper import DropRegistry

    host = RefusingHost(refuse_check={1})
    host.alive.update({1, 2})
    registry = DropRegistry(host, capacity=5, lifetime=1, clock=clock)
    registry.insert(1)
    registry.insert(2)

    assert registry.sweep(10) == 1

    assert registry.references() == [1]
    assert host.alive == {1}
