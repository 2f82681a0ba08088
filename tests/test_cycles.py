import dataclasses
from typing import List, Optional

from structdigest import CycleGuard, Ref, compute_digest, sha256_digest
from tests.utils_digest import raw


@dataclasses.dataclass
class Node:
    value: int
    next: Optional["Node"] = None
    children: List["Node"] = dataclasses.field(default_factory=list)


def _self_loop():
    n = Node(1)
    n.next = n
    return n


def _ring(size):
    nodes = [Node(i) for i in range(size)]
    for a, b in zip(nodes, nodes[1:] + nodes[:1]):
        a.next = b
    return nodes[0]


def test_self_referential_record_terminates():
    d1 = sha256_digest(_self_loop())
    d2 = sha256_digest(_self_loop())
    assert d1 == d2


def test_ring_is_reproducible_and_size_sensitive():
    assert sha256_digest(_ring(5)) == sha256_digest(_ring(5))
    assert sha256_digest(_ring(5)) != sha256_digest(_ring(6))


def test_self_referential_list_and_dict():
    a = [1]
    a.append(a)
    d = {"k": 1}
    d["self"] = d
    assert sha256_digest(a) == sha256_digest(a)
    assert sha256_digest(d) == sha256_digest(d)


def test_reference_cycle_emits_nothing_on_back_edge():
    r = Ref()
    r.target = [r]
    # outer Ref is transparent; the inner occurrence was already visited
    assert raw(r) == raw([Ref.nil()])


def test_self_pointing_reference():
    r = Ref()
    r.target = r
    assert raw(r) == b""


def test_shared_object_second_occurrence_emits_nothing():
    shared = [1, 2]
    aliased = [shared, shared]
    assert raw(aliased) == raw([[1, 2], Ref.nil()])
    assert raw(aliased) != raw([[1, 2], [1, 2]])


def test_immutable_values_are_not_deduplicated():
    t = (1, 2)
    assert raw([t, t]) == raw([(1, 2), (1, 2)])


def test_visited_state_is_fresh_per_call(buffer_sink):
    shared = [1]
    compute_digest([shared], buffer_sink)
    assert raw([shared]) == raw([[1]])


def test_guard_identity_and_pinning():
    g = CycleGuard()
    obj = [1]
    assert g.enter(obj)
    assert not g.enter(obj)
    assert obj in g
    r1, r2 = Ref(1), Ref(1)
    assert g.enter(r1)
    assert g.enter(r2)
    assert not g.enter(r1)
    assert len(g) == 3
