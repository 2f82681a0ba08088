import copy
import hashlib
from concurrent.futures import ThreadPoolExecutor

from structdigest import compute_digest, sha256_digest


def _heterogeneous():
    return {
        "foo": "bar",
        "bar": 0,
        42: "answer",
        3.14: "pi",
        True: "boolean",
        "apple": 1,
        ("t", 1): [1, 2, {"nested": None}],
        frozenset({"x", "y"}): {"a", "b", "c"},
    }


def test_map_digest_stable_over_500_runs():
    value = _heterogeneous()
    first = compute_digest(value, hashlib.sha256())
    for i in range(500):
        again = compute_digest(value, hashlib.sha256())
        assert again == first, f"digest changed on iteration {i}"


def test_equal_copies_hash_alike():
    a = _heterogeneous()
    b = copy.deepcopy(a)
    assert sha256_digest(a) == sha256_digest(b)


def test_insertion_order_does_not_matter():
    a = {"a": 1, "b": 2}
    b = {}
    b["b"] = 2
    b["a"] = 1
    assert sha256_digest(a) == sha256_digest(b)


def test_set_order_does_not_matter():
    a = {"x", "y", "z", 1, 2.5}
    b = set(reversed(sorted(a, key=repr)))
    assert sha256_digest(a) == sha256_digest(b)


def test_concurrent_calls_are_independent():
    value = _heterogeneous()
    expected = sha256_digest(value)
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: sha256_digest(value), range(64)))
    assert all(r == expected for r in results)
