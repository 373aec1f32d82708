"""Tests for the node liveness registry."""
from concurrent.futures import ThreadPoolExecutor

from meshcoord.models import NodeStatus
from meshcoord.stores.node_registry import NodeRegistry


def active_ids(registry):
    return {n.node_id for n in registry.get_active_nodes()}


def test_register_then_mark_inactive(make_node):
    registry = NodeRegistry()
    registry.register_node(make_node("n1"))
    assert "n1" in active_ids(registry)

    registry.mark_node_inactive("n1")
    assert "n1" not in active_ids(registry)
    assert registry.count() == 1


def test_reregistration_overwrites_entirely(make_node):
    registry = NodeRegistry()
    registry.register_node(make_node("n1", ts=500))
    registry.register_node(make_node("n1", status=NodeStatus.INACTIVE, ts=100))

    assert registry.count() == 1
    assert registry.get_active_nodes() == []

    registry.register_node(make_node("n1", ts=50))
    [node] = registry.get_active_nodes()
    # Older last_active still wins because it arrived last
    assert node == make_node("n1", ts=50)


def test_inactive_nodes_are_never_listed(make_node):
    registry = NodeRegistry()
    registry.register_node(make_node("a"))
    registry.register_node(make_node("b", status=NodeStatus.INACTIVE))
    registry.register_node(make_node("c"))
    registry.mark_node_inactive("c")

    listed = registry.get_active_nodes()
    assert {n.node_id for n in listed} == {"a"}
    assert all(n.status is NodeStatus.ACTIVE for n in listed)
    assert registry.count_active() == 1


def test_mark_unknown_node_is_a_silent_noop(make_node):
    registry = NodeRegistry()
    registry.register_node(make_node("known"))

    registry.mark_node_inactive("ghost")

    assert registry.count() == 1
    assert active_ids(registry) == {"known"}


def test_mark_inactive_only_touches_the_named_node(make_node):
    registry = NodeRegistry()
    registry.register_node(make_node("n1"))
    registry.register_node(make_node("n2", ts=900))

    registry.mark_node_inactive("n1")

    [node] = registry.get_active_nodes()
    assert node == make_node("n2", ts=900)


def test_empty_registry_lists_nothing():
    registry = NodeRegistry()
    assert registry.get_active_nodes() == []
    assert registry.count() == 0


def test_returned_nodes_are_copies(make_node):
    registry = NodeRegistry()
    original = make_node("n1")
    registry.register_node(original)

    [listed] = registry.get_active_nodes()
    assert listed == original
    assert listed is not original


def test_concurrent_registrations(make_node):
    registry = NodeRegistry()
    nodes = [make_node(f"n{i}") for i in range(200)]

    with ThreadPoolExecutor(max_workers=16) as pool:
        list(pool.map(registry.register_node, nodes))
        list(pool.map(registry.mark_node_inactive, [f"n{i}" for i in range(0, 200, 2)]))

    assert registry.count() == 200
    assert active_ids(registry) == {f"n{i}" for i in range(1, 200, 2)}
