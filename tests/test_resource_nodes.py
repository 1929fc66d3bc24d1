from __future__ import annotations

import random

from grindworld.adapters import InMemoryInventory
from grindworld.models import LootEntry, Vector3
from grindworld.resource_nodes import NODE_TEMPLATES, ResourceNodeStore


class RecordingRenderer:
    def __init__(self) -> None:
        self.events: list[tuple[str, object]] = []

    def flash_damage(self, visual) -> None:
        self.events.append(("flash", visual))

    def destruction_burst(self, visual, color: str) -> None:
        self.events.append(("burst", color))

    def detach(self, visual) -> None:
        self.events.append(("detach", visual))


class ExplodingRenderer:
    def flash_damage(self, visual) -> None:
        raise RuntimeError("gpu lost")

    def destruction_burst(self, visual, color: str) -> None:
        raise RuntimeError("gpu lost")

    def detach(self, visual) -> None:
        raise RuntimeError("gpu lost")


def _store(seed: int = 7, renderer=None) -> tuple[ResourceNodeStore, InMemoryInventory]:
    inventory = InMemoryInventory()
    return ResourceNodeStore(inventory, renderer=renderer, rng=random.Random(seed)), inventory


def test_create_node_uses_type_template() -> None:
    store, _ = _store()

    node = store.create_resource_node("c1", "chest", Vector3(1, 0, 1))

    assert node.max_hp == node.current_hp == 50
    assert [entry.item_id for entry in node.drops] == ["iron_ore", "stone_brick", "wood_log", "flint"]
    assert store.get_node("c1") is node


def test_unknown_type_falls_back_to_tree_template() -> None:
    store, _ = _store()

    node = store.create_resource_node("x", "obelisk", Vector3())

    assert node.type == "obelisk"
    assert node.max_hp == NODE_TEMPLATES["tree"].hp


def test_geological_and_container_nodes_outlast_organic_ones() -> None:
    hp = {name: template.hp for name, template in NODE_TEMPLATES.items()}

    assert hp["crystal"] > hp["rock"] > hp["tree"]
    assert hp["chest"] > hp["plant"] > hp["mushroom"]
    assert hp["crate"] > hp["berry_bush"]


def test_chest_survives_49_and_dies_at_50() -> None:
    store, _ = _store()
    store.create_resource_node("a", "chest", Vector3())
    store.create_resource_node("b", "chest", Vector3())

    assert store.damage_node("a", 49) is False
    assert store.get_node("a").current_hp == 1

    assert store.damage_node("b", 50) is True
    assert store.get_node("b") is None


def test_damage_is_monotonic_and_never_negative() -> None:
    store, _ = _store()
    node = store.create_resource_node("r", "rock", Vector3())
    history = [node.current_hp]

    for amount in (30, -20, 0, 45):
        store.damage_node("r", amount)
        history.append(node.current_hp)

    assert history == sorted(history, reverse=True)

    assert store.damage_node("r", 1_000) is True
    assert node.current_hp == 0


def test_damage_unknown_node_is_noop() -> None:
    store, inventory = _store()

    assert store.damage_node("ghost", 10) is False
    assert inventory.snapshot() == {}


def test_boundary_drop_chances_are_deterministic() -> None:
    for seed in range(50):
        store, inventory = _store(seed)
        node = store.create_resource_node("n", "crate", Vector3())
        node.drops = [LootEntry("gem", 2, 1.0), LootEntry("dust", 1, 0.0)]

        assert store.damage_node("n", 999) is True
        assert inventory.snapshot() == {"gem": 2}


def test_interior_drop_chance_matches_probability() -> None:
    store, inventory = _store(seed=1234)
    trials = 4_000
    for index in range(trials):
        node = store.create_resource_node(f"n{index}", "mushroom", Vector3())
        node.drops = [LootEntry("spore", 1, 0.25)]
        store.damage_node(node.id, 10)

    rate = inventory.quantity("spore") / trials
    assert 0.22 < rate < 0.28


def test_loot_replays_identically_under_same_seed() -> None:
    results = []
    for _ in range(2):
        store, inventory = _store(seed=99)
        for index in range(20):
            store.create_resource_node(f"t{index}", "tree", Vector3())
            store.damage_node(f"t{index}", 100)
        results.append(inventory.snapshot())

    assert results[0] == results[1]
    assert results[0]["wood_log"] >= 60


def test_renderer_receives_feedback_and_detach() -> None:
    renderer = RecordingRenderer()
    store, _ = _store(renderer=renderer)
    store.create_resource_node("b", "berry_bush", Vector3(), visual="mesh-b")
    store.create_resource_node("plain", "bush", Vector3())

    store.damage_node("b", 5)
    store.damage_node("b", 15)
    store.damage_node("plain", 100)

    assert renderer.events == [
        ("flash", "mesh-b"),
        ("flash", "mesh-b"),
        ("burst", "#228B22"),
        ("detach", "mesh-b"),
    ]


def test_renderer_failures_do_not_affect_state() -> None:
    store, inventory = _store(renderer=ExplodingRenderer())
    store.create_resource_node("m", "mushroom", Vector3(), visual=object())

    assert store.damage_node("m", 10) is True
    assert store.get_node("m") is None
    assert inventory.quantity("berry") == 2


def test_nodes_in_range_is_inclusive() -> None:
    store, _ = _store()
    store.create_resource_node("edge", "rock", Vector3(3, 0, 4))
    store.create_resource_node("far", "rock", Vector3(3, 0, 4.01))
    store.create_resource_node("near", "rock", Vector3(0, 0, 1))

    ids = {node.id for node in store.get_nodes_in_range(Vector3(), 5)}

    assert ids == {"edge", "near"}


def test_remove_and_clear() -> None:
    renderer = RecordingRenderer()
    store, _ = _store(renderer=renderer)
    store.create_resource_node("a", "log", Vector3(), visual="mesh-a")
    store.create_resource_node("b", "log", Vector3(), visual="mesh-b")
    store.create_resource_node("c", "log", Vector3())

    assert store.remove_node("a") is True
    assert store.remove_node("b", detach=False) is True
    assert store.remove_node("a") is False
    assert renderer.events == [("detach", "mesh-a")]

    store.clear()
    assert store.get_all_nodes() == []


def test_duplicate_ids_overwrite() -> None:
    store, _ = _store()
    store.create_resource_node("dup", "plant", Vector3())
    store.create_resource_node("dup", "crystal", Vector3())

    assert len(store) == 1
    assert store.get_node("dup").type == "crystal"
