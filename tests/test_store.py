import pytest

from driftcanvas.model.lifecycle import LifecycleState, Phase
from driftcanvas.model.store import ItemStore

from conftest import make_item


def _expire(item) -> None:
    item.apply_lifecycle(LifecycleState(Phase.EXPIRED, mosaic_level=1.0, fade_opacity=0.0))


def test_append_puts_item_on_top() -> None:
    store = ItemStore()
    a, b = make_item(), make_item()
    store.append(a)
    store.append(b)
    assert store.ids() == [a.id, b.id]
    assert next(store.iterate_top_to_bottom()) is b
    assert next(store.iterate_bottom_to_top()) is a


def test_ids_are_unique() -> None:
    assert len({make_item().id for _ in range(100)}) == 100


def test_append_rejects_duplicate_id() -> None:
    store = ItemStore()
    item = make_item()
    store.append(item)
    with pytest.raises(ValueError):
        store.append(item)


def test_raise_to_top_moves_item_last() -> None:
    store = ItemStore()
    a, b, c = make_item(), make_item(), make_item()
    for it in (a, b, c):
        store.append(it)

    store.raise_to_top(a.id)

    assert store.ids() == [b.id, c.id, a.id]


def test_raise_unknown_id_is_noop() -> None:
    store = ItemStore()
    a = make_item()
    store.append(a)
    store.raise_to_top("missing")
    assert store.ids() == [a.id]


def test_find_by_id() -> None:
    store = ItemStore()
    a = make_item()
    store.append(a)
    assert store.find_by_id(a.id) is a
    assert store.find_by_id("missing") is None
    assert store.find_by_id(None) is None
    assert a.id in store


def test_remove_expired_keeps_survivor_order() -> None:
    store = ItemStore()
    items = [make_item() for _ in range(4)]
    for it in items:
        store.append(it)
    _expire(items[1])
    _expire(items[3])

    removed = store.remove_expired()

    assert removed == [items[1], items[3]]
    assert store.ids() == [items[0].id, items[2].id]


def test_remove_if_asks_the_predicate_once_per_item() -> None:
    store = ItemStore()
    items = [make_item() for _ in range(4)]
    for it in items:
        store.append(it)

    # Answers flip on every call, so a second pass would disagree with the first.
    calls = []

    def flaky(item) -> bool:
        calls.append(item)
        return len(calls) % 2 == 1

    removed = store.remove_if(flaky)
    survivors = list(store.iterate_bottom_to_top())

    assert calls == items
    assert removed == [items[0], items[2]]
    assert survivors == [items[1], items[3]]
    assert len(removed) + len(survivors) == len(items)


def test_iteration_is_a_snapshot() -> None:
    store = ItemStore()
    a = make_item()
    store.append(a)

    seen = []
    for it in store.iterate_bottom_to_top():
        seen.append(it)
        store.append(make_item())

    assert seen == [a]
    assert len(store) == 2


def test_frame_colors_cycle_by_creation_order() -> None:
    store = ItemStore()
    assert [store.next_frame_color_index(3) for _ in range(5)] == [0, 1, 2, 0, 1]
