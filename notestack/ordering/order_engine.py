"""
Planning of note reorders over ordering keys, without touching the filesystem.

Notes display in descending key order. Moving a note to a new display index
needs a key strictly between its new neighbors:

- Gap case: if the neighbor above is absent or more than one above the neighbor
  below, the note takes `below + 1` (or 1 at the bottom). Only the moved note is
  renamed, which is why gaps are left alone and reused.
- Dense case: otherwise every note gets a fresh key from a contiguous block above
  the current maximum, in the new display order. New keys never meet old ones, so
  renames can be applied in any order without collisions.

Slugs are never changed by a reorder.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from notestack.errors import InvalidInput, InvalidState
from notestack.file_storage.note_filenames import format_filename, MAX_ORDERING_KEY


@dataclass(frozen=True)
class OrderedEntry:
    key: int
    slug: str
    path: Optional[Path] = None


@dataclass(frozen=True)
class Rename:
    entry: OrderedEntry
    new_key: int

    @property
    def new_filename(self) -> str:
        return format_filename(self.new_key, self.entry.slug)


@dataclass
class ReorderPlan:
    moved: OrderedEntry
    new_key: int
    renames: List[Rename] = field(default_factory=list)
    dense: bool = False

    @property
    def is_noop(self) -> bool:
        return not self.renames


def display_order(entries: Sequence[OrderedEntry]) -> List[OrderedEntry]:
    """
    Highest key first. Equal keys (only possible if files were named by hand) fall
    back to slug order so the result is deterministic.
    """
    return sorted(entries, key=lambda e: (e.key, e.slug), reverse=True)


def _check_key(key: int) -> int:
    if key > MAX_ORDERING_KEY:
        raise InvalidState(f"Ordering keys exhausted (would need key {key})")
    return key


def plan_reorder(
    entries: Sequence[OrderedEntry], source_idx: int, new_index: int
) -> ReorderPlan:
    """
    Plan moving `entries[source_idx]` to display position `new_index`. `entries` must
    already be in display order. Indices past the end mean the bottom of the list.
    """
    count = len(entries)
    if not 0 <= source_idx < count:
        raise InvalidInput(f"Source index out of range: {source_idx} (have {count} notes)")
    if new_index < 0:
        raise InvalidInput(f"Target index must not be negative: {new_index}")

    moved = entries[source_idx]
    if new_index == source_idx or count < 2:
        return ReorderPlan(moved, moved.key)

    rest = list(entries[:source_idx]) + list(entries[source_idx + 1 :])
    insert_idx = min(new_index, len(rest))
    if insert_idx == source_idx:
        return ReorderPlan(moved, moved.key)

    above = rest[insert_idx - 1].key if insert_idx > 0 else None
    below = rest[insert_idx].key if insert_idx < len(rest) else 0

    if above is None or above - below > 1:
        new_key = _check_key(below + 1)
        renames = [] if new_key == moved.key else [Rename(moved, new_key)]
        return ReorderPlan(moved, new_key, renames)

    new_order = list(rest)
    new_order.insert(insert_idx, moved)
    base = max(e.key for e in entries) + 1
    _check_key(base + count - 1)

    renames: List[Rename] = []
    for position, entry in enumerate(new_order):
        new_key = base + (count - 1 - position)
        if entry is not moved and new_key != entry.key:
            renames.append(Rename(entry, new_key))

    # The moved note is renamed last. Its key is above the old maximum so it always changes.
    moved_key = base + (count - 1 - insert_idx)
    renames.append(Rename(moved, moved_key))

    return ReorderPlan(moved, moved_key, renames, dense=True)


def apply_plan_keys(entries: Sequence[OrderedEntry], plan: ReorderPlan) -> List[OrderedEntry]:
    """
    The entries as they would be after the plan, in display order.
    """
    new_keys = {id(r.entry): r.new_key for r in plan.renames}
    return display_order(
        [OrderedEntry(new_keys.get(id(e), e.key), e.slug, e.path) for e in entries]
    )


## Tests


def _entries(*keys: int) -> List[OrderedEntry]:
    return display_order([OrderedEntry(k, f"note{k}") for k in keys])


def _slugs(entries: Sequence[OrderedEntry]) -> List[str]:
    return [e.slug for e in entries]


def test_gap_case_to_top():
    entries = _entries(5, 3, 1)
    plan = plan_reorder(entries, 2, 0)
    assert not plan.dense
    assert plan.new_key == 6
    assert [(r.entry.key, r.new_key) for r in plan.renames] == [(1, 6)]
    assert _slugs(apply_plan_keys(entries, plan)) == ["note1", "note5", "note3"]


def test_gap_case_between():
    entries = _entries(9, 5, 2)
    plan = plan_reorder(entries, 0, 1)
    # Moving 9 below 5: neighbors are 5 and 2, so it takes 3.
    assert plan.new_key == 3
    assert len(plan.renames) == 1
    assert _slugs(apply_plan_keys(entries, plan)) == ["note5", "note9", "note2"]


def test_gap_case_to_bottom():
    entries = _entries(8, 6, 4)
    plan = plan_reorder(entries, 0, 2)
    assert plan.new_key == 1
    assert not plan.dense
    # Past the end is clamped to the bottom.
    assert plan_reorder(entries, 0, 99).new_key == 1


def test_move_to_top_is_highest_plus_one():
    entries = _entries(5, 4, 3)
    plan = plan_reorder(entries, 2, 0)
    assert plan.new_key == 6
    assert [(r.entry.key, r.new_key) for r in plan.renames] == [(3, 6)]
    assert _slugs(apply_plan_keys(entries, plan)) == ["note3", "note5", "note4"]


def test_dense_case():
    entries = _entries(5, 4, 3)
    plan = plan_reorder(entries, 0, 1)
    assert plan.dense
    result = apply_plan_keys(entries, plan)
    assert _slugs(result) == ["note4", "note5", "note3"]
    assert [e.key for e in result] == [8, 7, 6]
    # Moved note is renamed last.
    assert plan.renames[-1].entry.slug == "note5"
    assert plan.new_key == 7


def test_dense_case_adjacent_gap_of_one():
    # 4 and 3 differ by exactly one, so 3 + 1 would collide with 4.
    entries = _entries(10, 4, 3)
    plan = plan_reorder(entries, 0, 1)
    assert plan.dense
    result = apply_plan_keys(entries, plan)
    assert _slugs(result) == ["note4", "note10", "note3"]
    assert [e.key for e in result] == [13, 12, 11]

    # Below the last note there is room down to 1.
    assert not plan_reorder(entries, 0, 2).dense


def test_dense_keys_distinct_and_above_old_max():
    entries = _entries(7, 6, 5, 4, 3, 2, 1)
    for source in range(len(entries)):
        for target in range(len(entries)):
            plan = plan_reorder(entries, source, target)
            result = apply_plan_keys(entries, plan)
            keys = [e.key for e in result]
            assert len(set(keys)) == len(keys)
            expected = _slugs(entries)
            expected.insert(target, expected.pop(source))
            assert _slugs(result) == expected
            if plan.dense:
                assert min(r.new_key for r in plan.renames) > 7
                assert [r.entry for r in plan.renames].count(entries[source]) == 1
                assert plan.renames[-1].entry == entries[source]


def test_noop():
    entries = _entries(3, 2, 1)
    assert plan_reorder(entries, 1, 1).is_noop
    assert plan_reorder(entries, 2, 5).is_noop
    assert plan_reorder(_entries(4), 0, 3).is_noop


def test_invalid_indices():
    import pytest

    entries = _entries(3, 2, 1)
    with pytest.raises(InvalidInput):
        plan_reorder(entries, 3, 0)
    with pytest.raises(InvalidInput):
        plan_reorder(entries, 0, -1)
