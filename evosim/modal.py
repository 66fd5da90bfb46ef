"""Finding the most common genome among the slots of a grid square."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from typing import Protocol


class Slot(Protocol):
    """A critter slot: alive when ``age`` is above zero."""

    age: int
    genome: Sequence[int]


def find_modal_genome(slots: Sequence[Slot], words_in_use: Sequence[int]) -> int | None:
    """Return the index of the first living slot carrying the modal genome.

    Genomes are compared on ``words_in_use`` only. Ties go to the genome seen
    first. Returns None when no slot is alive.
    """
    words = list(words_in_use)

    def key(slot: Slot) -> tuple[int, ...]:
        return tuple(slot.genome[index] for index in words)

    counts = Counter(key(slot) for slot in slots if slot.age > 0)
    if not counts:
        return None
    modal = max(counts, key=counts.__getitem__)
    return next(
        index for index, slot in enumerate(slots) if slot.age > 0 and key(slot) == modal
    )