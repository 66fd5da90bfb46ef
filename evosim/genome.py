"""Variable-length genomes made of 32-bit words."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

WORD_MASK = 0xFFFFFFFF


def bit_count(value: int) -> int:
    """Return the number of set bits in the low 32 bits of ``value``."""
    return bin(value & WORD_MASK).count("1")


class Genome:
    """A genome of unsigned 32-bit words that can be used as a dict key.

    Two genomes are equal when their words are equal. The hash is the first
    word, so genomes that differ only in later words share a bucket.
    """

    __slots__ = ("words",)

    def __init__(self, words: Iterable[int]) -> None:
        values = list(words)
        for word in values:
            if not 0 <= word <= WORD_MASK:
                raise ValueError(f"genome word {word!r} is not an unsigned 32-bit value")
        self.words = values

    def copy(self) -> Genome:
        """Return a deep copy that shares no storage with this genome."""
        return Genome(self.words)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Genome):
            return NotImplemented
        return self.words == other.words

    def __hash__(self) -> int:
        return self.words[0] if self.words else 0

    def __len__(self) -> int:
        return len(self.words)

    def __iter__(self) -> Iterator[int]:
        return iter(self.words)

    def __getitem__(self, index: int) -> int:
        return self.words[index]

    def __repr__(self) -> str:
        return f"Genome({self.words!r})"