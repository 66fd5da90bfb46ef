"""A layered hash table of genomes, counting repeats and keeping insertion order."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field

BinFunction = Callable[[Sequence[int], int], int]


@dataclass(eq=False)
class BinEntry:
    """One distinct genome in the table, with how often and where it occurs."""

    genome: tuple[int, ...]
    occurrence_count: int = 1
    positions: list[int] = field(default_factory=list)
    group: int = -1


@dataclass(eq=False)
class GroupData:
    """A group of related genomes, later assigned to a species."""

    group_id: int
    genome_count: int = 0
    occurrence_count: int = 0
    modal_genome: BinEntry | None = None
    species_id: int = -1
    log_species: object | None = None
    all_genomes: list[BinEntry] = field(default_factory=list)


@dataclass(eq=False)
class _Bin:
    entries: list[BinEntry] = field(default_factory=list)
    raw: list[BinEntry] = field(default_factory=list)
    sub_hash: GenomeHashTable | None = None


class GenomeHashTable:
    """Hash table keyed on a bin function of the genome, such as a bit count.

    Within a bin, entries are searched linearly and a repeat moves one place
    towards the front when it outnumbers its neighbour, so common genomes are
    found first. A bin that grows beyond ``max_bin_entries`` is replaced by a
    table one level deeper, as long as ``bin_counts`` has a level for it.
    ``bin_of(genome, level)`` gives the bin of a genome at a level, and
    ``bin_counts[level]`` the number of bins there. The top level also keeps
    every distinct genome of each bin in insertion order.
    """

    def __init__(
        self,
        bin_counts: Sequence[int],
        bin_of: BinFunction,
        max_bin_entries: int,
        level: int = 0,
    ) -> None:
        counts = list(bin_counts)
        if not 0 <= level < len(counts):
            raise ValueError(f"level {level} has no bin count in {counts}")
        if counts[level] < 1:
            raise ValueError(f"level {level} needs at least one bin")
        self.bin_counts = counts
        self.bin_of = bin_of
        self.max_bin_entries = max_bin_entries
        self.level = level
        self.bins = counts[level]
        self.bin_data = [_Bin() for _ in range(self.bins)]
        self.raw_count = 0
        self.insert_count = 0

    def _bin_index(self, genome: Sequence[int]) -> int:
        index = self.bin_of(genome, self.level)
        if not 0 <= index < self.bins:
            raise ValueError(f"bin {index} is outside 0..{self.bins - 1} at level {self.level}")
        return index

    def _record_raw(self, bin_data: _Bin, entry: BinEntry) -> None:
        if self.level == 0:
            self.raw_count += 1
            bin_data.raw.append(entry)

    def _can_split(self) -> bool:
        return self.level + 1 < len(self.bin_counts)

    def insert(self, genome: Sequence[int], position: int) -> BinEntry | None:
        """Add an occurrence of ``genome`` at ``position``.

        Returns the new entry when the genome was not yet present, or None
        when an existing entry's count was increased instead.
        """
        self.insert_count += 1
        key = tuple(genome)
        bin_data = self.bin_data[self._bin_index(key)]

        if bin_data.sub_hash is not None:
            new_entry = bin_data.sub_hash.insert(key, position)
            if new_entry is not None:
                self._record_raw(bin_data, new_entry)
            return new_entry

        entries = bin_data.entries
        for index, entry in enumerate(entries):
            if entry.genome == key:
                entry.occurrence_count += 1
                entry.positions.append(position)
                if index > 0 and entry.occurrence_count > entries[index - 1].occurrence_count:
                    entries[index - 1], entries[index] = entry, entries[index - 1]
                return None

        if len(entries) > self.max_bin_entries and self._can_split():
            sub_hash = GenomeHashTable(
                self.bin_counts, self.bin_of, self.max_bin_entries, self.level + 1
            )
            bin_data.sub_hash = sub_hash
            for entry in entries:
                sub_hash.copy_entry_rehashed(entry)
            new_entry = sub_hash.insert(key, position)
            if new_entry is not None:
                self._record_raw(bin_data, new_entry)
            entries.clear()
            return new_entry

        new_entry = BinEntry(genome=key, positions=[position])
        self._record_raw(bin_data, new_entry)
        entries.append(new_entry)
        return new_entry

    def copy_entry_rehashed(self, entry: BinEntry) -> None:
        """Place an existing entry into the bin it falls in at this level."""
        self.bin_data[self._bin_index(entry.genome)].entries.append(entry)

    def __contains__(self, genome: object) -> bool:
        if not isinstance(genome, Sequence):
            return False
        key = tuple(genome)
        bin_data = self.bin_data[self._bin_index(key)]
        if bin_data.sub_hash is not None:
            return key in bin_data.sub_hash
        return any(entry.genome == key for entry in bin_data.entries)

    def entry_by_index(self, bin_index: int, i: int) -> BinEntry | None:
        """Return the ``i``-th distinct genome added to a top-level bin, or None."""
        raw = self.bin_data[bin_index].raw
        if not 0 <= i < len(raw):
            return None
        return raw[i]

    def _entries(self) -> Iterator[BinEntry]:
        for bin_data in self.bin_data:
            if bin_data.sub_hash is not None:
                yield from bin_data.sub_hash._entries()
            else:
                yield from bin_data.entries

    def sum_frequencies(self, group: int) -> tuple[float, list[list[float]]]:
        """Count occurrences of genomes in ``group`` and the bits they carry.

        Returns the total occurrence count and, for each genome word, 32
        weighted counts of set bits, most significant bit first.
        """
        total = 0.0
        frequencies: list[list[float]] = []
        for entry in self._entries():
            if entry.group != group:
                continue
            weight = float(entry.occurrence_count)
            total += weight
            while len(frequencies) < len(entry.genome):
                frequencies.append([0.0] * 32)
            for word, counts in zip(entry.genome, frequencies):
                for bit in range(32):
                    if word & (1 << (31 - bit)):
                        counts[bit] += weight
        return total, frequencies