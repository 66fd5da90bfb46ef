"""Species lineage records and Newick/CSV tree output."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from evosim.logspeciesdata import LogSpeciesDataItem

_U64 = (1 << 64) - 1

GenomeFormatter = Callable[[Sequence[int], int], str]


@dataclass(eq=False)
class LogSpecies:
    """A species as recorded for output, with its child lineages."""

    max_size: int = 0
    id: int = 0
    time_of_first_appearance: int = 0
    time_of_last_appearance: int = 0
    parent: LogSpecies | None = None
    data_items: list[LogSpeciesDataItem] = field(default_factory=list)
    children: list[LogSpecies] = field(default_factory=list)

    def max_size_including_children(self) -> int:
        """Largest maximum size of this species and all its descendants."""
        return max(
            [self.max_size, *(c.max_size_including_children() for c in self.children)]
        )

    def is_fluff(self, min_species_size: int, exclude_with_descendants: bool) -> bool:
        """Whether the species should be left out of tree output.

        A species seen in only one iteration is always fluff. Otherwise it is
        fluff when its size never exceeded ``min_species_size``; unless
        ``exclude_with_descendants`` is set, a species with children is kept.
        """
        if self.time_of_first_appearance == self.time_of_last_appearance:
            return True
        if self.children and not exclude_with_descendants:
            return False
        size = self.max_size
        if exclude_with_descendants:
            size = self.max_size_including_children()
        return size <= min_species_size


class TreeWriter:
    """Writes species trees as Newick strings or per-iteration CSV data.

    Each node written consumes the next output identifier, starting from
    ``start_id``.
    """

    def __init__(
        self,
        min_species_size: int,
        exclude_with_descendants: bool = False,
        genome_size: int = 1,
        genome_formatter: GenomeFormatter | None = None,
        start_id: int = 0,
    ) -> None:
        self.min_species_size = min_species_size
        self.exclude_with_descendants = exclude_with_descendants
        self.genome_size = genome_size
        self.genome_formatter = genome_formatter
        self.next_id = start_id

    def _take_id(self) -> int:
        value = self.next_id
        self.next_id += 1
        return value

    def _is_fluff(self, species: LogSpecies) -> bool:
        return species.is_fluff(self.min_species_size, self.exclude_with_descendants)

    def _next_generation(self, species: LogSpecies, child_index: int) -> tuple[bool, int, int]:
        """Group children born at the same time, skipping fluff.

        Returns whether a group was found, its birth time, and the index of
        the first child after the group.
        """
        next_index = len(species.children)
        generation = 0
        valid = False
        for index, child in enumerate(species.children[child_index:], start=child_index):
            if not valid or child.time_of_first_appearance == generation:
                if not self._is_fluff(child):
                    valid = True
                    generation = child.time_of_first_appearance
            else:
                next_index = index
                break
        return valid, generation, next_index

    def newick(self, species: LogSpecies, child_index: int = 0, last_time_base: int = 0) -> str:
        """Return the Newick description of ``species`` and its lineages."""
        species_id = self._take_id()
        if last_time_base == 0:
            last_time_base = species.time_of_first_appearance
        if len(species.children) <= child_index:
            length = (species.time_of_last_appearance - last_time_base) & _U64
            return f"ID{species_id}-{species.max_size}:{length}"

        valid, generation, next_index = self._next_generation(species, child_index)
        if not valid:
            length = (species.time_of_last_appearance - last_time_base) & _U64
            return f"ID{species_id}-{species.max_size}:{length}"

        length = (generation - last_time_base) & _U64
        parts = [self.newick(species, next_index, generation)]
        parts.extend(
            self.newick(child, 0, generation)
            for child in species.children[child_index:next_index]
            if not self._is_fluff(child)
        )
        return f"({','.join(parts)})ID{species_id}-{species.max_size}:{length}"

    def data(
        self,
        species: LogSpecies,
        child_index: int = 0,
        last_time_base: int = 0,
        parent_id: int = 0,
    ) -> str:
        """Return CSV data lines for ``species`` and all its lineages."""
        species_id = self._take_id()
        if last_time_base == 0:
            last_time_base = species.time_of_first_appearance
        if len(species.children) <= child_index:
            return self.data_line(
                species, last_time_base, species.time_of_last_appearance, species_id, parent_id
            )

        valid, generation, next_index = self._next_generation(species, child_index)
        if not valid:
            return self.data_line(
                species, last_time_base, species.time_of_last_appearance, species_id, parent_id
            )

        parts = [self.data(species, next_index, generation, species_id)]
        parts.extend(
            self.data(child, 0, generation, species_id)
            for child in species.children[child_index:next_index]
            if not self._is_fluff(child)
        )
        parts.append(self.data_line(species, last_time_base, generation, species_id, parent_id))
        return "".join(parts)

    def data_line(
        self,
        species: LogSpecies,
        start: int,
        end: int,
        species_id: int,
        parent_id: int,
    ) -> str:
        """Return one CSV line per data item with ``start <= iteration < end``."""
        lines = []
        for item in species.data_items:
            if not start <= item.iteration < end:
                continue
            if self.genome_formatter is None:
                raise ValueError("a genome formatter is needed to write species data")
            words = item.sample_multi_word_genome
            genome = "_".join(f"W{i}_{words[i]}" for i in range(self.genome_size))
            genome_string = self.genome_formatter(words, self.genome_size)
            lines.append(
                f"{species_id},{parent_id},{item.iteration},{item.size},"
                f"{genome},{genome_string},{item.shared_csv_output()}\n"
            )
        return "".join(lines)