"""Genome-to-genome interactions that change fitness or transfer energy."""

from __future__ import annotations

from collections.abc import Sequence

from evosim.genome import WORD_MASK, bit_count


def _rotate_right(word: int) -> int:
    return (word >> 1) | ((word & 1) << 31)


def _rotate_left(word: int) -> int:
    return ((word << 1) & WORD_MASK) | (word >> 31)


def _truncating_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


class InteractionSystem:
    """Scores interactions between two genomes on the words in use.

    ``interaction`` is a 256 x 256 table indexed by byte pairs, used in block
    mode; ``genome_words`` lists the indices of the genome words considered.
    """

    def __init__(self, interaction: Sequence[Sequence[int]], genome_words: Sequence[int]) -> None:
        self.interaction = interaction
        self.genome_words = list(genome_words)

    def _score(self, genome: Sequence[int], target_genome: Sequence[int], interact_blocks: bool) -> int:
        total = 0
        for index in self.genome_words:
            own = genome[index]
            target = target_genome[index]
            if interact_blocks:
                for _ in range(4):
                    total += self.interaction[own & 0xFF][target & 0xFF]
                    own >>= 8
                    target >>= 8
            else:
                total += bit_count(_rotate_right(own) ^ target)
                total -= bit_count(_rotate_left(own) ^ target)
        return total

    def interact_fitness(
        self,
        genome: Sequence[int],
        target_genome: Sequence[int],
        own_fitness: int,
        interact_blocks: bool,
    ) -> int:
        """Return ``own_fitness`` changed by the interaction, never below zero."""
        return max(0, own_fitness + self._score(genome, target_genome, interact_blocks))

    def interact_energy(
        self,
        genome: Sequence[int],
        target_genome: Sequence[int],
        min_predator_delta: int,
        target_energy: int,
        interact_blocks: bool,
    ) -> int:
        """Return the energy taken from the target, or 0 if predation fails.

        The score peaks when it equals twelve per word in use; the share of
        ``target_energy`` taken is proportional to how close it gets.
        """
        predation_target = 12 * len(self.genome_words)
        total = self._score(genome, target_genome, interact_blocks)
        total = predation_target - abs(predation_target - total)
        if total > min_predator_delta:
            return _truncating_div(total * target_energy, predation_target)
        return 0