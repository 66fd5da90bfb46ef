"""Fitness of genomes against environment colours, and searches for viable genomes."""

from __future__ import annotations

import random
from collections.abc import Sequence

from evosim.genome import WORD_MASK, bit_count

_LEVELS = 256
_CHANNELS = 3


class EnvironmentFitnessSystem:
    """Scores genomes against red, green and blue environment values.

    Each of the 256 levels of each colour channel has a 32-bit XOR mask.
    Masks for neighbouring levels differ by exactly one bit, so similar
    colours favour similar genomes. The fitness of a genome is the number of
    set bits left after XOR-ing each word in use with the mask of each
    channel.
    """

    SEED_ATTEMPTS = 100_000
    SETTLE_STEPS = 500
    DUAL_ATTEMPTS = 500

    def __init__(
        self,
        genome_words: Sequence[int],
        genome_size: int,
        rng: random.Random | None = None,
        random_reseed_before_genetic: bool = False,
    ) -> None:
        if genome_size < 1:
            raise ValueError("genome size must be at least one word")
        words = list(genome_words)
        for word in words:
            if not 0 <= word < genome_size:
                raise ValueError(f"genome word {word} lies outside a genome of {genome_size} words")
        self.genome_words = words
        self.genome_size = genome_size
        self.rng = rng if rng is not None else random.Random()
        self.random_reseed_before_genetic = random_reseed_before_genetic
        self._masks: list[list[int]] = []
        self.reset()

    def reset(self) -> None:
        """Draw a fresh set of masks: random at level 0, one bit flipped per level."""
        masks = [[self.rng.getrandbits(32) for _ in range(_CHANNELS)]]
        for _ in range(1, _LEVELS):
            masks.append([mask ^ (1 << self.rng.randrange(32)) for mask in masks[-1]])
        self._masks = masks

    def calculate_fitness(self, genome: Sequence[int], environment: Sequence[int]) -> int:
        """Return the fitness of ``genome`` in an environment of (r, g, b)."""
        channel_masks = [self._masks[environment[c]][c] for c in range(_CHANNELS)]
        return sum(
            bit_count(mask ^ genome[index])
            for index in self.genome_words
            for mask in channel_masks
        )

    def _score(self, genome: Sequence[int], environment: Sequence[int], target: int) -> int:
        return abs(target - self.calculate_fitness(genome, environment))

    def _mutate(self, genome: list[int]) -> list[int]:
        word = self.rng.getrandbits(32) % self.genome_size
        bit = self.rng.getrandbits(8) & 31
        mutated = list(genome)
        mutated[word] ^= 1 << bit
        return mutated

    def _randomise(self, genome: list[int]) -> None:
        for index in range(self.genome_size):
            genome[index] = self.rng.getrandbits(32)

    def _working_copy(self, genome: Sequence[int]) -> list[int]:
        if len(genome) < self.genome_size:
            raise ValueError(
                f"genome has {len(genome)} words, fewer than the genome size {self.genome_size}"
            )
        return list(genome)

    def find_random_viable_genome(
        self,
        genome: Sequence[int],
        environment: Sequence[int],
        target: int,
        settle_tolerance: int,
    ) -> list[int] | None:
        """Search for a genome whose fitness lies within tolerance of ``target``.

        The first ``genome_size`` words of ``genome`` are replaced; any words
        beyond that are kept. Returns the genome found, or None on failure.
        """
        working = self._working_copy(genome)
        if self.random_reseed_before_genetic:
            self._randomise(working)
            if self._score(working, environment, target) < settle_tolerance:
                return working

        for _ in range(self.SEED_ATTEMPTS):
            self._randomise(working)
            base_score = 0
            for _ in range(self.SETTLE_STEPS):
                base_score = self._score(working, environment, target)
                candidate = self._mutate(working)
                if self._score(candidate, environment, target) < base_score:
                    working = candidate
            if base_score < settle_tolerance:
                return working
        return None

    def find_dual_viable_genome(
        self,
        genome: Sequence[int],
        environment: Sequence[int],
        environment2: Sequence[int],
        target: int,
        settle_tolerance: int,
    ) -> list[int] | None:
        """Search for a genome viable in two environments at once.

        Starts from a genome viable in the first environment and climbs
        towards the second while allowing the first score to slip by at most
        one. Returns the genome found, or None on failure.
        """
        working = self._working_copy(genome)
        for _ in range(self.DUAL_ATTEMPTS):
            found = self.find_random_viable_genome(working, environment, target, settle_tolerance)
            if found is None:
                return None
            working = found
            base_score1 = base_score2 = 0
            for _ in range(self.SETTLE_STEPS):
                base_score1 = self._score(working, environment, target)
                base_score2 = self._score(working, environment2, target)
                candidate = self._mutate(working)
                new_score1 = self._score(candidate, environment, target)
                new_score2 = self._score(candidate, environment2, target)
                if new_score1 < base_score1 + 2 and new_score2 < base_score2:
                    working = candidate
            if base_score1 < settle_tolerance and base_score2 < settle_tolerance:
                return working
        return None

    @staticmethod
    def _check_index(n: int, m: int) -> None:
        if not 0 <= n < _LEVELS:
            raise ValueError(f"mask level {n} is outside 0..{_LEVELS - 1}")
        if not 0 <= m < _CHANNELS:
            raise ValueError(f"colour channel {m} is outside 0..{_CHANNELS - 1}")

    def xor_mask(self, n: int, m: int) -> int:
        """Return the mask of level ``n`` for colour channel ``m``."""
        self._check_index(n, m)
        return self._masks[n][m]

    def set_xor_mask(self, n: int, m: int, value: int) -> None:
        """Replace the mask of level ``n`` for colour channel ``m``."""
        self._check_index(n, m)
        if not 0 <= value <= WORD_MASK:
            raise ValueError(f"mask {value!r} is not an unsigned 32-bit value")
        self._masks[n][m] = value