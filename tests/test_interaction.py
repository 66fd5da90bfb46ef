import random

import pytest

from evosim.interaction import InteractionSystem


def _table(value):
    return [[value] * 256 for _ in range(256)]


def _random_genome(rng, words=2):
    return [rng.getrandbits(32) for _ in range(words)]


def test_blocks_with_zero_table_keep_fitness():
    system = InteractionSystem(_table(0), [0, 1])
    assert system.interact_fitness([1, 2], [3, 4], 17, True) == 17


def test_blocks_add_table_value_per_byte_pair():
    system = InteractionSystem(_table(1), [0, 1])
    assert system.interact_fitness([1, 2], [3, 4], 10, True) == 18


def test_blocks_index_table_by_low_byte_first():
    table = _table(0)
    table[0xAB][0xCD] = 5
    system = InteractionSystem(table, [0])
    assert system.interact_fitness([0x000000AB], [0x000000CD], 0, True) == 5
    assert system.interact_fitness([0xAB000000], [0xCD000000], 0, True) == 5


def test_fitness_never_negative():
    system = InteractionSystem(_table(-100), [0])
    assert system.interact_fitness([0], [0], 3, True) == 0


def test_xor_mode_self_interaction_is_neutral():
    rng = random.Random(4)
    system = InteractionSystem(_table(0), [0, 1])
    for _ in range(20):
        genome = _random_genome(rng)
        assert system.interact_fitness(genome, genome, 50, False) == 50


def test_xor_mode_ignores_words_not_in_use():
    rng = random.Random(9)
    system = InteractionSystem(_table(0), [1])
    for _ in range(20):
        own = _random_genome(rng)
        target = _random_genome(rng)
        changed_own = [rng.getrandbits(32), own[1]]
        changed_target = [rng.getrandbits(32), target[1]]
        assert system.interact_fitness(own, target, 100, False) == system.interact_fitness(
            changed_own, changed_target, 100, False
        )


def test_xor_mode_bounded_by_word_count():
    rng = random.Random(2)
    system = InteractionSystem(_table(0), [0, 1])
    for _ in range(50):
        result = system.interact_fitness(_random_genome(rng), _random_genome(rng), 64, False)
        assert 0 <= result <= 128


def test_energy_full_when_score_hits_target():
    system = InteractionSystem(_table(3), [0, 1])
    assert system.interact_energy([0, 0], [5, 5], 0, 200, True) == 200


def test_energy_zero_when_delta_not_exceeded():
    system = InteractionSystem(_table(3), [0])
    assert system.interact_energy([0], [0], 12, 200, True) == 0


def test_energy_zero_for_neutral_xor_self_interaction():
    system = InteractionSystem(_table(0), [0])
    assert system.interact_energy([0x12345678], [0x12345678], 0, 500, False) == 0


@pytest.mark.parametrize("seed", range(5))
def test_energy_never_exceeds_target_energy(seed):
    rng = random.Random(seed)
    table = [[rng.randint(-3, 6) for _ in range(256)] for _ in range(256)]
    system = InteractionSystem(table, [0, 1])
    for blocks in (True, False):
        energy = system.interact_energy(_random_genome(rng), _random_genome(rng), 0, 300, blocks)
        assert 0 <= energy <= 300