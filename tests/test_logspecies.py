import pytest

from evosim.logspecies import LogSpecies, TreeWriter
from evosim.logspeciesdata import LogSpeciesDataItem


def _binary(words, size):
    return "".join(format(words[i], "032b") for i in range(size))


def _tree():
    parent = LogSpecies(max_size=50, time_of_first_appearance=1, time_of_last_appearance=100)
    child = LogSpecies(
        max_size=20, time_of_first_appearance=40, time_of_last_appearance=80, parent=parent
    )
    parent.children.append(child)
    return parent, child


def test_single_iteration_species_is_fluff():
    species = LogSpecies(max_size=1000, time_of_first_appearance=5, time_of_last_appearance=5)
    assert species.is_fluff(10, False)


def test_small_leaf_is_fluff_large_leaf_is_not():
    small = LogSpecies(max_size=10, time_of_first_appearance=1, time_of_last_appearance=9)
    large = LogSpecies(max_size=11, time_of_first_appearance=1, time_of_last_appearance=9)
    assert small.is_fluff(10, False)
    assert not large.is_fluff(10, False)


def test_species_with_children_kept_unless_excluding():
    parent, child = _tree()
    parent.max_size = 1
    assert not parent.is_fluff(30, False)
    # Excluding by descendants: the child's size of 20 is still too small.
    assert parent.is_fluff(30, True)
    assert not parent.is_fluff(10, True)


def test_max_size_including_children():
    parent, child = _tree()
    grandchild = LogSpecies(max_size=70, time_of_first_appearance=50, time_of_last_appearance=60)
    child.children.append(grandchild)
    assert parent.max_size_including_children() == 70
    assert child.max_size_including_children() == 70
    assert grandchild.max_size_including_children() == 70


def test_newick_leaf_branch_length():
    species = LogSpecies(max_size=5, time_of_first_appearance=10, time_of_last_appearance=30)
    assert TreeWriter(0).newick(species) == "ID0-5:20"


def test_newick_with_child():
    parent, _ = _tree()
    text = TreeWriter(5).newick(parent)
    assert text == "(ID1-50:60,ID2-20:40)ID0-50:39"


def test_newick_skips_fluff_children():
    parent, child = _tree()
    child.time_of_last_appearance = child.time_of_first_appearance
    assert TreeWriter(5).newick(parent) == "ID0-50:99"


def test_ids_continue_from_start_id():
    parent, _ = _tree()
    writer = TreeWriter(5, start_id=7)
    text = writer.newick(parent)
    assert text.startswith("(ID8-")
    assert writer.next_id == 10


def test_newick_parentheses_balance():
    parent, child = _tree()
    child.children.append(
        LogSpecies(max_size=30, time_of_first_appearance=60, time_of_last_appearance=75)
    )
    text = TreeWriter(5).newick(parent)
    assert text.count("(") == text.count(")") == 2


def test_data_line_filters_by_iteration():
    items = [
        LogSpeciesDataItem(iteration=i, size=i * 2, sample_multi_word_genome=[i, 1])
        for i in range(5)
    ]
    species = LogSpecies(data_items=items)
    writer = TreeWriter(0, genome_size=2, genome_formatter=_binary)
    lines = writer.data_line(species, 1, 4, 9, 3).splitlines()
    assert [line.split(",")[2] for line in lines] == ["1", "2", "3"]
    fields = lines[0].split(",")
    assert fields[:4] == ["9", "3", "1", "2"]
    assert fields[4] == "W0_1_W1_1"
    assert fields[5] == _binary([1, 1], 2)
    assert ",".join(fields[6:]) == items[1].shared_csv_output()


def test_data_line_needs_formatter_when_items_present():
    species = LogSpecies(data_items=[LogSpeciesDataItem(iteration=2, sample_multi_word_genome=[0])])
    with pytest.raises(ValueError):
        TreeWriter(0).data_line(species, 0, 10, 0, 0)


def test_data_splits_parent_records_at_branch():
    parent, child = _tree()
    parent.data_items = [
        LogSpeciesDataItem(iteration=i, sample_multi_word_genome=[i]) for i in (10, 50, 90)
    ]
    child.data_items = [LogSpeciesDataItem(iteration=60, sample_multi_word_genome=[60])]
    writer = TreeWriter(5, genome_size=1, genome_formatter=_binary)
    rows = [line.split(",") for line in writer.data(parent).splitlines()]
    by_iteration = {row[2]: (row[0], row[1]) for row in rows}
    before_id, before_parent = by_iteration["10"]
    after_id, after_parent = by_iteration["90"]
    child_id, child_parent = by_iteration["60"]
    assert before_parent == "0"
    assert after_parent == before_id
    assert child_parent == before_id
    assert len({before_id, after_id, child_id}) == 3
    assert len(rows) == 4