import os

import pytest

from evosim.logsettings import (
    LogType,
    RunSettings,
    end_run_file_name,
    format_settings,
    log_file_name,
)


def _settings(**overrides):
    values = dict(grid_x=7, grid_y=9, genome_size=2, slots_per_square=5)
    values.update(overrides)
    return RunSettings(**values)


def test_text_contains_integer_lines():
    text = format_settings(_settings(), False)
    assert text.startswith("REvoSim settings:\n\n- Integers:\n")
    assert "-- Grid X: 7\n" in text
    assert "-- Grid Y: 9\n" in text
    assert "-- Genome size: 2\n" in text


def test_text_bools_are_numeric():
    text = format_settings(_settings(toroidal=True, no_selection=False), False)
    assert "-- Toroidal environment: 1\n" in text
    assert "-- No selection: 0\n" in text


@pytest.mark.parametrize(
    "flags, label",
    [
        (dict(obligate_sexual=True, asexual=True), "obligate sexual"),
        (dict(facultative_sexual=True, asexual=True), "facultative sexual"),
        (dict(asexual=True), "asexual"),
        (dict(), "variable"),
    ],
)
def test_breeding_priority(flags, label):
    text = format_settings(_settings(**flags), False)
    assert f"-- Breeding: {label}\n" in text
    csv = format_settings(_settings(**flags), True)
    assert f",{label}," in csv


def test_pathogen_mode():
    assert "-- Pathogen mopde: Drift\n" in format_settings(_settings(pathogen_drift=True))
    assert "-- Pathogen mopde: Evolve\n" in format_settings(_settings(pathogen_drift=False))


def test_systems_listed():
    text = format_settings(_settings(systems=[("Breed", "0,1")]), False)
    assert "-- Breed is applied to words 0,1\n" in text
    csv = format_settings(_settings(systems=[("Breed", "0"), ("Mutate", "1")]), True)
    assert "Systems\nBreed,Mutate,\n0,1,\n" in csv


def test_matrix_only_with_blocks():
    matrix = [[r * 4 + c for c in range(4)] for r in range(4)]
    without = format_settings(_settings(a_priori_interaction=matrix), False)
    assert "Interactions Matrix" not in without
    text = format_settings(_settings(interact_blocks=True, a_priori_interaction=matrix), False)
    rows = ",".join("{" + ",".join(str(v) for v in row) + "}" for row in matrix)
    assert text.endswith("\n- Interactions Matrix:\n{" + rows + "}")
    csv = format_settings(_settings(interact_blocks=True, a_priori_interaction=matrix), True)
    csv_rows = ":".join("{" + ":".join(str(v) for v in row) + "}" for row in matrix)
    assert csv.endswith("\nInteractions Matrix,{" + csv_rows + "}")


def test_csv_integer_row_matches_header_count():
    lines = format_settings(_settings(), True).split("\n")
    assert lines[0] == "REvoSim settings:"
    assert lines[1] == "Integers"
    headers = lines[2].rstrip(",").split(",")
    values = lines[3].split(",")
    assert len(headers) == len(values)
    assert values[:2] == ["7", "9"]


def test_csv_bool_row():
    lines = format_settings(_settings(recalculate_fitness=True), True).split("\n")
    bools_at = lines.index("Bools")
    assert lines[bools_at + 1].endswith("Pathogen mopde: ")
    assert lines[bools_at + 2].startswith("1,0,")
    assert lines[bools_at + 2].endswith(",variable,Drift")


def test_log_file_name_without_batch(tmp_path):
    name = log_file_name(str(tmp_path), LogType.FITNESS, -1)
    assert name == str(tmp_path) + os.sep + "REvoSim_fitness.txt"


def test_log_file_name_keeps_existing_separator(tmp_path):
    directory = str(tmp_path) + os.sep
    assert log_file_name(directory, LogType.CUSTOM) == directory + "REvoSim_log.txt"


def test_log_file_name_with_batch(tmp_path):
    name = log_file_name(tmp_path, LogType.DUMP_INDIVIDUALS, 3)
    assert name.endswith("REvoSim_individuals_data_run_0003.txt")


def test_log_file_names_are_distinct(tmp_path):
    kinds = [
        LogType.CUSTOM,
        LogType.FITNESS,
        LogType.RECOMBINATION,
        LogType.DISPARITY,
        LogType.SPECIATION,
        LogType.MUTATION,
        LogType.DUMP_INDIVIDUALS,
    ]
    names = {log_file_name(tmp_path, kind) for kind in kinds}
    assert len(names) == len(kinds)


@pytest.mark.parametrize("kind", [LogType.ITERATION, LogType.SPECIES, LogType.HEADER])
def test_log_file_name_rejects_template_kinds(tmp_path, kind):
    with pytest.raises(ValueError):
        log_file_name(tmp_path, kind)


def test_end_run_file_name(tmp_path):
    assert end_run_file_name(tmp_path).endswith(os.sep + "REvoSim_end_run_log.txt")
    assert end_run_file_name(tmp_path, 12).endswith("REvoSim_end_run_log_run_0012.txt")