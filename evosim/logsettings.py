"""Settings summaries and file names for simulation logs."""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum, auto
from os import PathLike

PRODUCT_NAME = "REvoSim"


class LogType(Enum):
    """The kinds of log a simulation can write or validate."""

    CUSTOM = auto()
    FITNESS = auto()
    RECOMBINATION = auto()
    DISPARITY = auto()
    SPECIATION = auto()
    MUTATION = auto()
    DUMP_INDIVIDUALS = auto()
    ITERATION = auto()
    SPECIES = auto()
    HEADER = auto()


_FILE_SUFFIXES = {
    LogType.CUSTOM: "_log",
    LogType.FITNESS: "_fitness",
    LogType.RECOMBINATION: "_recombination",
    LogType.DISPARITY: "_disparity",
    LogType.SPECIATION: "_speciation",
    LogType.MUTATION: "_mutation",
    LogType.DUMP_INDIVIDUALS: "_individuals_data",
}


def _zero_matrix() -> list[list[int]]:
    return [[0] * 4 for _ in range(4)]


@dataclass
class RunSettings:
    """The simulation and cell settings reported at the top of logs.

    ``systems`` holds one ``(name, words in use)`` pair per system, and
    ``a_priori_interaction`` the 4 x 4 interaction matrix.
    """

    grid_x: int = 0
    grid_y: int = 0
    settle_tolerance: int = 0
    start_age: int = 0
    dispersal: int = 0
    food: int = 0
    breed_cost: int = 0
    mutate: int = 0
    pathogen_mutate: int = 0
    pathogen_frequency: int = 0
    max_difference: int = 0
    breed_threshold: int = 0
    slots_per_square: int = 0
    target: int = 0
    environment_change_rate: int = 0
    min_species_size: int = 0
    environment_mode: int = 0
    species_mode: int = 0
    genome_size: int = 0
    interactions: int = 0
    cropping_frequency: int = 0

    recalculate_fitness: bool = False
    no_selection: bool = False
    toroidal: bool = False
    environment_interpolate: bool = False
    nonspatial: bool = False
    breed_difference: bool = False
    breed_species: bool = False
    path_on: bool = False
    variable_mutate: bool = False
    exclude_with_descendants: bool = False
    interact_blocks: bool = False
    interact_fitness: bool = False
    interact_energy: bool = False
    multi_breed_list: bool = False
    random_reseed_before_genetic: bool = False

    obligate_sexual: bool = False
    facultative_sexual: bool = False
    asexual: bool = False
    pathogen_drift: bool = True

    systems: Sequence[tuple[str, str]] = ()
    a_priori_interaction: Sequence[Sequence[int]] = field(default_factory=_zero_matrix)

    @property
    def breeding(self) -> str:
        """The breeding mode, by priority: obligate, facultative, asexual, variable."""
        if self.obligate_sexual:
            return "obligate sexual"
        if self.facultative_sexual:
            return "facultative sexual"
        if self.asexual:
            return "asexual"
        return "variable"

    @property
    def pathogen_mode(self) -> str:
        return "Drift" if self.pathogen_drift else "Evolve"

    def _integers(self) -> list[tuple[str, str, int]]:
        return [
            ("Grid X", "Grid X", self.grid_x),
            ("Grid Y", "Grid Y", self.grid_y),
            ("Settle tolerance", "Settle tolerance", self.settle_tolerance),
            ("Start age", "Start age", self.start_age),
            ("Dispersal", "Disperal", self.dispersal),
            ("Food", "Food", self.food),
            ("Breed cost", "Breed cost", self.breed_cost),
            ("Mutate", "Mutate", self.mutate),
            ("Pathogen mutate", "Pathogen mutate", self.pathogen_mutate),
            ("Pathogen frequency", "Pathogen frequency", self.pathogen_frequency),
            ("Max diff to breed", "Max diff to breed", self.max_difference),
            ("Breed threshold", "Breed threshold", self.breed_threshold),
            ("Slots per square", "Slots per square", self.slots_per_square),
            ("Fitness target", "Fitness target", self.target),
            ("Environmental change rate", "Environmental change rate", self.environment_change_rate),
            ("Minimum species size", "Minimum species size", self.min_species_size),
            ("Environment mode", "Environment mode", self.environment_mode),
            ("Species mode", "Speices mode", self.species_mode),
            ("Genome size", "Genome size", self.genome_size),
            (
                "Interaction attempts per organism per iteration",
                "Interaction attempts per organism per iteration",
                self.interactions,
            ),
            ("Cropping rate", "Cropping rate", self.cropping_frequency),
        ]

    def _bools(self) -> list[tuple[str, bool]]:
        return [
            ("Recalculate fitness", self.recalculate_fitness),
            ("No selection", self.no_selection),
            ("Toroidal environment", self.toroidal),
            ("Interpolate environment", self.environment_interpolate),
            ("Nonspatial settling", self.nonspatial),
            ("Enforce max diff to breed", self.breed_difference),
            ("Only breed within species", self.breed_species),
            ("Pathogens enabled", self.path_on),
            ("Variable mutate", self.variable_mutate),
            ("Exclude species without descendants", self.exclude_with_descendants),
            ("Interactions using blocks rather than genome XOR", self.interact_blocks),
            ("Interactions change fitness", self.interact_fitness),
            ("Interactions change energy", self.interact_energy),
            ("Multiple breed lists", self.multi_breed_list),
            ("Random reseed before genetic", self.random_reseed_before_genetic),
        ]


_CSV_BOOL_HEADERS = (
    "Recalculate fitness",
    "No selection",
    "Toroidal environment",
    "Interpolate environment",
    "Nonspatial setling",
    "Enforce max diff to breed",
    "Only breed within species",
    "Pathogens enabled",
    "Variable mutate",
    "Exclude species without descendants",
    "Interactions using blocks",
    "Interactions using XOR",
    "Interactions change fitness",
    "Interactions change energy",
    "Multiple breed lists",
    "Random reseed before genetic",
    "Breeding",
)


def _matrix(matrix: Sequence[Sequence[int]], separator: str) -> str:
    rows = ("{" + separator.join(str(v) for v in row[:4]) + "}" for row in matrix[:4])
    return "{" + separator.join(rows) + "}"


def _format_text(settings: RunSettings) -> str:
    parts = ["REvoSim settings:\n\n", "- Integers:\n"]
    parts.extend(f"-- {label}: {value}\n" for label, _, value in settings._integers())
    parts.append("\n- Bools:\n")
    parts.extend(f"-- {label}: {int(value)}\n" for label, value in settings._bools())
    parts.append(f"-- Breeding: {settings.breeding}\n")
    parts.append(f"-- Pathogen mopde: {settings.pathogen_mode}\n")
    parts.append("\n- Systems:\n")
    parts.extend(f"-- {name} is applied to words {words}\n" for name, words in settings.systems)
    if settings.interact_blocks:
        parts.append("\n- Interactions Matrix:\n")
        parts.append(_matrix(settings.a_priori_interaction, ","))
    return "".join(parts)


def _format_csv(settings: RunSettings) -> str:
    integers = settings._integers()
    parts = ["REvoSim settings:\n", "Integers\n"]
    parts.append("".join(f"{header}," for _, header, _ in integers) + "\n")
    parts.append(",".join(str(value) for _, _, value in integers) + "\n")
    parts.append("Bools\n")
    parts.append("".join(f"{header}," for header in _CSV_BOOL_HEADERS) + "Pathogen mopde: \n")
    parts.append("".join(f"{int(value)}," for _, value in settings._bools()))
    parts.append(f"{settings.breeding},{settings.pathogen_mode}\n")
    parts.append("Systems\n")
    parts.append("".join(f"{name}," for name, _ in settings.systems) + "\n")
    parts.append("".join(f"{words}," for _, words in settings.systems) + "\n")
    if settings.interact_blocks:
        parts.append("\nInteractions Matrix,")
        parts.append(_matrix(settings.a_priori_interaction, ":"))
    return "".join(parts)


def format_settings(settings: RunSettings, csv_output: bool = False) -> str:
    """Describe ``settings`` as readable text, or as CSV header and value rows."""
    return _format_csv(settings) if csv_output else _format_text(settings)


def _with_separator(directory: str | PathLike[str]) -> str:
    path = os.fspath(directory)
    return path if path.endswith(os.sep) else path + os.sep


def _run_suffix(batch_run: int) -> str:
    return f"_run_{batch_run:04d}" if batch_run > -1 else ""


def log_file_name(directory: str | PathLike[str], kind: LogType, batch_run: int = -1) -> str:
    """Return the path of the log file of ``kind``; a batch run of -1 means none."""
    try:
        suffix = _FILE_SUFFIXES[kind]
    except KeyError:
        raise ValueError(f"{kind} is not written to a log file") from None
    return f"{_with_separator(directory)}{PRODUCT_NAME}{suffix}{_run_suffix(batch_run)}.txt"


def end_run_file_name(directory: str | PathLike[str], batch_run: int = -1) -> str:
    """Return the path of the end-of-run log; a batch run of -1 means none."""
    return f"{_with_separator(directory)}{PRODUCT_NAME}_end_run_log{_run_suffix(batch_run)}.txt"