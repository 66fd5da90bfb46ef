"""Per-iteration data recorded for a species in the species log."""

from __future__ import annotations

from dataclasses import dataclass, field

_SHARED_HEADERS = (
    "diversity,cellsOccupied,geog_range,centroid_x,centroid_y,mean_fit,"
    "min_env_red,min_env_green,min_env_blue,"
    "max_env_red,max_env_green,max_env_blue,"
    "mean_env_red,mean_env_green,mean_env_blue"
)


@dataclass
class LogSpeciesDataItem:
    """A snapshot of one species at one iteration."""

    iteration: int = 0
    sample_genome: int = 0
    sample_multi_word_genome: list[int] = field(default_factory=list)  # modal genome
    size: int = 0  # number of critters
    genomic_diversity: int = 0  # number of distinct genomes
    cells_occupied: int = 0  # cells found in, minus one
    geographical_range: int = 0  # max distance between outliers
    centroid_range_x: int = 0
    centroid_range_y: int = 0
    mean_fitness: int = 0  # stored as x1000
    min_environment: tuple[int, int, int] = (0, 0, 0)
    max_environment: tuple[int, int, int] = (0, 0, 0)
    mean_environment: tuple[int, int, int] = (0, 0, 0)

    def shared_csv_output(self) -> str:
        """Return the shared CSV fields, without leading comma or newline."""
        values = [
            self.genomic_diversity,
            self.cells_occupied,
            self.geographical_range,
            self.centroid_range_x,
            self.centroid_range_y,
            self.mean_fitness,
            *self.min_environment,
            *self.max_environment,
            *self.mean_environment,
        ]
        return ",".join(str(v) for v in values)

    @staticmethod
    def headers_for_shared_output() -> str:
        """Return the CSV headers matching :meth:`shared_csv_output`."""
        return _SHARED_HEADERS