"""Log templates: tag replacement, validation and XML storage of the log texts."""

from __future__ import annotations

import os
import re
import xml.etree.ElementTree as ET
from os import PathLike

from evosim.logsettings import PRODUCT_NAME
from evosim.logspeciesdata import LogSpeciesDataItem

_TAG = re.compile(r"\*(.*?)\*", re.IGNORECASE | re.DOTALL)
_UNCHECKED_TAGS = frozenset({"*printSettings*", "*printTime*", "**"})
_OUTPUT_FOLDER = f"{PRODUCT_NAME}_output/"
_ROOT = "revosim_log"
_HEADER = "headerText"
_ITERATION = "logIterationText"
_SPECIES = "logSpeciesText"


class LogXmlError(OSError):
    """A log template XML file could not be written or read."""


def mark_unknown_tags(text: str, scan: str | None = None) -> str:
    """Wrap every tag found in ``scan`` (default ``text``) in red font within ``text``."""
    for match in _TAG.finditer(text if scan is None else scan):
        tag = match.group(0)
        if tag in _UNCHECKED_TAGS:
            continue
        text = text.replace(tag, f'<font color="Red">{tag}</font color>')
    return text


class LogTemplates:
    """The user-editable header, iteration and species texts of the custom log."""

    def __init__(self, genome_size: int, csv_output: bool = False) -> None:
        if genome_size < 0:
            raise ValueError("genome size cannot be negative")
        self.genome_size = genome_size
        self.csv_output = csv_output
        self.header_text = ""
        self.iteration_text = ""
        self.species_text = ""

    def _frequency_headers(self, prefix: str) -> str:
        return ",".join(
            f"{prefix}_{word}_{bit}" for word in range(self.genome_size) for bit in range(32)
        )

    def replacement_text(self) -> dict[str, str]:
        """Return each log tag with the column heading it stands for."""
        return {
            "*iteration*": "Iteration_number",
            "*gridNumberAlive*": "Number_living_organisms",
            "*gridMeanFitness*": "Grid_mean_fitness",
            "*gridBreedEntries*": "Grid_breed_list_entries",
            "*gridBreedFails*": "Grid_bred_fails",
            "*gridBreedSuccess*": "Grid_bred_success",
            "*speciesCount*": "Species_count",
            "*gridTrophicHistograms*": "Trophic_histograms",
            "*gridGeneration*": "Grid_generatrion_time",
            "*speciesID*": "Species_ID",
            "*originTime*": "Origin_time_of_species",
            "*speciesParent*": "Species_parent",
            "*speciesSize*": "Species_size",
            "*speciesModalGenome*": "Modal_species_genome",
            "*speciesMeanFitness*": "species_Mean_Fitness",
            "*speciesMeanEnvironmentalFitness*": "species_Mean_Environmental_Fitness",
            "*speciesMeanRunningEnergy*": "species_Mean_Running_Energy",
            "*speciesMeanRunningStolenEnergy*": "species_Mean_Running_Stolen_Energy",
            "*speciesTrophicLevel*": "species_Trophic_Level",
            "*speciesGenomeDiversity*": "species_Genome_Diversity",
            "*completeSpeciesData*": LogSpeciesDataItem.headers_for_shared_output(),
            "*printSettings*": "*printSettings*",
            "*printTime*": "*printTime*",
            "*dumpGenomes*": "Genome_dump",
            "*gridSpeciesRange*": "Grid_species_range",
            "*originalGeneFrequencies*": self._frequency_headers("O"),
            "*currentGeneFrequencies*": self._frequency_headers("C"),
            "*Ca*": "sum_fitness_difference_from_origin_(Ca)",
            "*NCa*": "sum_breed_only_difference_from_origin_(NCa)",
            "*Cr*": "sum_fitness_difference_from_last_(Cr)",
            "*NCr*": "sum_breed_only_difference_from_last_(NCr)",
        }

    def default_header_text(self) -> str:
        """Return the built-in header text for the current output style."""
        if self.csv_output:
            return (
                "Iteration_Number,Living_Organism_Count,Mean_Fitness,Breed_Entries,"
                "Failed_Breeds,Species_Count,Species_ID,Species_Origin,Species_Parent,"
                "Species_Population,Species_Modal_Genome,Changes_Since_Origination_Coding,"
                "Changes_Since_Origination_NonCoding,Changes_Since_Last_Coding,"
                "Changes_Since_Last_NonCoding"
                + "".join(f",f{i}" for i in range(64))
                + ",sum_coding_initial_differences,sum_noncoding_initial_differences,"
                "sum_coding_since_last_differences,sum_noncoding_since_last_differences"
                + ","
                + LogSpeciesDataItem.headers_for_shared_output()
                + "<br />"
            )
        return (
            "New run *printTime*<br /><br />===================<br /><br />*printSettings*"
            "<br /><br />===================<br />"
            "\nFor each iteration, this log features:<br /><br />"
            "- [I] Iteration Number<br /><br />"
            "- [P] Population Grid Data:<br />"
            "-- Number of living digital organisms<br />"
            "-- Mean fitness of living digital organisms<br />"
            "-- Number of entries on the breed list<br />"
            "-- Number of failed breed attempts<br />"
            "-- Number of species<br />"
            "- [S] Species Data:<br />"
            "-- Species id<br />"
            "-- Species origin (iterations)<br />"
            "-- Species parent<br />"
            "-- Species current size (number of individuals)<br />"
            "-- Species mean fitness<br />"
            "-- Species mean environmental (non-interaction) fitness<br />"
            "-- Species current modal genome<br />"
            "<br />"
            "**Note that this excludes species with less individuals than minimum species "
            "size, but is not able to exlude species without descendants, which can only be "
            "achieved with the end-run log.**<br /><br />"
            "===================<br /><br />"
        )

    def default_iteration_text(self) -> str:
        """Return the built-in per-iteration text; empty for CSV output."""
        if self.csv_output:
            return ""
        return (
            "<br />[I] *iteration*<br />[P] *gridNumberAlive*,*gridMeanFitness*,"
            "*gridBreedEntries*,*gridBreedFails*,*speciesCount*<br />"
        )

    def default_species_text(self) -> str:
        """Return the built-in per-species text for the current output style."""
        if self.csv_output:
            return (
                "*iteration*,*gridNumberAlive*,*gridMeanFitness*,*gridBreedEntries*,"
                "*gridBreedFails*,*speciesCount*,*speciesID*,*originTime*,*speciesParent*,"
                "*speciesSize*,*speciesModalGenome*<br />"
            )
        return (
            "[S] *speciesID*,*originTime*,*speciesParent*,*speciesSize*,*speciesMeanFitness*,"
            "*speciesMeanEnvironmentalFitness*,*speciesModalGenome*,*speciesGenomeDiversity*<br />"
        )

    def header_from_log_text(self, text: str) -> str:
        """Turn log text into a header: known tags become headings, others are marked red."""
        for tag, heading in self.replacement_text().items():
            text = text.replace(tag, heading)
        return self.validate_string(text)

    def validate_string(self, text: str) -> str:
        """Mark in red every tag left in ``text``, except settings, time and ``**``."""
        return mark_unknown_tags(text)

    def save_xml(self, directory: str | PathLike[str]) -> str:
        """Write the three texts to the template file in the output folder; return its path."""
        folder = os.fspath(directory)
        if not folder.endswith(_OUTPUT_FOLDER):
            folder += _OUTPUT_FOLDER
        path = f"{folder}{PRODUCT_NAME}_log_template.xml"

        root = ET.Element(_ROOT)
        for name, value in (
            (_HEADER, self.header_text),
            (_ITERATION, self.iteration_text),
            (_SPECIES, self.species_text),
        ):
            ET.SubElement(root, name).text = value
        tree = ET.ElementTree(root)
        ET.indent(tree, space="\t")
        try:
            with open(path, "wb") as handle:
                tree.write(handle, encoding="UTF-8", xml_declaration=True)
        except OSError as exc:
            raise LogXmlError(f"error opening XML file {path} to write to") from exc
        return path

    def load_xml(self, path: str | PathLike[str]) -> None:
        """Read the texts from a template file written by :meth:`save_xml`."""
        try:
            with open(path, "rb") as handle:
                data = handle.read()
        except OSError as exc:
            raise LogXmlError(f"error opening log XML file {os.fspath(path)}") from exc
        try:
            root = ET.fromstring(data)
        except ET.ParseError as exc:
            raise LogXmlError(f"error reading log XML file {os.fspath(path)}") from exc
        for element in root.iter():
            value = "".join(element.itertext())
            if element.tag == _HEADER:
                self.header_text = value
            elif element.tag == _ITERATION:
                self.iteration_text = value
            elif element.tag == _SPECIES:
                self.species_text = value