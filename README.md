# evosim

Building blocks for a bitwise evolutionary simulation. Organisms carry genomes
made of unsigned 32-bit words. Those genomes are scored against the colour of
the grid cell they live in and against each other. The package also keeps
species records as a tree, which it can write as Newick text or as CSV data,
and it builds the text of simulation logs.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

- `evosim.genome`: `Genome` is a hashable, comparable sequence of 32-bit
  words, and its hash is its first word. `bit_count(value)` counts the set
  bits in the low 32 bits of a value.
- `evosim.envfitness`: `EnvironmentFitnessSystem` keeps one XOR mask for each
  of the 256 levels of each colour channel. Masks at neighbouring levels
  differ by one bit. `calculate_fitness(genome, environment)` counts the bits
  left set on the genome words in use. `find_random_viable_genome` and
  `find_dual_viable_genome` hill-climb towards a target fitness, in one
  environment or in two. They return the genome they found, or `None` if the
  search fails. `xor_mask` and `set_xor_mask` read and replace single masks.
  `reset` draws a new set of masks.
- `evosim.interaction`: `InteractionSystem` scores two genomes against each
  other. It works either through a 256 x 256 byte-pair table (block mode) or
  through a rotated XOR. `interact_fitness` returns the adjusted fitness,
  never below zero. `interact_energy` returns the energy taken from the
  target, or 0.
- `evosim.imagesequence`: `ImageSequence` reads a list of image files with
  Pillow into an RGB grid. Images smaller than the grid are scaled up. The
  grid moves through the files by `EnvironmentMode`: `STATIC`, `ONCE`, `LOOP`
  or `BOUNCE`. `regenerate(mode, interpolate)` advances one iteration and can
  interpolate between frames. It returns `True` when a `ONCE` sequence runs
  out of files. An image that cannot be opened raises `ImageLoadError`.
  `Linkage` ties a variable name to an image sequence.
- `evosim.modal`: `find_modal_genome(slots, words_in_use)` returns the index
  of the first living slot that carries the most common genome, or `None`.
  A slot is living when its `age` is above zero.
- `evosim.hashtable`: `GenomeHashTable` is a layered hash table of genomes.
  The caller supplies the bin function and the number of bins at each level.
  Within a bin it counts repeats and moves frequent genomes towards the front.
  A bin that grows too full is split into a deeper table. Other methods:
  - `insert` adds an occurrence of a genome.
  - `in` tests whether a genome is in the table.
  - `entry_by_index` returns the genomes of a top-level bin in the order they
    were first added.
  - `sum_frequencies(group)` returns, for one group, the total occurrence
    count and per-bit counts.

  `BinEntry` and `GroupData` hold the records.
- `evosim.logspeciesdata`: `LogSpeciesDataItem` holds the per-iteration data
  of one species. It provides `shared_csv_output()` and
  `headers_for_shared_output()`.
- `evosim.logspecies`: `LogSpecies` is a node of the species tree.
  `is_fluff` decides whether a species is left out of output.
  `TreeWriter` writes a tree with `newick(...)`, or as CSV lines with
  `data(...)` and `data_line(...)`. CSV output needs a `genome_formatter`.
- `evosim.logsettings`: `RunSettings` holds the settings reported in logs.
  `format_settings(settings, csv_output)` renders them as readable text or as
  CSV rows. `LogType` lists the kinds of log. `log_file_name` and
  `end_run_file_name` build log file paths, adding `_run_NNNN` for a batch
  run.
- `evosim.logtext`: `LogTemplates` holds the header, iteration and species
  texts of the custom log. `replacement_text()` maps each `*tag*` to its
  column heading. The default texts come in HTML or CSV style.
  `header_from_log_text` and `validate_string` mark unknown tags in red.
  `save_xml` and `load_xml` store the three texts in an XML template file,
  and `mark_unknown_tags` marks unknown tags on their own. `save_xml` writes
  into an output sub-folder of the directory it is given, and that folder
  must already exist. `LogXmlError` is raised when the file cannot be
  written, read or parsed.

## Examples

Searching for a genome that settles near a target fitness:

```python
import random

from evosim.envfitness import EnvironmentFitnessSystem

system = EnvironmentFitnessSystem(
    genome_words=[0],
    genome_size=1,
    rng=random.Random(1),
    random_reseed_before_genetic=False,
)
environment = (128, 64, 200)
found = system.find_random_viable_genome([0], environment, target=66, settle_tolerance=15)
if found is not None:
    print(found, system.calculate_fitness(found, environment))
```

Writing a species tree in Newick form:

```python
from evosim.logspecies import LogSpecies, TreeWriter

root = LogSpecies(max_size=10, time_of_first_appearance=1, time_of_last_appearance=50)
child = LogSpecies(max_size=5, time_of_first_appearance=20, time_of_last_appearance=40)
root.children.append(child)

writer = TreeWriter(min_species_size=0)
print(writer.newick(root))  # (ID1-10:31,ID2-5:20)ID0-10:19
```

## What the package does not do

There is no simulation loop, no command-line program and no graphical
interface. The package does not fill log templates with live grid and species
statistics, and it does not append per-iteration fitness, disparity,
recombination, speciation or mutation logs to files. It provides the settings
text, the log file names, the templates and the species tree output that such
a writer would use.