"""Genomes, environmental fitness, interactions, image-driven environments, genome tables and species logging for a bitwise evolution simulation."""

__version__ = "3.0.1"

__all__ = [
    "genome",
    "logspeciesdata",
    "logspecies",
    "interaction",
    "envfitness",
    "imagesequence",
    "modal",
    "hashtable",
    "logsettings",
    "logtext",
]