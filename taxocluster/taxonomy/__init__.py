"""Taxonomy model, builder and loader."""

from taxocluster.taxonomy.model import NOT_CLASSIFIED, Taxonomy
from taxocluster.taxonomy.builder import TaxonomyBuilder, flush_spaces
from taxocluster.taxonomy.loader import load_taxonomy, taxonomy_from_dict

__all__ = [
    "NOT_CLASSIFIED", "Taxonomy",
    "TaxonomyBuilder", "flush_spaces",
    "load_taxonomy", "taxonomy_from_dict",
]
