"""Dictionary-based text clustering against a category/detail/keyword taxonomy."""

from taxocluster.exceptions import CyclicAliasError, TaxonomyConfigError, TaxonomyError
from taxocluster.taxonomy import (
    NOT_CLASSIFIED,
    Taxonomy,
    TaxonomyBuilder,
    load_taxonomy,
    taxonomy_from_dict,
)
from taxocluster.aggregation import AggregationStore
from taxocluster.pipeline import ClusterBuilder, ClusterEntry, ClusterRunResult, build

__version__ = "1.0.0"

__all__ = [
    "CyclicAliasError", "TaxonomyConfigError", "TaxonomyError",
    "NOT_CLASSIFIED", "Taxonomy", "TaxonomyBuilder", "load_taxonomy", "taxonomy_from_dict",
    "AggregationStore",
    "ClusterBuilder", "ClusterEntry", "ClusterRunResult", "build",
]
