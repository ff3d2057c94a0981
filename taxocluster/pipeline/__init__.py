from taxocluster.pipeline.cluster import (
    ClusterBuilder,
    ClusterEntry,
    ClusterRunResult,
    DocumentOutcome,
    build,
)
from taxocluster.pipeline.sources import (
    DataSource,
    HTMLSource,
    PDFSource,
    TextFileSource,
    TextSource,
    merge_as_list,
    source_for_path,
)

__all__ = [
    "ClusterBuilder", "ClusterEntry", "ClusterRunResult", "DocumentOutcome", "build",
    "DataSource", "HTMLSource", "PDFSource", "TextFileSource", "TextSource",
    "merge_as_list", "source_for_path",
]
