"""
Document classification driver.

Runs every document through extract → resolve → classify → aggregate and
collects keywords under their (category, detail) buckets in a shared
AggregationStore.

Threading model:
- Documents are independent; they are spread over a thread pool
  (Settings.max_workers), one document per worker at a time
- The steps for one document run sequentially on its worker
- The taxonomy, extractor, resolver and classifier are read-only and shared
- The AggregationStore is the only shared mutable state

Cyclic aliases:
- "document" policy (default): a CyclicAliasError voids the whole document
- "token" policy: only the token that cannot be resolved is dropped
Either way the run continues and the document is counted in
ClusterRunResult.cyclic_alias_documents.
"""

import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Callable, Dict, Generic, Iterable, List, Optional, Sequence, TypeVar

from taxocluster.aggregation.store import AggregationStore
from taxocluster.config.settings import Settings
from taxocluster.exceptions import CyclicAliasError
from taxocluster.matching.classifier import ClassificationResult, TokenClassifier
from taxocluster.matching.extractor import KeywordExtractor
from taxocluster.matching.synonyms import SynonymResolver
from taxocluster.pipeline.sources import DataSource, merge_as_list
from taxocluster.taxonomy.model import Taxonomy
from taxocluster.utils.logging_config import get_logger

logger = get_logger("pipeline.cluster")

T = TypeVar("T")


@dataclass(frozen=True)
class ClusterEntry:
    """Value stored for every (category, detail, keyword) key."""
    category: str
    detail: str
    keyword: str
    document: str
    document_index: int


@dataclass
class DocumentOutcome:
    """What happened to one document."""
    document_index: int
    status: str                     # "classified" | "skipped" | "cyclic_alias"
    classification: ClassificationResult
    entries_written: int = 0
    dropped_tokens: int = 0


@dataclass
class ClusterRunResult:
    """Result of a build run."""
    started_at: str = ""
    completed_at: str = ""
    duration_seconds: float = 0
    documents_total: int = 0
    documents_classified: int = 0
    documents_skipped: int = 0
    cyclic_alias_documents: int = 0
    entries_written: int = 0
    store_size: int = 0

    def to_dict(self) -> Dict:
        return asdict(self)


def _identity(entry):
    return entry


class ClusterBuilder(Generic[T]):
    """
    Classify documents against a taxonomy and aggregate their keywords.

    Usage:
        builder = ClusterBuilder(taxonomy)
        result = builder.build(["Oranges have vitamin c ...", ...])
        entry = builder.retrieve("fruit", "citrus", "vitaminc")

        # Typed retrieval
        builder = ClusterBuilder(taxonomy, mapper=lambda e: e.document)
        text = builder.take("fruit", NOT_CLASSIFIED, "vitaminc")
    """

    def __init__(self, taxonomy: Taxonomy,
                 mapper: Optional[Callable[[ClusterEntry], T]] = None,
                 settings: Optional[Settings] = None,
                 store: Optional[AggregationStore] = None):
        self.taxonomy = taxonomy
        self.settings = settings or Settings()
        self.mapper = mapper or _identity
        self.store: AggregationStore[ClusterEntry] = (
            store if store is not None else AggregationStore(self.settings.store_shards)
        )
        self.extractor = KeywordExtractor(
            taxonomy, include_details=self.settings.extract_details
        )
        self.resolver = SynonymResolver(taxonomy)
        self.classifier = TokenClassifier(taxonomy)

    # ── Building ───────────────────────────────────────────────────────

    def build(self, documents: Sequence[str]) -> ClusterRunResult:
        """
        Classify every document and populate the store.

        Re-running with the same documents rewrites the same keys.
        """
        result = ClusterRunResult(started_at=datetime.now().isoformat())
        start_time = time.time()
        documents = list(documents)
        workers = min(self.settings.max_workers, max(len(documents), 1))

        logger.info(
            f"Clustering {len(documents)} documents with {workers} workers "
            f"against {self.taxonomy!r}",
            extra={"phase": "build_start"},
        )

        if workers == 1:
            outcomes = [self.process_document(i, doc) for i, doc in enumerate(documents)]
        else:
            with ThreadPoolExecutor(max_workers=workers,
                                    thread_name_prefix="cluster") as pool:
                outcomes = list(pool.map(
                    self.process_document, range(len(documents)), documents
                ))

        for outcome in outcomes:
            result.documents_total += 1
            result.entries_written += outcome.entries_written
            if outcome.status == "cyclic_alias":
                result.cyclic_alias_documents += 1
            if outcome.entries_written:
                result.documents_classified += 1
            else:
                result.documents_skipped += 1

        duration = time.time() - start_time
        result.completed_at = datetime.now().isoformat()
        result.duration_seconds = round(duration, 3)
        result.store_size = len(self.store)

        logger.info(
            f"Clustering complete: {result.documents_classified}/"
            f"{result.documents_total} documents classified, "
            f"{result.entries_written} entries written "
            f"({result.cyclic_alias_documents} with cyclic aliases) "
            f"in {duration:.2f}s",
            extra={"phase": "build_complete", "duration_ms": int(duration * 1000)},
        )
        return result

    def make(self, sources: Iterable[DataSource]) -> ClusterRunResult:
        """Merge sources into one document list and build from it."""
        return self.build(merge_as_list(sources))

    def process_document(self, index: int, text: str) -> DocumentOutcome:
        """Run one document through extract → resolve → classify → aggregate."""
        extracted = self.extractor.extract(text)
        resolved, dropped, cyclic = self._resolve(index, extracted)

        classification = self.classifier.classify(resolved)
        outcome = DocumentOutcome(
            document_index=index,
            status="cyclic_alias" if cyclic else "skipped",
            classification=classification,
            dropped_tokens=dropped,
        )
        if classification.is_empty:
            return outcome

        for category, detail, keyword in classification.entries():
            self.store.put(category, detail, keyword, ClusterEntry(
                category=category,
                detail=detail,
                keyword=keyword,
                document=text,
                document_index=index,
            ))
            outcome.entries_written += 1

        if not cyclic:
            outcome.status = "classified"
        return outcome

    def _resolve(self, index: int, tokens: List[str]):
        """Returns (resolved tokens, dropped token count, hit a cycle)."""
        if self.settings.cycle_policy == "document":
            try:
                return self.resolver.resolve_all(tokens), 0, False
            except CyclicAliasError as e:
                logger.warning(
                    f"Cyclic synonym for {e.token!r}, document ignored",
                    extra={"document_index": index, "token": e.token,
                           "error_type": "cyclic_alias"},
                )
                return [], len(tokens), True

        resolved: Dict[str, None] = {}
        dropped = 0
        for token in tokens:
            try:
                resolved.setdefault(self.resolver.resolve(token), None)
            except CyclicAliasError as e:
                dropped += 1
                logger.warning(
                    f"Cyclic synonym for {e.token!r}, token dropped",
                    extra={"document_index": index, "token": e.token,
                           "error_type": "cyclic_alias"},
                )
        return list(resolved), dropped, dropped > 0

    # ── Retrieval ──────────────────────────────────────────────────────

    def retrieve(self, category: str, detail: str, keyword: str) -> Optional[T]:
        """
        Mapped value stored at (category, detail, keyword), or None.

        Names are matched with the taxonomy's case mode.
        """
        category, detail, keyword = self._canonical_key(category, detail, keyword)
        return self.store.retrieve(category, detail, keyword, self.mapper)

    def take(self, category: str, detail: str, keyword: str) -> Optional[T]:
        logger.debug(f"take [{category}, {detail}, {keyword}]",
                     extra={"category": category, "detail": detail, "keyword": keyword})
        return self.retrieve(category, detail, keyword)

    def keywords_of(self, category: str, detail: str) -> List[str]:
        category, detail, _ = self._canonical_key(category, detail, "")
        return self.store.keywords_of(category, detail)

    def summary(self) -> Dict[str, Dict[str, List[str]]]:
        return self.store.buckets()

    def _canonical_key(self, category: str, detail: str, keyword: str):
        taxonomy = self.taxonomy
        category = taxonomy.canonical_category(category) or category
        detail = taxonomy.canonical_detail(category, detail) or detail
        keyword = taxonomy.canonical_keyword(keyword) or keyword
        return category, detail, keyword


def build(taxonomy: Taxonomy, documents: Sequence[str],
          mapper: Optional[Callable[[ClusterEntry], T]] = None,
          settings: Optional[Settings] = None) -> ClusterBuilder[T]:
    """Build a ClusterBuilder and run it over documents in one call."""
    builder = ClusterBuilder(taxonomy, mapper=mapper, settings=settings)
    builder.build(documents)
    return builder
