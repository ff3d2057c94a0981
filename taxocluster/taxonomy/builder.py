"""
Fluent builder for Taxonomy instances.

Usage:
    taxonomy = (
        TaxonomyBuilder()
        .add_categories("fruit", "vegetable")
        .add_details("fruit", "citrus", "berry")
        .add_synonyms("citrus", "lemon", "lime")
        .add_keywords("vitamin", "fiber")
        .ignore_case()
        .build()
    )

Every name goes through flush_spaces() before it is stored, so
"vitamin c" is registered as "vitaminc" unless the builder was created
with flush_spaces=False.
"""

from typing import Dict, Iterable, List, Set, Union

from taxocluster.taxonomy.model import NOT_CLASSIFIED, Taxonomy
from taxocluster.utils.logging_config import get_logger

logger = get_logger("taxonomy.builder")

Names = Union[str, Iterable[str]]


def flush_spaces(text: str) -> str:
    """Remove every space character from text."""
    return text.replace(" ", "")


def _as_list(names: tuple) -> List[str]:
    # add_xxx("a", "b") and add_xxx(["a", "b"]) are both accepted
    if len(names) == 1 and not isinstance(names[0], str):
        return list(names[0])
    return list(names)


class TaxonomyBuilder:
    """Assembles categories, details, synonyms and keywords into a Taxonomy."""

    def __init__(self, flush_spaces: bool = True):
        self._flush = flush_spaces
        self._categories: Dict[str, Set[str]] = {}
        self._synonyms: Dict[str, str] = {}
        self._keywords: Dict[str, None] = {}
        self._case_sensitive = False

    def _norm(self, text: str) -> str:
        return flush_spaces(text) if self._flush else text

    # ── Categories ─────────────────────────────────────────────────────

    def add_category(self, name: str) -> "TaxonomyBuilder":
        key = self._norm(name)
        if key in self._categories:
            logger.debug(f"Category already exists, ignoring: {name!r}",
                         extra={"category": name})
        else:
            self._categories[key] = {NOT_CLASSIFIED}
        return self

    def add_categories(self, *names: Names) -> "TaxonomyBuilder":
        for name in _as_list(names):
            self.add_category(name)
        return self

    def add_detail(self, category: str, detail: str) -> "TaxonomyBuilder":
        """Add a detail to a category, creating the category when missing."""
        key = self._norm(category)
        if key not in self._categories:
            logger.debug(
                f"Detail added to unknown category, creating it: {category!r}",
                extra={"category": category, "detail": detail},
            )
            self._categories[key] = {NOT_CLASSIFIED}
        self._categories[key].add(self._norm(detail))
        return self

    def add_details(self, category: str, *details: Names) -> "TaxonomyBuilder":
        for detail in _as_list(details):
            self.add_detail(category, detail)
        return self

    # ── Synonyms ───────────────────────────────────────────────────────

    def add_synonym(self, original: str, alias: str) -> "TaxonomyBuilder":
        """
        Register alias as another spelling of original.

        Ignored when alias equals original, when the same pair was
        already registered, or when alias already points somewhere else.
        Overwriting an alias could close a cycle in an existing chain.
        """
        original_key = self._norm(original)
        alias_key = self._norm(alias)

        if alias_key == original_key:
            logger.debug(f"Synonym points to itself, ignoring: {alias!r}",
                         extra={"token": alias})
            return self
        if self._synonyms.get(original_key) == alias_key:
            logger.debug(
                f"Synonym would invert an existing alias, ignoring: {alias!r}",
                extra={"token": alias},
            )
            return self
        if alias_key in self._synonyms:
            logger.debug(f"Synonym already exists, ignoring: {alias!r}",
                         extra={"token": alias})
            return self

        self._synonyms[alias_key] = original_key
        return self

    def add_synonyms(self, original: str, *aliases: Names) -> "TaxonomyBuilder":
        for alias in _as_list(aliases):
            self.add_synonym(original, alias)
        return self

    # ── Keywords ───────────────────────────────────────────────────────

    def add_keyword(self, keyword: str) -> "TaxonomyBuilder":
        key = self._norm(keyword)
        if key in self._keywords:
            logger.debug(f"Keyword already exists: {keyword!r}",
                         extra={"keyword": keyword})
        self._keywords[key] = None
        return self

    def add_keywords(self, *keywords: Names) -> "TaxonomyBuilder":
        for keyword in _as_list(keywords):
            self.add_keyword(keyword)
        return self

    # ── Case mode ──────────────────────────────────────────────────────

    def ignore_case(self) -> "TaxonomyBuilder":
        self._case_sensitive = False
        return self

    def case_sensitive(self) -> "TaxonomyBuilder":
        self._case_sensitive = True
        return self

    def set_case_sensitive(self, value: bool) -> "TaxonomyBuilder":
        self._case_sensitive = bool(value)
        return self

    # ── Inspection / build ─────────────────────────────────────────────

    @property
    def categories(self) -> Dict[str, Set[str]]:
        return {name: set(details) for name, details in self._categories.items()}

    @property
    def keywords(self) -> Set[str]:
        return set(self._keywords)

    @property
    def synonyms(self) -> Dict[str, str]:
        return dict(self._synonyms)

    def build(self) -> Taxonomy:
        """Snapshot the current configuration into an immutable Taxonomy."""
        taxonomy = Taxonomy(
            categories={
                name: sorted(details) for name, details in self._categories.items()
            },
            keywords=list(self._keywords),
            synonyms=dict(self._synonyms),
            case_sensitive=self._case_sensitive,
        )
        logger.debug(f"Taxonomy built: {taxonomy!r}")
        return taxonomy
