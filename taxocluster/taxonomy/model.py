"""
Immutable taxonomy model.

A taxonomy holds:
- categories: category name -> detail names (always including NOT_CLASSIFIED)
- keywords: the flat dictionary of matchable keywords
- synonyms: alias -> canonical name (chains allowed)
- case_sensitive: whether every lookup folds case

Instances are built once and shared read-only between worker threads.
All case-folded lookup indexes are computed at construction.
"""

from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Mapping, Optional, Tuple

NOT_CLASSIFIED = "[NOT_CLASSIFIED]"


def _ordered_unique(values: Iterable[str]) -> Tuple[str, ...]:
    return tuple(dict.fromkeys(values))


class Taxonomy:
    """
    Read-only view of categories, details, keywords and synonyms.

    Usage:
        taxonomy = Taxonomy(
            categories={"fruit": ["citrus", "berry"]},
            keywords=["vitamin", "fiber"],
            synonyms={"lemon": "citrus"},
            case_sensitive=False,
        )
        taxonomy.details_of("fruit")  # frozenset({"citrus", "berry", NOT_CLASSIFIED})
    """

    def __init__(self, categories: Mapping[str, Iterable[str]],
                 keywords: Iterable[str] = (),
                 synonyms: Optional[Mapping[str, str]] = None,
                 case_sensitive: bool = False):
        self._case_sensitive = bool(case_sensitive)

        category_order = []
        detail_order: Dict[str, Tuple[str, ...]] = {}
        for name, details in categories.items():
            category_order.append(name)
            detail_order[name] = _ordered_unique([*details, NOT_CLASSIFIED])

        self._category_order = tuple(category_order)
        self._categories = MappingProxyType(
            {name: frozenset(details) for name, details in detail_order.items()}
        )
        self._keyword_order = _ordered_unique(keywords)
        self._keywords = frozenset(self._keyword_order)
        self._synonyms = MappingProxyType(dict(synonyms or {}))

        # ── Folded lookup indexes ──────────────────────────────────────
        # First spelling wins when two entries fold to the same key.
        self._keyword_index: Dict[str, str] = {}
        for keyword in self._keyword_order:
            self._keyword_index.setdefault(self.fold(keyword), keyword)

        self._category_index: Dict[str, str] = {}
        for name in self._category_order:
            self._category_index.setdefault(self.fold(name), name)

        # folded detail -> ((category, stored detail), ...) in declaration order
        detail_index: Dict[str, Dict[str, str]] = {}
        for name in self._category_order:
            for detail in detail_order[name]:
                if detail == NOT_CLASSIFIED:
                    continue
                detail_index.setdefault(self.fold(detail), {}).setdefault(name, detail)
        self._detail_index = {
            key: tuple(owners.items()) for key, owners in detail_index.items()
        }

        self._folded_synonyms = MappingProxyType({
            self.fold(alias): self.fold(canonical)
            for alias, canonical in self._synonyms.items()
        })

    # ── Accessors ──────────────────────────────────────────────────────

    @property
    def case_sensitive(self) -> bool:
        return self._case_sensitive

    @property
    def categories(self) -> Mapping[str, FrozenSet[str]]:
        return self._categories

    @property
    def keywords(self) -> FrozenSet[str]:
        return self._keywords

    @property
    def synonyms(self) -> Mapping[str, str]:
        return self._synonyms

    @property
    def folded_synonyms(self) -> Mapping[str, str]:
        """Synonym map with keys and values case-folded (identity when case sensitive)."""
        return self._folded_synonyms

    def category_names(self) -> Tuple[str, ...]:
        """Category names in declaration order."""
        return self._category_order

    def details_of(self, category: str) -> Optional[FrozenSet[str]]:
        """Detail set of a category, or None if the category does not exist."""
        return self._categories.get(category)

    def ordered_keywords(self) -> Tuple[str, ...]:
        return self._keyword_order

    # ── Case-aware lookups ─────────────────────────────────────────────

    def fold(self, text: str) -> str:
        return text if self._case_sensitive else text.lower()

    def canonical_keyword(self, token: str) -> Optional[str]:
        """Stored spelling of a keyword matching token, or None."""
        return self._keyword_index.get(self.fold(token))

    def canonical_category(self, token: str) -> Optional[str]:
        """Stored spelling of a category matching token, or None."""
        return self._category_index.get(self.fold(token))

    def categories_of_detail(self, token: str) -> Tuple[Tuple[str, str], ...]:
        """
        Every (category, stored detail) pair whose detail matches token.

        Pairs come in category declaration order. The NOT_CLASSIFIED
        sentinel is never matched.
        """
        return self._detail_index.get(self.fold(token), ())

    def detail_names(self) -> Tuple[str, ...]:
        """One stored spelling per distinct (folded) detail name, sentinel excluded."""
        return tuple(owners[0][1] for owners in self._detail_index.values())

    def canonical_detail(self, category: str, token: str) -> Optional[str]:
        """Stored spelling of token within category's detail set, or None."""
        if self.fold(token) == self.fold(NOT_CLASSIFIED):
            return NOT_CLASSIFIED
        for owner, detail in self.categories_of_detail(token):
            if owner == category:
                return detail
        return None

    # ── Export ─────────────────────────────────────────────────────────

    def to_dict(self) -> Dict:
        """Plain-data snapshot, compatible with the loader format."""
        canonical_to_aliases: Dict[str, list] = {}
        for alias, canonical in self._synonyms.items():
            canonical_to_aliases.setdefault(canonical, []).append(alias)
        return {
            "case_sensitive": self._case_sensitive,
            "flush_spaces": False,
            "categories": {
                name: sorted(d for d in self._categories[name] if d != NOT_CLASSIFIED)
                for name in self._category_order
            },
            "keywords": list(self._keyword_order),
            "synonyms": canonical_to_aliases,
        }

    def __repr__(self) -> str:
        return (
            f"Taxonomy(categories={len(self._categories)}, "
            f"keywords={len(self._keywords)}, synonyms={len(self._synonyms)}, "
            f"case_sensitive={self._case_sensitive})"
        )
