"""
Token classification for one document.

Each resolved token gets exactly one role:
1. KEYWORD: member of the keyword dictionary
2. DETAIL: detail of one or more categories
3. CATEGORY: a category name
4. UNCLASSIFIED: none of the above

Only KEYWORD and DETAIL roles influence the document result. Category
names do not elect a category on their own; election happens through
detail membership.

Election rule, applied on every DETAIL token:
- the detail becomes the document's detail (last detail token wins)
- the current category is kept when it owns the detail
- otherwise the first owning category in declaration order is elected
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Tuple

from taxocluster.taxonomy.model import NOT_CLASSIFIED, Taxonomy
from taxocluster.utils.logging_config import get_logger

logger = get_logger("matching.classifier")


class TokenKind(Enum):
    KEYWORD = "keyword"
    CATEGORY = "category"
    DETAIL = "detail"
    UNCLASSIFIED = "unclassified"


@dataclass(frozen=True)
class TokenRole:
    """Role of a single token within the taxonomy."""
    kind: TokenKind
    value: str                                   # stored spelling (or the raw token)
    owners: Tuple[Tuple[str, str], ...] = ()     # (category, detail) for DETAIL

    @property
    def categories(self) -> Tuple[str, ...]:
        return tuple(category for category, _ in self.owners)


@dataclass
class ClassificationResult:
    """Outcome of classifying one document's resolved tokens."""
    category: Optional[str] = None
    detail: Optional[str] = None
    keywords: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """True when the document contributes nothing to aggregation."""
        return not self.keywords or self.category is None

    def entries(self) -> Iterator[Tuple[str, str, str]]:
        """
        Aggregation keys for this document.

        Every keyword lands under NOT_CLASSIFIED, and under the detail too
        when one was found.
        """
        if self.is_empty:
            return
        for keyword in self.keywords:
            if self.detail is not None and self.detail != NOT_CLASSIFIED:
                yield self.category, self.detail, keyword
            yield self.category, NOT_CLASSIFIED, keyword


def classify_token(taxonomy: Taxonomy, token: str) -> TokenRole:
    """Pure role lookup for one token, independent of any document state."""
    keyword = taxonomy.canonical_keyword(token)
    if keyword is not None:
        return TokenRole(TokenKind.KEYWORD, keyword)

    owners = taxonomy.categories_of_detail(token)
    if owners:
        return TokenRole(TokenKind.DETAIL, token, owners)

    category = taxonomy.canonical_category(token)
    if category is not None:
        return TokenRole(TokenKind.CATEGORY, category)

    return TokenRole(TokenKind.UNCLASSIFIED, token)


def elect_category(current: Optional[str], role: TokenRole) -> Tuple[str, str]:
    """
    Apply the election rule for a DETAIL token.

    Returns (category, detail) with detail in the elected category's spelling.
    """
    for category, detail in role.owners:
        if category == current:
            return category, detail
    return role.owners[0]


class TokenClassifier:
    """
    Classifies the resolved tokens of a document.

    Usage:
        classifier = TokenClassifier(taxonomy)
        result = classifier.classify(["vitamin", "citrus"])
        for category, detail, keyword in result.entries():
            ...
    """

    def __init__(self, taxonomy: Taxonomy):
        self.taxonomy = taxonomy

    def classify_token(self, token: str) -> TokenRole:
        return classify_token(self.taxonomy, token)

    def classify(self, tokens: Iterable[str]) -> ClassificationResult:
        result = ClassificationResult()
        seen_keywords = {}

        for token in tokens:
            role = self.classify_token(token)

            if role.kind is TokenKind.DETAIL:
                result.category, result.detail = elect_category(result.category, role)
                logger.debug(
                    f"Detail {role.value!r} owned by {list(role.categories)}, "
                    f"elected {result.category!r}",
                    extra={"category": result.category, "detail": result.detail},
                )
            elif role.kind is TokenKind.KEYWORD:
                seen_keywords.setdefault(role.value, None)

        result.keywords = list(seen_keywords)
        return result
