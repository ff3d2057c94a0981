"""
Synonym resolution with cycle detection.

A token is rewritten through the taxonomy's alias map until it reaches a
name with no further mapping (its canonical form). An acyclic chain can
never be longer than the number of aliases, so reaching that bound with a
mapping still pending means the chain loops and CyclicAliasError is raised.
"""

from typing import Iterable, List

from taxocluster.exceptions import CyclicAliasError
from taxocluster.taxonomy.model import Taxonomy


class SynonymResolver:
    """
    Map tokens to their canonical form.

    Case-insensitive taxonomies resolve against the folded synonym map, so
    canonical forms reached through an alias come back lower-cased.
    """

    def __init__(self, taxonomy: Taxonomy):
        self.taxonomy = taxonomy
        self._aliases = (
            taxonomy.synonyms if taxonomy.case_sensitive else taxonomy.folded_synonyms
        )
        self._bound = len(self._aliases)

    def resolve(self, token: str) -> str:
        fold = self.taxonomy.fold
        cursor = token
        hops = 0
        while fold(cursor) in self._aliases:
            if hops >= self._bound:
                raise CyclicAliasError(token)
            cursor = self._aliases[fold(cursor)]
            hops += 1
        return cursor

    def resolve_all(self, tokens: Iterable[str]) -> List[str]:
        """
        Resolve every token; duplicates after resolution collapse.

        Raises CyclicAliasError on the first token that cannot be resolved.
        """
        resolved = {}
        for token in tokens:
            resolved.setdefault(self.resolve(token), None)
        return list(resolved)
