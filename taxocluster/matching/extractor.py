"""
Multi-pattern keyword extraction.

Builds one Aho-Corasick automaton over the taxonomy's keyword dictionary
and scans each document once, whatever the dictionary size. Overlapping
matches are all reported; the result keeps one entry per keyword, in
order of first match end position.

Engineering notes:
- pyahocorasick does the matching in C; the automaton is built once per
  extractor and only read afterwards, so one extractor can serve every
  worker thread.
- Case-insensitive taxonomies fold both the patterns and the text.
  Matches are reported with the keyword's stored spelling.
"""

from typing import Dict, List

import ahocorasick

from taxocluster.taxonomy.model import Taxonomy
from taxocluster.utils.logging_config import get_logger

logger = get_logger("matching.extractor")


class KeywordExtractor:
    """
    Find which known keywords occur in a text.

    Usage:
        extractor = KeywordExtractor(taxonomy)
        found = extractor.extract("Oranges have Vitamin C")
    """

    def __init__(self, taxonomy: Taxonomy, include_details: bool = False):
        """
        Args:
            taxonomy: Source of the keyword dictionary and case mode
            include_details: Also match detail names literally present in
                the text, so they reach the classifier without a synonym
        """
        self.taxonomy = taxonomy
        self.include_details = include_details
        self._patterns = self._collect_patterns()
        self._automaton = self._build_automaton(self._patterns)
        logger.debug(f"Keyword automaton built with {len(self._patterns)} patterns")

    def _collect_patterns(self) -> Dict[str, str]:
        patterns: Dict[str, str] = {}
        for keyword in self.taxonomy.ordered_keywords():
            if keyword:
                patterns.setdefault(self.taxonomy.fold(keyword), keyword)
        if self.include_details:
            for detail in self.taxonomy.detail_names():
                if detail:
                    patterns.setdefault(self.taxonomy.fold(detail), detail)
        return patterns

    @staticmethod
    def _build_automaton(patterns: Dict[str, str]):
        if not patterns:
            return None
        automaton = ahocorasick.Automaton()
        for folded, stored in patterns.items():
            automaton.add_word(folded, stored)
        automaton.make_automaton()
        return automaton

    @property
    def pattern_count(self) -> int:
        return len(self._patterns)

    def extract(self, text: str) -> List[str]:
        """
        Return the distinct stored keywords occurring anywhere in text.

        The list has set semantics (no duplicates); ordering follows the
        position where each keyword is first completed.
        """
        if self._automaton is None or not text:
            return []

        found: Dict[str, None] = {}
        for _end, stored in self._automaton.iter(self.taxonomy.fold(text)):
            found.setdefault(stored, None)
        return list(found)
