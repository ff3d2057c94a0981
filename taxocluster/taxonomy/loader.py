"""
Load a taxonomy from a JSON configuration file or a plain dict.

Format:
    {
        "case_sensitive": false,
        "flush_spaces": true,
        "categories": {"fruit": ["citrus", "berry"], "vegetable": []},
        "keywords": ["vitamin", "fiber"],
        "synonyms": {"citrus": ["lemon", "lime"]}
    }

"synonyms" maps a canonical name to the list of its aliases.
Every key is optional except "categories".
"""

import json
from pathlib import Path
from typing import Any, Dict, Union

from taxocluster.exceptions import TaxonomyConfigError
from taxocluster.taxonomy.builder import TaxonomyBuilder
from taxocluster.taxonomy.model import Taxonomy
from taxocluster.utils.file_utils import load_json
from taxocluster.utils.logging_config import get_logger

logger = get_logger("taxonomy.loader")


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise TaxonomyConfigError(message)


def _is_str_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(v, str) for v in value)


def taxonomy_from_dict(data: Dict[str, Any]) -> Taxonomy:
    """Build a Taxonomy from its plain-data description."""
    _require(isinstance(data, dict), "Taxonomy config must be a JSON object")

    categories = data.get("categories")
    _require(isinstance(categories, dict), "'categories' must be an object")
    keywords = data.get("keywords", [])
    _require(_is_str_list(keywords), "'keywords' must be a list of strings")
    synonyms = data.get("synonyms", {})
    _require(isinstance(synonyms, dict), "'synonyms' must be an object")

    builder = TaxonomyBuilder(flush_spaces=bool(data.get("flush_spaces", True)))
    builder.set_case_sensitive(bool(data.get("case_sensitive", False)))

    for name, details in categories.items():
        _require(_is_str_list(details),
                 f"details of category {name!r} must be a list of strings")
        builder.add_category(name)
        builder.add_details(name, details)

    for canonical, aliases in synonyms.items():
        if isinstance(aliases, str):
            aliases = [aliases]
        _require(_is_str_list(aliases),
                 f"aliases of {canonical!r} must be a string or a list of strings")
        builder.add_synonyms(canonical, aliases)

    builder.add_keywords(keywords)
    return builder.build()


def load_taxonomy(path: Union[str, Path]) -> Taxonomy:
    """
    Load a taxonomy JSON file.

    Raises:
        TaxonomyConfigError: file missing, not valid JSON, or malformed
    """
    path = Path(path)
    try:
        data = load_json(path)
    except (OSError, json.JSONDecodeError) as e:
        raise TaxonomyConfigError(f"Cannot read taxonomy file {path}: {e}") from e

    if data is None:
        raise TaxonomyConfigError(f"Taxonomy file not found: {path}")

    taxonomy = taxonomy_from_dict(data)
    logger.info(f"Loaded {taxonomy!r} from {path}", extra={"path": str(path)})
    return taxonomy
