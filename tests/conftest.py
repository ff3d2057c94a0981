import logging

import pytest

from taxocluster.config.settings import Settings
from taxocluster.taxonomy.builder import TaxonomyBuilder
from taxocluster.taxonomy.model import Taxonomy
from taxocluster.utils.logging_config import ROOT_LOGGER


@pytest.fixture
def settings():
    return Settings(max_workers=1, store_shards=4, cycle_policy="document",
                    extract_details=False)


@pytest.fixture
def fruit_taxonomy():
    """fruit/citrus with lemon and lime as aliases of citrus."""
    return (
        TaxonomyBuilder()
        .add_categories("fruit", "candy")
        .add_details("fruit", "citrus", "berry")
        .add_details("candy", "chocolate")
        .add_synonyms("citrus", "lemon", "lime")
        .add_keywords("lemon", "lime", "vitamin", "fiber", "sugar")
        .ignore_case()
        .build()
    )


@pytest.fixture
def example_taxonomy():
    return Taxonomy(
        categories={"fruit": ["citrus"]},
        keywords=["vitamin c"],
        case_sensitive=False,
    )


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    root = logging.getLogger(ROOT_LOGGER)
    for handler in list(root.handlers):
        handler.close()
        root.removeHandler(handler)
    root.setLevel(logging.NOTSET)
