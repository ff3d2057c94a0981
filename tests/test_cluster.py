from dataclasses import replace

import pytest

from taxocluster.config.settings import Settings
from taxocluster.pipeline.cluster import ClusterBuilder, ClusterEntry, build
from taxocluster.pipeline.sources import TextSource
from taxocluster.taxonomy.model import NOT_CLASSIFIED, Taxonomy

LEMON_DOC = "Lemon juice is full of Vitamin and fiber"


def test_example_scenario(example_taxonomy, settings):
    builder = ClusterBuilder(example_taxonomy, settings=replace(settings, extract_details=True))
    result = builder.build(["Oranges have Vitamin C and are citrus fruit."])

    assert builder.store.keys() == [
        ("fruit", NOT_CLASSIFIED, "vitamin c"),
        ("fruit", "citrus", "vitamin c"),
    ]
    assert result.documents_classified == 1
    assert result.entries_written == 2


def test_example_scenario_without_detail_matching(example_taxonomy, settings):
    builder = ClusterBuilder(example_taxonomy, settings=settings)
    builder.build(["Oranges have Vitamin C and are citrus fruit."])
    assert len(builder.store) == 0


def test_detail_reached_through_synonym(fruit_taxonomy, settings):
    builder = ClusterBuilder(fruit_taxonomy, settings=settings)
    result = builder.build([LEMON_DOC])

    assert builder.store.keys() == [
        ("fruit", NOT_CLASSIFIED, "fiber"),
        ("fruit", NOT_CLASSIFIED, "vitamin"),
        ("fruit", "citrus", "fiber"),
        ("fruit", "citrus", "vitamin"),
    ]
    assert result.to_dict()["entries_written"] == 4


def test_every_keyword_is_in_both_buckets(fruit_taxonomy, settings):
    docs = [LEMON_DOC, "lime and sugar", "a lemon a day, fiber and sugar"]
    builder = ClusterBuilder(fruit_taxonomy, settings=settings)
    builder.build(docs)

    for category, detail, keyword in builder.store.keys():
        assert builder.store.contains(category, NOT_CLASSIFIED, keyword)
    assert builder.keywords_of("fruit", "citrus") == ["fiber", "sugar", "vitamin"]
    assert builder.keywords_of("fruit", NOT_CLASSIFIED) == ["fiber", "sugar", "vitamin"]


def test_documents_without_keywords_or_category_write_nothing(fruit_taxonomy, settings):
    builder = ClusterBuilder(fruit_taxonomy, settings=settings)
    result = builder.build(["just sugar here", "lime", "nothing at all", ""])

    assert len(builder.store) == 0
    assert result.documents_total == 4
    assert result.documents_skipped == 4
    assert result.documents_classified == 0


def cyclic_taxonomy():
    return Taxonomy(
        {"fruit": ["citrus"]},
        keywords=["loop", "lemon", "vitamin"],
        synonyms={"loop": "pool", "pool": "loop", "lemon": "citrus"},
        case_sensitive=False,
    )


def test_cyclic_alias_voids_the_document(settings, caplog):
    builder = ClusterBuilder(cyclic_taxonomy(), settings=settings)
    result = builder.build(["loop lemon vitamin", "lemon vitamin"])

    assert result.cyclic_alias_documents == 1
    assert result.documents_classified == 1
    # only the second document contributed
    entry = builder.retrieve("fruit", "citrus", "vitamin")
    assert entry.document_index == 1
    assert "Cyclic synonym" in caplog.text


def test_token_policy_drops_only_the_cyclic_token(settings):
    builder = ClusterBuilder(cyclic_taxonomy(), settings=replace(settings, cycle_policy="token"))
    result = builder.build(["loop lemon vitamin"])

    assert result.cyclic_alias_documents == 1
    assert builder.store.keys() == [
        ("fruit", NOT_CLASSIFIED, "vitamin"),
        ("fruit", "citrus", "vitamin"),
    ]


def test_process_document_outcome(fruit_taxonomy, settings):
    builder = ClusterBuilder(fruit_taxonomy, settings=settings)
    outcome = builder.process_document(7, LEMON_DOC)
    assert outcome.status == "classified"
    assert outcome.entries_written == 4
    assert outcome.classification.category == "fruit"
    assert outcome.classification.detail == "citrus"

    skipped = builder.process_document(8, "sugar")
    assert skipped.status == "skipped"
    assert skipped.entries_written == 0


def test_retrieve_returns_entry_by_default(fruit_taxonomy, settings):
    builder = ClusterBuilder(fruit_taxonomy, settings=settings)
    builder.build([LEMON_DOC])
    entry = builder.retrieve("fruit", "citrus", "vitamin")
    assert entry == ClusterEntry("fruit", "citrus", "vitamin", LEMON_DOC, 0)


def test_retrieve_with_mapper(fruit_taxonomy, settings):
    builder = ClusterBuilder(fruit_taxonomy, mapper=lambda e: e.document.upper(),
                             settings=settings)
    builder.build([LEMON_DOC])
    assert builder.take("fruit", NOT_CLASSIFIED, "fiber") == LEMON_DOC.upper()


def test_retrieve_miss_is_none(fruit_taxonomy, settings):
    builder = ClusterBuilder(fruit_taxonomy, mapper=lambda e: e.document, settings=settings)
    builder.build([LEMON_DOC])
    assert builder.retrieve("fruit", "berry", "vitamin") is None
    assert builder.retrieve("meat", "steak", "iron") is None
    assert builder.take("fruit", "citrus", "sugar") is None


def test_retrieve_follows_case_mode(fruit_taxonomy, settings):
    builder = ClusterBuilder(fruit_taxonomy, settings=settings)
    builder.build([LEMON_DOC])
    assert builder.retrieve("FRUIT", "Citrus", "VITAMIN") is not None


def test_overwrite_keeps_last_document(fruit_taxonomy, settings):
    builder = ClusterBuilder(fruit_taxonomy, settings=settings)
    builder.build(["lemon vitamin", "lime vitamin"])
    assert len(builder.store) == 2
    assert builder.retrieve("fruit", "citrus", "vitamin").document == "lime vitamin"


def test_rebuild_is_idempotent(fruit_taxonomy, settings):
    docs = [LEMON_DOC, "lime sugar"]
    builder = ClusterBuilder(fruit_taxonomy, settings=settings)
    builder.build(docs)
    first = builder.store.keys()
    builder.build(docs)
    assert builder.store.keys() == first


def test_parallel_build_matches_sequential(fruit_taxonomy, settings):
    docs = []
    for i in range(300):
        picks = [["lemon", "vitamin"], ["lime", "fiber", "sugar"], ["sugar"], ["berry"]]
        docs.append(f"doc {i}: " + " ".join(picks[i % len(picks)]))

    sequential = ClusterBuilder(fruit_taxonomy, settings=settings)
    sequential.build(docs)
    parallel = ClusterBuilder(fruit_taxonomy, settings=replace(settings, max_workers=8))
    result = parallel.build(docs)

    assert parallel.store.keys() == sequential.store.keys()
    assert result.documents_total == 300


def test_make_merges_sources(fruit_taxonomy, settings):
    builder = ClusterBuilder(fruit_taxonomy, settings=settings)
    result = builder.make([TextSource(["lemon vitamin"]), TextSource(["", "lime fiber"])])
    assert result.documents_total == 2
    assert builder.summary() == {
        "fruit": {
            NOT_CLASSIFIED: ["fiber", "vitamin"],
            "citrus": ["fiber", "vitamin"],
        },
    }


def test_module_level_build(fruit_taxonomy, settings):
    builder = build(fruit_taxonomy, [LEMON_DOC], mapper=lambda e: e.document_index,
                    settings=settings)
    assert builder.retrieve("fruit", "citrus", "fiber") == 0


def test_invalid_cycle_policy():
    with pytest.raises(ValueError):
        Settings(cycle_policy="ignore")
    with pytest.raises(ValueError):
        Settings(max_workers=0)
