from taxocluster.matching.classifier import (
    ClassificationResult,
    TokenClassifier,
    TokenKind,
    classify_token,
)
from taxocluster.taxonomy.model import NOT_CLASSIFIED, Taxonomy


def shop_taxonomy(**kwargs):
    return Taxonomy(
        {"fruit": ["citrus", "sweet"], "candy": ["sweet", "chocolate"]},
        keywords=["vitamin", "sugar", "citrus"],
        **kwargs,
    )


def test_token_roles():
    taxonomy = Taxonomy({"fruit": ["berry"]}, keywords=["vitamin"])
    assert classify_token(taxonomy, "vitamin").kind is TokenKind.KEYWORD
    assert classify_token(taxonomy, "fruit").kind is TokenKind.CATEGORY
    assert classify_token(taxonomy, "nothing").kind is TokenKind.UNCLASSIFIED

    role = classify_token(taxonomy, "berry")
    assert role.kind is TokenKind.DETAIL
    assert role.categories == ("fruit",)


def test_keyword_takes_precedence_over_detail():
    role = classify_token(shop_taxonomy(), "citrus")
    assert role.kind is TokenKind.KEYWORD


def test_detail_owned_by_several_categories():
    role = classify_token(shop_taxonomy(), "sweet")
    assert role.kind is TokenKind.DETAIL
    assert role.categories == ("fruit", "candy")


def test_keyword_and_detail_classify_document():
    taxonomy = Taxonomy({"fruit": ["citrus"]}, keywords=["vitamin"])
    result = TokenClassifier(taxonomy).classify(["vitamin", "citrus"])
    assert result.category == "fruit"
    assert result.detail == "citrus"
    assert result.keywords == ["vitamin"]


def test_entries_write_detail_and_catch_all():
    result = ClassificationResult(category="fruit", detail="citrus",
                                  keywords=["vitamin", "sugar"])
    assert list(result.entries()) == [
        ("fruit", "citrus", "vitamin"),
        ("fruit", NOT_CLASSIFIED, "vitamin"),
        ("fruit", "citrus", "sugar"),
        ("fruit", NOT_CLASSIFIED, "sugar"),
    ]


def test_entries_without_detail_only_use_catch_all():
    result = ClassificationResult(category="fruit", detail=None, keywords=["vitamin"])
    assert list(result.entries()) == [("fruit", NOT_CLASSIFIED, "vitamin")]


def test_no_category_means_no_entries():
    result = TokenClassifier(shop_taxonomy()).classify(["vitamin", "sugar"])
    assert result.category is None
    assert result.keywords == ["vitamin", "sugar"]
    assert result.is_empty
    assert list(result.entries()) == []


def test_no_keyword_means_no_entries():
    result = TokenClassifier(shop_taxonomy()).classify(["chocolate"])
    assert result.category == "candy"
    assert result.is_empty
    assert list(result.entries()) == []


def test_category_name_alone_does_not_elect():
    result = TokenClassifier(shop_taxonomy()).classify(["fruit", "vitamin"])
    assert result.category is None
    assert result.is_empty


def test_first_declared_owner_is_elected():
    result = TokenClassifier(shop_taxonomy()).classify(["sweet", "sugar"])
    assert result.category == "fruit"
    assert result.detail == "sweet"


def test_current_category_is_kept_when_it_owns_the_detail():
    result = TokenClassifier(shop_taxonomy()).classify(["chocolate", "sweet", "sugar"])
    assert result.category == "candy"
    assert result.detail == "sweet"


def test_category_switches_when_detail_belongs_elsewhere():
    taxonomy = Taxonomy({"fruit": ["berry"], "candy": ["chocolate"]}, keywords=["sugar"])
    result = TokenClassifier(taxonomy).classify(["berry", "chocolate", "sugar"])
    assert result.category == "candy"
    assert result.detail == "chocolate"


def test_last_detail_wins():
    taxonomy = Taxonomy({"fruit": ["berry", "citrus"]}, keywords=["sugar"])
    result = TokenClassifier(taxonomy).classify(["berry", "sugar", "citrus"])
    assert result.detail == "citrus"


def test_case_insensitive_uses_stored_spellings():
    taxonomy = Taxonomy({"Fruit": ["Citrus"]}, keywords=["Vitamin"], case_sensitive=False)
    result = TokenClassifier(taxonomy).classify(["citrus", "VITAMIN"])
    assert result.category == "Fruit"
    assert result.detail == "Citrus"
    assert result.keywords == ["Vitamin"]


def test_case_sensitive_distinguishes_spellings():
    taxonomy = Taxonomy({"fruit": ["citrus"]}, keywords=["vitamin"], case_sensitive=True)
    result = TokenClassifier(taxonomy).classify(["Citrus", "Vitamin"])
    assert result.category is None
    assert result.keywords == []
