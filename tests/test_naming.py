import re

import pytest

from taxdoc.domain.categories import DocumentCategory
from taxdoc.domain.naming import NAME_MAPPINGS, suggest_name

CANONICAL_PATTERN = re.compile(r"^\d{4}_.+_.+\.(pdf|csv)$")


def test_corporate_tax_name() -> None:
    assert (
        suggest_name(DocumentCategory.CORPORATE_TAX, "テスト会社株式会社", "2407")
        == "0001_法人税及び地方法人税申告書_2407.pdf"
    )


def test_missing_period_uses_placeholder() -> None:
    assert suggest_name(DocumentCategory.RECEIPT_NOTICE) == "0003_受信通知_XXXX.pdf"


def test_journal_data_uses_csv_extension() -> None:
    assert suggest_name(DocumentCategory.JOURNAL_DATA, fiscal_period="2407") == "5006_仕訳データ_2407.csv"


def test_unknown_category_has_no_suggestion() -> None:
    assert suggest_name(DocumentCategory.UNKNOWN, "会社", "2407") is None


@pytest.mark.parametrize("category", list(NAME_MAPPINGS))
def test_every_mapped_category_produces_canonical_form(category: DocumentCategory) -> None:
    name = suggest_name(category, fiscal_period="2407")

    assert name is not None
    assert CANONICAL_PATTERN.match(name)
    assert name.startswith(NAME_MAPPINGS[category].prefix + "_")


def test_only_unknown_is_unmapped() -> None:
    unmapped = {category for category in DocumentCategory if category not in NAME_MAPPINGS}

    assert unmapped == {DocumentCategory.UNKNOWN}


@pytest.mark.parametrize(
    ("prefecture", "expected_prefix"),
    [("東京都", "1011"), ("愛知県", "1021"), ("福岡県", "1031"), ("大阪府", "1000"), (None, "1000")],
)
def test_prefectural_prefix_by_region(prefecture: str | None, expected_prefix: str) -> None:
    name = suggest_name(DocumentCategory.PREFECTURAL_TAX, fiscal_period="2407", prefecture=prefecture)

    assert name == f"{expected_prefix}_都道府県税申告書_2407.pdf"


@pytest.mark.parametrize(
    ("municipality", "expected_prefix"),
    [("蒲郡市", "2001"), ("福岡市", "2011"), ("横浜市", "2000"), (None, "2000")],
)
def test_municipal_prefix_by_region(municipality: str | None, expected_prefix: str) -> None:
    name = suggest_name(DocumentCategory.MUNICIPAL_TAX, fiscal_period="2407", municipality=municipality)

    assert name == f"{expected_prefix}_市民税申告書_2407.pdf"


def test_region_only_applies_to_its_own_category() -> None:
    name = suggest_name(DocumentCategory.MUNICIPAL_TAX, fiscal_period="2407", prefecture="東京都")

    assert name == "2000_市民税申告書_2407.pdf"
