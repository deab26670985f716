from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from .categories import DocumentCategory

PERIOD_PLACEHOLDER = "XXXX"
PDF_EXTENSION = ".pdf"
CSV_EXTENSION = ".csv"
SUPPORTED_EXTENSIONS = frozenset({PDF_EXTENSION, CSV_EXTENSION})


@dataclass(frozen=True)
class NameMapping:
    prefix: str
    label: str


NAME_MAPPINGS: Mapping[DocumentCategory, NameMapping] = MappingProxyType(
    {
        DocumentCategory.TAX_PAYMENT_LIST: NameMapping("0000", "納付税額一覧表"),
        DocumentCategory.CORPORATE_TAX: NameMapping("0001", "法人税及び地方法人税申告書"),
        DocumentCategory.CORPORATE_TAX_ATTACHMENT: NameMapping("0002", "添付資料"),
        DocumentCategory.RECEIPT_NOTICE: NameMapping("0003", "受信通知"),
        DocumentCategory.PAYMENT_INFO: NameMapping("0004", "納付情報"),
        DocumentCategory.PREFECTURAL_TAX: NameMapping("1000", "都道府県税申告書"),
        DocumentCategory.MUNICIPAL_TAX: NameMapping("2000", "市民税申告書"),
        DocumentCategory.CONSUMPTION_TAX: NameMapping("3001", "消費税及び地方消費税申告書"),
        DocumentCategory.CONSUMPTION_TAX_ATTACHMENT: NameMapping("3002", "添付資料"),
        DocumentCategory.FINANCIAL_STATEMENT: NameMapping("5001", "決算書"),
        DocumentCategory.GENERAL_LEDGER: NameMapping("5002", "総勘定元帳"),
        DocumentCategory.SUBSIDIARY_LEDGER: NameMapping("5003", "補助元帳"),
        DocumentCategory.TRIAL_BALANCE: NameMapping("5004", "残高試算表"),
        DocumentCategory.JOURNAL: NameMapping("5005", "仕訳帳"),
        DocumentCategory.JOURNAL_DATA: NameMapping("5006", "仕訳データ"),
        DocumentCategory.FIXED_ASSET: NameMapping("6001", "固定資産台帳"),
        DocumentCategory.BULK_DEPRECIATION: NameMapping("6002", "一括償却資産明細表"),
        DocumentCategory.SMALL_AMOUNT_ASSET: NameMapping("6003", "少額減価償却資産明細表"),
        DocumentCategory.TAX_CLASSIFICATION: NameMapping("7001", "税区分集計表"),
        DocumentCategory.TAX_CLASSIFICATION_BY_ACCOUNT: NameMapping("7002", "勘定科目別税区分集計表"),
    }
)

PREFECTURE_PREFIXES: Mapping[str, str] = MappingProxyType(
    {
        "東京都": "1011",
        "愛知県": "1021",
        "福岡県": "1031",
    }
)

MUNICIPALITY_PREFIXES: Mapping[str, str] = MappingProxyType(
    {
        "蒲郡市": "2001",
        "福岡市": "2011",
    }
)

CSV_CATEGORIES = frozenset({DocumentCategory.JOURNAL_DATA})


def suggest_name(
    category: DocumentCategory,
    company_name: str | None = None,
    fiscal_period: str | None = None,
    prefecture: str | None = None,
    municipality: str | None = None,
) -> str | None:
    """
    Build the canonical ``{prefix}_{label}_{period}{ext}`` filename for a category.

    Returns None when the category cannot be named (UNKNOWN or unmapped).
    ``company_name`` is accepted for call-site symmetry with classification
    results but does not appear in the canonical form.

    Examples:
        >>> suggest_name(DocumentCategory.CORPORATE_TAX, fiscal_period="2407")
        '0001_法人税及び地方法人税申告書_2407.pdf'
        >>> suggest_name(DocumentCategory.RECEIPT_NOTICE)
        '0003_受信通知_XXXX.pdf'
        >>> suggest_name(DocumentCategory.UNKNOWN) is None
        True
    """
    mapping = NAME_MAPPINGS.get(category)
    if mapping is None:
        return None

    prefix = _regional_prefix(category, prefecture, municipality) or mapping.prefix
    period = fiscal_period or PERIOD_PLACEHOLDER
    extension = CSV_EXTENSION if category in CSV_CATEGORIES else PDF_EXTENSION
    return f"{prefix}_{mapping.label}_{period}{extension}"


def _regional_prefix(
    category: DocumentCategory, prefecture: str | None, municipality: str | None
) -> str | None:
    if category is DocumentCategory.PREFECTURAL_TAX and prefecture:
        return PREFECTURE_PREFIXES.get(prefecture)
    if category is DocumentCategory.MUNICIPAL_TAX and municipality:
        return MUNICIPALITY_PREFIXES.get(municipality)
    return None
