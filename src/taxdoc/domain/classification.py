from __future__ import annotations

import re

from .categories import (
    MANUAL_CONFIDENCE,
    NO_MATCH_CONFIDENCE,
    STRUCTURED_CONFIDENCE,
    TEXT_CONFIDENCE,
    DocumentCategory,
    clamp_confidence,
)
from .models import ClassificationResult, PartialAnalysis

# e-Tax/eLTAX export: <label>_<YYYYMMDD><company>_<YYYYMMDDhhmmss>.pdf
STRUCTURED_NAME_PATTERN = re.compile(r"^(.+?)_([0-9]{8})(.+?)_([0-9]{14})\.pdf$")

PREFECTURE_TOKEN_PATTERN = re.compile(r"^([^\s_]+?(?:都|道|府|県))(?=[\s_])")
MUNICIPALITY_TOKEN_PATTERN = re.compile(r"^([^\s_]+?(?:市|町|村))(?=[\s_])")

COMPANY_TEXT_PATTERN = re.compile(r"(?:株式会社|有限会社|合同会社|合資会社)\s*([^\s]+)")
SUBMISSION_DATE_PATTERN = re.compile(
    r"(?:提出日|申告日|作成日)[\s:：]*(\d{4}年\d{1,2}月\d{1,2}日)"
)
FISCAL_YEAR_TEXT_PATTERN = re.compile(
    r"事業年度[\s:：]*(?:自\s*)?(\d{4}年\d{1,2}月\d{1,2}日)\s*(?:至\s*)?(\d{4}年\d{1,2}月\d{1,2}日)"
)
JAPANESE_DATE_PATTERN = re.compile(r"(\d{4})年(\d{1,2})月(\d{1,2})日")

STRUCTURED_LABEL_RULES: tuple[tuple[tuple[str, ...], DocumentCategory], ...] = (
    (("法人税及び地方法人税申告書",), DocumentCategory.CORPORATE_TAX),
    (("消費税申告書",), DocumentCategory.CONSUMPTION_TAX),
    (("都道府県民税", "事業税"), DocumentCategory.PREFECTURAL_TAX),
    (("市町村民税", "市民税"), DocumentCategory.MUNICIPAL_TAX),
)

# Each rule: (any-of keywords, all-of keywords, required suffix, category).
MANUAL_NAME_RULES: tuple[tuple[tuple[str, ...], tuple[str, ...], str, DocumentCategory], ...] = (
    (("受信通知",), (), "", DocumentCategory.RECEIPT_NOTICE),
    (("納付情報", "脳情報"), (), "", DocumentCategory.PAYMENT_INFO),
    (("決算書",), (), "", DocumentCategory.FINANCIAL_STATEMENT),
    (("総勘定元帳",), (), "", DocumentCategory.GENERAL_LEDGER),
    (("補助元帳",), (), "", DocumentCategory.SUBSIDIARY_LEDGER),
    (("残高試算表", "貸借対照表", "損益計算書"), (), "", DocumentCategory.TRIAL_BALANCE),
    (("仕訳帳",), (), ".pdf", DocumentCategory.JOURNAL),
    (("仕訳",), (), ".csv", DocumentCategory.JOURNAL_DATA),
    (("固定資産台帳",), (), "", DocumentCategory.FIXED_ASSET),
    (("一括償却資産",), (), "", DocumentCategory.BULK_DEPRECIATION),
    (("少額",), (), "", DocumentCategory.SMALL_AMOUNT_ASSET),
    (("勘定科目別税区分集計表",), (), "", DocumentCategory.TAX_CLASSIFICATION_BY_ACCOUNT),
    (("税区分集計表",), (), "", DocumentCategory.TAX_CLASSIFICATION),
    (("イメージ添付書類",), ("法人税申告",), "", DocumentCategory.CORPORATE_TAX_ATTACHMENT),
    (("イメージ添付書類",), ("法人消費税申告",), "", DocumentCategory.CONSUMPTION_TAX_ATTACHMENT),
    (("納税一覧",), (), "", DocumentCategory.TAX_PAYMENT_LIST),
)

# Receipt and payment probes stay ahead of the declaration probes; their
# bodies usually repeat the declaration title.
TEXT_CATEGORY_RULES: tuple[tuple[re.Pattern[str], DocumentCategory], ...] = (
    (re.compile(r"(?:法人税|消費税).*受信通知"), DocumentCategory.RECEIPT_NOTICE),
    (re.compile(r"(?:法人税|消費税).*納付情報"), DocumentCategory.PAYMENT_INFO),
    (re.compile(r"地方法人税.*申告書|法人税.*申告書"), DocumentCategory.CORPORATE_TAX),
    (re.compile(r"都道府県民税.*事業税"), DocumentCategory.PREFECTURAL_TAX),
    (re.compile(r"法人市.*民税"), DocumentCategory.MUNICIPAL_TAX),
    (re.compile(r"消費税.*申告書"), DocumentCategory.CONSUMPTION_TAX),
    (re.compile(r"決算書|財務諸表"), DocumentCategory.FINANCIAL_STATEMENT),
    (re.compile(r"総勘定元帳"), DocumentCategory.GENERAL_LEDGER),
    (re.compile(r"補助元帳"), DocumentCategory.SUBSIDIARY_LEDGER),
    (re.compile(r"残高試算表|貸借対照表.*損益計算書"), DocumentCategory.TRIAL_BALANCE),
    (re.compile(r"仕訳帳"), DocumentCategory.JOURNAL),
    (re.compile(r"固定資産台帳"), DocumentCategory.FIXED_ASSET),
    (re.compile(r"一括償却資産"), DocumentCategory.BULK_DEPRECIATION),
    (re.compile(r"少額.*資産|少額減価償却"), DocumentCategory.SMALL_AMOUNT_ASSET),
    (re.compile(r"勘定科目別税区分"), DocumentCategory.TAX_CLASSIFICATION_BY_ACCOUNT),
    (re.compile(r"税区分集計表"), DocumentCategory.TAX_CLASSIFICATION),
)


def classify(file_name: str, extracted_text: str | None = None) -> ClassificationResult:
    """
    Classify a tax document from its filename, with optional PDF text as a
    secondary source.

    Filename metadata always wins; text only fills fields the filename left
    empty. Never raises: unmatched input yields UNKNOWN with confidence 0.

    Example:
        >>> result = classify("法人税　受信通知.pdf")
        >>> result.category, result.confidence
        (<DocumentCategory.RECEIPT_NOTICE: 'RECEIPT_NOTICE'>, 0.8)
    """
    from_name = analyze_file_name(file_name or "")
    from_text = analyze_text(extracted_text) if extracted_text else PartialAnalysis()
    return merge_analyses(from_name, from_text)


def analyze_file_name(file_name: str) -> PartialAnalysis:
    match = STRUCTURED_NAME_PATTERN.match(file_name)
    if match:
        return _analyze_structured_name(file_name, match)

    category = _match_manual_name(file_name)
    if category is None:
        return PartialAnalysis()
    return PartialAnalysis(category=category, confidence=MANUAL_CONFIDENCE)


def _analyze_structured_name(file_name: str, match: re.Match[str]) -> PartialAnalysis:
    label, fiscal_date, company, _timestamp = match.groups()
    analysis = PartialAnalysis(
        fiscal_period=fiscal_date[2:4] + fiscal_date[4:6],
        company_name=normalize_company_name(company),
        confidence=STRUCTURED_CONFIDENCE,
    )
    for keywords, category in STRUCTURED_LABEL_RULES:
        if not any(keyword in label for keyword in keywords):
            continue
        analysis.category = category
        if category is DocumentCategory.PREFECTURAL_TAX:
            analysis.prefecture = _leading_token(PREFECTURE_TOKEN_PATTERN, file_name)
        elif category is DocumentCategory.MUNICIPAL_TAX:
            analysis.municipality = _leading_token(MUNICIPALITY_TOKEN_PATTERN, file_name)
        break
    return analysis


def _match_manual_name(file_name: str) -> DocumentCategory | None:
    lowered = file_name.lower()
    for any_of, all_of, suffix, category in MANUAL_NAME_RULES:
        if not any(keyword in file_name for keyword in any_of):
            continue
        if not all(keyword in file_name for keyword in all_of):
            continue
        if suffix and not lowered.endswith(suffix):
            continue
        return category
    return None


def _leading_token(pattern: re.Pattern[str], file_name: str) -> str | None:
    match = pattern.match(file_name)
    return match.group(1) if match else None


def normalize_company_name(fragment: str) -> str | None:
    """
    Drop every whitespace character, including the full-width space used by
    e-Tax to pad company names.

    Examples:
        >>> normalize_company_name("テスト会社　株式会社")
        'テスト会社株式会社'
        >>> normalize_company_name("　 ") is None
        True
    """
    collapsed = "".join(fragment.split())
    return collapsed or None


def analyze_text(text: str) -> PartialAnalysis:
    analysis = PartialAnalysis()

    company_match = COMPANY_TEXT_PATTERN.search(text)
    if company_match:
        analysis.company_name = normalize_company_name(company_match.group(0))

    date_match = SUBMISSION_DATE_PATTERN.search(text)
    if date_match:
        analysis.submission_date = normalize_japanese_date(date_match.group(1))

    fiscal_match = FISCAL_YEAR_TEXT_PATTERN.search(text)
    if fiscal_match:
        end_date = normalize_japanese_date(fiscal_match.group(2))
        if end_date:
            year, month, _day = end_date.split("-")
            analysis.fiscal_period = year[2:] + month

    for pattern, category in TEXT_CATEGORY_RULES:
        if pattern.search(text):
            analysis.category = category
            analysis.confidence = TEXT_CONFIDENCE
            break

    return analysis


def normalize_japanese_date(value: str) -> str | None:
    """
    Convert ``YYYY年M月D日`` into ISO ``YYYY-MM-DD``.

    Examples:
        >>> normalize_japanese_date("2024年7月31日")
        '2024-07-31'
        >>> normalize_japanese_date("令和6年7月31日") is None
        True
    """
    match = JAPANESE_DATE_PATTERN.search(value)
    if not match:
        return None
    year, month, day = match.groups()
    return f"{year}-{int(month):02d}-{int(day):02d}"


def merge_analyses(from_name: PartialAnalysis, from_text: PartialAnalysis) -> ClassificationResult:
    category = from_name.category or from_text.category or DocumentCategory.UNKNOWN
    return ClassificationResult(
        category=category,
        company_name=from_name.company_name or from_text.company_name,
        fiscal_period=from_name.fiscal_period or from_text.fiscal_period,
        prefecture=from_name.prefecture or from_text.prefecture,
        municipality=from_name.municipality or from_text.municipality,
        submission_date=from_name.submission_date or from_text.submission_date,
        confidence=clamp_confidence(
            max(from_name.confidence, from_text.confidence, NO_MATCH_CONFIDENCE)
        ),
    )
