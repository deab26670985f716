from __future__ import annotations

from enum import Enum


class DocumentCategory(str, Enum):
    """Closed set of tax-filing document categories."""

    CORPORATE_TAX = "CORPORATE_TAX"
    CORPORATE_TAX_ATTACHMENT = "CORPORATE_TAX_ATTACHMENT"
    CONSUMPTION_TAX = "CONSUMPTION_TAX"
    CONSUMPTION_TAX_ATTACHMENT = "CONSUMPTION_TAX_ATTACHMENT"
    PREFECTURAL_TAX = "PREFECTURAL_TAX"
    MUNICIPAL_TAX = "MUNICIPAL_TAX"
    RECEIPT_NOTICE = "RECEIPT_NOTICE"
    PAYMENT_INFO = "PAYMENT_INFO"
    TAX_PAYMENT_LIST = "TAX_PAYMENT_LIST"
    FINANCIAL_STATEMENT = "FINANCIAL_STATEMENT"
    GENERAL_LEDGER = "GENERAL_LEDGER"
    SUBSIDIARY_LEDGER = "SUBSIDIARY_LEDGER"
    TRIAL_BALANCE = "TRIAL_BALANCE"
    JOURNAL = "JOURNAL"
    JOURNAL_DATA = "JOURNAL_DATA"
    FIXED_ASSET = "FIXED_ASSET"
    BULK_DEPRECIATION = "BULK_DEPRECIATION"
    SMALL_AMOUNT_ASSET = "SMALL_AMOUNT_ASSET"
    TAX_CLASSIFICATION = "TAX_CLASSIFICATION"
    TAX_CLASSIFICATION_BY_ACCOUNT = "TAX_CLASSIFICATION_BY_ACCOUNT"
    UNKNOWN = "UNKNOWN"


STRUCTURED_CONFIDENCE = 0.9
MANUAL_CONFIDENCE = 0.8
TEXT_CONFIDENCE = 0.5
NO_MATCH_CONFIDENCE = 0.0


def clamp_confidence(confidence: float) -> float:
    """Clamp a confidence value to the 0..1 range."""

    if confidence < 0.0:
        return 0.0
    if confidence > 1.0:
        return 1.0
    return confidence
