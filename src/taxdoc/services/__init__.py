from .batch_service import BatchService
from .file_transaction import FileTransactionService
from .filing_service import FilingService

__all__ = ["BatchService", "FileTransactionService", "FilingService"]
