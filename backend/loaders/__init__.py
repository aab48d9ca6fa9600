"""
Loaders Module - PDF text extraction and loading.
"""

from .pdf_loader import (
    load_pdf,
    load_pdf_bytes,
    PDFLoadError,
    PasswordRequiredError,
    IncorrectPasswordError
)

__all__ = [
    'load_pdf',
    'load_pdf_bytes',
    'PDFLoadError',
    'PasswordRequiredError',
    'IncorrectPasswordError',
]
