"""
PDF Loader Module
Extracts text from multi-page bank statement PDFs using PyMuPDF (fitz),
including password-protected statements.
"""

import fitz  # PyMuPDF
import logging
from pathlib import Path
from typing import Optional

from config import config

logger = logging.getLogger(__name__)


class PDFLoadError(Exception):
    """Custom exception for PDF loading errors."""
    pass


class PasswordRequiredError(PDFLoadError):
    """The PDF is encrypted and no password was supplied."""
    pass


class IncorrectPasswordError(PDFLoadError):
    """The supplied password was rejected."""
    pass


def _unlock(doc, password: Optional[str], source: str):
    """Authenticate an encrypted document or raise a password error."""
    if not doc.needs_pass:
        return

    password = password.strip() if password else password
    if not password:
        logger.warning(f"PDF is password protected: {source}")
        raise PasswordRequiredError(f"PDF is password protected: {source}")

    if not doc.authenticate(password):
        logger.error(f"Incorrect password for PDF: {source}")
        raise IncorrectPasswordError(f"Incorrect password for PDF: {source}")

    logger.info(f"PDF unlocked: {source}")


def _extract_text(doc, source: str) -> str:
    """Concatenate the text of every page that has any."""
    if doc.page_count == 0:
        logger.error(f"PDF has no pages: {source}")
        raise PDFLoadError(f"PDF has no pages: {source}")

    logger.info(f"Loading PDF: {source} ({doc.page_count} pages)")

    text_chunks = []
    empty_pages = 0

    for page_num in range(doc.page_count):
        text = doc[page_num].get_text()
        if text.strip():
            text_chunks.append(text)
            logger.debug(f"Page {page_num + 1}: extracted {len(text)} characters")
        else:
            empty_pages += 1
            logger.warning(f"Page {page_num + 1}: empty or no extractable text")

    if not text_chunks:
        raise PDFLoadError(f"No text could be extracted from PDF: {source}")

    combined_text = config.PAGE_SEPARATOR.join(text_chunks)

    logger.info(
        f"Extraction complete: {len(combined_text)} characters from "
        f"{len(text_chunks)} pages ({empty_pages} empty pages skipped)"
    )
    return combined_text


def _load(open_doc, password: Optional[str], source: str) -> str:
    doc = None
    try:
        doc = open_doc()
        _unlock(doc, password, source)
        return _extract_text(doc, source)

    except fitz.FileDataError as e:
        logger.error(f"Invalid or corrupted PDF file: {source}", exc_info=True)
        raise PDFLoadError(f"Invalid or corrupted PDF file: {source}") from e

    except PDFLoadError:
        raise

    except Exception as e:
        logger.error(f"Unexpected error loading PDF {source}: {e}", exc_info=True)
        raise PDFLoadError(f"Failed to load PDF {source}: {str(e)}") from e

    finally:
        if doc is not None:
            doc.close()
            logger.debug(f"PDF document closed: {source}")


def load_pdf(file_path: str, password: Optional[str] = None) -> str:
    """
    Extract text from all pages of a PDF file.

    Args:
        file_path: Path to the PDF file
        password: Password for encrypted statements. Leading and trailing
            whitespace is stripped before authenticating, so a password that
            really starts or ends with spaces cannot be used; a blank one
            counts as missing

    Returns:
        Page texts joined by the configured page separator

    Raises:
        PasswordRequiredError: If the PDF is encrypted and no password was given
        IncorrectPasswordError: If the password is wrong
        PDFLoadError: If the PDF cannot be loaded or read
    """
    pdf_path = Path(file_path)
    if not pdf_path.exists():
        logger.error(f"PDF file not found: {file_path}")
        raise PDFLoadError(f"PDF file not found: {file_path}")

    if not pdf_path.suffix.lower() == '.pdf':
        logger.error(f"File is not a PDF: {file_path}")
        raise PDFLoadError(f"File is not a PDF: {file_path}")

    return _load(lambda: fitz.open(str(pdf_path)), password, str(file_path))


def load_pdf_bytes(data: bytes, password: Optional[str] = None, source: str = "<upload>") -> str:
    """
    Extract text from an in-memory PDF (e.g. an uploaded file).
    The password is stripped the same way as in load_pdf.

    Raises:
        Same as load_pdf
    """
    if not data:
        raise PDFLoadError(f"PDF is empty: {source}")

    return _load(lambda: fitz.open(stream=data, filetype="pdf"), password, source)
