"""
FastAPI Backend for the Thai Bank Statement Classifier
RESTful API endpoints for classifying bank statements
"""

from fastapi import FastAPI, File, UploadFile, Form, HTTPException
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from typing import Optional
from pathlib import Path
from datetime import datetime
import asyncio
import logging
import sys

# Add backend to path
backend_path = Path(__file__).parent.parent / 'backend'
sys.path.insert(0, str(backend_path))

# Import backend modules
from config import config
from logging_config import setup_logging
from loaders.pdf_loader import load_pdf_bytes, PDFLoadError, PasswordRequiredError, IncorrectPasswordError
from extractors.statement_classifier import StatementResult, classify_statement

setup_logging()
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Thai Bank Statement Classifier API",
    description="Extract transactions from Thai bank statement PDFs and classify them as income or expense",
    version=config.VERSION
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class TextRequest(BaseModel):
    text: str


def _statement_response(result: StatementResult) -> dict:
    """Build the JSON body for a classified statement."""
    status = "no_transactions" if result.is_empty else "success"
    return {
        "status": status,
        "message": (
            "No transactions found; raw text included for diagnostics"
            if result.is_empty else
            f"Classified {len(result.transactions)} transactions"
        ),
        "statement": result.to_dict(include_raw_text=result.is_empty),
        "summary": {
            "bank": result.bank_name,
            **result.summary(),
            "stats": result.stats,
        },
    }


def _load_and_classify(content: bytes, password: Optional[str], filename: str) -> StatementResult:
    text = load_pdf_bytes(content, password=password, source=filename)
    return classify_statement(text)


@app.get("/")
async def root():
    """Root endpoint - API information"""
    return {
        "message": config.APP_NAME,
        "version": config.VERSION,
        "endpoints": {
            "POST /classify": "Classify a statement PDF (optional password form field)",
            "POST /classify/text": "Classify already extracted statement text",
            "GET /health": "Health check"
        },
        "settings": config.to_dict()
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat()
    }


@app.post("/classify")
async def classify_pdf(
    file: UploadFile = File(..., description="Statement PDF"),
    password: Optional[str] = Form(None, description="Password for encrypted statements")
):
    """
    Classify the transactions of an uploaded statement PDF.

    - **file**: Statement PDF
    - **password**: Optional password when the PDF is encrypted

    Returns the statement header, transactions and a summary. When no
    transactions are found, the extracted text is returned for diagnostics.
    """
    filename = file.filename or "<upload>"

    # Never read more than one byte past the limit
    content = await file.read(config.MAX_FILE_SIZE_BYTES + 1)

    is_valid, error = config.validate_file(filename, len(content))
    if not is_valid:
        raise HTTPException(status_code=400, detail=error)

    logger.info(f"Processing {filename} ({len(content)} bytes), password provided: {bool(password)}")

    try:
        result = await asyncio.wait_for(
            run_in_threadpool(_load_and_classify, content, password, filename),
            timeout=config.PARSE_TIMEOUT_SECONDS
        )

    except asyncio.TimeoutError:
        logger.error(f"Timeout after {config.PARSE_TIMEOUT_SECONDS}s processing {filename}")
        raise HTTPException(status_code=504, detail="Timeout: parsing took too long")

    except PasswordRequiredError as e:
        raise HTTPException(status_code=401, detail={"code": "password_required", "message": str(e)})

    except IncorrectPasswordError as e:
        raise HTTPException(status_code=401, detail={"code": "password_incorrect", "message": str(e)})

    except PDFLoadError as e:
        logger.error(f"Error loading {filename}: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        logger.error(f"Error processing {filename}: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")

    return _statement_response(result)


@app.post("/classify/text")
async def classify_text(request: TextRequest):
    """
    Classify statement text that was already extracted from a document.

    - **text**: Full concatenated page text
    """
    if not request.text.strip():
        raise HTTPException(status_code=400, detail="Text is empty")

    try:
        result = classify_statement(request.text)
    except Exception as e:
        logger.error(f"Error classifying text: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")

    return _statement_response(result)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.API_HOST, port=config.API_PORT)
