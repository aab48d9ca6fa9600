"""
Thai Bank Statement Classifier - Main Pipeline
Orchestrates loading, classification, validation and export of a statement.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from config import config
from logging_config import get_logger, setup_logging
from extractors.statement_classifier import StatementResult, classify_statement
from loaders.pdf_loader import load_pdf, PDFLoadError, PasswordRequiredError, IncorrectPasswordError
from validators.financial_validator import TransactionValidator, ValidationError
from output.writer import StatementWriter, OutputWriteError

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_PASSWORD = 2


class StatementPipeline:
    """Main orchestrator for the statement classification pipeline."""

    def __init__(self, strict_mode: Optional[bool] = None):
        """
        Args:
            strict_mode: Raise on invalid transactions (defaults to config.STRICT_MODE)
        """
        self.strict_mode = config.STRICT_MODE if strict_mode is None else strict_mode
        self.stats = {
            "characters": 0,
            "total_extracted": 0,
            "valid_transactions": 0,
            "by_balance": 0,
            "by_keyword": 0,
        }

    def _validate_inputs(self, pdf_path: str, output_path: Optional[str]):
        """Validate all input parameters."""
        if not pdf_path or not isinstance(pdf_path, str):
            raise ValueError("pdf_path must be a non-empty string")

        if not Path(pdf_path).exists():
            raise ValueError(f"PDF file not found: {pdf_path}")

        if not pdf_path.lower().endswith('.pdf'):
            raise ValueError(f"Not a PDF file: {pdf_path}")

        if output_path is not None:
            if Path(output_path).suffix.lower() not in config.OUTPUT_FORMATS:
                raise ValueError(f"output_path must end with one of: {', '.join(config.OUTPUT_FORMATS)}")

        logger.info("Input validation passed")

    def process(
        self,
        pdf_path: str,
        password: Optional[str] = None,
        output_path: Optional[str] = None
    ) -> StatementResult:
        """
        Load, classify and (optionally) export a statement PDF.

        Args:
            pdf_path: Path to the statement PDF
            password: Password for encrypted statements
            output_path: Optional .json or .csv export path

        Returns:
            StatementResult

        Raises:
            ValueError: If inputs are invalid
            PDFLoadError: If the PDF cannot be read (PasswordRequiredError /
                IncorrectPasswordError for encrypted files)
            ValidationError: In strict mode, if a transaction is invalid
            OutputWriteError: If the export cannot be written
        """
        logger.info("=" * 80)
        logger.info(f"Starting statement classification: {pdf_path}")
        logger.info("=" * 80)

        self._validate_inputs(pdf_path, output_path)

        # Step 1: Load PDF text
        text = load_pdf(pdf_path, password=password)
        self.stats["characters"] = len(text)
        logger.info(f"Step 1: Extracted {len(text)} characters from PDF")

        # Step 2: Classify
        result = classify_statement(text)
        self.stats["total_extracted"] = len(result.transactions)
        self.stats["by_balance"] = result.stats.get("by_balance", 0)
        self.stats["by_keyword"] = result.stats.get("by_keyword", 0)
        logger.info(f"Step 2: Classified {len(result.transactions)} transactions ({result.bank_name})")

        if result.is_empty:
            logger.warning("No transactions found in PDF. Check if the statement layout is supported.")

        # Step 3: Validate
        validator = TransactionValidator(
            strict_mode=self.strict_mode,
            allow_zero_amounts=config.ALLOW_ZERO_AMOUNTS,
            min_description_length=config.MIN_DESCRIPTION_LENGTH
        )
        validator.validate_transactions(result.transactions)
        validation_stats = validator.get_stats()
        self.stats["valid_transactions"] = validation_stats["valid"]
        logger.info(f"Step 3: Validation report {validation_stats}")

        # Step 4: Export
        if output_path:
            StatementWriter(output_path).write(result)
            logger.info(f"Step 4: Output saved to {output_path}")

        self._print_summary(result)
        return result

    def _print_summary(self, result: StatementResult):
        """Log extraction summary."""
        summary = result.summary()
        logger.info("=" * 80)
        logger.info("CLASSIFICATION SUMMARY")
        logger.info("=" * 80)
        logger.info(f"Bank:                            {result.bank_name}")
        logger.info(f"Account:                         {result.header.account_number or '-'}")
        logger.info(f"Transactions:                    {summary['transaction_count']}")
        logger.info(f"Decided by balance / keyword:    {self.stats['by_balance']} / {self.stats['by_keyword']}")
        logger.info(f"Total income:                    {summary['total_income']:.2f}")
        logger.info(f"Total expense:                   {summary['total_expense']:.2f}")
        logger.info("=" * 80)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="statement-classifier",
        description="Classify Thai bank statement transactions as income or expense",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  statement-classifier statement.pdf
  statement-classifier statement.pdf --password 01011990 --output output/july.json
  statement-classifier statement.pdf --output output/july.csv --strict
        """
    )
    parser.add_argument('pdf', help='Statement PDF file')
    parser.add_argument('--password', '-p', help='Password for encrypted statements')
    parser.add_argument('--output', '-o', help='Export path (.json or .csv)')
    parser.add_argument('--strict', action='store_true', help='Fail on invalid transactions')
    parser.add_argument('--log-level', default=None, help='Logging level (default: LOG_LEVEL env or INFO)')
    parser.add_argument('--log-file', default=None, help='Also log to this file inside LOG_DIR (default: LOG_FILE env)')
    return parser


def main(argv=None) -> int:
    """Command line entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(log_level=args.log_level, log_file=args.log_file)

    pipeline = StatementPipeline(strict_mode=True if args.strict else None)

    # Bare file names go to OUTPUT_DIR
    output_path = args.output
    if output_path and Path(output_path).parent == Path('.'):
        output_path = str(config.get_output_path(output_path))

    try:
        result = pipeline.process(args.pdf, password=args.password, output_path=output_path)

    except PasswordRequiredError as e:
        logger.error(str(e))
        print(f"\n🔒 {e}. Use --password to supply it.")
        return EXIT_PASSWORD

    except IncorrectPasswordError as e:
        logger.error(str(e))
        print(f"\n🔒 {e}")
        return EXIT_PASSWORD

    except (ValueError, PDFLoadError, OutputWriteError) as e:
        logger.error(f"Processing failed: {e}")
        print(f"\n❌ Error: {e}")
        return EXIT_ERROR

    except ValidationError as e:
        logger.error(f"Validation failed: {e}")
        print(f"\n❌ Validation Error: {e}")
        return EXIT_ERROR

    if result.is_empty:
        print("\n⚠️ No transactions found. Extracted text:")
        print(result.raw_text[:1000])
        return EXIT_OK

    print(f"\n✅ {result.bank_name}: {len(result.transactions)} transactions")
    print(f"Income: {result.total_income:,.2f} | Expense: {result.total_expense:,.2f}")
    if output_path:
        print(f"Saved to: {output_path}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
