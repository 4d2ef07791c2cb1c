from abc import ABC, abstractmethod
from dataclasses import replace
from typing import ClassVar

from receipt_ocr.categorization.service import CategorizationService
from receipt_ocr.extraction.text_extractor import TextExtractor
from receipt_ocr.logging.logger import Log
from receipt_ocr.parsing.parser import TransactionParser
from receipt_ocr.pipeline.exceptions import ErrorKind, ExtractionError, ParseError
from receipt_ocr.pipeline.models import PipelineContext

NO_TEXT_MESSAGE = (
    "No text could be extracted from the document. "
    "Please ensure the document contains clear, readable text."
)
NO_TRANSACTION_MESSAGE = "Could not extract a usable transaction from the document"


class PipelineStep(ABC):
    # failures raised by this step are reported with this kind
    error_kind: ClassVar[ErrorKind] = ErrorKind.EXTRACTION

    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError


class ExtractTextStep(PipelineStep):
    error_kind = ErrorKind.EXTRACTION

    def __init__(self, text_extractor: TextExtractor) -> None:
        self._text_extractor = text_extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        result = self._text_extractor.extract(context.file, context.token)
        if not result.ok:
            raise ExtractionError(result.error or "Text extraction failed")
        if not result.text.strip():
            raise ExtractionError(NO_TEXT_MESSAGE)
        context.raw_text = result.text
        Log.info(f"Extracted {len(result.text)} chars from {result.unit_count} unit(s)")
        return context


class ParseTransactionStep(PipelineStep):
    error_kind = ErrorKind.PARSE

    def __init__(self, parser: TransactionParser) -> None:
        self._parser = parser

    def run(self, context: PipelineContext) -> PipelineContext:
        extraction = self._parser.parse(context.raw_text)
        if extraction is None:
            raise ParseError(NO_TRANSACTION_MESSAGE)
        context.extraction = extraction
        Log.info(
            f"Parsed transaction: amount={extraction.amount} date={extraction.date} "
            f"confidence={extraction.overall_confidence}"
        )
        return context


class CategorizeStep(PipelineStep):
    error_kind = ErrorKind.PARSE

    def __init__(self, categorization: CategorizationService) -> None:
        self._categorization = categorization

    def run(self, context: PipelineContext) -> PipelineContext:
        extraction = context.extraction
        if extraction is None:
            raise ValueError("PipelineContext.extraction must be set before categorization")
        if extraction.category is not None or extraction.description is None:
            return context
        category = self._categorization.categorize(extraction.description)
        if category is not None:
            context.extraction = replace(extraction, category=category)
            Log.info(f"Categorized '{extraction.description}' as {category}")
        return context
