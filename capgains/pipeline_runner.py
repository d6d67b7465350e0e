# capgains/pipeline_runner.py
import logging
import time
from decimal import Decimal
from typing import Callable, List, Optional, TextIO

from capgains.domain.errors import CapitalGainsError
from capgains.domain.position import Position
from capgains.engine.batch_evaluator import OperationFilter, PositionBook, evaluate
from capgains.parsers.operations_parser import parse_operations_line
from capgains.reporting.json_writer import encode_error_line, encode_tax_line

logger = logging.getLogger(__name__)


class ProcessingOutput:
    """
    Counters describing one run of the line pipeline.
    """
    def __init__(self,
                 batches_processed: int = 0,
                 batches_failed: int = 0,
                 operations_evaluated: int = 0,
                 elapsed_ms: int = 0):
        self.batches_processed = batches_processed
        self.batches_failed = batches_failed
        self.operations_evaluated = operations_evaluated
        self.elapsed_ms = elapsed_ms

    def __repr__(self) -> str:
        return (f"ProcessingOutput(batches_processed={self.batches_processed}, batches_failed={self.batches_failed}, "
                f"operations_evaluated={self.operations_evaluated}, elapsed_ms={self.elapsed_ms})")


def calculate_line(line: str,
                   operation_filter: Optional[OperationFilter] = None,
                   position_book: Optional[PositionBook] = None,
                   line_number: Optional[int] = None) -> List[Decimal]:
    """Decodes one input line and returns the tax of every accepted operation."""
    operations = parse_operations_line(line, line_number=line_number)
    return evaluate(operations, position_for=position_book, operation_filter=operation_filter)


def run_capital_gains_pipeline(
    input_stream: TextIO,
    output_stream: TextIO,
    *,
    operation_filter: Optional[OperationFilter] = None,
    position_factory: Callable[[], Position] = Position,
    carry_positions: bool = False,
    print_every_line: bool = False,
    timings: bool = False,
    continue_on_error: bool = False,
) -> ProcessingOutput:
    """
    Reads one batch of operations per line until EOF or the first blank line and
    writes one JSON array of tax records per batch.

    Each batch starts from fresh positions unless carry_positions keeps a single
    PositionBook alive for the whole run. A batch that fails to decode or
    evaluate aborts the run, unless continue_on_error is set, in which case an
    error record is written in place of its result.
    """
    start_time = time.perf_counter()
    output = ProcessingOutput()
    shared_book = PositionBook(position_factory) if carry_positions else None

    for line_number, line in enumerate(input_stream, start=1):
        if not line.strip():
            break

        book = shared_book if shared_book is not None else PositionBook(position_factory)
        try:
            taxes = calculate_line(line, operation_filter=operation_filter,
                                   position_book=book, line_number=line_number)
        except CapitalGainsError as e:
            output.batches_failed += 1
            if not continue_on_error:
                logger.error(f"Batch on line {line_number} failed: {e}. Aborting.")
                raise
            logger.error(f"Batch on line {line_number} failed: {e}. Continuing with the next line.")
            output_stream.write(encode_error_line(e))
        else:
            output.batches_processed += 1
            output.operations_evaluated += len(taxes)
            logger.info(f"Line {line_number}: evaluated {len(taxes)} operations across {len(book)} positions.")
            output_stream.write(encode_tax_line(taxes))

        output_stream.write("\n")
        if print_every_line:
            output_stream.flush()

    output.elapsed_ms = int((time.perf_counter() - start_time) * 1000)
    if timings:
        output_stream.write(f"Total time taken: {output.elapsed_ms}ms\n")
    output_stream.flush()

    logger.info(f"Pipeline finished: {output}")
    return output
