# capgains/main.py
import logging
import sys
from decimal import getcontext
from functools import partial
from typing import List, Optional

import capgains.config as config
from capgains.cli import parse_arguments
from capgains.domain.errors import CapitalGainsError
from capgains.domain.position import Position, TaxPolicy
from capgains.engine.batch_evaluator import OperationFilter, only_assets, only_kinds
from capgains.pipeline_runner import run_capital_gains_pipeline

logger = logging.getLogger(__name__)


def setup_decimal_context():
    """Sets the global decimal precision and rounding mode."""
    getcontext().prec = config.INTERNAL_CALCULATION_PRECISION
    getcontext().rounding = config.DECIMAL_ROUNDING_MODE
    logger.info(f"Global decimal precision set to {getcontext().prec}, rounding mode to {getcontext().rounding}.")


def build_operation_filter(args) -> Optional[OperationFilter]:
    filters: List[OperationFilter] = []
    if args.tickers:
        filters.append(only_assets(args.tickers))
    if args.kinds:
        filters.append(only_kinds(args.kinds))
    if not filters:
        return None
    return lambda operation: all(accepts(operation) for accepts in filters)


def main_application(argv=None):
    """
    Main application entry point.
    Parses arguments, then streams stdin through the calculation pipeline to stdout.
    """
    args = parse_arguments(argv)
    logging.basicConfig(level=args.log_level, format=config.LOG_FORMAT)
    setup_decimal_context()

    policy = TaxPolicy(tax_rate=args.tax_rate, exemption_threshold=args.exemption_threshold)
    logger.info(f"Starting Capital Gains Calculator (tax rate {policy.tax_rate}, exemption threshold {policy.exemption_threshold})...")

    input_stream = open(sys.stdin.fileno(), mode="r", buffering=args.buffer_size_in, encoding="utf-8", closefd=False)
    output_stream = open(sys.stdout.fileno(), mode="w", buffering=args.buffer_size_out, encoding="utf-8", closefd=False)

    try:
        with input_stream, output_stream:
            run_capital_gains_pipeline(
                input_stream,
                output_stream,
                operation_filter=build_operation_filter(args),
                position_factory=partial(Position, policy),
                carry_positions=args.carry_positions,
                print_every_line=args.print_every_line,
                timings=args.timings,
                continue_on_error=args.continue_on_error,
            )
    except CapitalGainsError as e:
        logger.critical(f"Capital gains calculation failed: {e}. Exiting.", exc_info=True)
        sys.exit(1)
    except Exception as e:
        logger.critical(f"Capital gains pipeline failed with unexpected error: {e}", exc_info=True)
        sys.exit(1)

    logger.info("Processing finished.")


if __name__ == "__main__":
    main_application()
