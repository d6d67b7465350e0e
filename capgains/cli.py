# capgains/cli.py
import argparse
from decimal import Decimal, InvalidOperation

import capgains.config as config
from capgains.domain.enums import OperationKind
from capgains.utils.type_utils import parse_buffer_size


def _buffer_size(value: str) -> int:
    try:
        return parse_buffer_size(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def _non_negative_decimal(value: str) -> Decimal:
    try:
        parsed = Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"'{value}' is not a decimal number.")
    if not parsed.is_finite() or parsed < 0:
        raise argparse.ArgumentTypeError(f"'{value}' must be a non-negative number.")
    return parsed


def _operation_kind(value: str) -> OperationKind:
    try:
        return OperationKind.from_text(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def parse_arguments(argv=None):
    """Parses command line arguments for the application."""
    parser = argparse.ArgumentParser(
        description="Capital Gains Calculator: reads one JSON array of buy/sell operations per line from stdin "
                    "and writes the tax owed for each operation to stdout."
    )

    # Output behaviour
    parser.add_argument("-pel", "--print-every-line", action="store_true", help="Flush the output after every processed line.")
    parser.add_argument("-t", "--timings", action="store_true", help="Append the total processing time to the output.")

    # Buffering
    parser.add_argument("-bsi", "--buffer-size-in", type=_buffer_size, default=config.DEFAULT_BUFFER_SIZE_IN, metavar="SIZE",
                        help="Input buffer size, e.g. 8k, 1m (binary units).")
    parser.add_argument("-bso", "--buffer-size-out", type=_buffer_size, default=config.DEFAULT_BUFFER_SIZE_OUT, metavar="SIZE",
                        help="Output buffer size, e.g. 8k, 1m (binary units).")

    # Operation filters
    parser.add_argument("--ticker", action="append", dest="tickers", metavar="TICKER",
                        help="Only evaluate operations for this ticker. May be given more than once.")
    parser.add_argument("--kind", action="append", dest="kinds", type=_operation_kind, metavar="KIND",
                        help="Only evaluate operations of this kind (buy or sell). May be given more than once.")

    # Processing modes
    parser.add_argument("--carry-positions", action="store_true", help="Keep positions alive across input lines instead of starting every line fresh.")
    parser.add_argument("--continue-on-error", action="store_true", help="Write an error record for a failing line and continue instead of aborting.")

    # Tax policy
    parser.add_argument("--tax-rate", type=_non_negative_decimal, default=config.TAX_RATE, help=f"Flat tax rate (default: {config.TAX_RATE}).")
    parser.add_argument("--exemption-threshold", type=_non_negative_decimal, default=config.EXEMPTION_THRESHOLD,
                        help=f"Sale total at or below which gains are not taxed (default: {config.EXEMPTION_THRESHOLD}).")

    parser.add_argument("--log-level", default=config.LOG_LEVEL, choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        help="Logging level for messages written to stderr.")

    return parser.parse_args(argv)
