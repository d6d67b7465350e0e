"""
Test Support Module

This module consolidates shared test infrastructure:
- Operation builders
- Pipeline runners over in-memory streams
"""

from tests.support.helpers import (
    buy,
    sell,
    operations_line,
    run_pipeline_on_text,
    taxes_of,
)

__all__ = [
    "buy",
    "sell",
    "operations_line",
    "run_pipeline_on_text",
    "taxes_of",
]
