# capgains/parsers/operations_parser.py
import json
import logging
from decimal import Decimal
from typing import List, Optional

from pydantic import ValidationError

from capgains.domain.errors import OperationDecodeError
from capgains.domain.operations import Operation
from .raw_models import RawOperationRecord

logger = logging.getLogger(__name__)


def parse_operations_line(line: str, line_number: Optional[int] = None) -> List[Operation]:
    """
    Decodes one input line, a JSON array of operation records, into Operations.

    JSON numbers are read as Decimal so prices keep their exact textual value.
    Malformed JSON and invalid records raise OperationDecodeError; an unknown
    operation type raises InvalidOperationKindError.
    """
    try:
        payload = json.loads(line, parse_float=Decimal)
    except json.JSONDecodeError as e:
        raise OperationDecodeError(f"Malformed JSON: {e.msg} (column {e.colno}).", line_number) from e

    if not isinstance(payload, list):
        raise OperationDecodeError(f"Expected a JSON array of operations, got {type(payload).__name__}.", line_number)

    operations: List[Operation] = []
    for i, record in enumerate(payload):
        if not isinstance(record, dict):
            raise OperationDecodeError(f"Operation #{i + 1} is not a JSON object: {record!r}.", line_number)
        try:
            raw_record = RawOperationRecord(**record)
        except ValidationError as e:
            raise OperationDecodeError(f"Invalid operation #{i + 1} {record!r}: {e.errors()}", line_number) from e
        operations.append(raw_record.to_operation())

    logger.debug(f"Decoded {len(operations)} operations from line {line_number}.")
    return operations
