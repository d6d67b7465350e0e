# capgains/utils/type_utils.py
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

import capgains.config as global_config

_BUFFER_SIZE_PATTERN = re.compile(r"^(?P<size>\d{1,3})(?P<unit>[kmg])$", re.IGNORECASE)
_BUFFER_SIZE_EXPONENTS = {"k": 1, "m": 2, "g": 3}


def safe_decimal(value: Any, default: Optional[Decimal] = None, raise_error: bool = False) -> Optional[Decimal]:
    """
    Safely converts a value to a Decimal.
    Floats are converted through their shortest repr, so 10.1 becomes Decimal('10.1').
    If raise_error is True, re-raises InvalidOperation instead of returning default.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, Decimal):
        return value
    if isinstance(value, (int, float)):
        return Decimal(str(value))

    s_value = str(value).strip()
    if not s_value:
        return default

    try:
        return Decimal(s_value)
    except InvalidOperation as e:
        if raise_error:
            raise e
        return default


def parse_buffer_size(value: str) -> int:
    """
    Parses a buffer size such as '8k', '16m' or '1g' (binary units) into bytes.
    Raises ValueError for malformed sizes or sizes above MAX_BUFFER_SIZE.
    """
    match = _BUFFER_SIZE_PATTERN.match(str(value).strip())
    if not match:
        raise ValueError(f"Invalid buffer size '{value}'. Expected 1-3 digits followed by k, m or g (e.g. 8k).")

    size = int(match.group("size")) * 1024 ** _BUFFER_SIZE_EXPONENTS[match.group("unit").lower()]
    if size > global_config.MAX_BUFFER_SIZE:
        raise ValueError(f"Too many bytes: buffer size '{value}' exceeds {global_config.MAX_BUFFER_SIZE}.")
    if size == 0:
        raise ValueError(f"Invalid buffer size '{value}'. The size must be greater than 0.")
    return size
