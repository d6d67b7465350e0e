# capgains/config.py

from decimal import Decimal

# Tax regime
TAX_RATE: Decimal = Decimal("0.20")
# Gross value of a single sale at or below which its gain is not taxed
EXEMPTION_THRESHOLD: Decimal = Decimal("20000")

# Numerical Precision
INTERNAL_CALCULATION_PRECISION = 28
DECIMAL_ROUNDING_MODE = "ROUND_HALF_EVEN" # Python's decimal module uses strings like 'ROUND_HALF_UP', 'ROUND_HALF_EVEN'

AVERAGE_COST_PRECISION: Decimal = Decimal("0.01")
TAX_PRECISION: Decimal = Decimal("0.01")

# Output/Reporting Precision (display only, "#0.0" style)
OUTPUT_PRECISION_TAX: Decimal = Decimal("0.1")

# I/O
DEFAULT_BUFFER_SIZE_IN = 8_192
DEFAULT_BUFFER_SIZE_OUT = 8_192
MAX_BUFFER_SIZE = 2**31 - 1

LOG_LEVEL = "WARNING"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
