"""
Test Fixtures Module

Tax scenarios are kept as YAML specs (tax_scenarios.yaml):
- Human-readable, git-diff friendly input/output tables
- Use load_yaml_spec() to parse and parse_tax_scenarios() to get typed specs
- Amounts tagged !decimal are loaded as Decimal, never float
"""

from pathlib import Path
from typing import Any, Dict, List, Optional
from dataclasses import dataclass
from decimal import Decimal
import yaml


FIXTURES_DIR = Path(__file__).parent


@dataclass
class OperationSpec:
    """Parsed operation from YAML spec."""
    type: str
    qty: int
    price: Decimal
    ticker: Optional[str] = None


@dataclass
class TaxScenarioSpec:
    """A single tax scenario parsed from YAML."""
    id: str
    description: str
    operations: List[OperationSpec]
    expected_taxes: List[Decimal]
    expected_accumulated_loss: Optional[Decimal] = None
    notes: Optional[str] = None


def _decimal_constructor(loader: yaml.SafeLoader, node: yaml.ScalarNode) -> Decimal:
    """YAML constructor for Decimal values."""
    value = loader.construct_scalar(node)
    return Decimal(str(value))


def _parse_operation(op_dict: Dict) -> OperationSpec:
    """Parse an operation dictionary into OperationSpec."""
    return OperationSpec(
        type=op_dict["type"],
        qty=int(op_dict["qty"]),
        price=Decimal(str(op_dict["price"])),
        ticker=op_dict.get("ticker"),
    )


def load_yaml_spec(filename: str) -> Dict[str, Any]:
    """
    Load a YAML test specification file.

    Args:
        filename: Name of the YAML file in the fixtures directory

    Returns:
        Parsed YAML content as a dictionary
    """
    filepath = FIXTURES_DIR / filename

    # Register Decimal constructor for numeric values
    yaml.add_constructor("!decimal", _decimal_constructor, Loader=yaml.SafeLoader)

    with open(filepath, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def parse_tax_scenarios(spec_data: Dict[str, Any]) -> List[TaxScenarioSpec]:
    """
    Parse tax scenario specifications from loaded YAML.

    Args:
        spec_data: Loaded YAML dictionary

    Returns:
        List of TaxScenarioSpec objects
    """
    scenarios = []
    for scenario in spec_data.get("scenarios", []):
        expected_loss = scenario.get("expected_accumulated_loss")
        scenarios.append(TaxScenarioSpec(
            id=scenario["id"],
            description=scenario["description"],
            operations=[_parse_operation(op) for op in scenario["operations"]],
            expected_taxes=[Decimal(str(tax)) for tax in scenario["expected_taxes"]],
            expected_accumulated_loss=Decimal(str(expected_loss)) if expected_loss is not None else None,
            notes=scenario.get("notes"),
        ))
    return scenarios


def get_tax_scenarios() -> List[TaxScenarioSpec]:
    return parse_tax_scenarios(load_yaml_spec("tax_scenarios.yaml"))
