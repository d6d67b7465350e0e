# capgains/engine/batch_evaluator.py
import logging
from decimal import Decimal
from types import MappingProxyType
from typing import Callable, Dict, Iterable, List, Mapping, Optional

from capgains.domain.enums import OperationKind
from capgains.domain.errors import InvalidOperationKindError
from capgains.domain.operations import Operation
from capgains.domain.position import Position, ZERO_TAX

logger = logging.getLogger(__name__)

OperationFilter = Callable[[Operation], bool]
PositionSupplier = Callable[[Optional[str]], Position]


class PositionBook:
    """
    Positions of one batch, keyed by asset id.

    A Position is created through position_factory the first time its asset id
    is requested and lives as long as the book does.
    """

    def __init__(self, position_factory: Callable[[], Position] = Position):
        self.position_factory = position_factory
        self._positions: Dict[Optional[str], Position] = {}

    def __call__(self, asset_id: Optional[str]) -> Position:
        position = self._positions.get(asset_id)
        if position is None:
            position = self.position_factory()
            self._positions[asset_id] = position
            logger.debug(f"Opened position for asset '{asset_id}'.")
        return position

    @property
    def positions(self) -> Mapping[Optional[str], Position]:
        return MappingProxyType(self._positions)

    def __len__(self) -> int:
        return len(self._positions)


def accept_all(operation: Operation) -> bool:
    return True


def only_assets(asset_ids: Iterable[str]) -> OperationFilter:
    """Filter accepting operations whose asset id is one of asset_ids."""
    wanted = frozenset(asset_ids)
    return lambda operation: operation.asset_id in wanted


def only_kinds(kinds: Iterable[OperationKind]) -> OperationFilter:
    """Filter accepting operations of the given kinds."""
    wanted = frozenset(kinds)
    return lambda operation: operation.kind in wanted


def evaluate(operations: Iterable[Operation],
             position_for: Optional[PositionSupplier] = None,
             operation_filter: Optional[OperationFilter] = None) -> List[Decimal]:
    """
    Applies each accepted operation to the position of its asset, in order,
    and returns one tax amount per accepted operation.

    Operations rejected by operation_filter are skipped and produce no output.
    Any error raised for an operation aborts the rest of the batch.
    """
    if position_for is None:
        position_for = PositionBook()
    if operation_filter is None:
        operation_filter = accept_all

    taxes: List[Decimal] = []
    for operation in operations:
        if not operation_filter(operation):
            continue
        taxes.append(_process_operation(operation, position_for(operation.asset_id)))
    return taxes


def _process_operation(operation: Operation, position: Position) -> Decimal:
    if operation.kind == OperationKind.BUY:
        position.buy(operation.quantity, operation.unit_price)
        return ZERO_TAX
    if operation.kind == OperationKind.SELL:
        return position.sell(operation.quantity, operation.unit_price)
    raise InvalidOperationKindError(operation.kind)
