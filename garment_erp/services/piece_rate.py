"""
Piece-Rate Aggregator

Pure functions over normalised piece-rate records (``WorkerSalaryRecord`` /
``ProductionOperationRecord``). Nothing here talks to the store.
"""
from collections import OrderedDict
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

from garment_erp.schemas.production import ProductionOperationRecord
from garment_erp.schemas.report import OperationExpense, WorkerAggregate
from garment_erp.schemas.salary import WorkerSalaryRecord
from garment_erp.services.period_filter import Period, efficiency, in_period, round_half_up


def filter_period(records: Iterable, period: Optional[Period] = None, reference: Optional[date] = None) -> List:
    """All records when ``period`` is None, otherwise those inside the period bucket."""
    if period is None:
        return list(records)
    return [r for r in records if in_period(r.date, period, reference)]


def aggregate_by_worker(
    records: Sequence[WorkerSalaryRecord],
    period: Optional[Period] = None,
    reference: Optional[date] = None,
) -> List[WorkerAggregate]:
    """
    Group piece-rate transactions per worker.

    Pieces and amounts are summed; ``paid`` is True only if every contributing
    record is paid. Groups keep first-seen order.
    """
    groups: "OrderedDict[str, WorkerAggregate]" = OrderedDict()
    for r in filter_period(records, period, reference):
        key = r.worker_id or r.worker_name or "unknown"
        agg = groups.get(key)
        if agg is None:
            agg = groups[key] = WorkerAggregate(worker_id=key, worker_name=r.worker_name or "Unknown")
        agg.total_pieces += r.pieces_done
        agg.total_amount += r.total_amount
        agg.operations += 1
        agg.paid = agg.paid and r.paid

    for agg in groups.values():
        agg.total_amount = round(agg.total_amount, 2)
        agg.efficiency = efficiency(agg.total_pieces, agg.operations)
    return list(groups.values())


def bottleneck_finished_pieces(production_operations: Sequence[ProductionOperationRecord]) -> int:
    """
    Pieces that have cleared every operation of a production: the minimum,
    across operations, of the pieces done for that operation.
    """
    totals: Dict[str, int] = {}
    for op in production_operations:
        if not op.operation_id:
            continue
        totals[op.operation_id] = totals.get(op.operation_id, 0) + op.pieces_done
    if not totals:
        return 0
    return min(totals.values())


def operation_expense_breakdown(
    records: Sequence,
    period: Optional[Period] = None,
    reference: Optional[date] = None,
) -> Dict[str, OperationExpense]:
    breakdown: Dict[str, OperationExpense] = OrderedDict()
    for r in filter_period(records, period, reference):
        name = r.operation_name or r.operation_id or "Unknown"
        entry = breakdown.get(name)
        if entry is None:
            entry = breakdown[name] = OperationExpense(name=name)
        entry.cost += r.cost
        entry.pieces += r.pieces_done
    return breakdown


def production_progress(total_quantity: int, operation_count: int, pieces_done_total: int) -> int:
    """
    Percent of operation-pieces completed for a production, clamped to 0..100.
    Every operation must process every unit, so the required work is
    quantity x operations (a product with no operations counts as one).
    """
    required = total_quantity * max(1, operation_count)
    if required <= 0:
        return 0
    percent = round_half_up(pieces_done_total / required * 100)
    return min(max(percent, 0), 100)
