"""Output totals for the management dashboard."""

from collections import defaultdict
from typing import Dict, Iterable, List

from app.core.reference import MODELS, PROCESSES, SHIFT_ORDER
from app.storage.records import ProductionEntryWithDetails


def _ordered(totals: Dict[str, float], order: List[str], key: str) -> List[dict]:
    known = [k for k in order if k in totals]
    # values outside the reference lists still get reported, after the known ones
    extra = sorted(k for k in totals if k not in order)
    return [{key: k, "quantity": totals[k]} for k in known + extra]


def summarize_production(entries: Iterable[ProductionEntryWithDetails]) -> dict:
    """
    Sum detail quantities across entries.

    Returns the grand total plus totals per shift time (chronological order),
    per model and per process (reference order). Only keys that occur are
    listed.
    """
    by_time: Dict[str, float] = defaultdict(float)
    by_model: Dict[str, float] = defaultdict(float)
    by_process: Dict[str, float] = defaultdict(float)
    entry_count = 0
    detail_count = 0
    total = 0.0

    for entry in entries:
        entry_count += 1
        entry_total = 0.0
        for detail in entry.details:
            detail_count += 1
            entry_total += detail.quantity
            by_model[detail.model] += detail.quantity
        by_time[entry.time] += entry_total
        by_process[entry.process] += entry_total
        total += entry_total

    return {
        "total_quantity": total,
        "entry_count": entry_count,
        "detail_count": detail_count,
        "by_time": _ordered(by_time, SHIFT_ORDER, "time"),
        "by_model": _ordered(by_model, MODELS, "model"),
        "by_process": _ordered(by_process, PROCESSES, "process"),
    }
