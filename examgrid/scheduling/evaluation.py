import math
from collections import Counter
from typing import Tuple

from ..config import SchedulerConfig
from ..graph_build import build_conflict_graph
from ..models import ConflictMatrix, ScheduleResult
from .validation import atomicity_ok, breaks_ok, conflicts_ok, multi_slot_ok, rooms_ok, split_subjects


def exams_per_day(config: SchedulerConfig) -> int:
    """Most single-slot exams one cohort can sit in a day with the minimum break."""
    count, free_from = 0, None
    for slot in range(config.num_slots):
        start, end = config.slot_window(slot)
        if free_from is None or start >= free_from:
            count += 1
            free_from = end + config.min_break_min
    return count


def busiest_cohort(matrix: ConflictMatrix) -> Tuple[Tuple[str, str], int]:
    """Cohort sitting the most distinct subjects.

    Every subject of one cohort conflicts with every other, so that count
    is a lower bound on the (day, slot) cells a conflict-free run needs.
    """
    best, size = None, 0
    for cohort in sorted(matrix):
        n = len(matrix[cohort])
        if n > size:
            best, size = cohort, n
    return best, size


def summary(result: ScheduleResult, config: SchedulerConfig, num_days: int) -> str:
    sched = result.scheduled
    G = build_conflict_graph(result.matrix)
    cells = num_days * config.num_slots
    cohort, size = busiest_cohort(result.matrix)
    per_day = exams_per_day(config)
    days_needed = math.ceil(size / per_day) if per_day else 0
    per_phase = Counter(e.phase for e in sched)
    reasons = Counter(u.reason.value for u in result.unplaced)
    warning = ""
    if days_needed > num_days:
        warning = (f"Warning: cohort {'-'.join(cohort)} sits {size} subjects but only "
                   f"{per_day} fit per day; {days_needed} days needed, {num_days} given.\n")
    loads = "  ".join(f"{config.day_label(d)}: {n}" for d, n in enumerate(result.day_load))
    phases = "  ".join(f"P{p}: {per_phase.get(p, 0)}" for p in (1, 2, 3, 4))
    reason_text = ", ".join(f"{r}={n}" for r, n in sorted(reasons.items())) or "none"
    busiest = f"{'-'.join(cohort)} ({size} subjects)" if cohort else "none"
    return (
        f"Sections excluded: {len(result.excluded)}  Eligible: {result.eligible_count}\n"
        f"Placed: {len(sched)}  Unplaced: {len(result.unplaced)}  Coverage: {result.coverage:.2f}%\n"
        f"By phase: {phases}\n"
        f"Day load: {loads}\n"
        f"Unplaced reasons: {reason_text}\n"
        f"Subjects: {G.number_of_nodes()}  Conflicts: {G.number_of_edges()}  Cells: {cells}\n"
        f"Busiest cohort: {busiest}  Exams per cohort-day: {per_day}  Days needed: {days_needed}\n"
        f"Valid (rooms): {rooms_ok(sched)}  Valid (conflicts): {conflicts_ok(G, sched)}  "
        f"Valid (breaks): {breaks_ok(sched, config)}  Valid (multi-slot): {multi_slot_ok(sched, config)}\n"
        f"Atomic before fallback: {atomicity_ok(sched)}  Split in fallback: {len(split_subjects(sched))}\n"
        f"{warning}"
    )
