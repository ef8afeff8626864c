from itertools import combinations
from typing import Dict, List, Sequence, Set, Tuple

import networkx as nx

from ..config import SchedulerConfig
from ..models import ScheduledExam
from .phases import FALLBACK


def rooms_ok(scheduled: Sequence[ScheduledExam]) -> bool:
    used: Set[Tuple[int, int, str]] = set()
    for e in scheduled:
        for s in e.slots():
            key = (e.day, s, e.room)
            if key in used:
                return False
            used.add(key)
    return True


def conflicts_ok(G: nx.Graph, scheduled: Sequence[ScheduledExam]) -> bool:
    cells: Dict[str, Set[Tuple[int, int]]] = {}
    for e in scheduled:
        cells.setdefault(e.subject_id, set()).update((e.day, s) for s in e.slots())
    for u, v in G.edges():
        if cells.get(u, set()) & cells.get(v, set()):
            return False
    return True


def breaks_ok(scheduled: Sequence[ScheduledExam], config: SchedulerConfig) -> bool:
    by_cohort_day: Dict[Tuple, List[ScheduledExam]] = {}
    for e in scheduled:
        if e.section.cohort is not None:
            by_cohort_day.setdefault((e.section.cohort, e.day), []).append(e)
    for exams in by_cohort_day.values():
        for a, b in combinations(exams, 2):
            a_start, a_end = config.slot_window(a.slot, a.section.slot_width)
            b_start, b_end = config.slot_window(b.slot, b.section.slot_width)
            if a.subject_id == b.subject_id and (a_start, a_end) == (b_start, b_end):
                continue
            if max(a_start - b_end, b_start - a_end) < config.min_break_min:
                return False
    return True


def atomicity_ok(scheduled: Sequence[ScheduledExam]) -> bool:
    """Sections placed before the fallback phase share their subject's (day, slot)."""
    seen: Dict[str, Tuple[int, int]] = {}
    for e in scheduled:
        if e.phase == FALLBACK:
            continue
        cell = seen.setdefault(e.subject_id, (e.day, e.slot))
        if cell != (e.day, e.slot):
            return False
    return True


def multi_slot_ok(scheduled: Sequence[ScheduledExam], config: SchedulerConfig) -> bool:
    for e in scheduled:
        if e.section.slot_width > 1 and e.slot + e.section.slot_width - 1 > config.last_slot:
            return False
    return rooms_ok(scheduled)


def split_subjects(scheduled: Sequence[ScheduledExam]) -> List[str]:
    """Subjects whose sections ended up in more than one (day, slot)."""
    cells: Dict[str, Set[Tuple[int, int]]] = {}
    for e in scheduled:
        cells.setdefault(e.subject_id, set()).add((e.day, e.slot))
    return [sid for sid, c in cells.items() if len(c) > 1]
