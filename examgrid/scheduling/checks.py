from typing import Optional

from ..config import SchedulerConfig
from ..graph_build import conflicts_for
from ..models import ConflictMatrix, ExamSection, UnscheduledReason
from .state import SchedulingState


def clashes_with_conflicting_subject(section: ExamSection, day: int, slot: int,
                                     state: SchedulingState, matrix: ConflictMatrix,
                                     config: SchedulerConfig) -> bool:
    last = min(slot + section.slot_width - 1, config.last_slot)
    wanted = {(day, s) for s in range(slot, last + 1)}
    for other in sorted(conflicts_for(matrix, section)):
        if state.subject_scheduled.get(other, set()) & wanted:
            return True
    return False


def breaks_too_short(section: ExamSection, day: int, slot: int,
                     state: SchedulingState, config: SchedulerConfig) -> bool:
    """True if the cohort already sits an exam that day less than the minimum break away."""
    cohort = section.cohort
    if cohort is None:
        return False
    start, end = config.slot_window(slot, section.slot_width)
    for other_start, other_end, subject_id in state.windows(cohort, day):
        # a parallel section of the same subject may share the exact window
        if subject_id == section.subject_id and (other_start, other_end) == (start, end):
            continue
        # negative when the windows overlap
        gap = max(start - other_end, other_start - end)
        if gap < config.min_break_min:
            return True
    return False


def conflict_reason(section: ExamSection, day: int, slot: int, state: SchedulingState,
                    matrix: ConflictMatrix, config: SchedulerConfig) -> Optional[UnscheduledReason]:
    if clashes_with_conflicting_subject(section, day, slot, state, matrix, config):
        return UnscheduledReason.SLOT_CONFLICT
    if breaks_too_short(section, day, slot, state, config):
        return UnscheduledReason.BREAK_VIOLATION
    return None


def has_conflict(section: ExamSection, day: int, slot: int, state: SchedulingState,
                 matrix: ConflictMatrix, config: SchedulerConfig) -> bool:
    """Single gate for placement legality; every attempt goes through here."""
    return conflict_reason(section, day, slot, state, matrix, config) is not None
