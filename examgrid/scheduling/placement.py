import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Set, Tuple

from ..config import SchedulerConfig
from ..models import ConflictMatrix, ExamSection, UnscheduledReason
from .checks import conflict_reason, has_conflict
from .room_assignment import available_rooms
from .state import SchedulingState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunContext:
    """Read-only inputs shared by every phase of a run."""
    rooms: Tuple[str, ...]
    matrix: ConflictMatrix
    config: SchedulerConfig
    num_days: int


def placement_blocker(section: ExamSection, day: int, slot: int, state: SchedulingState,
                      ctx: RunContext) -> Optional[UnscheduledReason]:
    """Why ``section`` cannot go at (day, slot) on its own, or None if it can."""
    if section.slot_width > 1 and slot >= ctx.config.last_slot:
        return UnscheduledReason.END_OF_DAY
    reason = conflict_reason(section, day, slot, state, ctx.matrix, ctx.config)
    if reason is not None:
        return reason
    if not available_rooms(section, day, slot, ctx.rooms, state, ctx.config):
        return UnscheduledReason.NO_ROOM
    return None


def try_schedule_group(group: Sequence[ExamSection], day: int, slot: int,
                       state: SchedulingState, ctx: RunContext, phase: int) -> bool:
    """Place every section of one subject at (day, slot), or change nothing."""
    for section in group:
        if has_conflict(section, day, slot, state, ctx.matrix, ctx.config):
            return False
    plan: List[Tuple[ExamSection, str]] = []
    reserved: Set[str] = set()
    for section in group:
        candidates = available_rooms(section, day, slot, ctx.rooms, state, ctx.config, reserved)
        if not candidates:
            return False
        plan.append((section, candidates[0]))
        reserved.add(candidates[0])
    for section, room in plan:
        state.commit(section, day, slot, room, phase, ctx.config)
    return True


def try_schedule_section(section: ExamSection, day: int, slot: int,
                         state: SchedulingState, ctx: RunContext,
                         phase: int) -> Optional[UnscheduledReason]:
    """Place one section on its own. Returns None on success, else the blocker."""
    reason = placement_blocker(section, day, slot, state, ctx)
    if reason is not None:
        return reason
    room = available_rooms(section, day, slot, ctx.rooms, state, ctx.config)[0]
    state.commit(section, day, slot, room, phase, ctx.config)
    return None
