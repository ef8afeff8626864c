import logging
from typing import Iterable, List, Optional, Sequence

from ..config import SchedulerConfig
from ..eligibility import is_arch, is_gen_ed, is_math, split_eligible
from ..graph_build import build_conflict_matrix
from ..models import ExamSection, ScheduledExam, ScheduleResult, UnplacedSection
from .phases import schedule_gen_eds, schedule_high_priority, schedule_individually, schedule_majors
from .placement import RunContext
from .state import SchedulingState

logger = logging.getLogger(__name__)


def run_scheduler(sections: Iterable[ExamSection], rooms: Sequence[str], num_days: int,
                  config: Optional[SchedulerConfig] = None) -> ScheduleResult:
    """Assign every eligible section a (day, slot, room), phase by phase.

    A partial result is normal: whatever could not be placed comes back in
    ``ScheduleResult.unplaced`` with the reason that blocked it most often.
    """
    if num_days < 1:
        raise ValueError("num_days must be at least 1")
    config = config or SchedulerConfig()
    sections = list(sections)
    # de-duplicate while keeping the caller's order
    room_list = tuple(dict.fromkeys(rooms))

    eligible, excluded = split_eligible(sections, config)
    logger.info("Scheduling %d sections (%d eligible, %d excluded) into %d rooms over %d days",
                len(sections), len(eligible), len(excluded), len(room_list), num_days)

    ctx = RunContext(rooms=room_list, matrix=build_conflict_matrix(eligible),
                     config=config, num_days=num_days)

    gen_eds, maths, archs, majors = [], [], [], []
    for s in eligible:
        if is_gen_ed(s, config):
            gen_eds.append(s)
        elif is_math(s, config):
            maths.append(s)
        elif is_arch(s.subject_id, config):
            archs.append(s)
        else:
            majors.append(s)
    logger.info("Categories: %d gen-ed, %d math, %d architecture, %d major",
                len(gen_eds), len(maths), len(archs), len(majors))

    state = SchedulingState()
    phase1 = schedule_gen_eds(gen_eds, state, ctx)
    phase2 = schedule_high_priority(maths, archs, phase1.state, ctx)
    phase3 = schedule_majors(majors, phase2.state, ctx)
    leftovers = phase1.failed + phase2.failed + phase3.failed
    phase4 = schedule_individually(leftovers, phase3.state, ctx)

    final = phase4.state
    result = ScheduleResult(
        scheduled=list(final.scheduled),
        unplaced=[UnplacedSection(section=s, reason=phase4.reasons[s.code]) for s in phase4.failed],
        excluded=excluded,
        eligible_count=len(eligible),
        day_load=final.day_load(num_days),
        matrix=ctx.matrix,
    )
    logger.info("Placed %d of %d eligible sections (%.2f%%)",
                len(result.scheduled), result.eligible_count, result.coverage)
    return result


def generate_exam_schedule(sections: Iterable[ExamSection], rooms: Sequence[str], num_days: int,
                           config: Optional[SchedulerConfig] = None) -> List[ScheduledExam]:
    return run_scheduler(sections, rooms, num_days, config).scheduled
