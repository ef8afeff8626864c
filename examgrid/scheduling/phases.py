"""The four placement phases.

Each phase takes the state left by the previous one and returns a fresh
state; nothing placed earlier is ever moved. Within a phase the first
candidate that works wins.
"""
import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence

from ..eligibility import gen_ed_category
from ..models import ExamSection, UnscheduledReason
from .placement import RunContext, try_schedule_group, try_schedule_section
from .state import SchedulingState

logger = logging.getLogger(__name__)

GEN_ED, HIGH_PRIORITY, MAJORS, FALLBACK = 1, 2, 3, 4


@dataclass
class PhaseResult:
    state: SchedulingState
    placed: int = 0
    failed: List[ExamSection] = field(default_factory=list)
    # only filled by the fallback phase, keyed by section code
    reasons: Dict[str, UnscheduledReason] = field(default_factory=dict)


def group_by_subject(sections: Iterable[ExamSection]) -> Dict[str, List[ExamSection]]:
    groups: Dict[str, List[ExamSection]] = {}
    for s in sections:
        groups.setdefault(s.subject_id, []).append(s)
    return groups


def day_order(load: Sequence[int], ctx: RunContext, penalty: int) -> List[int]:
    """Least-loaded days first, with ``penalty`` added to the lightly-preferred day."""
    light = ctx.config.light_day
    return sorted(range(ctx.num_days), key=lambda d: load[d] + (penalty if d == light else 0))


def _scan_all(group: List[ExamSection], days: Iterable[int], state: SchedulingState,
              ctx: RunContext, phase: int):
    for day in days:
        for slot in range(ctx.config.num_slots):
            if try_schedule_group(group, day, slot, state, ctx, phase):
                return day, slot
    return None


def schedule_gen_eds(sections: List[ExamSection], state: SchedulingState,
                     ctx: RunContext) -> PhaseResult:
    logger.info("Phase 1: gen-ed time blocks (%d sections)", len(sections))
    result = PhaseResult(state=state.copy())
    config = ctx.config
    by_category: Dict[str, List[ExamSection]] = {}
    for s in sections:
        by_category.setdefault(gen_ed_category(s.subject_id, config), []).append(s)

    for category, members in by_category.items():
        blocks = config.gen_ed_blocks.get(category)
        if not blocks:
            logger.info("  %s: no time block defined, deferring %d sections", category, len(members))
            result.failed.extend(members)
            continue
        skip = config.gen_ed_skip_slots.get(category, set())
        for subject_id, group in group_by_subject(members).items():
            placed = False
            for day, slot in blocks:
                if slot in skip or day >= ctx.num_days or slot > config.last_slot:
                    continue
                if try_schedule_group(group, day, slot, result.state, ctx, GEN_ED):
                    result.placed += len(group)
                    placed = True
                    logger.debug("  %s: %s (%d sections) -> %s %s", category, subject_id, len(group),
                                 config.day_label(day), config.slot_labels[slot])
                    break
            if not placed:
                result.failed.extend(group)
                logger.warning("  %s: %s (%d sections) found no free block", category, subject_id, len(group))

    logger.info("Phase 1 complete: %d placed, %d deferred", result.placed, len(result.failed))
    return result


def schedule_high_priority(math_sections: List[ExamSection], arch_sections: List[ExamSection],
                           state: SchedulingState, ctx: RunContext) -> PhaseResult:
    logger.info("Phase 2: high priority (%d math, %d architecture sections)",
                len(math_sections), len(arch_sections))
    result = PhaseResult(state=state.copy())
    for label, sections in (('math', math_sections), ('architecture', arch_sections)):
        for subject_id, group in group_by_subject(sections).items():
            hit = _scan_all(group, range(ctx.num_days), result.state, ctx, HIGH_PRIORITY)
            if hit is None:
                result.failed.extend(group)
                logger.warning("  %s: %s (%d sections) has no available slot", label, subject_id, len(group))
                continue
            result.placed += len(group)
            logger.debug("  %s: %s (%d sections) -> %s %s", label, subject_id, len(group),
                         ctx.config.day_label(hit[0]), ctx.config.slot_labels[hit[1]])
    logger.info("Phase 2 complete: %d placed, %d deferred", result.placed, len(result.failed))
    return result


def schedule_majors(sections: List[ExamSection], state: SchedulingState,
                    ctx: RunContext) -> PhaseResult:
    logger.info("Phase 3: major subjects (%d sections)", len(sections))
    result = PhaseResult(state=state.copy())
    load = result.state.day_load(ctx.num_days)
    # sorted() is stable: equal-sized subjects keep input order
    groups = sorted(group_by_subject(sections).items(), key=lambda kv: -len(kv[1]))
    for subject_id, group in groups:
        days = day_order(load, ctx, ctx.config.major_day_penalty)
        hit = _scan_all(group, days, result.state, ctx, MAJORS)
        if hit is None:
            result.failed.extend(group)
            logger.warning("  %s (%d sections) will be retried individually", subject_id, len(group))
            continue
        load[hit[0]] += len(group)
        result.placed += len(group)
        logger.debug("  %s (%d sections) -> %s %s", subject_id, len(group),
                     ctx.config.day_label(hit[0]), ctx.config.slot_labels[hit[1]])
    logger.info("Phase 3 complete: %d placed, day load %s", result.placed, load)
    return result


def schedule_individually(sections: List[ExamSection], state: SchedulingState,
                          ctx: RunContext) -> PhaseResult:
    """Last resort: sections of one subject may land in different slots here."""
    logger.info("Phase 4: individual fallback (%d sections)", len(sections))
    result = PhaseResult(state=state.copy())
    load = result.state.day_load(ctx.num_days)
    penalty = ctx.config.fallback_day_penalty

    remaining = list(sections)
    if ctx.config.fallback_colocate:
        remaining = []
        for subject_id, group in group_by_subject(sections).items():
            if len(group) > 1:
                hit = _scan_all(group, day_order(load, ctx, penalty), result.state, ctx, FALLBACK)
                if hit is not None:
                    load[hit[0]] += len(group)
                    result.placed += len(group)
                    continue
            remaining.extend(group)

    for section in remaining:
        blockers: Counter = Counter()
        placed = False
        for day in day_order(load, ctx, penalty):
            for slot in range(ctx.config.num_slots):
                reason = try_schedule_section(section, day, slot, result.state, ctx, FALLBACK)
                if reason is None:
                    placed = True
                    break
                blockers[reason] += 1
            if placed:
                load[day] += 1
                result.placed += 1
                break
        if not placed:
            reason = max(UnscheduledReason, key=lambda r: blockers[r])
            result.failed.append(section)
            result.reasons[section.code] = reason
            logger.warning("  unplaced: %s (%s) %s year %s [%s]", section.subject_id, section.code,
                           section.course, section.year_level, reason.value)

    logger.info("Phase 4 complete: %d placed, %d unplaced, day load %s",
                result.placed, len(result.failed), load)
    return result
