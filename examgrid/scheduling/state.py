from dataclasses import dataclass, field
from typing import Dict, List, Set, Tuple

from ..config import SchedulerConfig
from ..models import Cohort, ExamSection, ScheduledExam

# (start_min, end_min, subject_id)
Window = Tuple[int, int, str]


@dataclass
class SchedulingState:
    """Bookkeeping for one scheduling run.

    Phases take a state and hand back a new one; ``copy`` is what keeps an
    earlier phase's state untouched.
    """
    # (day, slot, room) -> exams starting there
    assignments: Dict[Tuple[int, int, str], List[ScheduledExam]] = field(default_factory=dict)
    # day -> slot -> occupied rooms
    room_usage: Dict[int, Dict[int, Set[str]]] = field(default_factory=dict)
    # subject -> every (day, slot) its sections cover
    subject_scheduled: Dict[str, Set[Tuple[int, int]]] = field(default_factory=dict)
    # cohort -> day -> exam windows already sat that day
    cohort_windows: Dict[Cohort, Dict[int, List[Window]]] = field(default_factory=dict)
    scheduled: List[ScheduledExam] = field(default_factory=list)

    def copy(self) -> 'SchedulingState':
        return SchedulingState(
            assignments={k: list(v) for k, v in self.assignments.items()},
            room_usage={d: {s: set(r) for s, r in slots.items()} for d, slots in self.room_usage.items()},
            subject_scheduled={k: set(v) for k, v in self.subject_scheduled.items()},
            cohort_windows={c: {d: list(w) for d, w in days.items()} for c, days in self.cohort_windows.items()},
            scheduled=list(self.scheduled),
        )

    def occupied(self, day: int, slot: int) -> Set[str]:
        return self.room_usage.get(day, {}).get(slot, set())

    def is_room_free(self, day: int, slot: int, room: str) -> bool:
        return room not in self.occupied(day, slot)

    def windows(self, cohort: Cohort, day: int) -> List[Window]:
        return self.cohort_windows.get(cohort, {}).get(day, [])

    def placed_codes(self) -> Set[str]:
        return {e.code for e in self.scheduled}

    def day_load(self, num_days: int) -> List[int]:
        load = [0] * num_days
        for e in self.scheduled:
            if 0 <= e.day < num_days:
                load[e.day] += 1
        return load

    def commit(self, section: ExamSection, day: int, slot: int, room: str,
               phase: int, config: SchedulerConfig) -> ScheduledExam:
        """Record a placement. Callers have already checked legality."""
        exam = ScheduledExam(
            section=section,
            day=day,
            slot=slot,
            day_label=config.day_label(day),
            slot_label=config.slot_labels[slot],
            room=room,
            phase=phase,
        )
        self.scheduled.append(exam)
        self.assignments.setdefault((day, slot, room), []).append(exam)
        day_usage = self.room_usage.setdefault(day, {})
        covered = self.subject_scheduled.setdefault(section.subject_id, set())
        for s in exam.slots():
            day_usage.setdefault(s, set()).add(room)
            covered.add((day, s))
        cohort = section.cohort
        if cohort is not None:
            start, end = config.slot_window(slot, section.slot_width)
            self.cohort_windows.setdefault(cohort, {}).setdefault(day, []).append(
                (start, end, section.subject_id))
        return exam
