from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Set, Tuple

# (course, year_level)
Cohort = Tuple[str, str]
# cohort -> subject_id -> subjects that cohort also sits
ConflictMatrix = Dict[Cohort, Dict[str, Set[str]]]


@dataclass(frozen=True)
class ExamSection:
    subject_id: str
    code: str  # unique per section
    title: str = ''
    course: str = ''
    year_level: str = ''
    dept: str = ''
    instructor: str = 'TBA'
    slot_width: int = 1  # 2 for six-unit subjects
    student_count: int = 0

    @property
    def cohort(self) -> Optional[Cohort]:
        if not self.course or not self.year_level:
            return None
        return (self.course.strip(), str(self.year_level).strip())


@dataclass(frozen=True)
class ScheduledExam:
    section: ExamSection
    day: int
    slot: int
    day_label: str
    slot_label: str
    room: str
    phase: int

    @property
    def subject_id(self) -> str:
        return self.section.subject_id

    @property
    def code(self) -> str:
        return self.section.code

    def slots(self) -> List[int]:
        return list(range(self.slot, self.slot + self.section.slot_width))

    def as_row(self) -> Dict[str, object]:
        s = self.section
        return {
            'code': s.code,
            'subject_id': s.subject_id,
            'title': s.title,
            'course': s.course,
            'year_level': s.year_level,
            'dept': s.dept,
            'instructor': s.instructor,
            'slot_width': s.slot_width,
            'student_count': s.student_count,
            'day': self.day_label,
            'slot': self.slot_label,
            'room': self.room,
        }


class UnscheduledReason(str, Enum):
    SLOT_CONFLICT = 'slot_conflict'
    BREAK_VIOLATION = 'break_violation'
    NO_ROOM = 'no_room'
    END_OF_DAY = 'end_of_day'


@dataclass(frozen=True)
class UnplacedSection:
    section: ExamSection
    reason: UnscheduledReason


@dataclass
class ScheduleResult:
    scheduled: List[ScheduledExam] = field(default_factory=list)
    unplaced: List[UnplacedSection] = field(default_factory=list)
    # filtered out before scheduling (non-examined dept, excluded subjects)
    excluded: List[ExamSection] = field(default_factory=list)
    eligible_count: int = 0
    day_load: List[int] = field(default_factory=list)
    # the matrix the run checked placements against
    matrix: ConflictMatrix = field(default_factory=dict)

    @property
    def coverage(self) -> float:
        if not self.eligible_count:
            return 100.0
        return 100.0 * len(self.scheduled) / self.eligible_count
