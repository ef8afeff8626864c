from dataclasses import dataclass, field, fields
from typing import Dict, List, Set, Tuple

SLOT_LABELS = [
    '7:30-9:00', '9:00-10:30', '10:30-12:00', '12:00-13:30',
    '13:30-15:00', '15:00-16:30', '16:30-18:00', '18:00-19:30',
]

# minutes after midnight
SLOT_START_TIMES = [450, 540, 630, 720, 810, 900, 990, 1080]

EXCLUDED_SUBJECT_IDS = {
    'RESM 1023', 'ARMS 1023', 'BRES 1023', 'RESM 1013', 'RESM 1022', 'THES 1023',
    'ACCT 1183', 'ACCT 1213', 'ACCT 1193', 'ACCT 1223', 'ACCT 1203', 'ACCT 1236',
    'PRAC 1033', 'PRAC 1023', 'PRAC 1013', 'PRAC 1012', 'PRAC 1036', 'PRAC 1026',
    'MKTG 1183', 'MKTG 1153',
    'ARCH 1505', 'ARCH 1163', 'ARCH 1254', 'ARCH 1385',
    'HOAS 1013', 'FMGT 1123',
    'CPAR 1013', 'CVIL 1222', 'CADD 1011', 'COME 1151', 'GEOD 1253', 'CVIL 1065',
    'CAPS 1021',
    'EDUC 1123', 'ELEM 1063', 'ELEM 1073', 'ELEM 1083', 'SCED 1023', 'MAPE 1073',
    'JOUR 1013', 'LITR 1043', 'LITR 1073', 'LITR 1033', 'LITR 1023',
    'SOCS 1073', 'SOCS 1083', 'PSYC 1133', 'SOCS 1183', 'SOCS 1063',
    'SOCS 1213', 'SOCS 1193', 'SOCS 1093', 'SOCS 1173', 'SOCS 1203',
    'CFED 1061', 'CFED 1043', 'CFED 1081',
    'CORE 1016', 'CORE 1026',
    'ENLT 1153', 'ENLT 1013', 'ENLT 1143', 'ENLT 1063', 'ENLT 1133', 'ENLT 1123',
    'NSTP 1023',
    'NURS 1015', 'NURS 1236', 'MELS 1053', 'MELS 1044', 'MELS 13112', 'MELS 1323',
    'PNCM 1178', 'PNCM 1169', 'PNCM 10912', 'PNCM 1228',
}

EXCLUDED_PATTERNS = [
    '(lab)', '(rle)', 'lab)', 'rle)',
    'practicum', 'internship', 'thesis',
    'research method', 'capstone',
]

EXCLUDED_PREFIXES = {'PRAC', 'THES', 'CAPS', 'RESM', 'ARMS', 'BRES'}

GEN_ED_CATEGORIES = {
    'ETHC': ['ETHC'],
    'ENGL': ['ENGL'],
    'PHED': ['PHED'],
    'CFED': ['CFED'],
    'CONW': ['CONW'],
    'LANG': ['LANG', 'JAPN', 'CHIN', 'SPAN'],
    'LITR': ['LITR'],
    'ICTE': ['ICTE'],
    'OMGT': ['OMGT'],
    'GGSR': ['GGSR'],
    'RZAL': ['RZAL'],
    'PDEV': ['PDEV'],
}

# (day, slot) candidates; first entry is the primary block
GEN_ED_BLOCKS = {
    'ETHC': [(0, 0), (0, 1)],
    'ENGL': [(0, 2), (2, 0), (0, 1)],
    'PHED': [(0, 3), (1, 0), (2, 3)],
    'CFED': [(0, 4), (1, 1), (1, 2), (0, 5), (1, 4)],
    'CONW': [(1, 5), (0, 5), (2, 5)],
    'LANG': [(2, 3), (2, 4), (1, 3)],
    'LITR': [(2, 4), (2, 5), (0, 4)],
}

DEPARTMENT_BUILDINGS = [
    ('SECAP', ['A', 'B', 'J']),
    ('SABH', ['A']),
    ('SACE', ['N', 'K', 'C']),
    ('SHAS', ['L', 'M', 'N', 'K', 'J']),
]

ALL_BUILDINGS = ['A', 'N', 'K', 'L', 'M', 'B', 'C', 'J']


@dataclass
class SchedulerConfig:
    """Institution tables injected into one scheduling run."""
    slot_labels: List[str] = field(default_factory=lambda: list(SLOT_LABELS))
    slot_start_times: List[int] = field(default_factory=lambda: list(SLOT_START_TIMES))
    slot_duration_min: int = 90
    min_break_min: int = 90
    day_label_format: str = 'Day {n}'

    non_examined_dept: str = 'SAS'
    excluded_subject_ids: Set[str] = field(default_factory=lambda: set(EXCLUDED_SUBJECT_IDS))
    excluded_patterns: List[str] = field(default_factory=lambda: list(EXCLUDED_PATTERNS))
    excluded_prefixes: Set[str] = field(default_factory=lambda: set(EXCLUDED_PREFIXES))

    gen_ed_categories: Dict[str, List[str]] = field(
        default_factory=lambda: {k: list(v) for k, v in GEN_ED_CATEGORIES.items()})
    gen_ed_blocks: Dict[str, List[Tuple[int, int]]] = field(
        default_factory=lambda: {k: list(v) for k, v in GEN_ED_BLOCKS.items()})
    gen_ed_skip_slots: Dict[str, Set[int]] = field(default_factory=lambda: {'CFED': {0}})

    math_prefix: str = 'MATH'
    math_dept: str = 'SACE'
    arch_marker: str = 'ARCH'
    arch_buildings: List[str] = field(default_factory=lambda: ['C', 'K'])
    arch_preferred_building: str = 'C'
    department_buildings: List[Tuple[str, List[str]]] = field(
        default_factory=lambda: [(d, list(b)) for d, b in DEPARTMENT_BUILDINGS])
    all_buildings: List[str] = field(default_factory=lambda: list(ALL_BUILDINGS))

    light_day: int = 2
    major_day_penalty: int = 50
    fallback_day_penalty: int = 30
    fallback_colocate: bool = True

    def __post_init__(self):
        if not self.slot_labels:
            raise ValueError("at least one slot is required")
        if len(self.slot_labels) != len(self.slot_start_times):
            raise ValueError("slot_labels and slot_start_times must have the same length")
        for a, b in zip(self.slot_start_times, self.slot_start_times[1:]):
            if b <= a:
                raise ValueError("slot_start_times must be strictly increasing")
        if self.slot_duration_min <= 0 or self.min_break_min < 0:
            raise ValueError("slot duration must be positive and break non-negative")
        if self.major_day_penalty < 0 or self.fallback_day_penalty < 0:
            raise ValueError("day penalties must be non-negative")

    @property
    def num_slots(self) -> int:
        return len(self.slot_labels)

    @property
    def last_slot(self) -> int:
        return self.num_slots - 1

    def day_label(self, day: int) -> str:
        return self.day_label_format.format(n=day + 1)

    def slot_window(self, slot: int, width: int = 1) -> Tuple[int, int]:
        """Minute window covered by an exam starting at ``slot`` spanning ``width`` slots."""
        last = min(slot + width - 1, self.last_slot)
        return self.slot_start_times[slot], self.slot_start_times[last] + self.slot_duration_min

    @classmethod
    def from_dict(cls, data: Dict) -> 'SchedulerConfig':
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        kw = dict(data)
        for key in ('excluded_subject_ids', 'excluded_prefixes'):
            if key in kw:
                kw[key] = set(kw[key])
        if 'gen_ed_blocks' in kw:
            kw['gen_ed_blocks'] = {cat: [tuple(b) for b in blocks]
                                   for cat, blocks in kw['gen_ed_blocks'].items()}
        if 'gen_ed_skip_slots' in kw:
            kw['gen_ed_skip_slots'] = {cat: set(s) for cat, s in kw['gen_ed_skip_slots'].items()}
        if 'department_buildings' in kw:
            kw['department_buildings'] = [(d, list(b)) for d, b in kw['department_buildings']]
        return cls(**kw)


def default_rooms() -> List[str]:
    """Reference campus room universe (BCJ, Main and Lecaros campuses)."""
    rooms: List[str] = []
    for lo, hi in ((101, 115), (201, 216), (301, 316)):
        rooms.extend(f"A-{i}" for i in range(lo, hi + 1))
    rooms.extend(f"C-{i}" for i in range(21, 26))
    for lo, hi in ((11, 15), (21, 28), (31, 40)):
        rooms.extend(f"N-{i}" for i in range(lo, hi + 1))
    for lo, hi in ((11, 13), (21, 25), (31, 35)):
        rooms.extend(f"K-{i}" for i in range(lo, hi + 1))
    rooms.extend(['J-11', 'J-12', 'J-21', 'J-22', 'J-31', 'J-32'])
    rooms.extend(['B-11', 'B-21'])
    for lo, hi in ((11, 15), (21, 24)):
        rooms.extend(f"L-{i}" for i in range(lo, hi + 1))
    rooms.extend(f"M-{i}" for i in range(11, 15))
    rooms.extend(['M-21', 'M-22', 'M-23'])
    return rooms
