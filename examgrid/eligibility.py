import re
from typing import Iterable, List, Optional, Tuple

from .config import SchedulerConfig
from .models import ExamSection

_CODE_PREFIX = re.compile(r'^([A-Z]+)')


def normalize_subject_id(subject_id: str) -> str:
    return re.sub(r'\s+', ' ', (subject_id or '').upper().strip())


def should_exclude_subject(subject_id: str, config: SchedulerConfig) -> bool:
    """True for subjects that never get a written exam (labs, practicum, thesis, ...)."""
    if not subject_id:
        return False
    normalized = normalize_subject_id(subject_id)
    if normalized in config.excluded_subject_ids:
        return True
    lower = normalized.lower()
    if any(p in lower for p in config.excluded_patterns):
        return True
    m = _CODE_PREFIX.match(normalized)
    return bool(m) and m.group(1) in config.excluded_prefixes


def split_eligible(sections: Iterable[ExamSection],
                   config: SchedulerConfig) -> Tuple[List[ExamSection], List[ExamSection]]:
    """Return (eligible, excluded), both in input order."""
    eligible: List[ExamSection] = []
    excluded: List[ExamSection] = []
    non_examined = config.non_examined_dept.upper()
    for s in sections:
        if s.dept.upper() == non_examined or should_exclude_subject(s.subject_id, config):
            excluded.append(s)
        else:
            eligible.append(s)
    return eligible, excluded


def filter_eligible(sections: Iterable[ExamSection], config: SchedulerConfig) -> List[ExamSection]:
    return split_eligible(sections, config)[0]


# --- subject classes -------------------------------------------------------

def gen_ed_category(subject_id: str, config: SchedulerConfig) -> Optional[str]:
    upper = (subject_id or '').upper()
    for category, prefixes in config.gen_ed_categories.items():
        if any(upper.startswith(p) for p in prefixes):
            return category
    return None


def is_gen_ed(section: ExamSection, config: SchedulerConfig) -> bool:
    return gen_ed_category(section.subject_id, config) is not None


def is_math(section: ExamSection, config: SchedulerConfig) -> bool:
    return (section.subject_id.upper().startswith(config.math_prefix)
            and section.dept.upper() == config.math_dept)


def is_arch(subject_id: str, config: SchedulerConfig) -> bool:
    return config.arch_marker in (subject_id or '').upper()
