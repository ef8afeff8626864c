import csv
import io
import json
import logging
import os
from contextlib import contextmanager
from typing import IO, Dict, Iterator, List, Sequence, Union

from .config import SchedulerConfig
from .models import ExamSection, ScheduledExam

logger = logging.getLogger(__name__)

TextOrPath = Union[str, os.PathLike, bytes, IO]

# upstream reports name the same column several ways
FIELD_ALIASES = {
    'subject_id': ('subjectId', 'SUBJECT_ID', 'subject_id'),
    'title': ('subjectTitle', 'descriptiveTitle', 'SUBJECT_TITLE', 'DESCRIPTIVE_TITLE', 'title'),
    'code': ('codeNo', 'CODE_NO', 'code', 'CODE'),
    'course': ('course', 'COURSE'),
    'year_level': ('yearLevel', 'year', 'YEAR_LEVEL', 'YEAR', 'year_level'),
    'dept': ('deptCode', 'dept', 'DEPT_CODE', 'DEPT'),
    'instructor': ('instructor', 'INSTRUCTOR'),
    'units': ('lecUnits', 'lec', 'LEC_UNITS', 'LEC', 'units'),
    'slot_width': ('slot_width', 'SLOT_WIDTH'),
    'student_count': ('classSize', 'studentCount', 'CLASS_SIZE', 'STUDENT_COUNT', 'student_count'),
}

DOUBLE_SLOT_UNITS = 6


@contextmanager
def text_source(src: TextOrPath) -> Iterator[IO[str]]:
    """Yield a text handle over a path, a byte buffer or an open text stream.

    Handles opened here are closed on exit; caller-owned streams are rewound
    when possible and left open.
    """
    if isinstance(src, (str, os.PathLike)):
        with open(src, 'r', newline='', encoding='utf-8') as f:
            yield f
    elif isinstance(src, (bytes, bytearray, io.BytesIO)):
        raw = src.getvalue() if isinstance(src, io.BytesIO) else bytes(src)
        yield io.StringIO(raw.decode('utf-8-sig'), newline='')
    elif hasattr(src, 'read'):
        if getattr(src, 'seekable', lambda: False)():
            src.seek(0)
        yield src
    else:
        raise TypeError(f"Unsupported input type {type(src).__name__}; expected path or file-like object")


def _pick(row: Dict[str, str], name: str, default: str = '') -> str:
    for alias in FIELD_ALIASES[name]:
        value = row.get(alias)
        if value not in (None, ''):
            return str(value).strip()
    return default


def row_to_section(row: Dict[str, str]) -> ExamSection:
    units = int(_pick(row, 'units', '3'))
    width = _pick(row, 'slot_width')
    return ExamSection(
        subject_id=_pick(row, 'subject_id'),
        code=_pick(row, 'code'),
        title=_pick(row, 'title'),
        course=_pick(row, 'course'),
        year_level=_pick(row, 'year_level', '1'),
        dept=_pick(row, 'dept').upper(),
        instructor=_pick(row, 'instructor', 'TBA'),
        slot_width=int(width) if width else (2 if units == DOUBLE_SLOT_UNITS else 1),
        student_count=int(_pick(row, 'student_count', '0')),
    )


def load_sections(src: TextOrPath) -> List[ExamSection]:
    """Read exam sections from CSV, dropping rows without a subject id or course."""
    sections: List[ExamSection] = []
    with text_source(src) as f:
        for line_no, row in enumerate(csv.DictReader(f), start=2):
            try:
                section = row_to_section(row)
            except ValueError as exc:
                raise ValueError(f"line {line_no}: {exc}") from exc
            if not section.subject_id or not section.course:
                logger.warning("Skipping line %d: missing subject id or course", line_no)
                continue
            sections.append(section)
    return sections


def load_rooms(src: TextOrPath) -> List[str]:
    """Room ids from a CSV with an ``id``/``room`` column, or one id per line."""
    with text_source(src) as f:
        lines = [line.strip() for line in f if line.strip() and not line.startswith('#')]
    if not lines:
        return []
    header = [h.strip().lower() for h in lines[0].split(',')]
    for col in ('id', 'room'):
        if col in header:
            idx = header.index(col)
            return [row[idx].strip() for row in csv.reader(lines[1:]) if len(row) > idx and row[idx].strip()]
    return lines


def load_config(src: TextOrPath) -> SchedulerConfig:
    with text_source(src) as f:
        data = json.load(f)
    return SchedulerConfig.from_dict(data)


def save_schedule_csv(path: str, scheduled: Sequence[ScheduledExam]):
    columns = ['code', 'subject_id', 'title', 'course', 'year_level', 'dept', 'instructor',
               'slot_width', 'student_count', 'day', 'slot', 'room']
    with open(path, 'w', newline='', encoding='utf-8') as f:
        w = csv.DictWriter(f, fieldnames=columns)
        w.writeheader()
        for exam in scheduled:
            w.writerow(exam.as_row())
