import csv
import io

import pytest

from examgrid.io_utils import load_rooms, load_sections, save_schedule_csv
from examgrid.scheduling.scheduler import run_scheduler

REPORT = """CODE_NO,SUBJECT_ID,DESCRIPTIVE_TITLE,COURSE,YEAR_LEVEL,DEPT,LEC_UNITS,CLASS_SIZE
1001,CS 101,Intro,BSCS,1,secap,3,40
1002,CS 600,Studio,BSCS,2,SECAP,6,25
1003,CS 102,No course,,1,SECAP,3,10
"""


def test_load_sections_accepts_upstream_names():
    sections = load_sections(io.StringIO(REPORT))
    assert [s.code for s in sections] == ['1001', '1002']
    first, second = sections
    assert first.dept == 'SECAP'
    assert first.slot_width == 1
    assert first.student_count == 40
    assert first.cohort == ('BSCS', '1')
    assert second.slot_width == 2


def test_load_sections_camel_case_and_bytes():
    data = b"codeNo,subjectId,course,yearLevel,deptCode,lecUnits,classSize\n7,ENGL 101,BSIT,3,SHAS,3,30\n"
    (section,) = load_sections(io.BytesIO(data))
    assert (section.subject_id, section.year_level, section.instructor) == ('ENGL 101', '3', 'TBA')


def test_load_sections_bad_number():
    bad = "CODE,SUBJECT_ID,COURSE,LEC\n1,CS 1,BSCS,three\n"
    with pytest.raises(ValueError, match='line 2'):
        load_sections(io.StringIO(bad))


def test_load_rooms_formats():
    assert load_rooms(io.StringIO("A-101\nA-102\n\n# note\nB-11\n")) == ['A-101', 'A-102', 'B-11']
    assert load_rooms(io.StringIO("id,capacity\nA-101,40\nC-21,30\n")) == ['A-101', 'C-21']
    assert load_rooms(io.StringIO("")) == []


def test_unsupported_source():
    with pytest.raises(TypeError):
        load_rooms(42)


def test_save_schedule_csv(tmp_path):
    sections = load_sections(io.StringIO(REPORT))
    result = run_scheduler(sections, ['A-101', 'A-102'], 1)
    out = tmp_path / 'schedule.csv'
    save_schedule_csv(str(out), result.scheduled)
    with open(out, newline='') as f:
        rows = list(csv.DictReader(f))
    assert [r['code'] for r in rows] == ['1001', '1002']
    assert rows[0]['day'] == 'Day 1'
    assert rows[0]['slot'] == '7:30-9:00'
    assert rows[1]['slot_width'] == '2'


def test_text_source_handles_bom_bytes_and_leaves_streams_open():
    assert load_rooms(b'\xef\xbb\xbfA-101\nB-11\n') == ['A-101', 'B-11']
    stream = io.StringIO("A-101\n")
    stream.read()
    assert load_rooms(stream) == ['A-101']
    assert not stream.closed
