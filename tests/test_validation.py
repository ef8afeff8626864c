from examgrid.models import ScheduledExam
from examgrid.scheduling.validation import (
    atomicity_ok, breaks_ok, conflicts_ok, multi_slot_ok, rooms_ok, split_subjects,
)


def _exam(section, day, slot, room, phase=3):
    return ScheduledExam(section=section, day=day, slot=slot, day_label=f'Day {day + 1}',
                         slot_label=str(slot), room=room, phase=phase)


def test_room_double_booking(make_section):
    a, b = make_section('A', course='X'), make_section('B', course='Y')
    assert rooms_ok([_exam(a, 0, 0, 'R'), _exam(b, 0, 1, 'R')])
    assert not rooms_ok([_exam(a, 0, 0, 'R'), _exam(b, 0, 0, 'R')])


def test_room_double_booking_on_second_slot(make_section, config):
    a = make_section('A', course='X', width=2)
    b = make_section('B', course='Y')
    sched = [_exam(a, 0, 0, 'R'), _exam(b, 0, 1, 'R')]
    assert not rooms_ok(sched)
    assert not multi_slot_ok(sched, config)


def test_double_width_in_last_slot(make_section, config):
    a = make_section('A', width=2)
    assert not multi_slot_ok([_exam(a, 0, config.last_slot, 'R')], config)
    assert multi_slot_ok([_exam(a, 0, config.last_slot - 1, 'R')], config)


def test_conflicting_subjects_sharing_a_cell(make_section, graph_for):
    a, b = make_section('A'), make_section('B')
    G = graph_for([a, b])
    assert not conflicts_ok(G, [_exam(a, 0, 0, 'R1'), _exam(b, 0, 0, 'R2')])
    assert conflicts_ok(G, [_exam(a, 0, 0, 'R1'), _exam(b, 0, 2, 'R2')])


def test_breaks(make_section, config):
    a, b = make_section('A'), make_section('B')
    assert not breaks_ok([_exam(a, 0, 0, 'R1'), _exam(b, 0, 1, 'R2')], config)
    assert breaks_ok([_exam(a, 0, 0, 'R1'), _exam(b, 0, 2, 'R2')], config)
    assert breaks_ok([_exam(a, 0, 0, 'R1'), _exam(b, 1, 1, 'R2')], config)


def test_atomicity_exempts_fallback(make_section):
    a1, a2 = make_section('A', course='X'), make_section('A', course='Y')
    split = [_exam(a1, 0, 0, 'R1'), _exam(a2, 0, 3, 'R2')]
    assert not atomicity_ok(split)
    assert atomicity_ok([_exam(a1, 0, 0, 'R1', phase=4), _exam(a2, 0, 3, 'R2', phase=4)])
    assert split_subjects(split) == ['A']


def test_breaks_apply_between_sections_of_one_subject(make_section, config):
    a1, a2 = make_section('A'), make_section('A')
    assert breaks_ok([_exam(a1, 0, 0, 'R1', phase=4), _exam(a2, 0, 0, 'R2', phase=4)], config)
    assert not breaks_ok([_exam(a1, 0, 0, 'R1', phase=4), _exam(a2, 0, 1, 'R2', phase=4)], config)
