from examgrid.models import UnscheduledReason
from examgrid.scheduling.placement import try_schedule_group, try_schedule_section


def test_group_lands_in_distinct_rooms(make_section, make_ctx, state):
    group = [make_section('CS 101', course='BSCS'), make_section('CS 101', course='BSIT')]
    ctx = make_ctx(group, ['A-101', 'A-102'])
    assert try_schedule_group(group, 1, 2, state, ctx, phase=3)
    assert sorted(e.room for e in state.scheduled) == ['A-101', 'A-102']
    assert state.subject_scheduled == {'CS 101': {(1, 2)}}
    assert state.room_usage == {1: {2: {'A-101', 'A-102'}}}
    assert {(e.day_label, e.slot_label) for e in state.scheduled} == {('Day 2', '10:30-12:00')}


def test_group_is_all_or_nothing_on_rooms(make_section, make_ctx, state):
    group = [make_section('CS 101', course='BSCS'), make_section('CS 101', course='BSIT')]
    ctx = make_ctx(group, ['A-101', 'N-11'])
    assert not try_schedule_group(group, 0, 0, state, ctx, phase=3)
    assert state.scheduled == []
    assert state.room_usage == {}
    assert state.subject_scheduled == {}
    assert state.assignments == {}


def test_group_is_all_or_nothing_on_conflicts(make_section, make_ctx, state, config):
    math = make_section('MATH101', course='BSCS')
    group = [make_section('ENGL101', course='BSIT'), make_section('ENGL101', course='BSCS')]
    ctx = make_ctx([math] + group, ['A-101', 'A-102', 'A-103'])
    state.commit(math, 0, 0, 'A-101', 2, config)
    before = state.copy()
    assert not try_schedule_group(group, 0, 0, state, ctx, phase=3)
    assert state == before


def test_double_width_reserves_both_slots(make_section, make_ctx, state):
    group = [make_section('CS 600', width=2)]
    ctx = make_ctx(group, ['A-101'])
    assert try_schedule_group(group, 0, 3, state, ctx, phase=3)
    assert state.room_usage[0] == {3: {'A-101'}, 4: {'A-101'}}
    assert list(state.assignments) == [(0, 3, 'A-101')]


def test_mixed_width_group_shares_nothing(make_section, make_ctx, state):
    group = [make_section('CS 600', width=2, course='X'), make_section('CS 600', course='Y')]
    ctx = make_ctx(group, ['A-101', 'A-102'])
    assert try_schedule_group(group, 0, 0, state, ctx, phase=3)
    rooms = [e.room for e in state.scheduled]
    assert len(set(rooms)) == 2


def test_single_section_reasons(make_section, make_ctx, state, config):
    double = make_section('CS 600', width=2)
    single = make_section('CS 101', course='OTHER')
    ctx = make_ctx([double, single], ['A-101'])
    assert try_schedule_section(double, 0, config.last_slot, state, ctx, 4) is UnscheduledReason.END_OF_DAY
    assert try_schedule_section(single, 0, 0, state, ctx, 4) is None
    assert try_schedule_section(double, 0, 0, state, ctx, 4) is UnscheduledReason.NO_ROOM
    assert state.scheduled[0].phase == 4
    assert len(state.scheduled) == 1
