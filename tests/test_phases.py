from examgrid.scheduling.phases import (
    day_order, group_by_subject, schedule_gen_eds, schedule_high_priority, schedule_individually,
    schedule_majors,
)


def test_group_by_subject_keeps_first_seen_order(make_section):
    a1, b1, a2 = make_section('A'), make_section('B'), make_section('A')
    assert list(group_by_subject([a1, b1, a2]).items()) == [('A', [a1, a2]), ('B', [b1])]


def test_day_order_penalizes_light_day(make_section, make_ctx):
    ctx = make_ctx([], ['A-101'], num_days=3)
    assert day_order([0, 0, 0], ctx, 50) == [0, 1, 2]
    assert day_order([60, 10, 0], ctx, 50) == [1, 2, 0]
    assert day_order([5, 5, 0], ctx, 0) == [2, 0, 1]


def test_phases_leave_their_input_state_alone(make_section, make_ctx, state):
    sections = [make_section('ENGL 101'), make_section('CS 101', course='X'),
                make_section('MATH 1', dept='SACE', course='Y')]
    ctx = make_ctx(sections, ['A-101', 'N-11'], num_days=2)
    p1 = schedule_gen_eds(sections[:1], state, ctx)
    p2 = schedule_high_priority(sections[2:], [], p1.state, ctx)
    p3 = schedule_majors(sections[1:2], p2.state, ctx)
    assert state.scheduled == []
    assert len(p1.state.scheduled) == 1
    assert len(p2.state.scheduled) == 2
    assert len(p3.state.scheduled) == 3
    assert (p1.placed, p2.placed, p3.placed) == (1, 1, 1)


def test_gen_ed_without_blocks_is_deferred(make_section, make_ctx, state):
    icte = [make_section('ICTE 101'), make_section('PDEV 101')]
    result = schedule_gen_eds(icte, state, make_ctx(icte, ['A-101']))
    assert result.failed == icte
    assert result.state.scheduled == []


def test_high_priority_scans_day_major(make_section, make_ctx, state, config):
    blocker = make_section('CS 1', course='BSCS', dept='SACE')
    math = make_section('MATH 101', course='BSCS', dept='SACE')
    ctx = make_ctx([blocker, math], ['N-11'], num_days=2)
    state.commit(blocker, 0, 0, 'N-11', 3, config)
    result = schedule_high_priority([math], [], state, ctx)
    exam = result.state.scheduled[-1]
    assert (exam.day, exam.slot) == (0, 2)


def test_fallback_reports_reasons(make_section, make_ctx, state):
    double = make_section('CS 600', width=2)
    ctx = make_ctx([double], ['N-11'], num_days=1)
    result = schedule_individually([double], state, ctx)
    assert result.failed == [double]
    assert result.reasons[double.code].value == 'no_room'
