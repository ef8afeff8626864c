import itertools

import pytest

from examgrid.config import SchedulerConfig
from examgrid.graph_build import build_conflict_graph, build_conflict_matrix
from examgrid.models import ExamSection
from examgrid.scheduling.placement import RunContext
from examgrid.scheduling.state import SchedulingState


@pytest.fixture()
def config():
    return SchedulerConfig()


@pytest.fixture()
def make_section():
    counter = itertools.count(1)

    def _make(subject_id, course='BSCS', year='1', dept='SECAP', width=1, code=None):
        return ExamSection(
            subject_id=subject_id,
            code=code or f"S{next(counter):04d}",
            title=subject_id.title(),
            course=course,
            year_level=year,
            dept=dept,
            slot_width=width,
            student_count=30,
        )
    return _make


@pytest.fixture()
def make_ctx(config):
    def _make(sections, rooms, num_days=3, cfg=None):
        return RunContext(rooms=tuple(rooms), matrix=build_conflict_matrix(sections),
                          config=cfg or config, num_days=num_days)
    return _make


@pytest.fixture()
def state():
    return SchedulingState()


@pytest.fixture()
def graph_for():
    def _graph(sections):
        return build_conflict_graph(build_conflict_matrix(sections))
    return _graph
