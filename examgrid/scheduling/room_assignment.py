import re
from typing import Collection, List, Sequence

from ..config import SchedulerConfig
from ..eligibility import is_arch
from ..models import ExamSection
from .state import SchedulingState

_BUILDING = re.compile(r'^([A-Z]+)-')
_FLOOR = re.compile(r'-([0-9])([0-9])')


def building_of(room: str) -> str:
    m = _BUILDING.match(room)
    return m.group(1) if m else ''


def floor_of(room: str) -> int:
    """First digit of the room number ("N-21" -> 2); 0 when it can't be read."""
    m = _FLOOR.search(room)
    return int(m.group(1)) if m else 0


def allowed_buildings(section: ExamSection, config: SchedulerConfig) -> List[str]:
    if is_arch(section.subject_id, config):
        return list(config.arch_buildings)
    dept = section.dept.upper()
    for marker, buildings in config.department_buildings:
        if marker in dept:
            return list(buildings)
    return list(config.all_buildings)


def available_rooms(section: ExamSection, day: int, slot: int, rooms: Sequence[str],
                    state: SchedulingState, config: SchedulerConfig,
                    reserved: Collection[str] = ()) -> List[str]:
    """Free rooms the section may sit in at (day, slot), best first.

    ``reserved`` holds rooms already promised to other sections of the
    same tentative group placement.
    """
    double = section.slot_width > 1
    if double and slot >= config.last_slot:
        return []
    buildings = set(allowed_buildings(section, config))
    taken = state.occupied(day, slot)
    taken_next = state.occupied(day, slot + 1) if double else set()
    free = [r for r in rooms
            if building_of(r) in buildings
            and r not in taken and r not in taken_next and r not in reserved]

    arch = is_arch(section.subject_id, config)

    def rank(room):
        first = 0 if (arch and building_of(room) == config.arch_preferred_building) else 1
        return (first, floor_of(room), room)

    return sorted(free, key=rank)
