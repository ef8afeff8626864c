import argparse
import logging

from examgrid.config import SchedulerConfig, default_rooms
from examgrid.io_utils import load_config, load_rooms, load_sections, save_schedule_csv
from examgrid.scheduling.evaluation import summary
from examgrid.scheduling.scheduler import run_scheduler


def main(argv=None):
    p = argparse.ArgumentParser(description="ExamGrid – multi-phase exam timetable builder")
    p.add_argument('--sections', type=str, required=True, help='CSV of exam sections')
    p.add_argument('--rooms', type=str, help='room list (CSV with id column or one per line); '
                                              'defaults to the reference campus rooms')
    p.add_argument('--days', type=int, default=3, help='number of exam days')
    p.add_argument('--config', type=str, help='JSON file overriding scheduler tables')
    p.add_argument('--out', type=str, default='exam_schedule.csv')
    p.add_argument('--verbose', '-v', action='count', default=0)
    args = p.parse_args(argv)

    level = logging.WARNING - 10 * min(args.verbose, 2)
    logging.basicConfig(level=level, format='%(levelname)s %(name)s: %(message)s')

    try:
        config = load_config(args.config) if args.config else SchedulerConfig()
        sections = load_sections(args.sections)
        rooms = load_rooms(args.rooms) if args.rooms else default_rooms()
        result = run_scheduler(sections, rooms, args.days, config)
    except (OSError, KeyError, ValueError) as exc:
        raise SystemExit(f"error: {exc}")

    print(summary(result, config, args.days))

    save_schedule_csv(args.out, result.scheduled)
    print(f"Saved: {args.out}")
    for u in result.unplaced:
        s = u.section
        print(f"  unplaced: {s.subject_id} ({s.code}) {s.course} year {s.year_level} – {u.reason.value}")


if __name__ == '__main__':
    main()
