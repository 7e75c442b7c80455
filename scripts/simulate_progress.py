"""Simulate progress analytics over a small seeded training log (in-memory SQLite)."""

import datetime
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv

load_dotenv()

from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from training_analytics.core.logging import setup_logging
from training_analytics.models.training_log import Workout, WorkoutExercise, WorkoutSet
from training_analytics.services.analytics_service import ProgressAnalyticsService

USER_ID = "athlete-1"
TODAY = datetime.date(2025, 12, 31)

# ─── (days ago, mode, exercise, type, [set fields...]) ──────────────
RAW_DATA = [
    (85, "workout", "Bench Press", "exercise", [{"reps": 8, "weight": 60}, {"reps": 8, "weight": 60}]),
    (60, "workout", "Bench Press", "exercise", [{"reps": 6, "weight": 70}, {"reps": 6, "weight": 70}]),
    (60, "workout", "Back Squat", "exercise", [{"reps": 5, "weight": 100}]),
    (30, "workout", "Bench Pres", "exercise", [{"reps": 5, "weight": 80}, {"reps": 5, "weight": 80}]),
    (30, "workout", "Back Squat", "exercise", [{"reps": 5, "weight": 110}]),
    (10, "workout", "Pull-up", "exercise", [{"reps": 10}, {"reps": 8, "weight": 0}]),
    (5, "workout", "Bench Press", "exercise", [{"reps": 3, "weight": 90}]),
    (40, "basketball", "11ft Jump Shot", "shooting", [{"attempted": 20, "made": 11}]),
    (20, "basketball", "11ft Jump Shot", "shooting", [{"attempted": 20, "made": 14}]),
    (20, "basketball", "17ft Jump Shot", "shooting", [{"attempted": 20, "made": 8}]),
    (2, "basketball", "11ft Jump Shot", "shooting", [{"attempted": 25, "made": 19}, {"attempted": 0, "made": 0}]),
]


def seed(session: Session) -> None:
    for i, (days_ago, mode, name, exercise_type, sets) in enumerate(RAW_DATA):
        workout_id = f"w{i}"
        exercise_id = f"e{i}"
        session.add(Workout(id=workout_id, user_id=USER_ID, mode=mode,
                            performed_at=TODAY - datetime.timedelta(days=days_ago)))
        session.add(WorkoutExercise(id=exercise_id, workout_id=workout_id, name=name, exercise_type=exercise_type))
        for index, fields in enumerate(sets):
            session.add(WorkoutSet(id=f"{exercise_id}s{index}", workout_exercise_id=exercise_id, set_index=index,
                                   **fields))
    session.commit()


def main() -> None:
    setup_logging(level="WARNING", fmt="console")

    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    SQLModel.metadata.create_all(engine)

    with Session(engine) as session:
        seed(session)
        service = ProgressAnalyticsService.from_session(session)

        print("=" * 60)
        print("TREND — lifting / Performance / 'bench' / 90 days")
        print("=" * 60)
        trend = service.trend(USER_ID, "workout", "Performance", 90, exercise_query="bench", today=TODAY)
        for point in trend.points:
            value = f"{point.value:>8.1f}" if point.value is not None else f"{'--':>8}"
            print(f"  {point.start_date} .. {point.end_date}  {value}")
        print(f"  axis: {trend.min_value} .. {trend.max_value}")

        print()
        print("=" * 60)
        print("SKILL MAP — lifting / Tonnage / 90 days")
        print("=" * 60)
        skill_map = service.compare(USER_ID, "lifting", "Tonnage", ["Bench Press", "Back Squat", "Deadlift"], 90,
                                    today=TODAY)
        for entry in skill_map.entries:
            marker = "*" if entry.is_highest else " "
            print(f" {marker}{entry.exercise_name:<20} {entry.raw_value:>9.1f} {entry.percentage:>7.2f}%")

        print()
        print("=" * 60)
        print("PERSONAL RECORDS")
        print("=" * 60)
        for sport, name in (("lifting", "Bench Press"), ("basketball", "11ft Jump Shot")):
            record = service.best_ever(USER_ID, name, sport)
            if record is None:
                print(f"  {name}: no records")
                continue
            print(f"  {record.exercise_name} ({record.exercise_type.value}), last PR {record.date_achieved}")
            for metric, best in record.records.items():
                print(f"    {metric.value:<22} {best.value:>8.2f}  on {best.achieved_on}")

        print()
        print("=" * 60)
        print("MOST LOGGED — lifting / 90 days")
        print("=" * 60)
        for summary in service.most_logged(USER_ID, "lifting", 90, today=TODAY):
            print(f"  {summary.exercise_name:<20} x{summary.count}  last {summary.last_logged}")


if __name__ == "__main__":
    main()
