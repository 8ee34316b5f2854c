"""Example: use the service layer directly (no Flask).

Applies template 1 to two users for next week, then approves what was created.
"""

import importlib
from datetime import date, timedelta

from shift_attendance.config import get_settings_module
from shift_attendance.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, batch_max_workers=settings.BATCH_MAX_WORKERS)

    start = date.today() + timedelta(days=7 - date.today().weekday())
    outcome = container.batch_mutator.apply_template_to_range(
        template_id=1,
        user_ids=[1, 2],
        start_date=start,
        end_date=start + timedelta(days=6),
    )
    print(outcome.to_dict())

    if outcome.affected_ids:
        print(container.batch_mutator.approve(outcome.affected_ids, "weekly roster").to_dict())


if __name__ == "__main__":
    main()
