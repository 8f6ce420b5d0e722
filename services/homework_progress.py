"""
Per-user homework completion, attached to Homework rows at read time.
"""

from models import HomeworkProgress


def get_hw_progress(user_id, homework_list):
    """
    Mark each item and extra of every homework with the user's completion.

    Sets ``completed`` on every item, and ``completed_count``, ``total`` and
    ``complete`` on every homework. Extras do not count towards ``complete``.
    """
    item_ids = [item.id for hw in homework_list for item in list(hw.items) + list(hw.extras)]
    done = set()
    if item_ids:
        rows = HomeworkProgress.query.filter(
            HomeworkProgress.user_id == user_id,
            HomeworkProgress.item_id.in_(item_ids),
            HomeworkProgress.completed.is_(True)
        ).all()
        done = {row.item_id for row in rows}

    for hw in homework_list:
        for item in list(hw.items) + list(hw.extras):
            item.completed = item.id in done
        hw.total = len(hw.items)
        hw.completed_count = sum(1 for item in hw.items if item.completed)
        hw.complete = hw.total > 0 and hw.completed_count == hw.total
    return homework_list
