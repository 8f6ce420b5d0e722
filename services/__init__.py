"""
Business logic and services. Keeps the route modules as glue-only.
"""

from .form_processing import create_document
from .homework_progress import get_hw_progress
from .lessons import (
    ActionResult,
    get_all_lessons,
    get_all_lessons_progress,
    get_lesson_progress,
    get_lesson_detail,
    get_lesson_form_data,
    save_lesson,
    delete_lesson,
    toggle_lesson_watched,
    toggle_lesson_checked_in,
)

__all__ = [
    'create_document',
    'get_hw_progress',
    'ActionResult',
    'get_all_lessons',
    'get_all_lessons_progress',
    'get_lesson_progress',
    'get_lesson_detail',
    'get_lesson_form_data',
    'save_lesson',
    'delete_lesson',
    'toggle_lesson_watched',
    'toggle_lesson_checked_in',
]
