"""
Lesson orchestration: listing, detail pages, admin upsert/delete and
progress toggles. Views call these and decide how to present failures.
"""

import re
from datetime import datetime
from flask import current_app
from sqlalchemy.orm import selectinload
from extensions import db
from error_handler import LessonFormError, LessonNotFound, log_application_error
from models import Homework, Lesson, LessonClass, LessonProgress, User
from services.form_processing import create_document
from services.homework_progress import get_hw_progress

# Scalar lesson fields an admin form may set
LESSON_FIELDS = ['title', 'permalink', 'description', 'video', 'slides']


class ActionResult:
    """Outcome of an admin mutation, shown to the user as a flash message."""

    def __init__(self, success, message, lesson=None):
        self.success = success
        self.message = message
        self.lesson = lesson

    @property
    def category(self):
        return 'success' if self.success else 'danger'

    def __repr__(self):
        return f"ActionResult({self.success!r}, {self.message!r})"


def get_all_lessons():
    return Lesson.query.order_by(Lesson.id.asc()).all()


def get_all_lessons_progress(user_id, lessons):
    """Attach watched/checked_in to every lesson using one progress query for the user."""
    progress = {p.lesson_id: p for p in LessonProgress.query.filter_by(user_id=user_id).all()}
    for lesson in lessons:
        prog = progress.get(lesson.id)
        lesson.watched = bool(prog.watched) if prog else False
        lesson.checked_in = bool(prog.checked_in) if prog else False
    return lessons


def get_lesson_progress(user_id, lesson):
    prog = LessonProgress.query.filter_by(user_id=user_id, lesson_id=lesson.id).first()
    lesson.watched = prog.watched if prog else False
    lesson.checked_in = prog.checked_in if prog else False
    return lesson


def get_next_lesson(lesson_id):
    return Lesson.query.filter(Lesson.id > lesson_id).order_by(Lesson.id.asc()).first()


def get_previous_lesson(lesson_id):
    return Lesson.query.filter(Lesson.id < lesson_id).order_by(Lesson.id.desc()).first()


def _homework_for(column, class_numbers):
    return Homework.query.options(
        selectinload(Homework.items),
        selectinload(Homework.extras)
    ).filter(column.in_(class_numbers)).order_by(Homework.id.asc()).all()


def get_lesson_detail(permalink, user_id=None):
    """
    Everything the lesson page needs: the lesson, prev/next permalinks and
    the homework assigned in and due in its classes. With a user_id the
    lesson and homework carry that user's progress.
    """
    lesson = Lesson.query.filter_by(permalink=permalink).first()
    if lesson is None:
        raise LessonNotFound(f"No class with permalink '{permalink}'")

    next_lesson = get_next_lesson(lesson.id)
    prev_lesson = get_previous_lesson(lesson.id)

    class_numbers = lesson.class_numbers
    assigned = _homework_for(Homework.class_no, class_numbers)
    due = _homework_for(Homework.due_no, class_numbers)

    if user_id is not None:
        lesson = get_lesson_progress(user_id, lesson)
        if assigned:
            assigned = get_hw_progress(user_id, assigned)
        if due:
            due = get_hw_progress(user_id, due)

    return {
        'lesson': lesson,
        'next': next_lesson.permalink if next_lesson else None,
        'prev': prev_lesson.permalink if prev_lesson else None,
        'assigned': assigned,
        'due': due,
    }


def get_lesson_form_data(lesson_id):
    """Lesson values for the edit form, with class dates as YYYY-MM-DD strings."""
    lesson = db.session.get(Lesson, lesson_id)
    if lesson is None:
        raise LessonNotFound(f"No class with id {lesson_id}")
    data = {field: getattr(lesson, field) for field in LESSON_FIELDS}
    data['id'] = lesson.id
    data['classes'] = [
        {'number': c.number, 'date': c.date.strftime('%Y-%m-%d') if c.date else ''}
        for c in lesson.classes
    ]
    return data


def slugify(text):
    return re.sub(r'[^a-z0-9]+', '-', (text or '').lower()).strip('-')


def _parse_date(value):
    if not value:
        return None
    try:
        return datetime.strptime(str(value)[:10], '%Y-%m-%d').date()
    except ValueError:
        raise LessonFormError(f"Invalid class date '{value}'")


def _build_classes(raw_classes):
    if isinstance(raw_classes, dict):
        raw_classes = [raw_classes]
    if raw_classes is not None and not isinstance(raw_classes, list):
        raise LessonFormError(f"Invalid classes field '{raw_classes}'")
    classes = []
    for raw in raw_classes or []:
        if raw is not None and not isinstance(raw, dict):
            raise LessonFormError(f"Invalid class entry '{raw}'")
        if not raw or raw.get('number') is None:
            continue
        try:
            number = int(raw['number'])
        except (TypeError, ValueError):
            raise LessonFormError(f"Invalid class number '{raw['number']}'")
        classes.append(LessonClass(number=number, date=_parse_date(raw.get('date'))))
    return classes


def apply_lesson_document(lesson, document):
    for field in LESSON_FIELDS:
        if field in document:
            setattr(lesson, field, document[field])
    if not lesson.permalink:
        lesson.permalink = slugify(lesson.title) or None
    if not lesson.permalink:
        raise LessonFormError('A class needs a permalink or a title')
    if 'classes' in document:
        lesson.classes = _build_classes(document['classes'])
    return lesson


def save_lesson(form, lesson_id=None):
    """
    Create or update (upsert by id) a lesson from a submitted form.

    A newly created lesson becomes the current class of every user that has
    none yet.
    """
    editing = lesson_id is not None
    verb = 'updated' if editing else 'added'
    try:
        document = create_document(form)
        lesson = db.session.get(Lesson, lesson_id) if editing else None
        if lesson is None:
            lesson = Lesson(id=lesson_id)
            db.session.add(lesson)
        apply_lesson_document(lesson, document)
        db.session.flush()

        if not editing:
            assigned = User.query.filter(User.current_class_id.is_(None)).update(
                {User.current_class_id: lesson.id}, synchronize_session=False)
            current_app.logger.info(f"Class {lesson.id} is now the current class of {assigned} user(s)")

        db.session.commit()
        current_app.logger.info(f"Class {lesson.id} ({lesson.permalink}) {verb}")
        return ActionResult(True, f"Class {verb}", lesson)
    except Exception as e:
        db.session.rollback()
        log_application_error(e, context=f"saving class {lesson_id or '(new)'}")
        return ActionResult(False, f"Class not {verb}")


def delete_lesson(lesson_id):
    """
    Delete a lesson in one transaction: users pointing at it move to the next
    lesson by id (or to none) and its progress rows are removed.
    """
    try:
        next_lesson = get_next_lesson(lesson_id)
        next_id = next_lesson.id if next_lesson else None
        reassigned = User.query.filter_by(current_class_id=lesson_id).update(
            {User.current_class_id: next_id}, synchronize_session=False)
        LessonProgress.query.filter_by(lesson_id=lesson_id).delete(synchronize_session=False)
        lesson = db.session.get(Lesson, lesson_id)
        if lesson is not None:
            db.session.delete(lesson)
        db.session.commit()
        current_app.logger.info(
            f"Class {lesson_id} deleted; {reassigned} user(s) moved to class {next_id}")
        return ActionResult(True, 'Class deleted')
    except Exception as e:
        db.session.rollback()
        log_application_error(e, context=f"deleting class {lesson_id}")
        return ActionResult(False, 'Class not deleted')


def _require_lesson(lesson_id):
    if db.session.get(Lesson, lesson_id) is None:
        raise LessonNotFound(f"No class with id {lesson_id}")


def toggle_lesson_watched(lesson_id, user_id):
    _require_lesson(lesson_id)
    LessonProgress.toggle_watched(lesson_id, user_id)


def toggle_lesson_checked_in(lesson_id, user_id):
    _require_lesson(lesson_id)
    LessonProgress.toggle_checked_in(lesson_id, user_id)
