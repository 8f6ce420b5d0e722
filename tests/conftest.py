import os
import sys
from datetime import date

import pytest
from flask import template_rendered
from werkzeug.security import generate_password_hash

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app import create_app
from config import TestingConfig
from extensions import db
from models import (Homework, HomeworkItem, HomeworkProgress, Lesson, LessonClass,
                    LessonProgress, User)


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    def _make_user(username, role='Student', current_class_id=None, password='password123'):
        with app.app_context():
            user = User(username=username,
                        password_hash=generate_password_hash(password),
                        role=role,
                        current_class_id=current_class_id)
            db.session.add(user)
            db.session.commit()
            return user.id
    return _make_user


@pytest.fixture
def make_lesson(app):
    def _make_lesson(permalink, classes=(), lesson_id=None, title=None):
        with app.app_context():
            lesson = Lesson(id=lesson_id, permalink=permalink, title=title or permalink.title())
            lesson.classes = [LessonClass(number=n, date=d) for n, d in classes]
            db.session.add(lesson)
            db.session.commit()
            return lesson.id
    return _make_lesson


@pytest.fixture
def make_progress(app):
    def _make_progress(user_id, lesson_id, watched=False, checked_in=False):
        with app.app_context():
            db.session.add(LessonProgress(user_id=user_id, lesson_id=lesson_id,
                                          watched=watched, checked_in=checked_in))
            db.session.commit()
    return _make_progress


@pytest.fixture
def make_homework(app):
    def _make_homework(name, class_no=None, due_no=None, items=(), extras=()):
        with app.app_context():
            hw = Homework(name=name, class_no=class_no, due_no=due_no)
            hw.all_items = (
                [HomeworkItem(text=t, position=i) for i, t in enumerate(items)] +
                [HomeworkItem(text=t, position=i, extra=True) for i, t in enumerate(extras)]
            )
            db.session.add(hw)
            db.session.commit()
            return hw.id, [item.id for item in hw.all_items]
    return _make_homework


@pytest.fixture
def complete_item(app):
    def _complete_item(user_id, item_id):
        with app.app_context():
            db.session.add(HomeworkProgress(user_id=user_id, item_id=item_id, completed=True))
            db.session.commit()
    return _complete_item


@pytest.fixture
def login(client):
    def _login(user_id):
        with client.session_transaction() as sess:
            sess['_user_id'] = str(user_id)
            sess['_fresh'] = True
    return _login


@pytest.fixture
def captured_templates(app):
    recorded = []

    def record(sender, template, context, **extra):
        recorded.append((template, context))

    template_rendered.connect(record, app)
    yield recorded
    template_rendered.disconnect(record, app)


@pytest.fixture
def three_lessons(make_lesson):
    """Lessons 1..3 with one class each, numbered like their ids."""
    return [
        make_lesson('intro', classes=[(1, date(2024, 1, 8))], lesson_id=1),
        make_lesson('loops', classes=[(2, date(2024, 1, 15))], lesson_id=2),
        make_lesson('functions', classes=[(3, date(2024, 1, 22))], lesson_id=3),
    ]


@pytest.fixture
def get_flashes(client):
    def _get_flashes():
        with client.session_transaction() as sess:
            return sess.get('_flashes', [])
    return _get_flashes
