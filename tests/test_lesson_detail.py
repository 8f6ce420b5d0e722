"""Tests for the single lesson page: navigation, homework and progress."""

from datetime import date

import pytest

from error_handler import LessonNotFound
from services.lessons import get_lesson_detail


@pytest.mark.parametrize('permalink, expected_prev, expected_next', [
    ('intro', None, 'loops'),
    ('loops', 'intro', 'functions'),
    ('functions', 'loops', None),
])
def test_prev_next_follow_id_order(client, three_lessons, captured_templates,
                                   permalink, expected_prev, expected_next):
    response = client.get(f'/class/{permalink}')

    assert response.status_code == 200
    template, context = captured_templates[-1]
    assert template.name == 'lesson/lesson.html'
    assert context['prev'] == expected_prev
    assert context['next'] == expected_next


def test_navigation_ignores_permalink_order(app, make_lesson):
    make_lesson('zebra', lesson_id=1)
    make_lesson('apple', lesson_id=5)
    make_lesson('mango', lesson_id=9)

    with app.app_context():
        detail = get_lesson_detail('apple')
        assert detail['prev'] == 'zebra'
        assert detail['next'] == 'mango'


def test_single_lesson_has_no_neighbours(app, make_lesson):
    make_lesson('only', lesson_id=4)

    with app.app_context():
        detail = get_lesson_detail('only')
        assert detail['prev'] is None
        assert detail['next'] is None


def test_unknown_permalink_redirects_to_classes(client, three_lessons):
    response = client.get('/class/does-not-exist')

    assert response.status_code == 302
    assert response.headers['Location'] == '/classes'


def test_unknown_permalink_raises_not_found(app):
    with app.app_context():
        with pytest.raises(LessonNotFound) as excinfo:
            get_lesson_detail('missing')
        assert excinfo.value.status_code == 404


def test_assigned_and_due_homework(client, make_lesson, make_homework, captured_templates):
    make_lesson('week-two', classes=[(3, date(2024, 2, 5)), (4, date(2024, 2, 7))], lesson_id=2)
    make_homework('Reading', class_no=3, due_no=5, items=['chapter 1'])
    make_homework('Exercises', class_no=1, due_no=4, items=['ex 1', 'ex 2'], extras=['bonus'])
    make_homework('Project', class_no=4, due_no=8)
    make_homework('Unrelated', class_no=10, due_no=11)

    response = client.get('/class/week-two')

    assert response.status_code == 200
    _, context = captured_templates[-1]
    assert [hw.name for hw in context['assigned']] == ['Reading', 'Project']
    assert [hw.name for hw in context['due']] == ['Exercises']
    assert b'bonus' in response.data


def test_anonymous_detail_has_no_progress(client, three_lessons, captured_templates):
    client.get('/class/intro')

    _, context = captured_templates[-1]
    assert not hasattr(context['lesson'], 'watched')


def test_logged_in_detail_defaults_progress_to_false(client, three_lessons, make_user, login,
                                                     captured_templates):
    login(make_user('ada'))

    client.get('/class/loops')

    _, context = captured_templates[-1]
    assert context['lesson'].watched is False
    assert context['lesson'].checked_in is False


def test_logged_in_detail_shows_progress(client, three_lessons, make_user, make_progress, login,
                                         captured_templates):
    user_id = make_user('ada')
    make_progress(user_id, three_lessons[1], watched=False, checked_in=True)
    login(user_id)

    client.get('/class/loops')

    _, context = captured_templates[-1]
    assert context['lesson'].watched is False
    assert context['lesson'].checked_in is True


def test_logged_in_detail_decorates_homework(client, make_lesson, make_homework, make_user, login,
                                             complete_item, captured_templates):
    make_lesson('intro', classes=[(1, None)], lesson_id=1)
    _, item_ids = make_homework('Setup', class_no=1, items=['install', 'configure'])
    user_id = make_user('ada')
    complete_item(user_id, item_ids[0])
    login(user_id)

    client.get('/class/intro')

    _, context = captured_templates[-1]
    setup = context['assigned'][0]
    assert setup.completed_count == 1
    assert setup.total == 2
    assert setup.complete is False
    assert context['due'] == []
