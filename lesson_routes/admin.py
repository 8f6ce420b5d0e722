"""
Admin-only lesson management: add/edit form, save and delete.
"""

from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for
from decorators import admin_required, redirect_to
from error_handler import LessonNotFound, log_application_error
from services.lessons import delete_lesson as delete_lesson_record
from services.lessons import get_lesson_form_data, save_lesson

bp = Blueprint('admin', __name__)


@bp.route('/class/add', methods=['GET'])
@bp.route('/class/edit/<int:lesson_id>', methods=['GET'])
@admin_required
def add_edit_lesson_form(lesson_id=None):
    edit = lesson_id is not None
    lesson = None
    if edit:
        try:
            lesson = get_lesson_form_data(lesson_id)
        except LessonNotFound as e:
            log_application_error(e)
            return redirect_to('classes')
    return render_template('lesson/add_lesson.html', edit=edit, lesson=lesson)


@bp.route('/class/add', methods=['POST'])
@bp.route('/class/edit/<int:lesson_id>', methods=['POST'])
@admin_required
def add_edit_lesson(lesson_id=None):
    result = save_lesson(request.form, lesson_id=lesson_id)
    flash(result.message, result.category)
    if lesson_id is not None:
        return redirect(url_for('lesson.admin.add_edit_lesson_form', lesson_id=lesson_id))
    return redirect_to('add_class')


@bp.route('/class/delete/<int:lesson_id>', methods=['POST'])
@admin_required
def delete_lesson(lesson_id):
    result = delete_lesson_record(lesson_id)
    if not result.success:
        current_app.logger.warning(f"Class {lesson_id}: {result.message}")
    return redirect_to('classes')
