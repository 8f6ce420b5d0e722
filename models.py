from flask_login import UserMixin
from datetime import datetime
from sqlalchemy import not_
from sqlalchemy.exc import IntegrityError
from extensions import db

ADMIN_ROLES = ['Admin']


class User(db.Model, UserMixin):
    """
    User model for authentication and roles. Every user also carries a pointer
    to the lesson they are currently assigned to.
    """
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(100), unique=True, nullable=False)
    password_hash = db.Column(db.String(256), nullable=False)
    role = db.Column(db.String(50), nullable=False, default='Student')  # 'Student' or 'Admin'
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    # Null until a lesson exists; reassigned when the lesson is deleted.
    current_class_id = db.Column(db.Integer, db.ForeignKey('lesson.id'), nullable=True)
    current_class = db.relationship('Lesson', foreign_keys=[current_class_id], lazy=True)

    @property
    def is_admin(self):
        return self.role in ADMIN_ROLES

    def __repr__(self):
        return f"User('{self.username}', '{self.role}')"


class Lesson(db.Model):
    """
    A lesson ("class" in the UI). The integer primary key orders lessons and
    drives previous/next navigation; the permalink is the public URL key.
    """
    id = db.Column(db.Integer, primary_key=True)
    permalink = db.Column(db.String(200), unique=True, nullable=False, index=True)
    title = db.Column(db.String(200), nullable=True)
    description = db.Column(db.Text, nullable=True)
    video = db.Column(db.String(500), nullable=True)
    slides = db.Column(db.String(500), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    classes = db.relationship('LessonClass', backref='lesson', lazy=True,
                              cascade='all, delete-orphan',
                              order_by='LessonClass.number')

    @property
    def class_numbers(self):
        return [c.number for c in self.classes]

    def __repr__(self):
        return f"Lesson('{self.permalink}')"


class LessonClass(db.Model):
    """One scheduled session of a lesson."""
    __tablename__ = 'lesson_class'
    id = db.Column(db.Integer, primary_key=True)
    lesson_id = db.Column(db.Integer, db.ForeignKey('lesson.id'), nullable=False)
    number = db.Column(db.Integer, nullable=False)
    date = db.Column(db.Date, nullable=True)


class LessonProgress(db.Model):
    """
    Watched / checked-in status of one user for one lesson. Rows are created
    lazily by the first toggle; a missing row means both flags are False.
    """
    __tablename__ = 'lesson_progress'
    __table_args__ = (
        db.UniqueConstraint('user_id', 'lesson_id', name='uq_lesson_progress_user_lesson'),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False, index=True)
    lesson_id = db.Column(db.Integer, db.ForeignKey('lesson.id'), nullable=False, index=True)
    watched = db.Column(db.Boolean, default=False, nullable=False)
    checked_in = db.Column(db.Boolean, default=False, nullable=False)

    @classmethod
    def _flip(cls, lesson_id, user_id, field):
        column = getattr(cls, field)
        return cls.query.filter_by(user_id=user_id, lesson_id=lesson_id).update(
            {column: not_(column)}, synchronize_session=False)

    @classmethod
    def _toggle(cls, lesson_id, user_id, field):
        """Flip ``field`` on the (user, lesson) row, inserting it set to True when missing."""
        if not cls._flip(lesson_id, user_id, field):
            db.session.add(cls(user_id=user_id, lesson_id=lesson_id, **{field: True}))
        try:
            db.session.commit()
        except IntegrityError:
            # Another request inserted the row first; flip that one instead.
            db.session.rollback()
            cls._flip(lesson_id, user_id, field)
            db.session.commit()

    @classmethod
    def toggle_watched(cls, lesson_id, user_id):
        cls._toggle(lesson_id, user_id, 'watched')

    @classmethod
    def toggle_checked_in(cls, lesson_id, user_id):
        cls._toggle(lesson_id, user_id, 'checked_in')


class Homework(db.Model):
    """
    Homework is tied to lessons through class numbers: ``class_no`` is the
    class it is assigned in and ``due_no`` the class it is due in.
    """
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    class_no = db.Column(db.Integer, nullable=True, index=True)
    due_no = db.Column(db.Integer, nullable=True, index=True)

    all_items = db.relationship('HomeworkItem', backref='homework', lazy=True,
                                cascade='all, delete-orphan')
    items = db.relationship('HomeworkItem', viewonly=True, lazy=True,
                            primaryjoin='and_(Homework.id == HomeworkItem.homework_id, '
                                        'HomeworkItem.extra.is_(False))',
                            order_by='HomeworkItem.position')
    extras = db.relationship('HomeworkItem', viewonly=True, lazy=True,
                             primaryjoin='and_(Homework.id == HomeworkItem.homework_id, '
                                         'HomeworkItem.extra.is_(True))',
                             order_by='HomeworkItem.position')


class HomeworkItem(db.Model):
    __tablename__ = 'homework_item'
    id = db.Column(db.Integer, primary_key=True)
    homework_id = db.Column(db.Integer, db.ForeignKey('homework.id'), nullable=False)
    text = db.Column(db.Text, nullable=False)
    link = db.Column(db.String(500), nullable=True)
    extra = db.Column(db.Boolean, default=False, nullable=False)
    position = db.Column(db.Integer, default=0, nullable=False)


class HomeworkProgress(db.Model):
    __tablename__ = 'homework_progress'
    __table_args__ = (
        db.UniqueConstraint('user_id', 'item_id', name='uq_homework_progress_user_item'),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False, index=True)
    item_id = db.Column(db.Integer, db.ForeignKey('homework_item.id'), nullable=False)
    completed = db.Column(db.Boolean, default=False, nullable=False)
