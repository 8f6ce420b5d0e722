"""
Flask CLI commands for setting up the database and managing users.

Usage:
    flask init-db
    flask create-user <username> <password> [--role Admin]
"""

import click
from flask.cli import with_appcontext
from werkzeug.security import generate_password_hash
from extensions import db
from models import ADMIN_ROLES, Lesson, User

ROLES = ADMIN_ROLES + ['Student']


@click.command('init-db')
@with_appcontext
def init_db_command():
    """Create all database tables."""
    db.create_all()
    click.echo('Database tables created successfully')


@click.command('create-user')
@with_appcontext
@click.argument('username')
@click.argument('password')
@click.option('--role', type=click.Choice(ROLES), default='Student', show_default=True)
def create_user_command(username, password, role):
    """Create a user whose current class is the first lesson, if any."""
    if User.query.filter_by(username=username).first():
        raise click.ClickException(f"User '{username}' already exists")

    first_lesson = Lesson.query.order_by(Lesson.id.asc()).first()
    user = User(
        username=username,
        password_hash=generate_password_hash(password),
        role=role,
        current_class_id=first_lesson.id if first_lesson else None,
    )
    db.session.add(user)
    db.session.commit()
    click.echo(f"Created {role} '{username}'")


def register_commands(app):
    app.cli.add_command(init_db_command)
    app.cli.add_command(create_user_command)
