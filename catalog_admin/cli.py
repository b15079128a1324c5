# catalog_admin/cli.py
import os

import click
from flask.cli import with_appcontext

from catalog_admin.extensions import db


@click.command("create-admin")
@click.option("--username", default=lambda: os.environ.get("ADMIN_USERNAME", "admin"),
              show_default=True, help="Admin username")
@click.option("--email", default=lambda: os.environ.get("ADMIN_EMAIL", "admin@example.com"),
              show_default=True, help="Admin e-mail")
@click.option("--password", default=lambda: os.environ.get("ADMIN_PASSWORD"),
              help="Password (prompted when omitted)")
@click.option("--force", is_flag=True, default=False,
              help="Reset password and admin flag of an existing user")
@with_appcontext
def create_admin(username: str, email: str, password: str | None, force: bool):
    """Create or reset an admin account."""
    from catalog_admin.models.user import User

    db.create_all()  # empty database

    if not password:
        password = click.prompt("Password", hide_input=True, confirmation_prompt=True)

    user = User.query.filter_by(username=username).first()
    if user and not force:
        click.echo(f"User '{username}' already exists. Use --force to reset the password.")
        return

    if not user:
        user = User(username=username, email=email)
        db.session.add(user)

    user.is_admin = True
    user.set_password(password)
    db.session.commit()
    click.echo(f"Admin ready: {username}")
