# Overview: Flask CLI command groups for bootstrap and inspection.

# backend/backoffice/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to backoffice (PowerShell: $env:FLASK_APP="backoffice").
# - Use: python -m flask <group> <command> [options]
#
# System bootstrap:
# - python -m flask system init-db
#   Create all tables that do not exist yet (use `flask db upgrade` in production).
# - python -m flask system reset-db --yes
#   DEV/TEST only: drop and recreate all tables (deletes all data).
# - python -m flask system issue-token ann@example.com
#   Print a session token for an existing user (local API testing).
#
# User inspection/bootstrap:
# - python -m flask users list
#   List all users.
# - python -m flask users create --name "Ann" --email ann@example.com --password "secret1"
#   Create a user (prompts if options are omitted).

import click
from flask import current_app
from flask.cli import with_appcontext

from .errors import DuplicateEmailError, StorageUnavailableError
from .extensions import db
from .services import user_service
from .services.token_service import get_token_issuer
from .time_utils import to_utc_z
from .validation import ValidationError, validate_create_user


@click.group('system')
def system_group():
    """System bootstrap commands."""


@system_group.command('init-db')
@with_appcontext
def init_db():
    """Create missing tables from the model metadata."""
    db.create_all()
    click.echo("PASS Database schema created")


@system_group.command('reset-db')
@click.option('--yes', is_flag=True, help='Skip confirmation')
@with_appcontext
def reset_db(yes):
    """
    DANGER: Drop all tables and recreate schema.

    This will DELETE ALL DATA!
    """
    if not yes:
        click.confirm("WARN This will DELETE ALL DATA. Are you sure?", abort=True)

    click.echo("DELETE  Dropping all tables...")
    db.drop_all()
    db.create_all()
    click.echo("PASS Database reset complete")


@system_group.command('issue-token')
@click.argument('email')
@with_appcontext
def issue_token(email):
    """Print a session token for the user with EMAIL."""
    user = user_service.find_by_email(email)
    if not user:
        click.echo(f"FAIL No user with email {email}")
        raise SystemExit(1)

    issued = get_token_issuer().issue(user.id, user.email, user.name)
    click.echo(issued.token)
    click.echo(f"Expires: {to_utc_z(issued.expires_at)}", err=True)


@click.group('users')
def users_group():
    """User account commands."""


@users_group.command('create')
@click.option('--name', prompt=True, help='Display name')
@click.option('--email', prompt=True, help='Email address')
@click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True, help='Password')
@with_appcontext
def create_user_cli(name, email, password):
    """
    Create a new user.

    Same rules as the API: valid email, password 6 to 255 characters, email
    unique regardless of case.
    """
    try:
        data = validate_create_user({"name": name, "email": email, "password": password})
        user = user_service.create_user(
            name=data["name"],
            email=data["email"],
            password=data["password"],
            rounds=current_app.config["BCRYPT_ROUNDS"],
        )
    except ValidationError as e:
        for error in e.errors:
            click.echo(f"FAIL {error['property']}: {error['message']}")
        raise SystemExit(1)
    except (DuplicateEmailError, StorageUnavailableError) as e:
        click.echo(f"FAIL Failed to create user: {e.message}")
        raise SystemExit(1)

    click.echo(f"PASS Created user: {user.name} ({user.email}) id={user.id}")
    click.echo("SECURITY Password securely hashed with bcrypt")


@users_group.command('list')
@with_appcontext
def list_users():
    """List all users, oldest first."""
    users = user_service.list_users()

    if not users:
        click.echo("No users found.")
        return

    click.echo("\n" + "="*100)
    click.echo(f"{'ID':<38} {'Name':<20} {'Email':<30} {'Created'}")
    click.echo("="*100)

    for user in users:
        click.echo(f"{str(user.id):<38} {user.name:<20} {user.email:<30} {to_utc_z(user.created_at)}")

    click.echo("="*100)
    click.echo(f"Total: {len(users)} users\n")


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(system_group)
    app.cli.add_command(users_group)
