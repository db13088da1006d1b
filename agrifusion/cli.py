# agrifusion/cli.py
import uuid

import click
from flask.cli import with_appcontext
from flask_jwt_extended import create_access_token

from .extensions import db
from .model import Consultant, Profile, ProfileRole, ProfileStatus


@click.command("create-profile")
@click.option("--email", required=True)
@click.option("--name", required=True)
@click.option("--role", type=click.Choice([r.value for r in ProfileRole]), required=True)
@click.option("--status", type=click.Choice([s.value for s in ProfileStatus]),
              default=ProfileStatus.PENDING.value, show_default=True)
@click.option("--auth-user-id", default=None, help="JWT subject; generated when omitted")
@with_appcontext
def create_profile(email, name, role, status, auth_user_id):
    """Create a profile (plus consultant record) and print an access token."""
    email = email.strip().lower()
    if Profile.query.filter_by(email=email).first():
        click.echo("Email already exists"); return
    p = Profile(
        auth_user_id=auth_user_id or str(uuid.uuid4()),
        email=email, full_name=name, role=role, status=status,
    )
    db.session.add(p)
    db.session.flush()
    if role == ProfileRole.CONSULTANT.value:
        db.session.add(Consultant(profile_id=p.id))
    db.session.commit()
    click.echo(f"Profile created: {p.id} {p.email} ({p.role}/{p.status})")
    click.echo(create_access_token(identity=p.auth_user_id))


@click.command("issue-token")
@click.option("--email", required=True)
@with_appcontext
def issue_token(email):
    """Print an access token for an existing profile."""
    p = Profile.query.filter_by(email=email.strip().lower()).first()
    if not p:
        raise click.ClickException("Profile not found")
    click.echo(create_access_token(identity=p.auth_user_id))


def register_cli(app):
    app.cli.add_command(create_profile)
    app.cli.add_command(issue_token)
