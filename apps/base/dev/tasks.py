""" Development CLI tasks """
import click

from main import db

from . import dev_cli
from .fake import FakeDataGenerator


@dev_cli.command("createdb")
def create_db():
    """Create all database tables"""
    db.create_all()
    click.echo("Created tables")


@dev_cli.command("talk_data")
@click.option("--users", "user_count", default=5, help="Number of speakers to create")
@click.option("--talks", "talks_per_user", default=2, help="Talks per speaker")
def fake_data(user_count, talks_per_user):
    """Make fake speakers and talks"""
    fdg = FakeDataGenerator()
    fdg.run(user_count, talks_per_user)
