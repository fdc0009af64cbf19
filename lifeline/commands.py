import click

from lifeline import db
from lifeline.seed import seed_data


def register_commands(app):
    @app.cli.command('seed')
    def seed_command():
        """Load the demonstration donors and blood requests."""
        if seed_data(db.session):
            click.echo('Seed data loaded.')
        else:
            click.echo('Registry already has donors, nothing to do.')
