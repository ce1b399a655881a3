"""Flask CLI commands for HabitGrid."""

from __future__ import annotations

import click


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("habitgrid-init-db")
    def habitgrid_init_db() -> None:
        """Create database tables if they do not exist."""

        from .extensions import get_engine
        from .infra.database import init_database

        init_database(get_engine())
        click.echo("Database initialized.")

    @app.cli.command("habitgrid-seed")
    @click.option("--demo", is_flag=True, default=False, help="Create demo habits with marks")
    @click.option("--force", is_flag=True, default=False, help="Seed even if habits exist")
    def habitgrid_seed(demo: bool, force: bool) -> None:
        """Seed application data (demo)."""

        if not demo:
            click.echo("No action specified. Use --demo to seed demo data.")
            return

        from .extensions import get_repository, today
        from .services.seed import seed_demo_habits

        created = seed_demo_habits(get_repository(), today=today(), force=force)
        click.echo(f"Demo seed created {created} habit(s).")
