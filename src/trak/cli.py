"""Flask CLI commands for Trak."""

from __future__ import annotations

from pathlib import Path

import click
from flask import current_app

from .services import auth, export_csv


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("trak-export")
    @click.option("--user", "username", required=True, help="Username whose data to export")
    @click.option(
        "--out",
        "out_dir",
        type=click.Path(file_okay=False, path_type=Path),
        default=Path("exports"),
        show_default=True,
        help="Directory for the CSV files",
    )
    def trak_export(username: str, out_dir: Path) -> None:
        """Export a user's habits and journal entries to CSV."""

        ctx = current_app.extensions["trak"]
        user = auth.get_user_by_username(username, ctx.session_factory)
        if user is None:
            raise click.ClickException(f"No such user: {username}")

        habits = ctx.habit_repo.list_all(user_id=user.id)
        completions = ctx.habit_repo.list_completions(user_id=user.id)
        habits_path = export_csv.export_habits_csv(
            habits=habits, completions=completions, output_path=out_dir / "habits.csv"
        )
        journal_path = export_csv.export_journal_csv(
            entries=ctx.journal_repo.list_entries(user_id=user.id),
            output_path=out_dir / "journal.csv",
        )
        click.echo(f"Export written: {habits_path}")
        click.echo(f"Export written: {journal_path}")
