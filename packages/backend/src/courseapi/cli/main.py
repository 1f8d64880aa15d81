"""courseapi CLI: run the server and manage the database.

Usage:
    courseapi serve --port 5000                  # Run the API with uvicorn
    courseapi init-db                            # Create tables
    courseapi create-user --email a@b.io ...     # Sign up a user from the shell
    courseapi courses                            # List courses and owners
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import sys
from typing import Optional

import click

from courseapi import __version__
from courseapi.config import settings
from courseapi.db import engine as db_engine
from courseapi.errors import ValidationError
from courseapi.schemas.user import UserCreate

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run(coro):
    """Run an async coroutine from synchronous Click handler.

    Handles nested event loops (e.g. when invoked via Click CliRunner
    inside an existing async context like tests) by offloading to a thread.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    else:
        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
            return pool.submit(asyncio.run, coro).result()


def _print_table(rows: list[dict], columns: list[tuple[str, str, int]]):
    """Print a simple ASCII table.

    columns: list of (header, dict_key, width)
    """
    header = "  ".join(h.ljust(w) for h, _, w in columns)
    click.secho(header, bold=True)
    click.echo("-" * len(header))
    for row in rows:
        line = "  ".join(str(row.get(k) or "—")[:w].ljust(w) for _, k, w in columns)
        click.echo(line)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="courseapi")
def main():
    """Course catalog API server and admin commands."""


@main.command()
@click.option("--host", default=None, help="Bind address (default: COURSEAPI_HOST)")
@click.option("--port", default=None, type=int, help="Port (default: COURSEAPI_PORT)")
@click.option("--reload", is_flag=True, help="Auto-reload on code changes")
def serve(host: Optional[str], port: Optional[int], reload: bool):
    """Run the API server."""
    import uvicorn

    uvicorn.run(
        "courseapi.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_config=None,
    )


@main.command("init-db")
def init_db():
    """Create database tables that don't exist yet."""
    _run(db_engine.init_models(db_engine.engine))
    click.secho("Tables ready.", fg="green")


@main.command("create-user")
@click.option("--first-name", required=True)
@click.option("--last-name", required=True)
@click.option("--email", "email_address", required=True)
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
def create_user(first_name: str, last_name: str, email_address: str, password: str):
    """Sign up a user, with the same checks as POST /api/users."""
    payload = UserCreate(
        first_name=first_name,
        last_name=last_name,
        email_address=email_address,
        password=password,
    ).model_dump(by_alias=True)
    try:
        user = _run(_create_user_impl(payload))
    except ValidationError as e:
        for message in e.errors:
            click.secho(f"Error: {message}", fg="red", err=True)
        sys.exit(1)

    click.secho(f"Created user #{user.id} <{user.email_address}>", fg="green")


async def _create_user_impl(payload: dict):
    from courseapi.api.users import register_user
    from courseapi.services.user_service import UserService

    async with db_engine.async_session_factory() as session:
        return await register_user(UserService(session), payload)


@main.command()
def courses():
    """List courses with their owners."""
    rows = _run(_courses_impl())
    if not rows:
        click.echo("No courses.")
        return
    _print_table(
        rows,
        [("ID", "id", 5), ("TITLE", "title", 40), ("OWNER", "owner", 30), ("TIME", "estimated_time", 12)],
    )


async def _courses_impl() -> list[dict]:
    from courseapi.services.course_service import CourseService

    async with db_engine.async_session_factory() as session:
        items = await CourseService(session).list_courses()
        return [
            {
                "id": c.id,
                "title": c.title,
                "owner": c.user.email_address,
                "estimated_time": c.estimated_time,
            }
            for c in items
        ]


if __name__ == "__main__":
    main()
