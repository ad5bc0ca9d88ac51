"""
CollegePath command line: run the server, create students, load reference data.
"""
import asyncio
from typing import Optional
from uuid import uuid4

import typer
import uvicorn

from collegepath.auth.api_keys import generate_api_key
from collegepath.config import get_settings
from collegepath.errors import ConfigurationError
from collegepath.importers.iefa import seed_scholarships
from collegepath.importers.scorecard import DEFAULT_SEARCH_TERMS, ScorecardClient, import_by_search_terms
from collegepath.infra.db.repositories.user import UserRepository
from collegepath.infra.db.session import close_db, get_session, init_db

app = typer.Typer(help="CollegePath CLI")


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Port to bind"),
    reload: bool = typer.Option(False, help="Enable autoreload (dev only)"),
):
    """Start the CollegePath API server."""
    uvicorn.run(
        "collegepath.main:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
    )


async def _create_user(email: str, first_name: Optional[str], last_name: Optional[str]) -> str:
    await init_db()
    try:
        async with get_session() as session:
            users = UserRepository(session)
            if await users.get_by_email(email):
                raise typer.BadParameter(f"A user with email {email} already exists")
            user_id = str(uuid4())
            full_key, key_hash, key_prefix = generate_api_key(user_id)
            await users.create(
                id=user_id,
                email=email,
                first_name=first_name,
                last_name=last_name,
                api_key_hash=key_hash,
                api_key_prefix=key_prefix,
            )
            return full_key
    finally:
        await close_db()


@app.command("create-user")
def create_user(
    email: str = typer.Argument(..., help="Student email"),
    first_name: Optional[str] = typer.Option(None, help="First name"),
    last_name: Optional[str] = typer.Option(None, help="Last name"),
):
    """Create a student and print their API key. The key is shown only once."""
    key = asyncio.run(_create_user(email, first_name, last_name))
    typer.echo(f"Created user {email}")
    typer.echo(f"API key (store it now, it cannot be shown again): {key}")


async def _import_universities(terms: list[str], per_page: int) -> int:
    client = ScorecardClient.from_settings(get_settings())
    await init_db()
    try:
        async with get_session() as session:
            return await import_by_search_terms(session, client, terms, per_page=per_page)
    finally:
        await close_db()


async def _seed_scholarships() -> int:
    await init_db()
    try:
        async with get_session() as session:
            return await seed_scholarships(session)
    finally:
        await close_db()


@app.command("import-universities")
def import_universities(
    term: Optional[list[str]] = typer.Option(None, "--term", help="Search term (repeatable)"),
    per_page: int = typer.Option(5, help="Results per search term"),
):
    """Import universities from the College Scorecard API."""
    try:
        count = asyncio.run(_import_universities(term or DEFAULT_SEARCH_TERMS, per_page))
    except ConfigurationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Imported {count} universities")


@app.command("seed-scholarships")
def seed_scholarships_command():
    """Seed IEFA and Kenya-focused scholarship listings."""
    count = asyncio.run(_seed_scholarships())
    typer.echo(f"Seeded {count} scholarships")


if __name__ == "__main__":
    app()
