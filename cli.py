"""
Market CLI.

Command-line interface for common operations.
"""

import sys
import time

import httpx
import typer
from rich.console import Console
from rich.table import Table

from market_api import __version__

app = typer.Typer(
    name="market",
    help="Market API management CLI",
    add_completion=False,
)
console = Console()


# =============================================================================
# Database Commands
# =============================================================================

@app.command()
def db_init():
    """Create all database tables."""
    from sqlalchemy.exc import SQLAlchemyError

    from market_api.models import Base
    from shared.infrastructure.db import engine

    console.print(f"[blue]Creating tables on: {engine.url.render_as_string(hide_password=True)}[/blue]")
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        console.print(f"[red]✗ Table creation failed: {e}[/red]")
        raise typer.Exit(1)

    table = Table(title="Tables")
    table.add_column("Name", style="cyan")
    for name in sorted(Base.metadata.tables):
        table.add_row(name)
    console.print(table)
    console.print("[green]✓ Database ready[/green]")


# =============================================================================
# Member Commands
# =============================================================================

@app.command()
def create_member(
    email: str = typer.Option(..., help="Login email"),
    name: str = typer.Option(..., help="Display name"),
    phone_number: str = typer.Option(..., help="Phone number (unique)"),
    role: str = typer.Option("CUSTOMER", help="BUSINESS or CUSTOMER"),
    password: str = typer.Option(
        ..., prompt=True, hide_input=True, confirmation_prompt=True, help="Initial password"
    ),
):
    """Register a local member."""
    from fastapi import HTTPException

    from market_api.services.domain import MemberService
    from shared.infrastructure.db import get_db_context

    with get_db_context() as db:
        try:
            member = MemberService(db).signup(email, password, name, phone_number, role)
        except HTTPException as e:
            console.print(f"[red]✗ {e.detail}[/red]")
            raise typer.Exit(1)

    table = Table(title="Member created")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("ID", str(member.id))
    table.add_row("Email", member.email)
    table.add_row("Name", member.name)
    table.add_row("Role", member.role)
    console.print(table)


@app.command()
def audit_passwords():
    """List members whose stored password is not a bcrypt hash."""
    from sqlalchemy import select

    from market_api.models import Member
    from shared.infrastructure.db import get_db_context
    from shared.security.password import needs_rehash

    with get_db_context() as db:
        members = db.execute(select(Member.id, Member.email, Member.password)).all()

    flagged = [(m.id, m.email) for m in members if needs_rehash(m.password)]
    if not flagged:
        console.print(f"[green]✓ All {len(members)} stored passwords are bcrypt hashes[/green]")
        return

    table = Table(title="Members needing a password reset")
    table.add_column("ID", style="cyan")
    table.add_column("Email", style="yellow")
    for member_id, email in flagged:
        table.add_row(str(member_id), email)
    console.print(table)
    raise typer.Exit(1)


# =============================================================================
# Health Commands
# =============================================================================

@app.command()
def health(
    base_url: str = typer.Option("http://localhost:8000", help="Market API base URL"),
):
    """Check API health."""
    checks = [
        ("Market API", f"{base_url}/api/health"),
        ("Database", f"{base_url}/api/health/detailed"),
    ]

    table = Table(title="Service Health")
    table.add_column("Service", style="cyan")
    table.add_column("Status", style="green")
    table.add_column("Response Time", style="yellow")

    all_healthy = True
    with httpx.Client(timeout=5.0) as client:
        for name, url in checks:
            start = time.perf_counter()
            try:
                response = client.get(url)
            except httpx.HTTPError as e:
                table.add_row(name, f"✗ {type(e).__name__}", "-")
                all_healthy = False
                continue
            elapsed = (time.perf_counter() - start) * 1000

            if response.status_code == 200:
                table.add_row(name, "✓ Healthy", f"{elapsed:.0f}ms")
            else:
                table.add_row(name, f"✗ Status {response.status_code}", f"{elapsed:.0f}ms")
                all_healthy = False

    console.print(table)
    if not all_healthy:
        raise typer.Exit(1)


@app.command()
def version():
    """Show version information."""
    table = Table(title="Market Version")
    table.add_column("Component", style="cyan")
    table.add_column("Version", style="green")

    table.add_row("API", __version__)
    table.add_row("Python", sys.version.split()[0])

    console.print(table)


if __name__ == "__main__":
    app()
