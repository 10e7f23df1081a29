"""
CareerHub Command Line Interface

Provides CLI commands for operating the decisioning core: database
setup, applicant ranking, single-candidate scoring, status decisions
and notification inboxes.
"""

import asyncio
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from careerhub.core.exceptions import CareerHubError

app = typer.Typer(
    name="careerhub",
    help="CareerHub applicant matching and application workflow CLI",
    add_completion=False,
)
console = Console()


@app.callback()
def main():
    """Configure logging before any command runs."""
    from careerhub.utils.logger import setup_logging

    setup_logging()


def _connect():
    """Return wired services, exiting if MongoDB is unreachable."""
    from careerhub.core.services import build_services
    from careerhub.data.database import get_database_manager

    db_manager = get_database_manager()
    if not db_manager.check_sync_connection():
        console.print("[red]Error: Could not connect to MongoDB. Run 'init-db' first.[/red]")
        raise typer.Exit(1)
    return build_services(db_manager)


def _fail(error: CareerHubError) -> None:
    console.print(f"[red]Error ({error.code}): {error.message}[/red]")
    raise typer.Exit(1)


@app.command()
def version():
    """Show application version."""
    from careerhub import __app_name__, __version__

    console.print(f"[bold blue]{__app_name__}[/bold blue] version [green]{__version__}[/green]")


@app.command()
def info():
    """Show system information and configuration."""
    from careerhub.utils.config import get_settings

    settings = get_settings()

    table = Table(title="CareerHub Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Environment", settings.environment)
    table.add_row("Debug Mode", str(settings.debug))
    table.add_row("Database Host", settings.database.host)
    table.add_row("Database Name", settings.database.name)
    table.add_row("Transactions", str(settings.database.use_transactions))
    table.add_row("Ranking Concurrency", str(settings.matching.max_concurrency))
    table.add_row("Applications per Institution", str(settings.workflow.max_applications_per_institution))
    table.add_row("Log Level", settings.logging.level)

    console.print(table)


@app.command()
def init_db():
    """Initialize the database with required collections and indexes."""
    from careerhub.data.database import get_database_manager

    console.print("[yellow]Initializing database...[/yellow]")

    db_manager = get_database_manager()

    console.print("  Checking database connection...")
    if not db_manager.check_sync_connection():
        console.print("[red]Error: Could not connect to MongoDB.[/red]")
        console.print("[dim]Make sure MongoDB is running and connection settings are correct.[/dim]")
        raise typer.Exit(1)

    console.print("  [green]✓[/green] Connected to MongoDB")

    console.print("  Creating indexes...")
    try:
        asyncio.run(db_manager.ensure_indexes())
    except Exception as e:
        console.print(f"[red]Error initializing database: {e}[/red]")
        raise typer.Exit(1)
    console.print("  [green]✓[/green] Indexes created")

    console.print("\n[green]Database initialized successfully![/green]")


@app.command()
def rank(
    job_id: str = typer.Argument(..., help="Job ID to rank students against"),
    company_id: Optional[str] = typer.Option(None, "--company", "-c", help="Requesting company ID"),
    concurrent: bool = typer.Option(False, "--concurrent", help="Evaluate candidates concurrently"),
    timeout: Optional[float] = typer.Option(None, "--timeout", "-t", help="Timeout in seconds (concurrent only)"),
    top_n: int = typer.Option(20, "--top", "-n", help="Number of candidates to show"),
):
    """Rank qualified students for a job posting."""
    from careerhub.utils.config import get_settings

    if concurrent and company_id:
        console.print("[red]Error: --company cannot be combined with --concurrent.[/red]")
        raise typer.Exit(1)

    services = _connect()
    console.print(f"[yellow]Ranking qualified students for job: {job_id}[/yellow]")

    try:
        if concurrent:
            if timeout is None:
                timeout = get_settings().matching.ranking_timeout_seconds
            results = asyncio.run(services.ranker.rank_qualified_async(job_id, timeout=timeout))
        elif company_id:
            results = services.ranker.rank_for_company(job_id, company_id)
        else:
            results = services.ranker.rank_qualified(job_id)
    except CareerHubError as e:
        _fail(e)

    if not results:
        console.print("[yellow]No qualified students for this job.[/yellow]")
        raise typer.Exit(0)

    table = Table(title=f"Top {min(len(results), top_n)} of {len(results)} Qualified Students")
    table.add_column("Rank", style="dim", width=4)
    table.add_column("Student", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Email")
    table.add_column("Details")

    for i, result in enumerate(results[:top_n], 1):
        color = "green" if result.score >= 90 else "blue"
        table.add_row(
            str(i),
            result.candidate_name or result.candidate_id,
            f"[{color}]{result.score}[/{color}]",
            result.email or "",
            "; ".join(result.match_details),
        )

    console.print(table)


@app.command()
def match(
    student_id: str = typer.Argument(..., help="Student ID"),
    job_id: str = typer.Argument(..., help="Job ID"),
):
    """Score one student against one job posting."""
    services = _connect()

    try:
        result = services.matcher.evaluate_by_id(student_id, job_id)
    except CareerHubError as e:
        _fail(e)

    verdict = "[green]QUALIFIED[/green]" if result.qualified else "[red]NOT QUALIFIED[/red]"
    console.print(f"\n[bold]{result.candidate_name or result.candidate_id}[/bold]: {result.score}/100 {verdict}")
    if result.match_details:
        for detail in result.match_details:
            console.print(f"  • {detail}")
    else:
        console.print("  [dim]No matching signals[/dim]")


@app.command()
def set_status(
    application_id: str = typer.Argument(..., help="Application ID"),
    status: str = typer.Argument(..., help="pending, admitted, rejected or waiting-list"),
    by: Optional[str] = typer.Option(None, "--by", "-b", help="Acting institution or company ID"),
    job: bool = typer.Option(False, "--job", help="The ID refers to a job application"),
):
    """Change an application's status and notify the student."""
    from careerhub.utils.constants import ApplicationKind

    services = _connect()
    kind = ApplicationKind.JOB if job else ApplicationKind.COURSE

    try:
        transition = services.workflow.set_status(application_id, status, acting_authority=by, kind=kind)
    except CareerHubError as e:
        _fail(e)

    console.print(
        f"[green]✓[/green] Application {transition.application_id}: "
        f"{transition.previous_status} → [cyan]{transition.new_status.value}[/cyan]"
    )


@app.command()
def notifications(
    user_id: str = typer.Argument(..., help="User ID"),
    limit: Optional[int] = typer.Option(None, "--limit", "-l", help="Maximum notifications to show"),
    mark_all_read: bool = typer.Option(False, "--mark-all-read", help="Mark every notification read"),
):
    """Show a user's notifications."""
    services = _connect()

    try:
        if mark_all_read:
            count = services.notifications.mark_all_read(user_id)
            console.print(f"[green]✓[/green] Marked {count} notification(s) as read")
        items = services.notifications.list_for_user(user_id, limit=limit)
        unread = services.notifications.unread_count(user_id)
    except CareerHubError as e:
        _fail(e)

    if not items:
        console.print("[yellow]No notifications.[/yellow]")
        raise typer.Exit(0)

    table = Table(title=f"Notifications ({unread} unread)")
    table.add_column("", width=1)
    table.add_column("Date", style="dim")
    table.add_column("Title", style="cyan")
    table.add_column("Message")
    table.add_column("Link", style="dim")

    for item in items:
        table.add_row(
            "" if item.read else "[bold yellow]•[/bold yellow]",
            item.created_at.strftime("%Y-%m-%d %H:%M"),
            item.title,
            item.message,
            item.link,
        )

    console.print(table)


if __name__ == "__main__":
    app()
