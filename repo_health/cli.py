"""
Command-line interface for Repo Health.
"""

from pathlib import Path

import httpx
import typer
from rich.console import Console
from rich.table import Table

from repo_health.analyzers import load_analyzers
from repo_health.config import (
    check_weight_sum,
    get_github_token,
    get_output_path,
    get_weights,
    is_parallel_enabled,
    set_config_path,
    set_verify_ssl,
)
from repo_health.core import HealthReport, analyze_repository, grade_short
from repo_health.http_client import close_http_client
from repo_health.report import generate_markdown
from repo_health.vcs import RateLimitError, parse_repo_input

# --- Typer App ---
app = typer.Typer(help="Analyze GitHub repository health.")
console = Console()

RULE = "=" * 60


def _score_color(score: float) -> str:
    if score >= 80:
        return "green"
    if score >= 60:
        return "yellow"
    return "red"


def display_results(report: HealthReport) -> None:
    """Display per-analyzer scores and the overall score."""
    table = Table(title=f"Repo Health: {report.owner}/{report.name}")
    table.add_column("Analyzer", justify="left", style="cyan", no_wrap=True)
    table.add_column("Weight", justify="center", style="magenta")
    table.add_column("Score", justify="center")
    table.add_column("Details", justify="left")

    for item in report.results:
        color = _score_color(item.result.score)
        table.add_row(
            item.name,
            f"{item.weight * 100:.0f}%",
            f"[{color}]{item.result.score:.1f}/100 ({grade_short(item.result.score)})[/{color}]",
            item.result.details,
        )

    console.print(table)

    color = _score_color(report.overall_score)
    console.print(f"\n[cyan]{RULE}[/cyan]")
    console.print(
        f"[bold]Overall Score:[/bold] "
        f"[bold {color}]{report.overall_score:.1f}/100 ({report.grade})[/bold {color}]"
    )
    console.print(f"[cyan]{RULE}[/cyan]\n")


@app.command()
def analyze(
    repository: str = typer.Argument(
        ...,
        help='Repository in format "owner/repo" or full GitHub URL.',
    ),
    token: str | None = typer.Option(
        None,
        "--token",
        "-t",
        help="GitHub personal access token (or set GITHUB_TOKEN). Optional for public repos.",
    ),
    output: str | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file path for the markdown report (default: REPO_HEALTH.md).",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Don't print to stdout, only write the report file.",
    ),
    parallel: bool | None = typer.Option(
        None,
        "--parallel/--sequential",
        help="Run analyzers concurrently. If not specified, uses config file default.",
    ),
    config_file: Path | None = typer.Option(
        None,
        "--config",
        help="Path to a TOML file with a [tool.repo-health] table.",
    ),
    insecure: bool = typer.Option(
        False,
        "--insecure",
        help="Disable SSL certificate verification for HTTPS requests.",
    ),
):
    """Analyze a GitHub repository and write a markdown health report."""
    set_verify_ssl(not insecure)
    set_config_path(config_file)

    try:
        owner, name = parse_repo_input(repository)
        weights = get_weights()
        output_path = output or get_output_path()
        use_parallel = is_parallel_enabled() if parallel is None else parallel
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1) from e

    drift = check_weight_sum(weights)
    if drift is not None and not quiet:
        console.print(
            f"[yellow]⚠️  Analyzer weights sum to {drift:.2f}, not 1.0. "
            "Overall scores are not normalized.[/yellow]"
        )

    token = token or get_github_token()
    if not quiet:
        console.print(f"[cyan]{RULE}[/cyan]")
        console.print("[bold cyan]Repository Health Analyzer[/bold cyan]")
        console.print(f"[cyan]{RULE}[/cyan]")
        console.print(f"\n[bold]Analyzing:[/bold] [green]{owner}/{name}[/green]")
        if token is None:
            console.print(
                "\n[yellow]⚠[/yellow] No GitHub token provided. "
                "Using unauthenticated access (lower rate limits)."
            )
            console.print(
                "[cyan]ℹ[/cyan] Set GITHUB_TOKEN env var or use --token for higher rate limits.\n"
            )
        console.print("[yellow]Fetching repository data...[/yellow]")

    try:
        report = analyze_repository(
            owner,
            name,
            token=token,
            analyzers=load_analyzers(weights),
            parallel=use_parallel,
        )
    except (httpx.HTTPError, ValueError, RateLimitError) as e:
        # Details were already printed by the analysis layer
        raise typer.Exit(code=1) from e
    finally:
        close_http_client()

    Path(output_path).write_text(generate_markdown(report), encoding="utf-8")

    if not quiet:
        display_results(report)
        console.print(f"[green]✓[/green] Report saved to: [bold green]{output_path}[/bold green]")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
