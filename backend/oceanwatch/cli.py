"""OceanWatch CLI — suspicious fishing activity around ecological preserves.

Commands:
  summary     ranked companies and per-zone totals
  companies   selectable company names (baseline first)
  search      resolve free text to a company
  zones       zone list with forbidden flags
  tracks      vessel tracks and transponder gaps
  zone        who pinged inside one forbidden zone
  timeline    daily cargo or suspicious-ping series
  export      every view for one filter as JSON
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from oceanwatch.config import settings
from oceanwatch.errors import DatasetLoadError, InvalidFilterError, UnknownZoneError
from oceanwatch.modules.filter_context import ALL_COMPANIES, DateRange, FilterContext
from oceanwatch.modules.query_facade import QueryFacade
from oceanwatch.utils.parsing import parse_day

app = typer.Typer(
    name="oceanwatch",
    help="Transponder track and forbidden-zone analysis for fishing fleets.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console()

GraphOpt = typer.Option(None, "--graph", help="Graph payload (nodes + links) JSON")
GeographyOpt = typer.Option(None, "--geography", help="Geography FeatureCollection")
LocationsOpt = typer.Option(None, "--locations", help="Location nodes JSON")
CompanyOpt = typer.Option(ALL_COMPANIES, "--company", "-c", help="Company name, or 'all'")
StartOpt = typer.Option(None, "--start", help="First day, YYYY-MM-DD (inclusive)")
EndOpt = typer.Option(None, "--end", help="Last day, YYYY-MM-DD (inclusive)")
TopNOpt = typer.Option(settings.DEFAULT_TOP_N, "--top-n", "-n", min=0, help="Companies shown when unscoped")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging")):
    logging.basicConfig(level=logging.DEBUG if verbose else settings.LOG_LEVEL)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command("summary")
def summary(
    graph: Optional[Path] = GraphOpt,
    geography: Optional[Path] = GeographyOpt,
    locations: Optional[Path] = LocationsOpt,
    company: str = CompanyOpt,
    start: Optional[str] = StartOpt,
    end: Optional[str] = EndOpt,
    top_n: int = TopNOpt,
):
    """Ranked companies by suspicious pings, and totals per zone."""
    facade = _load_facade(graph, geography, locations)
    context = _build_context(company, start, end)

    top = facade.top_companies(context, top_n) if not context.is_scoped else [
        c for c in facade.ranked_companies(context) if c.name == context.company
    ]
    if not top:
        console.print("[yellow]No suspicious pings for this filter[/yellow]")
        return

    table = Table(title=f"Suspicious pings by company ({_describe(context)})")
    table.add_column("#", justify="right")
    table.add_column("Company")
    table.add_column("Pings", justify="right")
    for i, entry in enumerate(top, 1):
        style = "bold red" if entry.name == facade.baseline_company else None
        table.add_row(str(i), entry.name, str(entry.count), style=style)
    console.print(table)

    zones = Table(title="Suspicious pings by zone")
    zones.add_column("Zone")
    zones.add_column("Pings", justify="right")
    for name, count in facade.suspicion(context).zone_totals.items():
        zones.add_row(name, str(count))
    console.print(zones)


@app.command("companies")
def companies(
    graph: Optional[Path] = GraphOpt,
    geography: Optional[Path] = GeographyOpt,
    locations: Optional[Path] = LocationsOpt,
):
    """List selectable companies (baseline first, then alphabetical)."""
    facade = _load_facade(graph, geography, locations)
    for name in facade.company_options():
        console.print(name)


@app.command("search")
def search(
    text: str = typer.Argument(..., help="Part of a company name"),
    graph: Optional[Path] = GraphOpt,
    geography: Optional[Path] = GeographyOpt,
    locations: Optional[Path] = LocationsOpt,
):
    """Find the company matching free text."""
    facade = _load_facade(graph, geography, locations)
    match = facade.search_company(text)
    if match is None:
        console.print(f"[yellow]No company matches {text!r}[/yellow]")
        raise typer.Exit(1)
    console.print(match)


@app.command("zones")
def zones(
    graph: Optional[Path] = GraphOpt,
    geography: Optional[Path] = GeographyOpt,
    locations: Optional[Path] = LocationsOpt,
):
    """List zones, their kind, and whether they are forbidden."""
    facade = _load_facade(graph, geography, locations)
    table = Table(title="Zones")
    table.add_column("Zone")
    table.add_column("Kind")
    table.add_column("Forbidden")
    for zone in facade.index.zones:
        forbidden = facade.index.is_forbidden(zone)
        table.add_row(zone.name, zone.kind or "-", "[red]yes[/red]" if forbidden else "no")
    console.print(table)
    console.print(f"Kinds present: {', '.join(facade.index.kinds()) or '-'}")


@app.command("tracks")
def tracks(
    graph: Optional[Path] = GraphOpt,
    geography: Optional[Path] = GeographyOpt,
    locations: Optional[Path] = LocationsOpt,
    company: str = CompanyOpt,
    start: Optional[str] = StartOpt,
    end: Optional[str] = EndOpt,
    top_n: int = TopNOpt,
    all_vessels: bool = typer.Option(False, "--all-vessels", help="Include every vessel when no company is selected"),
):
    """Vessel tracks with segment and transponder-gap counts."""
    facade = _load_facade(graph, geography, locations)
    context = _build_context(company, start, end)
    result = facade.tracks(context, top_n=top_n, include_all_vessels=all_vessels)
    if not result:
        console.print("[yellow]No tracks for this filter[/yellow]")
        return

    table = Table(title=f"Vessel tracks ({_describe(context)})")
    table.add_column("Vessel")
    table.add_column("Company")
    table.add_column("Points", justify="right")
    table.add_column("Segments", justify="right")
    table.add_column("Gaps", justify="right")
    table.add_column("Longest gap (h)", justify="right")
    table.add_column("Suspicious", justify="right")
    for track in result:
        longest = max((g.hours for g in track.gaps), default=None)
        table.add_row(
            track.vessel_name or track.vessel_id,
            track.company or "Unknown",
            str(len(track.points)),
            str(len(track.segments)),
            str(len(track.gaps)),
            f"{longest:.1f}" if longest is not None else "-",
            str(len(track.suspicious_pings)),
            style="bold red" if track.is_baseline else ("yellow" if track.category == "suspicious" else None),
        )
    console.print(table)


@app.command("zone")
def zone(
    name: str = typer.Argument(..., help="Forbidden zone name"),
    graph: Optional[Path] = GraphOpt,
    geography: Optional[Path] = GeographyOpt,
    locations: Optional[Path] = LocationsOpt,
    start: Optional[str] = StartOpt,
    end: Optional[str] = EndOpt,
):
    """Companies and vessels logged inside one forbidden zone."""
    facade = _load_facade(graph, geography, locations)
    context = _build_context(ALL_COMPANIES, start, end)
    try:
        result = facade.zone_investigation(name, context)
    except UnknownZoneError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    console.print(f"[bold]Selected Zone:[/bold] {result.zone}")
    if result.species:
        console.print(f"[bold]Fish species:[/bold] {', '.join(result.species)}")
    else:
        console.print("No specific fish data available for this zone.")
    if not result.total_pings:
        console.print("[yellow]No pings recorded in this zone for the selected date range.[/yellow]")
        return
    console.print(f"Found {result.total_pings} pings in this zone.")
    for entry in result.companies:
        console.print(f"  [bold]{entry.company}[/bold] ({entry.pings} pings)")
        for vessel in entry.vessels:
            console.print(f"    - {vessel}")


@app.command("timeline")
def timeline(
    graph: Optional[Path] = GraphOpt,
    geography: Optional[Path] = GeographyOpt,
    locations: Optional[Path] = LocationsOpt,
    company: str = CompanyOpt,
):
    """Daily cargo tonnage (all companies) or suspicious pings (one company)."""
    facade = _load_facade(graph, geography, locations)
    result = facade.timeline(_build_context(company, None, None))
    table = Table(title=result.title)
    table.add_column("Day")
    table.add_column("Value", justify="right")
    for point in result.points:
        table.add_row(point.day.isoformat(), f"{point.value:g}")
    console.print(table)


@app.command("export")
def export(
    graph: Optional[Path] = GraphOpt,
    geography: Optional[Path] = GeographyOpt,
    locations: Optional[Path] = LocationsOpt,
    company: str = CompanyOpt,
    start: Optional[str] = StartOpt,
    end: Optional[str] = EndOpt,
    top_n: int = TopNOpt,
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write JSON here instead of stdout"),
):
    """Export every view for one filter as JSON."""
    facade = _load_facade(graph, geography, locations)
    context = _build_context(company, start, end)
    payload = facade.dashboard(context, top_n=top_n).model_dump_json(indent=2)
    if output is None:
        typer.echo(payload)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(payload, encoding="utf-8")
    console.print(f"[green]Wrote {output}[/green]")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_facade(graph: Optional[Path], geography: Optional[Path], locations: Optional[Path]) -> QueryFacade:
    """Load the dataset or exit with a single error line."""
    try:
        return QueryFacade.from_files(graph, geography, locations)
    except DatasetLoadError as e:
        console.print(f"[red]Error loading data:[/red] {e}")
        raise typer.Exit(1)


def _build_context(company: str, start: Optional[str], end: Optional[str]) -> FilterContext:
    context = FilterContext(company=company or ALL_COMPANIES)
    if not start and not end:
        return context
    if not (start and end):
        console.print("[yellow]Please select both a start and end date; ignoring date filter.[/yellow]")
        return context
    start_day, end_day = parse_day(start), parse_day(end)
    if start_day is None or end_day is None:
        console.print(f"[red]Dates must be YYYY-MM-DD (got {start!r}, {end!r})[/red]")
        raise typer.Exit(1)
    try:
        return context.with_date_range(DateRange.from_dates(start_day, end_day))
    except InvalidFilterError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


def _describe(context: FilterContext) -> str:
    label = context.company if context.is_scoped else "all companies"
    if context.date_range:
        label += f", {context.date_range.start:%Y-%m-%d} to {context.date_range.end:%Y-%m-%d}"
    return label


if __name__ == "__main__":
    app()
