"""Typer CLI for the leave optimizer."""

from __future__ import annotations

import datetime
import json
import logging
import sys

import typer

from pont.calendar_view import format_calendar_view, format_month, format_result
from pont.config import Settings, load_config
from pont.dates import check_year, parse_date
from pont.errors import InvalidDate, PontError
from pont.holidays import PRESETS, Holiday, HolidayIndex, get_holidays, load_holidays_file
from pont.optimizer import OptimizationResult, optimize as run_optimizer

app = typer.Typer(
    name="pont",
    help="Leave optimizer: spend your paid leave on bridges around public "
    "holidays and on whole free weeks.",
    add_completion=False,
)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )


def _fail(message: str) -> typer.Exit:
    typer.echo(f"Error: {message}", err=True)
    return typer.Exit(code=1)


def _parse_holiday_option(value: str) -> Holiday:
    """Parse ``YYYY-MM-DD`` or ``YYYY-MM-DD=Name``."""
    raw_date, _, name = value.partition("=")
    try:
        d = parse_date(raw_date)
    except InvalidDate:
        raise typer.BadParameter(f"Invalid date format {raw_date!r}. Use YYYY-MM-DD.") from None
    return Holiday(d, name.strip() or "Custom holiday")


def _current_year() -> int:
    return datetime.date.today().year


def _resolve_year(year: int | None) -> int:
    try:
        return check_year(year if year is not None else _current_year())
    except PontError as exc:
        raise _fail(str(exc)) from None


# ---------------------------------------------------------------------------
# Shared option plumbing
# ---------------------------------------------------------------------------


def _resolve_settings(
    config: str | None,
    year: int | None,
    quota: int | None,
    country: str | None,
    holidays_file: str | None,
) -> Settings:
    try:
        base = load_config(config) if config is not None else Settings()
    except PontError as exc:
        raise _fail(str(exc)) from None
    return base.merged(year=year, quota=quota, country=country, holidays_file=holidays_file)


def _collect_holidays(settings: Settings, year: int, extra: list[str] | None) -> list[Holiday]:
    holidays: list[Holiday] = []

    if settings.holidays_file is not None:
        try:
            holidays.extend(load_holidays_file(settings.holidays_file))
        except PontError as exc:
            raise _fail(str(exc)) from None
    elif settings.country and settings.country.lower() != "none":
        try:
            holidays.extend(get_holidays(settings.country, year))
        except KeyError as exc:
            raise _fail(exc.args[0]) from None

    for value in extra or []:
        holidays.append(_parse_holiday_option(value))

    return holidays


def _plan(
    config: str | None,
    year: int | None,
    quota: int | None,
    country: str | None,
    holidays_file: str | None,
    holiday: list[str] | None,
) -> tuple[Settings, HolidayIndex, OptimizationResult]:
    settings = _resolve_settings(config, year, quota, country, holidays_file)
    resolved_year = _resolve_year(settings.year)

    index = HolidayIndex(_collect_holidays(settings, resolved_year, holiday))
    try:
        result = run_optimizer(resolved_year, index, settings.quota)
    except PontError as exc:
        raise _fail(str(exc)) from None
    return settings, index, result


YEAR_OPTION = typer.Option(None, "--year", "-y", help="Target year. Defaults to the current year.")
QUOTA_OPTION = typer.Option(
    None, "--quota", "-q", help="Paid leave days to allocate (default 25).", min=0
)
COUNTRY_OPTION = typer.Option(
    None,
    "--country",
    "-c",
    help=f"Holiday preset ({', '.join(sorted(PRESETS))}). Use 'none' to skip.",
)
HOLIDAYS_FILE_OPTION = typer.Option(
    None,
    "--holidays-file",
    help="JSON list of holidays ({date, localName} records). Replaces the preset.",
)
HOLIDAY_OPTION = typer.Option(
    None,
    "--holiday",
    "-H",
    help="Additional holiday, YYYY-MM-DD or YYYY-MM-DD=Name. Repeatable.",
)
CONFIG_OPTION = typer.Option(None, "--config", help="Path to a JSON config file.")
VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Log each allocation phase.")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def optimize(
    year: int | None = YEAR_OPTION,
    quota: int | None = QUOTA_OPTION,
    country: str | None = COUNTRY_OPTION,
    holidays_file: str | None = HOLIDAYS_FILE_OPTION,
    holiday: list[str] | None = HOLIDAY_OPTION,
    calendar: bool = typer.Option(
        True,
        "--calendar/--no-calendar",
        help="Show month-by-month calendar view.",
    ),
    output_json: bool = typer.Option(
        False,
        "--json",
        help="Output results as JSON.",
    ),
    config: str | None = CONFIG_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Choose which days to take off for the longest breaks."""
    _setup_logging(verbose)
    _settings, index, result = _plan(config, year, quota, country, holidays_file, holiday)

    if output_json:
        _print_json(result, index)
    else:
        _print_text(result, index, calendar)


def _print_text(result: OptimizationResult, index: HolidayIndex, show_calendar: bool) -> None:
    w = 64
    in_year = index.in_year(result.year)
    typer.echo("=" * w)
    typer.echo("  LEAVE OPTIMIZER")
    typer.echo("=" * w)
    typer.echo(f"  Year:         {result.year}")
    typer.echo(f"  Leave quota:  {result.quota} days")
    typer.echo(f"  Holidays:     {len(in_year)}")
    typer.echo()
    for h in in_year:
        typer.echo(f"    {h.date.strftime('%a, %b %d'):>12}  {h.local_name}")

    typer.echo(format_result(result, index))
    if show_calendar:
        typer.echo(format_calendar_view(result, index))


def _print_json(result: OptimizationResult, index: HolidayIndex) -> None:
    output = result.to_dict()
    output["holidays"] = [
        {"date": h.date.isoformat(), "localName": h.local_name} for h in index.in_year(result.year)
    ]
    json.dump(output, sys.stdout, indent=2, ensure_ascii=False)
    typer.echo()


@app.command("calendar")
def calendar_command(
    month: int = typer.Option(..., "--month", "-m", help="Month to render (1-12).", min=1, max=12),
    year: int | None = YEAR_OPTION,
    quota: int | None = QUOTA_OPTION,
    country: str | None = COUNTRY_OPTION,
    holidays_file: str | None = HOLIDAYS_FILE_OPTION,
    holiday: list[str] | None = HOLIDAY_OPTION,
    config: str | None = CONFIG_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Render one month with optimized leave days and holidays marked."""
    _setup_logging(verbose)
    _settings, index, result = _plan(config, year, quota, country, holidays_file, holiday)

    for line in format_month(result, index, month):
        typer.echo(line)
    typer.echo()
    typer.echo("  Legend: B=Bridge  W=Week fill  G=Gap  H=Holiday")

    for h in index.in_year(result.year):
        if h.date.month == month:
            typer.echo(f"    {h.date.strftime('%a, %b %d'):>12}  {h.local_name}")


@app.command()
def holidays(
    country: str = typer.Option(
        "fr",
        "--country",
        "-c",
        help=f"Country preset ({', '.join(sorted(PRESETS))}).",
    ),
    year: int = typer.Option(
        None,
        "--year",
        "-y",
        help="Year to list holidays for. Defaults to the current year.",
    ),
) -> None:
    """List holidays for a country preset."""
    resolved_year = _resolve_year(year)

    try:
        preset = get_holidays(country, resolved_year)
    except KeyError as exc:
        raise _fail(exc.args[0]) from None

    typer.echo(f"  {PRESETS[country.lower()]} - {resolved_year}")
    typer.echo()
    for h in preset:
        typer.echo(f"    {h.date.strftime('%a, %b %d'):>12}  {h.local_name}")


def main() -> None:
    """Entry point for the CLI."""
    app()
