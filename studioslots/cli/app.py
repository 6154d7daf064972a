"""
Main CLI application using Typer.
"""

import asyncio
import logging
from pathlib import Path
from typing import List, Optional, Annotated, Tuple

import pendulum
import typer
from rich.console import Console
from rich.table import Table

from ..config import AppConfig, get_default_config_path
from ..domain.conflict_filter import ConflictFilter
from ..domain.exceptions import RetrievalError
from ..domain.models import AvailabilityResult, AvailabilityStatus, BusinessHours
from ..adapters.mock_record_store import MockRecordStore
from ..adapters.supabase_client import SupabaseRecordStore
from ..services.availability_resolver import AvailabilityResolver, RecordStoreProtocol

app = typer.Typer(
    name="studioslots",
    help="Check free session times for the studio booking form",
    add_completion=False
)

console = Console()

# Store convention: 0=Sunday
WEEKDAY_NAMES = {
    0: "Domingo",
    1: "Segunda-feira",
    2: "Terça-feira",
    3: "Quarta-feira",
    4: "Quinta-feira",
    5: "Sexta-feira",
    6: "Sábado"
}

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")
]
MockOption = Annotated[
    bool,
    typer.Option("--mock", help="Usar dados de teste em vez da base de dados.")
]
MockDataOption = Annotated[
    Optional[Path],
    typer.Option("--mock-data", help="JSON file with mock records (only with --mock)")
]


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )


def _load_config(config_file: Optional[Path], allow_defaults: bool = False) -> AppConfig:
    """
    Load the configuration, exiting with a message if it is unusable.

    In mock mode a missing default config file is not an error; the built-in
    defaults are used instead.
    """
    config_path = config_file or get_default_config_path()

    if allow_defaults and config_file is None and not config_path.exists():
        return AppConfig()

    try:
        return AppConfig.load_from_yaml(config_path)
    except FileNotFoundError as e:
        console.print(f"[bold red]Erro:[/bold red] {e}")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[bold red]Erro na configuração:[/bold red] {e}")
        raise typer.Exit(1)


def _build_store(config: AppConfig, mock: bool, mock_data: Optional[Path]) -> RecordStoreProtocol:
    """Create the record store for the selected mode."""
    if mock:
        return MockRecordStore(data_file=mock_data)

    try:
        config.require_store_credentials()
    except ValueError as e:
        console.print(f"[bold red]Erro:[/bold red] {e}")
        raise typer.Exit(1)

    return SupabaseRecordStore(
        base_url=config.supabase_url,
        api_key=config.supabase_anon_key,
        timeout=config.request_timeout_seconds
    )


def _format_duration(hours: int) -> str:
    label = "1 hora" if hours == 1 else f"{hours} horas"
    if hours == 8:
        label += " (dia completo)"
    return label


def _print_slots(result: AvailabilityResult) -> None:
    """Render the outcome of an availability check."""
    if result.status is AvailabilityStatus.NOT_CONFIGURED:
        console.print("[yellow]Sem horários disponíveis para esta data (estúdio fechado).[/yellow]")
        return

    if not result.slots:
        console.print(
            "[yellow]Sem horários disponíveis para esta data.[/yellow]\n"
            "A duração escolhida é maior do que o horário de abertura."
        )
        return

    table = Table(
        title="Horários",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Hora", style="bold")
    table.add_column("Estado")

    for slot in result.slots:
        state = "[green]Disponível[/green]" if slot.available else "[dim]Ocupado[/dim]"
        table.add_row(slot.label, state)

    console.print()
    console.print(table)
    console.print()

    if result.is_fully_booked:
        console.print("[yellow]Todos os horários estão ocupados para esta data.[/yellow]")
    else:
        console.print(
            f"[bold green]✓ {len(result.available_slots)} horário(s) disponível(eis)[/bold green]"
        )


@app.command()
def slots(
    session_date: Annotated[str, typer.Argument(help="Data da sessão (YYYY-MM-DD)")],
    duration: Annotated[Optional[int], typer.Option("--duration", "-d", help="Session duration in hours")] = None,
    config_file: ConfigOption = None,
    mock: MockOption = False,
    mock_data: MockDataOption = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output.")] = False,
):
    """
    Show the session times for a date.

    Examples:

        studioslots slots 2026-11-02
        studioslots slots 2026-11-02 --duration 3
        studioslots slots 2026-11-02 --mock
    """
    config = _load_config(config_file, allow_defaults=mock)
    _setup_logging("DEBUG" if verbose else config.log_level)

    try:
        target_date = pendulum.from_format(session_date, "YYYY-MM-DD", tz=config.timezone).date()
    except ValueError as e:
        console.print(f"[red]Erro ao interpretar a data: {e}[/red]")
        raise typer.Exit(1)

    today = config.today()
    if not config.booking.is_bookable(target_date, today):
        earliest, latest = config.booking.date_bounds(today)
        console.print(
            f"[red]Só é possível agendar entre {earliest.format('DD/MM/YYYY')} "
            f"e {latest.format('DD/MM/YYYY')}.[/red]"
        )
        raise typer.Exit(1)

    hours = duration if duration is not None else config.booking.default_duration_hours
    if hours not in config.booking.duration_options:
        offered = ", ".join(str(option) for option in config.booking.duration_options)
        console.print(f"[red]Duração inválida: {hours}. Opções: {offered}[/red]")
        raise typer.Exit(1)

    if mock:
        console.print("[yellow]⚠  MODO DE TESTE: a usar dados fictícios[/yellow]\n")

    store = _build_store(config, mock, mock_data)
    resolver = AvailabilityResolver(
        record_store=store,
        conflict_filter=ConflictFilter(policy=config.booking.overlap_policy)
    )

    weekday = WEEKDAY_NAMES[target_date.isoweekday() % 7]
    console.print(
        f"[bold cyan]{weekday}, {target_date.format('DD/MM/YYYY')}[/bold cyan] | "
        f"{_format_duration(hours)}"
    )

    result = asyncio.run(resolver.resolve(target_date, hours))

    if result.retrieval_failed:
        console.print(f"[bold red]Não foi possível verificar a disponibilidade:[/bold red] {result.reason}")
        raise typer.Exit(1)

    if result.validation_failed:
        console.print(f"[bold red]Erro:[/bold red] {result.reason}")
        raise typer.Exit(1)

    _print_slots(result)


async def _collect_hours(store: RecordStoreProtocol) -> List[Tuple[int, Optional[BusinessHours]]]:
    return [(day, await store.get_business_hours(day)) for day in range(7)]


@app.command()
def hours(
    config_file: ConfigOption = None,
    mock: MockOption = False,
    mock_data: MockDataOption = None,
):
    """
    List the business hours for every day of the week.
    """
    config = _load_config(config_file, allow_defaults=mock)
    _setup_logging(config.log_level)
    store = _build_store(config, mock, mock_data)

    try:
        week = asyncio.run(_collect_hours(store))
    except RetrievalError as e:
        console.print(f"[bold red]Erro:[/bold red] {e}")
        raise typer.Exit(1)

    table = Table(
        title="Horário de funcionamento",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Dia", style="bold yellow")
    table.add_column("Abertura")
    table.add_column("Fecho")

    for day, business_hours in week:
        if business_hours is None:
            table.add_row(WEEKDAY_NAMES[day], "[dim]Fechado[/dim]", "")
        else:
            table.add_row(
                WEEKDAY_NAMES[day],
                business_hours.opening_label,
                business_hours.closing_label
            )

    console.print()
    console.print(table)
    console.print()


@app.command()
def durations(config_file: ConfigOption = None):
    """
    List the session durations clients can choose from.
    """
    config = _load_config(config_file, allow_defaults=True)

    for option in config.booking.duration_options:
        marker = " [dim](predefinida)[/dim]" if option == config.booking.default_duration_hours else ""
        console.print(f"  {_format_duration(option)}{marker}")


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]studioslots[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
