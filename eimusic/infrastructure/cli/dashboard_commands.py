"""Overview commands: dashboard panels, monetization summary and analytics."""

from enum import StrEnum
from typing import Annotated

from rich.columns import Columns
from rich.console import RenderableType
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
import typer

from eimusic.application.use_cases import (
    AnalyticsCommand,
    AnalyticsResult,
    AnalyticsUseCase,
    DashboardCommand,
    DashboardResult,
    DashboardUseCase,
    MonetizationResult,
    MonetizationUseCase,
)
from eimusic.application.use_cases.analytics import PERIOD_LABELS
from eimusic.application.use_cases.monetization import transaction_fee
from eimusic.domain.formatting import (
    format_compact_number,
    format_currency,
    format_duration,
    format_percentage,
    group_thousands,
)
from eimusic.infrastructure.cli.async_helpers import run_with_unit_of_work
from eimusic.infrastructure.cli.ui import command_error_handler, console

ACTIVITY_ICONS = {"user": "👤", "track": "🎵", "artist": "✔"}

STATUS_LABELS = {
    "completed": "Concluída",
    "pending": "Pendente",
    "failed": "Falhou",
    "refunded": "Reembolsada",
}

METHOD_LABELS = {"mpesa": "M-Pesa", "visa": "Visa", "paypal": "PayPal"}


class DashboardSection(StrEnum):
    """Panels of the dashboard; ``all`` shows every one."""

    ALL = "all"
    STATS = "stats"
    TOP_TRACKS = "top-tracks"
    ACTIVITY = "activity"
    ARTISTS = "artists"


class AnalyticsPeriod(StrEnum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"


def register_dashboard_commands(app: typer.Typer) -> None:
    """Register overview commands with the Typer app."""
    app.command(
        name="dashboard",
        help="Painel geral: estatísticas, top faixas e atividade recente",
        rich_help_panel="📊 Visão Geral",
    )(dashboard)
    app.command(
        name="monetization",
        help="Planos, transações e taxas",
        rich_help_panel="📊 Visão Geral",
    )(monetization)
    app.command(
        name="analytics",
        help="Indicadores por período e série mensal",
        rich_help_panel="📊 Visão Geral",
    )(analytics)


# --- Dashboard ---


def _stat_card(title: str, value: str, detail: str = "") -> Panel:
    body = Text(value, style="bold green")
    if detail:
        body.append(f"\n{detail}", style="dim")
    return Panel(body, title=title, border_style="blue", width=26)


def render_stats(result: DashboardResult) -> Columns:
    stats = result.stats
    return Columns([
        _stat_card(
            "Usuários",
            format_compact_number(stats.total_users),
            f"+{stats.new_users_today} hoje",
        ),
        _stat_card(
            "Artistas",
            format_compact_number(stats.total_artists),
            f"{stats.verified_artists} verificados",
        ),
        _stat_card(
            "Faixas",
            format_compact_number(stats.total_tracks),
            f"Gênero top: {stats.top_genre or '-'}",
        ),
        _stat_card(
            "Reproduções",
            format_compact_number(stats.total_streams),
            f"{format_compact_number(stats.avg_streams_per_track)} por faixa",
        ),
        _stat_card(
            "Receita",
            format_currency(stats.total_revenue),
            f"{stats.active_subscriptions} assinaturas ativas",
        ),
    ])


def render_top_tracks(result: DashboardResult) -> Table:
    table = Table(title="Top Faixas", header_style="bold cyan")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Faixa")
    table.add_column("Artista")
    table.add_column("Duração", justify="right")
    table.add_column("Reproduções", justify="right", style="green")
    for position, track in enumerate(result.top_tracks, 1):
        table.add_row(
            str(position),
            escape(track.title),
            escape(track.artist_name or "-"),
            format_duration(track.duration),
            format_compact_number(track.plays),
        )
    return table


def render_recent_artists(result: DashboardResult) -> Table:
    table = Table(title="Artistas Recentes", header_style="bold cyan")
    table.add_column("Artista")
    table.add_column("Gênero")
    table.add_column("Verificado", justify="center")
    table.add_column("Entrada")
    for artist in result.recent_artists:
        table.add_row(
            escape(artist.name),
            escape(artist.genre or "-"),
            "✔" if artist.verified else "",
            artist.joined_date.strftime("%d/%m/%Y") if artist.joined_date else "-",
        )
    return table


def render_activity(result: DashboardResult) -> RenderableType:
    if not result.activity:
        return Text("Nenhuma atividade recente", style="dim")
    table = Table(title="Atividade Recente", header_style="bold cyan", box=None)
    table.add_column("")
    table.add_column("Evento")
    table.add_column("Detalhe", style="dim")
    table.add_column("Quando", style="cyan", justify="right")
    for item in result.activity:
        table.add_row(
            ACTIVITY_ICONS.get(item.kind, "•"),
            escape(item.title),
            escape(item.description),
            item.time_label,
        )
    return table


@command_error_handler
def dashboard(
    section: Annotated[
        DashboardSection,
        typer.Argument(help="Painel a mostrar (padrão: todos)"),
    ] = DashboardSection.ALL,
) -> None:
    """Mostrar o painel geral."""
    result = run_with_unit_of_work(
        lambda uow: DashboardUseCase().execute(DashboardCommand(), uow)
    )

    renderers = {
        DashboardSection.STATS: render_stats,
        DashboardSection.TOP_TRACKS: render_top_tracks,
        DashboardSection.ACTIVITY: render_activity,
        DashboardSection.ARTISTS: render_recent_artists,
    }
    if section is DashboardSection.ALL:
        for render in renderers.values():
            console.print(render(result))
            console.print()
    else:
        console.print(renderers[section](result))


# --- Monetization ---


def render_plans(result: MonetizationResult) -> Table:
    stats = result.plan_stats
    table = Table(
        title="Planos",
        header_style="bold cyan",
        caption=(
            f"{stats.paid_subscribers} de {stats.total_subscribers} assinantes em "
            f"planos pagos ({stats.conversion_rate:.1f}%)"
        ),
    )
    table.add_column("Plano")
    table.add_column("Preço", justify="right")
    table.add_column("Assinantes", justify="right")
    table.add_column("Receita mensal", justify="right", style="green")
    table.add_column("Status")
    for plan in result.plans:
        table.add_row(
            escape(plan.name),
            format_currency(plan.price) if plan.is_paid else "Grátis",
            format_compact_number(plan.subscribers),
            format_currency(plan.monthly_revenue),
            "Ativo" if plan.status == "active" else "Inativo",
        )
    return table


def render_transactions(result: MonetizationResult) -> Table:
    table = Table(title="Transações", header_style="bold cyan")
    table.add_column("Data")
    table.add_column("Usuário")
    table.add_column("Valor", justify="right")
    table.add_column("Método")
    table.add_column("Taxa", justify="right", style="dim")
    table.add_column("Status")
    for transaction in result.transactions:
        moment = transaction.transaction_date
        style = "red" if transaction.amount < 0 else None
        table.add_row(
            moment.strftime("%d/%m/%Y") if moment else "-",
            escape(transaction.user_name),
            Text(format_currency(transaction.amount), style=style or ""),
            METHOD_LABELS.get(transaction.payment_method, transaction.payment_method),
            format_currency(transaction_fee(transaction)),
            STATUS_LABELS.get(transaction.status, transaction.status),
        )
    return table


@command_error_handler
def monetization() -> None:
    """Mostrar planos, transações e o resumo de receita."""
    result = run_with_unit_of_work(lambda uow: MonetizationUseCase().execute(uow))
    summary = result.transaction_summary

    console.print(render_plans(result))
    console.print()
    console.print(render_transactions(result))
    console.print()

    totals = Table(show_header=False, box=None, padding=(0, 2))
    totals.add_column(style="cyan")
    totals.add_column(style="green bold", justify="right")
    totals.add_row("Receita concluída", format_currency(summary.completed_revenue))
    totals.add_row("Pendente", format_currency(summary.pending_amount))
    totals.add_row("Reembolsado", format_currency(summary.refunded_amount))
    for method, fee in summary.fees_by_method.items():
        totals.add_row(f"Taxas {METHOD_LABELS.get(method, method)}", format_currency(fee))
    totals.add_row("Receita líquida", format_currency(summary.net_revenue))
    console.print(Panel(totals, title="[bold]Resumo[/bold]", border_style="green", expand=False))


# --- Analytics ---


def render_cards(result: AnalyticsResult) -> Columns:
    panels = []
    for card in result.cards:
        if card.prefix:
            value = f"{card.prefix}{group_thousands(card.value)}"
        else:
            value = format_compact_number(card.value)
        change_style = "green" if card.is_increase else "red"
        arrow = "▲" if card.is_increase else "▼"
        body = Text.assemble(
            (value, "bold"),
            "\n",
            (f"{arrow} {format_percentage(card.change)}", change_style),
        )
        panels.append(Panel(body, title=f"{card.icon} {card.title}", width=26))
    return Columns(panels)


def render_monthly(result: AnalyticsResult) -> Table:
    table = Table(title="Evolução mensal", header_style="bold cyan")
    table.add_column("Mês")
    table.add_column("Usuários", justify="right")
    table.add_column("Artistas", justify="right")
    table.add_column("Conteúdo", justify="right")
    table.add_column("Receita", justify="right", style="green")
    for point in result.monthly:
        table.add_row(
            point.label,
            str(point.users),
            str(point.artists),
            str(point.content),
            format_currency(point.revenue),
        )
    return table


@command_error_handler
def analytics(
    period: Annotated[
        AnalyticsPeriod,
        typer.Option("--period", "-p", help="Período de comparação"),
    ] = AnalyticsPeriod.MONTH,
    months: Annotated[
        int, typer.Option("--months", min=1, help="Meses na série mensal")
    ] = 6,
) -> None:
    """Mostrar indicadores do período e a série mensal."""
    command = AnalyticsCommand(period=period.value, months=months)
    result = run_with_unit_of_work(lambda uow: AnalyticsUseCase().execute(command, uow))

    console.print(f"[bold]Período:[/bold] {PERIOD_LABELS[result.period]}")
    console.print(render_cards(result))
    console.print()
    console.print(render_monthly(result))
