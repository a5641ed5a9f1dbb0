"""Static table configuration for every admin screen.

Each screen declares its columns, filters and searchable fields once. Cell
renderers return Rich console markup with every record-derived string escaped;
they never see anything but the cell value and its record.
"""

from collections.abc import Mapping, Sequence
from datetime import date, datetime

from attrs import define, field, validators
from rich.markup import escape

from eimusic.domain.entities.shared import Record, RecordValue
from eimusic.domain.errors import ValidationError
from eimusic.domain.formatting import (
    format_compact_number,
    format_currency,
    format_duration,
)
from eimusic.domain.listing import ColumnDefinition, FilterDefinition, FilterOption

EMPTY_MESSAGE = "Nenhum dado encontrado"

# === Select options ===

GENRE_OPTIONS = (
    FilterOption("pandza", "Pandza"),
    FilterOption("marrabenta", "Marrabenta"),
    FilterOption("hip-hop", "Hip Hop"),
    FilterOption("pop", "Pop"),
    FilterOption("kizomba", "Kizomba"),
    FilterOption("afro-pop", "Afro-Pop"),
    FilterOption("rnb", "R&B"),
)

ACCOUNT_STATUS_OPTIONS = (
    FilterOption("active", "Ativo"),
    FilterOption("inactive", "Inativo"),
    FilterOption("suspended", "Suspenso"),
)

CONTENT_STATUS_OPTIONS = (
    FilterOption("draft", "Rascunho"),
    FilterOption("published", "Publicado"),
    FilterOption("removed", "Removido"),
)

ARTIST_PLAN_OPTIONS = (
    FilterOption("basic", "Básico (0 MT)"),
    FilterOption("premium", "Premium (120 MT/mês)"),
    FilterOption("enterprise", "Enterprise (250 MT/mês)"),
)

PAYMENT_METHOD_OPTIONS = (
    FilterOption("mpesa", "M-Pesa (1% taxa)"),
    FilterOption("visa", "Visa/Mastercard (2.5% taxa)"),
    FilterOption("paypal", "PayPal (3% taxa)"),
)

USER_PLAN_OPTIONS = (
    FilterOption("free", "Gratuito"),
    FilterOption("premium", "Premium"),
    FilterOption("vip", "VIP"),
)

TRANSACTION_STATUS_OPTIONS = (
    FilterOption("completed", "Concluído"),
    FilterOption("pending", "Pendente"),
    FilterOption("failed", "Falhado"),
    FilterOption("refunded", "Reembolsado"),
)

TRANSACTION_TYPE_OPTIONS = (
    FilterOption("subscription", "Assinatura"),
    FilterOption("one_time", "Pagamento único"),
    FilterOption("refund", "Reembolso"),
)

PLAN_STATUS_OPTIONS = (
    FilterOption("active", "Ativo"),
    FilterOption("deprecated", "Descontinuado"),
    FilterOption("coming_soon", "Em breve"),
)

YES_NO_OPTIONS = (FilterOption("true", "Sim"), FilterOption("false", "Não"))

# === Cell renderers ===

_BADGE_STYLES: Mapping[str, str] = {
    "active": "green",
    "published": "green",
    "completed": "green",
    "inactive": "bright_black",
    "draft": "yellow",
    "pending": "yellow",
    "coming_soon": "blue",
    "suspended": "red",
    "removed": "red",
    "failed": "red",
    "refunded": "magenta",
    "deprecated": "bright_black",
    "premium": "blue",
    "enterprise": "magenta",
    "vip": "magenta",
}

_BADGE_LABELS: Mapping[str, str] = {
    option.value: option.label
    for options in (
        ACCOUNT_STATUS_OPTIONS,
        CONTENT_STATUS_OPTIONS,
        TRANSACTION_STATUS_OPTIONS,
        PLAN_STATUS_OPTIONS,
        USER_PLAN_OPTIONS,
    )
    for option in options
}


def render_status(value: RecordValue, _record: Record) -> str:
    """Coloured badge with the Portuguese label of a status value."""
    if value is None:
        return "-"
    text = str(value)
    label = escape(_BADGE_LABELS.get(text, text.capitalize()))
    style = _BADGE_STYLES.get(text)
    return f"[{style}]{label}[/{style}]" if style else label


def render_duration(value: RecordValue, _record: Record) -> str:
    return format_duration(value if isinstance(value, int | float) else 0)


def render_currency(value: RecordValue, _record: Record) -> str:
    return format_currency(value if isinstance(value, int | float) else 0)


def render_compact(value: RecordValue, _record: Record) -> str:
    return format_compact_number(value if isinstance(value, int | float) else 0)


def render_date(value: RecordValue, _record: Record) -> str:
    """ISO date or timestamp as ``dd/mm/yyyy``."""
    if not value:
        return "-"
    text = str(value)
    try:
        parsed = datetime.fromisoformat(text) if "T" in text else date.fromisoformat(text)
    except ValueError:
        return escape(text)
    return parsed.strftime("%d/%m/%Y")


def render_verified(value: RecordValue, _record: Record) -> str:
    return "[green]✓ Verificado[/green]" if value else "[bright_black]-[/bright_black]"


def render_plan(value: RecordValue, _record: Record) -> str:
    """Artist plan label without its price hint."""
    labels = {"basic": "Básico", "premium": "Premium", "enterprise": "Enterprise"}
    text = str(value or "")
    style = _BADGE_STYLES.get(text)
    label = escape(labels.get(text, text))
    return f"[{style}]{label}[/{style}]" if style else label


def titled_with(subtitle_key: str):
    """Composite cell: the value in bold over a dimmed second field."""

    def render(value: RecordValue, record: Record) -> str:
        subtitle = record.get(subtitle_key)
        main = f"[bold]{escape(str(value or '-'))}[/bold]"
        return f"{main}\n[dim]{escape(str(subtitle))}[/dim]" if subtitle else main

    return render


# === Screen configuration ===


@define(frozen=True, slots=True)
class ScreenConfig:
    """Everything a listing screen needs to present one record kind."""

    kind: str = field(validator=validators.min_len(1))
    title: str
    columns: tuple[ColumnDefinition, ...] = field(converter=tuple)
    filters: tuple[FilterDefinition, ...] = field(default=(), converter=tuple)
    searchable_fields: tuple[str, ...] = field(default=(), converter=tuple)
    page_size: int = field(default=10, validator=validators.ge(1))
    empty_message: str = EMPTY_MESSAGE
    singular: str = ""

    def __attrs_post_init__(self) -> None:
        keys = [column.key for column in self.columns]
        if len(keys) != len(set(keys)):
            raise ValueError(f"Screen {self.kind!r} declares duplicate columns")

    def column(self, key: str) -> ColumnDefinition | None:
        return next((c for c in self.columns if c.key == key), None)

    def column_by_label(self, label: str) -> ColumnDefinition | None:
        wanted = label.casefold()
        return next((c for c in self.columns if c.label.casefold() == wanted), None)

    def filter(self, key: str) -> FilterDefinition | None:
        """Filter definition owning a filter-state key (range keys included)."""
        return next((f for f in self.filters if key in f.state_keys), None)

    @property
    def sortable_keys(self) -> tuple[str, ...]:
        return tuple(c.key for c in self.columns if c.sortable)

    @property
    def filter_keys(self) -> tuple[str, ...]:
        return tuple(key for f in self.filters for key in f.state_keys)


TRACKS = ScreenConfig(
    kind="tracks",
    title="Faixas",
    singular="Faixa",
    columns=[
        ColumnDefinition("id", "ID", sortable=True),
        ColumnDefinition("title", "Faixa", sortable=True, render=titled_with("artist_name")),
        ColumnDefinition("artist_name", "Artista", sortable=True),
        ColumnDefinition("album_title", "Álbum", sortable=True),
        ColumnDefinition("duration", "Duração", sortable=True, render=render_duration),
        ColumnDefinition("streams", "Streams", sortable=True, render=render_compact),
        ColumnDefinition("status", "Status", render=render_status),
        ColumnDefinition("release_date", "Data", sortable=True, render=render_date),
    ],
    filters=[
        FilterDefinition("status", "Status", "select", CONTENT_STATUS_OPTIONS),
        FilterDefinition("release_date", "Data de lançamento", "date"),
        FilterDefinition("duration", "Duração (s)", "range"),
    ],
    searchable_fields=["title", "artist_name", "album_title"],
)

ALBUMS = ScreenConfig(
    kind="albums",
    title="Álbuns",
    singular="Álbum",
    columns=[
        ColumnDefinition("id", "ID", sortable=True),
        ColumnDefinition("title", "Álbum", sortable=True, render=titled_with("artist_name")),
        ColumnDefinition("artist_name", "Artista", sortable=True),
        ColumnDefinition("track_count", "Faixas", sortable=True),
        ColumnDefinition("total_duration", "Duração", sortable=True, render=render_duration),
        ColumnDefinition("plays", "Reproduções", sortable=True, render=render_compact),
        ColumnDefinition("release_date", "Lançamento", sortable=True, render=render_date),
        ColumnDefinition("status", "Status", render=render_status),
    ],
    filters=[
        FilterDefinition("status", "Status", "select", CONTENT_STATUS_OPTIONS),
        FilterDefinition("release_date", "Data de lançamento", "date"),
        FilterDefinition("track_count", "Faixas", "range"),
    ],
    searchable_fields=["title", "artist_name"],
)

ARTISTS = ScreenConfig(
    kind="artists",
    title="Artistas",
    singular="Artista",
    columns=[
        ColumnDefinition("id", "ID", sortable=True),
        ColumnDefinition("name", "Artista", sortable=True, render=titled_with("email")),
        ColumnDefinition("genre", "Género", sortable=True),
        ColumnDefinition("total_tracks", "Faixas", sortable=True),
        ColumnDefinition("total_revenue", "Receita", sortable=True, render=render_currency),
        ColumnDefinition("monetization_plan", "Plano", render=render_plan),
        ColumnDefinition("verified", "Verificado", render=render_verified),
        ColumnDefinition("status", "Status", render=render_status),
    ],
    filters=[
        FilterDefinition("genre", "Género", "select", GENRE_OPTIONS),
        FilterDefinition("status", "Status", "select", ACCOUNT_STATUS_OPTIONS),
        FilterDefinition("monetization_plan", "Plano", "select", ARTIST_PLAN_OPTIONS),
        FilterDefinition("verified", "Verificado", "select", YES_NO_OPTIONS),
        FilterDefinition("total_revenue", "Receita (MT)", "range"),
    ],
    searchable_fields=["name", "email", "genre"],
)

VIDEOS = ScreenConfig(
    kind="videos",
    title="Vídeos",
    singular="Vídeo",
    columns=[
        ColumnDefinition("id", "ID", sortable=True),
        ColumnDefinition("title", "Vídeo", sortable=True, render=titled_with("artist_name")),
        ColumnDefinition("artist_name", "Artista", sortable=True),
        ColumnDefinition("duration", "Duração", sortable=True, render=render_duration),
        ColumnDefinition("views", "Visualizações", sortable=True, render=render_compact),
        ColumnDefinition("revenue", "Receita", sortable=True, render=render_currency),
        ColumnDefinition("status", "Status", render=render_status),
        ColumnDefinition("upload_date", "Data", sortable=True, render=render_date),
    ],
    filters=[
        FilterDefinition("status", "Status", "select", CONTENT_STATUS_OPTIONS),
        FilterDefinition("upload_date", "Data de upload", "date"),
        FilterDefinition("views", "Visualizações", "range"),
    ],
    searchable_fields=["title", "artist_name"],
)

USERS = ScreenConfig(
    kind="users",
    title="Usuários",
    singular="Usuário",
    columns=[
        ColumnDefinition("id", "ID", sortable=True),
        ColumnDefinition("name", "Usuário", sortable=True, render=titled_with("email")),
        ColumnDefinition("plan", "Plano", render=render_status),
        ColumnDefinition("joined_date", "Registo", sortable=True, render=render_date),
        ColumnDefinition("last_active", "Último acesso", sortable=True, render=render_date),
        ColumnDefinition("total_spent", "Total gasto", sortable=True, render=render_currency),
        ColumnDefinition("status", "Status", render=render_status),
    ],
    filters=[
        FilterDefinition("plan", "Plano", "select", USER_PLAN_OPTIONS),
        FilterDefinition("status", "Status", "select", ACCOUNT_STATUS_OPTIONS),
        FilterDefinition("payment_method", "Pagamento", "select", PAYMENT_METHOD_OPTIONS),
        FilterDefinition("total_spent", "Total gasto (MT)", "range"),
    ],
    searchable_fields=["name", "email", "phone_number"],
)

TRANSACTIONS = ScreenConfig(
    kind="transactions",
    title="Transações",
    singular="Transação",
    columns=[
        ColumnDefinition("id", "ID", sortable=True),
        ColumnDefinition("user_name", "Usuário", sortable=True),
        ColumnDefinition("amount", "Valor", sortable=True, render=render_currency),
        ColumnDefinition("plan_name", "Plano"),
        ColumnDefinition("type", "Tipo", render=lambda v, _r: _type_label(v)),
        ColumnDefinition("payment_method", "Pagamento"),
        ColumnDefinition("transaction_date", "Data", sortable=True, render=render_date),
        ColumnDefinition("status", "Status", render=render_status),
    ],
    filters=[
        FilterDefinition("status", "Status", "select", TRANSACTION_STATUS_OPTIONS),
        FilterDefinition("type", "Tipo", "select", TRANSACTION_TYPE_OPTIONS),
        FilterDefinition("payment_method", "Pagamento", "select", PAYMENT_METHOD_OPTIONS),
        FilterDefinition("transaction_date", "Data", "date"),
        FilterDefinition("amount", "Valor (MT)", "range"),
    ],
    searchable_fields=["user_name", "plan_name"],
)

PLANS = ScreenConfig(
    kind="plans",
    title="Planos de monetização",
    singular="Plano",
    columns=[
        ColumnDefinition("id", "ID", sortable=True),
        ColumnDefinition("name", "Plano", sortable=True),
        ColumnDefinition("price", "Preço", sortable=True, render=render_currency),
        ColumnDefinition("subscribers", "Assinantes", sortable=True, render=render_compact),
        ColumnDefinition(
            "monthly_revenue", "Receita mensal", sortable=True, render=render_currency
        ),
        ColumnDefinition("status", "Status", render=render_status),
    ],
    filters=[FilterDefinition("status", "Status", "select", PLAN_STATUS_OPTIONS)],
    searchable_fields=["name", "features"],
)


def _type_label(value: RecordValue) -> str:
    labels = {option.value: option.label for option in TRANSACTION_TYPE_OPTIONS}
    return escape(labels.get(str(value), str(value or "-")))


SCREENS: Mapping[str, ScreenConfig] = {
    screen.kind: screen
    for screen in (TRACKS, ALBUMS, ARTISTS, VIDEOS, USERS, TRANSACTIONS, PLANS)
}

# Kinds whose records can be created, edited and deleted from the console
EDITABLE_KINDS: Sequence[str] = ("artists", "albums", "tracks", "videos", "users")


def get_screen(kind: str) -> ScreenConfig:
    """Look up a screen by record kind."""
    try:
        return SCREENS[kind]
    except KeyError:
        known = ", ".join(SCREENS)
        raise ValidationError(f"Unknown record kind {kind!r}; expected one of: {known}") from None
