"""ManageContent use case: create, edit and delete catalog and user records.

Form input arrives as strings keyed by entity field name. Values are parsed
against the entity's attrs field types, validated by constructing the entity,
joined with artist/album names where the record shows them, and persisted
through the unit of work. Every outcome is published to the
``NotificationCenter`` the way the admin screens show toasts.
"""

from collections.abc import Mapping
from datetime import date, datetime
import types
from typing import Any, Literal, Union, get_args, get_origin

import attrs
from attrs import define, field

from eimusic.application.notifications import NotificationCenter
from eimusic.application.screens import EDITABLE_KINDS, get_screen
from eimusic.config import get_logger
from eimusic.domain.entities import Album, Artist, Track, User, Video
from eimusic.domain.errors import NotFoundError, ValidationError
from eimusic.domain.repositories import UnitOfWorkProtocol

logger = get_logger(__name__)

ContentAction = Literal["create", "update", "delete"]

ENTITY_TYPES: dict[str, type] = {
    "artists": Artist,
    "albums": Album,
    "tracks": Track,
    "videos": Video,
    "users": User,
}

# Fields filled in by the store or derived from other records
READ_ONLY_FIELDS = frozenset({"id", "created_at", "artist_name", "album_title"})

_TRUE_WORDS = frozenset({"true", "1", "yes", "sim", "y", "s"})
_FALSE_WORDS = frozenset({"false", "0", "no", "nao", "não", "n"})

_ACTION_VERBS = {
    "create": ("criado", "criada"),
    "update": ("atualizado", "atualizada"),
    "delete": ("excluído", "excluída"),
}
_FEMININE_KINDS = frozenset({"tracks"})


def editable_fields(kind: str) -> tuple[str, ...]:
    """Field names accepted from forms for a record kind."""
    entity_type = _entity_type(kind)
    return tuple(
        a.name for a in attrs.fields(entity_type) if a.name not in READ_ONLY_FIELDS
    )


def required_fields(kind: str) -> tuple[str, ...]:
    """Fields without a default that must be given on creation."""
    entity_type = _entity_type(kind)
    return tuple(
        a.name
        for a in attrs.fields(entity_type)
        if a.default is attrs.NOTHING and a.name not in READ_ONLY_FIELDS
    )


def _entity_type(kind: str) -> type:
    try:
        return ENTITY_TYPES[kind]
    except KeyError:
        editable = ", ".join(EDITABLE_KINDS)
        raise ValidationError(
            f"Records of kind {kind!r} cannot be edited; editable kinds: {editable}"
        ) from None


def _unwrap_optional(annotation: Any) -> tuple[Any, bool]:
    if get_origin(annotation) in (Union, types.UnionType):
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        optional = len(args) < len(get_args(annotation))
        if len(args) == 1:
            return args[0], optional
    return annotation, False


def parse_field_value(attribute: attrs.Attribute, raw: str) -> Any:
    """Convert one form string to the type an entity field declares.

    Raises:
        ValidationError: If the string does not parse as that type
    """
    annotation, optional = _unwrap_optional(attribute.type)
    text = raw.strip()

    if text == "" and optional:
        return None

    try:
        if annotation is bool:
            lowered = text.casefold()
            if lowered in _TRUE_WORDS:
                return True
            if lowered in _FALSE_WORDS:
                return False
            raise ValueError(f"not a yes/no value: {raw!r}")
        if annotation is int:
            return int(text)
        if annotation is float:
            return float(text.replace(",", "."))
        if annotation is datetime:
            return datetime.fromisoformat(text)
        if annotation is date:
            return date.fromisoformat(text)
    except ValueError as e:
        raise ValidationError(f"Invalid value for {attribute.name}: {e}") from e

    # Literals and plain strings stay as text; entity validators check them
    return text


def parse_form(kind: str, raw: Mapping[str, str]) -> dict[str, Any]:
    """Parse a form into typed entity field values.

    Raises:
        ValidationError: On unknown or read-only fields and unparseable values
    """
    entity_type = _entity_type(kind)
    attributes = {a.name: a for a in attrs.fields(entity_type)}
    allowed = set(editable_fields(kind))

    unknown = sorted(set(raw) - allowed)
    if unknown:
        raise ValidationError(
            f"Unknown field(s) for {kind}: {', '.join(unknown)}. "
            f"Editable fields: {', '.join(sorted(allowed))}"
        )

    return {name: parse_field_value(attributes[name], value) for name, value in raw.items()}


def build_entity(kind: str, values: Mapping[str, Any]) -> Any:
    """Construct an entity, turning attrs validation failures into ValidationError."""
    entity_type = _entity_type(kind)
    missing = [name for name in required_fields(kind) if name not in values]
    if missing:
        raise ValidationError(f"Missing required field(s): {', '.join(missing)}")
    try:
        return entity_type(**values)
    except (TypeError, ValueError) as e:
        raise ValidationError(str(e)) from e


def _apply_changes(entity: Any, changes: Mapping[str, Any]) -> Any:
    try:
        return attrs.evolve(entity, **changes)
    except (TypeError, ValueError) as e:
        raise ValidationError(str(e)) from e


@define(frozen=True, slots=True)
class CreateRecordCommand:
    kind: str
    values: dict[str, str] = field(factory=dict)


@define(frozen=True, slots=True)
class UpdateRecordCommand:
    kind: str
    record_id: int
    changes: dict[str, str] = field(factory=dict)


@define(frozen=True, slots=True)
class DeleteRecordCommand:
    kind: str
    record_id: int


@define(frozen=True, slots=True)
class ContentResult:
    """Outcome of one content operation."""

    kind: str
    action: ContentAction
    record_id: int | None
    entity: Any = None


@define(slots=True)
class ManageContentUseCase:
    """Create, update and delete records of the editable kinds."""

    notifications: NotificationCenter = field(factory=NotificationCenter)

    async def get(self, kind: str, record_id: int, uow: UnitOfWorkProtocol) -> Any:
        """Fetch one active record.

        Raises:
            NotFoundError: If the record is missing or deleted
        """
        get_screen(kind)
        async with uow:
            return await uow.get_repository(kind).get_by_id(record_id)

    async def create(
        self, command: CreateRecordCommand, uow: UnitOfWorkProtocol
    ) -> ContentResult:
        try:
            values = parse_form(command.kind, command.values)
            async with uow:
                values = await self._join_names(command.kind, values, uow)
                if command.kind == "users":
                    await self._check_unique_email(values.get("email"), None, uow)
                entity = build_entity(command.kind, values)
                created = await uow.get_repository(command.kind).create(entity)
        except (ValidationError, NotFoundError) as e:
            self._notify_failure(command.kind, "create", e)
            raise

        logger.info("Created record", kind=command.kind, record_id=created.id)
        self._notify_success(command.kind, "create", _display_name(created))
        return ContentResult(command.kind, "create", created.id, created)

    async def update(
        self, command: UpdateRecordCommand, uow: UnitOfWorkProtocol
    ) -> ContentResult:
        try:
            changes = parse_form(command.kind, command.changes)
            if not changes:
                raise ValidationError("Nothing to update: no fields given")
            async with uow:
                repo = uow.get_repository(command.kind)
                current = await repo.get_by_id(command.record_id)
                changes = await self._join_names(command.kind, changes, uow)
                if command.kind == "users" and "email" in changes:
                    await self._check_unique_email(
                        changes["email"], command.record_id, uow
                    )
                # Validate the full entity before touching the store
                _apply_changes(current, changes)
                updated = await repo.update(command.record_id, changes)
        except (ValidationError, NotFoundError) as e:
            self._notify_failure(command.kind, "update", e)
            raise

        logger.info(
            "Updated record",
            kind=command.kind,
            record_id=command.record_id,
            fields=", ".join(sorted(changes)),
        )
        self._notify_success(command.kind, "update", _display_name(updated))
        return ContentResult(command.kind, "update", command.record_id, updated)

    async def delete(
        self, command: DeleteRecordCommand, uow: UnitOfWorkProtocol
    ) -> ContentResult:
        try:
            _entity_type(command.kind)
            async with uow:
                await uow.get_repository(command.kind).soft_delete(command.record_id)
        except (ValidationError, NotFoundError) as e:
            self._notify_failure(command.kind, "delete", e)
            raise

        logger.info("Deleted record", kind=command.kind, record_id=command.record_id)
        self._notify_success(command.kind, "delete", f"ID {command.record_id}")
        return ContentResult(command.kind, "delete", command.record_id)

    async def _join_names(
        self, kind: str, values: dict[str, Any], uow: UnitOfWorkProtocol
    ) -> dict[str, Any]:
        """Resolve artist and album ids into the names shown in listings."""
        joined = dict(values)
        if kind in ("albums", "tracks", "videos") and values.get("artist_id") is not None:
            artist = await uow.get_artist_repository().find_by_id(values["artist_id"])
            if artist is None:
                raise ValidationError(f"Artist {values['artist_id']} does not exist")
            joined["artist_name"] = artist.name
        if kind == "tracks" and "album_id" in values:
            album_id = values["album_id"]
            if album_id is None:
                joined["album_title"] = None
            else:
                album = await uow.get_album_repository().find_by_id(album_id)
                if album is None:
                    raise ValidationError(f"Album {album_id} does not exist")
                joined["album_title"] = album.title
        return joined

    async def _check_unique_email(
        self, email: str | None, own_id: int | None, uow: UnitOfWorkProtocol
    ) -> None:
        if not email:
            return
        wanted = email.strip().casefold()
        for user in await uow.get_user_repository().list_active():
            if user.email.casefold() == wanted and user.id != own_id:
                raise ValidationError(f"A user with email {email} already exists")

    def _notify_success(self, kind: str, action: ContentAction, name: str) -> None:
        screen = get_screen(kind)
        masculine, feminine = _ACTION_VERBS[action]
        verb = feminine if kind in _FEMININE_KINDS else masculine
        singular = screen.singular or screen.title
        self.notifications.success(f"{singular} {verb} com sucesso", name)

    def _notify_failure(self, kind: str, action: ContentAction, error: Exception) -> None:
        logger.warning(
            "Content operation failed", kind=kind, action=action, error=str(error)
        )
        title = "Erro ao excluir" if action == "delete" else "Erro ao salvar"
        self.notifications.error(title, str(error))


def _display_name(entity: Any) -> str:
    return getattr(entity, "title", None) or getattr(entity, "name", None) or ""
