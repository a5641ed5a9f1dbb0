"""Domain-level exceptions shared by use cases and adapters."""


class EiMusicError(Exception):
    """Base class for errors raised by EiMusic code."""


class NotFoundError(EiMusicError):
    """Raised when an entity id does not resolve to an active record."""

    def __init__(self, kind: str, entity_id: int) -> None:
        super().__init__(f"{kind} with ID {entity_id} not found")
        self.kind = kind
        self.entity_id = entity_id


class ValidationError(EiMusicError):
    """Raised for invalid user input (malformed filters, bad form fields)."""


class MediaUploadError(EiMusicError):
    """Raised when the hosted media service rejects or cannot take an upload."""
