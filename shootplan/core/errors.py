"""Exception taxonomy for checklist operations.

Every error raised by the checklist stores, engine and editor derives from
``ChecklistError`` so the web layer can translate them in one place:

    - ``ValidationError``: bad input caught locally (e.g. an empty name).
      Never reaches the document store.
    - ``NotFoundError``: the target of an update does not exist.
    - ``StoreError``: the document store is unreachable or rejected the write.
    - ``ConflictError``: reserved for version-checked writes. Nothing raises
      it yet; last write wins.
    - ``StateError``: an engine operation was called in the wrong state,
      e.g. a toggle before the checklist finished loading.
"""


class ChecklistError(Exception):
    """Base class for all checklist errors."""


class ValidationError(ChecklistError):
    """Input rejected before any remote call was made."""


class NotFoundError(ChecklistError):
    """A referenced document, item or domain does not exist."""


class StoreError(ChecklistError):
    """The document store failed to complete an operation."""


class ConflictError(ChecklistError):
    """A write lost against a newer version of the same document."""


class StateError(ChecklistError):
    """The operation is not valid in the engine's current state."""
