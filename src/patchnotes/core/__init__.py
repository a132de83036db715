"""Core data models and operations for patch notes generation.

Exports:
    LocaleEntry: Editable per-locale title and messages.
    PatchNotesDocument: The versioned multi-language output document.
    PatchNotesBuilder: Editing session owning the locale entries.
    OperationResult: Outcome of a builder workflow action.
    TranslationError: Base exception for translation failures.
    TranslationProvider: Abstract base for machine translation backends.
    ValidationError: Base exception for unmet operation preconditions.
"""

from .builder import (
    EmptySourceError,
    NoTargetsError,
    OperationResult,
    PatchNotesBuilder,
    ValidationError,
)
from .draft_store import Draft, DraftFormatError, load_draft, save_draft
from .patch_notes import (
    LocaleEntry,
    PatchNotesDocument,
    UpdateDetail,
    build_document,
    document_path,
    document_to_json,
    is_valid_date,
    split_to_lines,
    today_string,
    version_to_file_name,
    write_document,
)
from .translation_provider_base import (
    EmptyInputError,
    MalformedResponseError,
    MissingCredentialError,
    ServiceError,
    TranslationError,
    TranslationProvider,
)

__all__ = [
    "Draft",
    "DraftFormatError",
    "EmptyInputError",
    "EmptySourceError",
    "LocaleEntry",
    "MalformedResponseError",
    "MissingCredentialError",
    "NoTargetsError",
    "OperationResult",
    "PatchNotesBuilder",
    "PatchNotesDocument",
    "ServiceError",
    "TranslationError",
    "TranslationProvider",
    "UpdateDetail",
    "ValidationError",
    "build_document",
    "document_path",
    "document_to_json",
    "is_valid_date",
    "load_draft",
    "save_draft",
    "split_to_lines",
    "today_string",
    "version_to_file_name",
    "write_document",
]
