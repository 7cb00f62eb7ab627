import logging
from collections.abc import Mapping
from pathlib import Path

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from cipher_identifier.core.exceptions import ConfigurationError
from cipher_identifier.models.schemas import CipherTypeMetadata
from cipher_identifier.services.profiles.store import RESOURCES_DIR

logger = logging.getLogger(__name__)

DEFAULT_CIPHER_TYPES_PATH = RESOURCES_DIR / "cipher_types.json"

_catalog_adapter = TypeAdapter(dict[str, CipherTypeMetadata])


class CipherCatalog:
    """
    Human-facing metadata about each cipher.

    Only presenters read this; scoring never depends on it.
    """

    def __init__(self, entries: Mapping[str, CipherTypeMetadata] | None = None):
        self._entries = dict(entries or {})

    def get(self, cipher_name: str) -> CipherTypeMetadata:
        """Metadata for a cipher, empty when unknown."""
        return self._entries.get(cipher_name, CipherTypeMetadata())

    def primary_type(self, cipher_name: str) -> str:
        """First listed type of a cipher, or "unknown"."""
        return self.get(cipher_name).primary_type

    def __contains__(self, cipher_name: object) -> bool:
        return cipher_name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    @classmethod
    def from_json(cls, path: str | Path) -> "CipherCatalog":
        """
        Load cipher metadata from a JSON file.

        Raises:
            ConfigurationError: If the file is missing or malformed
        """
        path = Path(path)
        try:
            raw = path.read_text(encoding="utf-8")
            entries = _catalog_adapter.validate_json(raw)
        except (OSError, PydanticValidationError) as e:
            raise ConfigurationError(
                f"Cannot load cipher metadata from {path}: {e}",
                {"source": str(path)},
            ) from e
        return cls(entries)

    @classmethod
    def load_or_empty(cls, path: str | Path | None = None) -> "CipherCatalog":
        """Load metadata, degrading to an empty catalog when unavailable."""
        try:
            return cls.from_json(path or DEFAULT_CIPHER_TYPES_PATH)
        except ConfigurationError as e:
            logger.warning("%s; cipher types will show as unknown", e.message)
            return cls()
