"""Register lookup records from YAML seed files.

Each type's data lives in ``<data_root>/<table name>.yml`` or in every
``*.yml`` file of the directory ``<data_root>/<table name>/``. Files hold a
sequence of mappings; entries may name an STI subtype in the discriminator
attribute.

Usage:
    store = YamlStore("data/lookups")
    store.load(Animal)      # reads data/lookups/animals.yml
    catalog.lock_all()
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from lookupgraph.config import RegistrySettings
from lookupgraph.core.errors import AmbiguousSource, LoaderError
from lookupgraph.registry.storage import LoadPolicy

if TYPE_CHECKING:
    from lookupgraph.registry.lookup_type import LookupType

logger = logging.getLogger(__name__)


def read_entries(path: Path) -> list[Mapping[str, Any]]:
    """Parse one seed file.

    Args:
        path: YAML file holding a sequence of mappings.

    Returns:
        The entries; an empty file yields no entries.

    Raises:
        LoaderError: If the document is not a sequence of mappings.
        yaml.YAMLError: If the file is not valid YAML.
    """
    document = yaml.safe_load(path.read_text(encoding="utf-8"))
    if document is None:
        logger.warning("Seed file %s is empty", path)
        return []
    if not isinstance(document, list) or not all(isinstance(e, Mapping) for e in document):
        raise LoaderError(f"{path} must contain a sequence of mappings")
    return document


class YamlStore:
    """Locates and registers seed files for lookup types.

    Args:
        data_root: Directory holding seed files (defaults to ``settings.data_root``).
        settings: Settings to read ``data_root`` from when not given.
    """

    def __init__(self, data_root: str | Path | None = None, settings: RegistrySettings | None = None):
        root = data_root if data_root is not None else (settings or RegistrySettings()).data_root
        self._data_root = Path(root) if root is not None else None

    @property
    def data_root(self) -> Path | None:
        return self._data_root

    def files_for(self, lookup_type: LookupType) -> list[Path]:
        """Seed files for a type, in load order.

        Raises:
            LoaderError: If no data root is configured.
            AmbiguousSource: If both the file and the directory exist.
        """
        if self._data_root is None:
            raise LoaderError(
                f"a data root must be configured before loading {lookup_type.name} from files"
            )
        basename = lookup_type.table_name
        directory = self._data_root / basename
        inferred_file = self._data_root / f"{basename}.yml"
        if directory.is_dir():
            if inferred_file.exists():
                raise AmbiguousSource(lookup_type.name, inferred_file, directory)
            return sorted(directory.glob("*.yml"))
        return [inferred_file]

    def load(self, lookup_type: LookupType) -> int:
        """Queue every seed file of a type as a deferred STI-aware batch.

        Errors in the entries surface when the type locks.

        Returns:
            Number of entries queued.

        Raises:
            LoaderError, AmbiguousSource: See ``files_for``.
            FileNotFoundError: If the inferred file is missing.
            EnumLocked: If the type is already locked.
        """
        total = 0
        for path in self.files_for(lookup_type):
            entries = read_entries(path)
            total += lookup_type.register_many(
                entries,
                policy=LoadPolicy.DEFERRED,
                allow_type_discriminator=True,
            )
            logger.debug("Queued %d %s entries from %s", len(entries), lookup_type.name, path)
        return total
