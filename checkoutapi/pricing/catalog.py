"""Pricing catalog: the current SKU -> rule snapshot.

The catalog is read on every scan and total, and replaced wholesale when the
pricing source changes. Readers share a lock; a reload parses the source
outside the lock and only holds the write side to swap the snapshot in.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Mapping

from checkoutapi.core.locks import ReadWriteLock
from checkoutapi.errors import CatalogLoadError, CatalogReloadError, PricingSourceError
from checkoutapi.models import PricingRule, PricingTable
from checkoutapi.pricing.source import PricingSource

logger = logging.getLogger(__name__)


class PricingCatalog:
    """Versioned, atomically replaceable pricing rules.

    Example:
        >>> catalog = PricingCatalog(FilePricingSource("configs/pricing.json"))
        >>> catalog.get_rule("A").unit_price
        50
        >>> catalog.refresh_if_changed()  # True only if the file changed and parsed
        False
    """

    def __init__(self, source: PricingSource):
        """Load the initial rule set.

        Args:
            source: Where rules are read from

        Raises:
            CatalogLoadError: If the source cannot be read or parsed
        """
        self.source = source
        self._lock = ReadWriteLock()
        self._reload_lock = threading.Lock()
        self._rules: Mapping[str, PricingRule] = MappingProxyType({})
        self._source_mtime: float = 0.0
        self._version = 0
        self._loaded_at: datetime | None = None

        try:
            self._load()
        except PricingSourceError as e:
            raise CatalogLoadError(f"initial pricing load failed: {e}") from e

    @property
    def version(self) -> int:
        """Number of successful loads, starting at 1 for the initial load."""
        with self._lock.read_locked():
            return self._version

    @property
    def loaded_at(self) -> datetime | None:
        with self._lock.read_locked():
            return self._loaded_at

    def get_rules(self) -> Mapping[str, PricingRule]:
        """Return the current rules as a read-only mapping.

        The mapping is never modified after it is published, so callers may
        keep and iterate it without further locking.
        """
        with self._lock.read_locked():
            return self._rules

    def get_rule(self, sku: str) -> PricingRule | None:
        return self.get_rules().get(sku)

    def reload(self) -> PricingTable:
        """Re-read the source and swap in the new rules.

        Returns:
            The table that is now active

        Raises:
            CatalogReloadError: If the source cannot be read or parsed; the
                previous rules stay active
        """
        try:
            return self._load()
        except PricingSourceError as e:
            raise CatalogReloadError(f"pricing reload failed, keeping version {self.version}: {e}") from e

    def refresh_if_changed(self) -> bool:
        """Reload when the source reports a change since the last load.

        Failures are logged and never clear the current rules.

        Returns:
            True if new rules were swapped in
        """
        try:
            mtime = self.source.modified_at()
        except PricingSourceError as e:
            logger.warning(f"Could not check pricing source, keeping old rules: {e}")
            return False

        with self._lock.read_locked():
            last_mtime = self._source_mtime
        if mtime <= last_mtime:
            return False

        logger.info(f"Change detected in {self.source!r}, attempting to reload")
        try:
            self.reload()
        except CatalogReloadError as e:
            logger.error(f"Error reloading pricing rules: {e}")
            return False
        return True

    def _load(self) -> PricingTable:
        # Serialises loaders only; readers keep the previous snapshot meanwhile
        with self._reload_lock:
            # mtime is taken before reading so a write racing the read is picked up next cycle
            mtime = self.source.modified_at()
            table = self.source.load()
            snapshot = MappingProxyType(dict(table.root))

            with self._lock.write_locked():
                self._rules = snapshot
                self._source_mtime = mtime
                self._version += 1
                self._loaded_at = datetime.now(timezone.utc)
                version = self._version

        logger.info(f"Loaded {len(snapshot)} pricing rules (version {version})")
        return table
