"""Pricing sources.

A source turns an external pricing definition into a validated PricingTable
and reports when that definition last changed.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Protocol, runtime_checkable

import yaml
from pydantic import ValidationError

from checkoutapi.errors import PricingSourceError
from checkoutapi.models import PricingTable

logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}


@runtime_checkable
class PricingSource(Protocol):
    """Anything the catalog can load rules from."""

    def load(self) -> PricingTable:
        """Read and validate the full rule set.

        Raises:
            PricingSourceError: If the source is unreadable or malformed
        """
        ...

    def modified_at(self) -> float:
        """Timestamp of the last change to the source.

        Raises:
            PricingSourceError: If the timestamp cannot be determined
        """
        ...


class FilePricingSource:
    """Pricing rules stored in a JSON or YAML file.

    The format is picked from the file suffix; anything that is not
    `.yaml`/`.yml` is parsed as JSON:

        {
          "A": {"unitPrice": 50, "specialPrice": {"quantity": 3, "price": 130}},
          "C": {"unitPrice": 20}
        }
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"FilePricingSource({str(self.path)!r})"

    def load(self) -> PricingTable:
        try:
            raw = self.path.read_bytes()
        except OSError as e:
            raise PricingSourceError(f"Cannot read pricing file {self.path}: {e}") from e

        try:
            if self.path.suffix.lower() in YAML_SUFFIXES:
                return PricingTable.model_validate(yaml.safe_load(raw))
            return PricingTable.model_validate_json(raw)
        except (ValidationError, yaml.YAMLError) as e:
            raise PricingSourceError(f"Failed to parse pricing file {self.path}: {e}") from e

    def modified_at(self) -> float:
        try:
            return os.stat(self.path).st_mtime
        except OSError as e:
            raise PricingSourceError(f"Cannot stat pricing file {self.path}: {e}") from e
