"""Test doubles and file helpers shared across the test suite."""

from __future__ import annotations

import json
import os
from pathlib import Path
from types import MappingProxyType

from checkoutapi.models import PricingRule

REFERENCE_RULES = {
    "A": {"unitPrice": 50, "specialPrice": {"quantity": 3, "price": 130}},
    "B": {"unitPrice": 30, "specialPrice": {"quantity": 2, "price": 45}},
    "C": {"unitPrice": 20},
    "D": {"unitPrice": 15},
}


class StubPricer:
    """Rules provider whose rules a test can swap at will."""

    def __init__(self, rules: dict[str, dict]):
        self.set_rules(rules)

    def set_rules(self, rules: dict[str, dict]) -> None:
        self._rules = MappingProxyType(
            {sku: PricingRule.model_validate(rule) for sku, rule in rules.items()}
        )

    def get_rules(self):
        return self._rules


def write_pricing_file(path: Path, rules: dict | str, bump_mtime: bool = True) -> Path:
    """Write rules (or raw text) to `path`.

    An existing file gets its mtime pushed 10s forward so the change is
    detected regardless of filesystem timestamp resolution.
    """
    previous = path.stat().st_mtime if path.exists() else None
    path.write_text(rules if isinstance(rules, str) else json.dumps(rules))
    if bump_mtime and previous is not None:
        later = previous + 10
        os.utime(path, (later, later))
    return path
