"""Unit tests for checkout sessions.

Tests scanning, totals with multi-buy offers, price changes between scans
and concurrent scans on one session.
"""

from __future__ import annotations

import itertools
import random
from concurrent.futures import ThreadPoolExecutor

import pytest

from checkoutapi.checkout import CheckoutSession, RulesProvider
from checkoutapi.errors import UnknownSKUError


def checkout_total(pricer, skus: list[str]) -> int:
    session = CheckoutSession(pricer)
    for sku in skus:
        session.scan(sku)
    return session.get_total_price()


class TestScan:
    """Tests for CheckoutSession.scan()."""

    def test_scan_known_sku(self, pricer):
        session = CheckoutSession(pricer)

        session.scan("A")

        assert session.scanned_items() == {"A": 1}

    def test_repeated_scans_accumulate(self, pricer):
        session = CheckoutSession(pricer)

        for _ in range(3):
            session.scan("B")
        session.scan("D")

        assert session.scanned_items() == {"B": 3, "D": 1}

    def test_unknown_sku_raises_and_leaves_state(self, pricer):
        session = CheckoutSession(pricer)
        session.scan("A")
        session.scan("B")

        with pytest.raises(UnknownSKUError) as exc_info:
            session.scan("Z")

        assert exc_info.value.sku == "Z"
        assert str(exc_info.value) == "sku 'Z' not found in pricing rules"
        assert session.scanned_items() == {"A": 1, "B": 1}

    def test_sku_lookup_is_case_sensitive(self, pricer):
        session = CheckoutSession(pricer)

        with pytest.raises(UnknownSKUError):
            session.scan("a")

    def test_scan_validates_against_current_rules(self, pricer, reference_rules):
        session = CheckoutSession(pricer)
        pricer.set_rules({**reference_rules, "E": {"unitPrice": 5}})

        session.scan("E")

        assert session.scanned_items() == {"E": 1}

    def test_scanned_items_is_a_copy(self, pricer):
        session = CheckoutSession(pricer)
        session.scan("A")

        items = session.scanned_items()
        items["A"] = 100

        assert session.scanned_items() == {"A": 1}


class TestTotalPrice:
    """Tests for CheckoutSession.get_total_price()."""

    @pytest.mark.parametrize(
        "skus, expected",
        [
            ([], 0),
            (["A", "B", "C"], 100),
            (["A", "A", "A"], 130),
            (["A", "A", "A", "A"], 180),
            (["A", "B", "A", "B", "A"], 175),
            (["B", "A", "B"], 95),
            (["C", "B", "A", "B", "A", "A", "D"], 210),
            (["C", "C", "D"], 55),
        ],
    )
    def test_reference_baskets(self, pricer, skus, expected):
        assert checkout_total(pricer, skus) == expected

    def test_invalid_sku_stops_the_basket(self, pricer):
        session = CheckoutSession(pricer)
        session.scan("A")

        with pytest.raises(UnknownSKUError):
            session.scan("Z")

    def test_new_session_totals_zero(self, pricer):
        assert CheckoutSession(pricer).get_total_price() == 0

    def test_total_is_independent_of_scan_order(self, pricer):
        basket = ["A", "A", "A", "A", "B", "B", "B", "C", "D", "D"]
        expected = checkout_total(pricer, basket)
        rng = random.Random(7)

        for _ in range(25):
            shuffled = basket[:]
            rng.shuffle(shuffled)
            assert checkout_total(pricer, shuffled) == expected

    def test_every_permutation_of_small_basket(self, pricer):
        totals = {checkout_total(pricer, list(p)) for p in itertools.permutations("AABBC")}

        assert totals == {165}

    def test_total_uses_current_prices(self, pricer, reference_rules):
        session = CheckoutSession(pricer)
        for sku in ["A", "A", "A", "C"]:
            session.scan(sku)
        assert session.get_total_price() == 150

        reference_rules["A"] = {"unitPrice": 40}
        pricer.set_rules(reference_rules)

        assert session.get_total_price() == 140

    def test_dropped_sku_priced_with_rule_from_its_last_scan(self, pricer, reference_rules):
        session = CheckoutSession(pricer)
        for sku in ["A", "A", "A", "A", "C"]:
            session.scan(sku)

        pricer.set_rules({"C": reference_rules["C"]})

        assert session.get_total_price() == 180 + 20

    def test_get_total_does_not_change_state(self, pricer):
        session = CheckoutSession(pricer)
        session.scan("B")
        session.scan("B")

        assert session.get_total_price() == 45
        assert session.get_total_price() == 45
        assert session.scanned_items() == {"B": 2}


class TestSessionIdentity:
    """Tests for session ids."""

    def test_ids_are_unique(self, pricer):
        ids = {CheckoutSession(pricer).id for _ in range(1000)}

        assert len(ids) == 1000

    def test_get_id_matches_id(self, pricer):
        session = CheckoutSession(pricer)

        assert session.get_id() == session.id
        assert session.id

    def test_explicit_id(self, pricer):
        assert CheckoutSession(pricer, session_id="fixed").id == "fixed"

    def test_stub_satisfies_rules_provider(self, pricer, catalog):
        assert isinstance(pricer, RulesProvider)
        assert isinstance(catalog, RulesProvider)


class TestConcurrentScans:
    """Tests for scanning the same session from many threads."""

    def test_no_scans_are_lost(self, pricer):
        session = CheckoutSession(pricer)

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(lambda _: session.scan("A"), range(2000)))

        assert session.scanned_items() == {"A": 2000}

    def test_totals_during_scans_are_consistent(self, pricer):
        session = CheckoutSession(pricer)

        def scan_and_total(i):
            session.scan("D")
            return session.get_total_price()

        with ThreadPoolExecutor(max_workers=8) as pool:
            totals = list(pool.map(scan_and_total, range(500)))

        assert all(t % 15 == 0 and 15 <= t <= 500 * 15 for t in totals)
        assert session.get_total_price() == 500 * 15
