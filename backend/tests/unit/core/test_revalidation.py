"""
Unit tests for the listing cache and the path-revalidated signal.
"""

from unittest.mock import Mock

import pytest

from fincontrol.core import revalidation
from fincontrol.core.revalidation import (
    ListingCache,
    get_listing_cache_ttl,
    listing_cache,
    path_revalidated,
    revalidate_path,
)


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class TestListingCache:
    def test_loader_runs_once_within_ttl(self):
        clock = FakeClock()
        cache = ListingCache(ttl_seconds=30, clock=clock)
        loader = Mock(return_value=["row"])

        assert cache.get_or_load("/dashboard/invoices", loader) == ["row"]
        clock.now += 10
        assert cache.get_or_load("/dashboard/invoices", loader) == ["row"]

        loader.assert_called_once()

    def test_entry_expires_after_ttl(self):
        clock = FakeClock()
        cache = ListingCache(ttl_seconds=30, clock=clock)
        loader = Mock(side_effect=[["old"], ["new"]])

        cache.get_or_load("/dashboard/invoices", loader)
        clock.now += 31

        assert cache.get_or_load("/dashboard/invoices", loader) == ["new"]

    def test_zero_ttl_disables_caching(self):
        cache = ListingCache(ttl_seconds=0)
        loader = Mock(return_value=[])

        cache.get_or_load("/dashboard/customers", loader)
        cache.get_or_load("/dashboard/customers", loader)

        assert loader.call_count == 2
        assert "/dashboard/customers" not in cache

    def test_invalidate_only_drops_that_path(self):
        cache = ListingCache(ttl_seconds=30)
        cache.get_or_load("/dashboard/invoices", lambda: [1])
        cache.get_or_load("/dashboard/customers", lambda: [2])

        cache.invalidate("/dashboard/invoices")

        assert "/dashboard/invoices" not in cache
        assert "/dashboard/customers" in cache


class TestRevalidatePath:
    def test_signal_drops_shared_cache_entry(self):
        listing_cache.get_or_load("/dashboard/invoices", lambda: ["stale"])

        revalidate_path("/dashboard/invoices")

        assert "/dashboard/invoices" not in listing_cache

    def test_signal_reaches_other_receivers(self):
        received = []

        def receiver(sender, **kwargs):
            received.append(sender)

        with path_revalidated.connected_to(receiver):
            revalidate_path("/dashboard/customers")

        assert received == ["/dashboard/customers"]

    def test_failing_receiver_is_logged_not_raised(self, monkeypatch):
        warning = Mock()
        monkeypatch.setattr(revalidation.logger, "warning", warning)

        def broken(sender, **kwargs):
            raise RuntimeError("purge failed")

        with path_revalidated.connected_to(broken):
            revalidate_path("/dashboard/invoices")

        warning.assert_called_once()
        assert warning.call_args.kwargs["extra"]["context"]["path"] == "/dashboard/invoices"


class TestListingCacheTtl:
    @pytest.mark.parametrize(
        "raw,expected", [("5", 5.0), ("0", 0.0), ("-3", 0.0), ("junk", 30.0)]
    )
    def test_ttl_from_environment(self, monkeypatch, raw, expected):
        monkeypatch.setenv("LISTING_CACHE_TTL_SECONDS", raw)

        assert get_listing_cache_ttl() == expected

    def test_default_ttl(self, monkeypatch):
        monkeypatch.delenv("LISTING_CACHE_TTL_SECONDS", raising=False)

        assert get_listing_cache_ttl() == 30.0
