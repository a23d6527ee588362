"""Tests for the discovery listing and search filter."""

from uuid import uuid4

import pytest

from snap_market.domain.errors import FetchFailureError
from snap_market.domain.models import ROLE_PHOTOGRAPHER
from snap_market.services.listing import ListingService, filter_photographers
from tests.conftest import (
    InMemoryListingRepository,
    InMemoryPhotographerRepository,
    InMemoryProfileRepository,
)


@pytest.fixture
def listing() -> tuple[ListingService, InMemoryListingRepository]:
    profiles = InMemoryProfileRepository()
    photographers = InMemoryPhotographerRepository()
    ada = profiles.add("Ada Lens", ROLE_PHOTOGRAPHER)
    bo = profiles.add("Bo Shutter", ROLE_PHOTOGRAPHER)
    cy = profiles.add("Cy Hidden", ROLE_PHOTOGRAPHER)
    photographers.put(ada.id, specialty="Wedding", city="Boston")
    photographers.put(bo.id, specialty="Portrait", city="Chicago")
    photographers.put(cy.id, specialty="Wedding", city="Boston", available=False)
    repository = InMemoryListingRepository(profiles, photographers)
    return ListingService(repository), repository


def _names(listings) -> list[str]:
    return sorted(item.full_name for item in listings)


def test_only_available_photographers_are_listed(listing) -> None:
    service, _ = listing

    assert _names(service.list_available_photographers()) == ["Ada Lens", "Bo Shutter"]


def test_empty_query_returns_full_available_set(listing) -> None:
    service, _ = listing
    available = service.list_available_photographers()

    assert filter_photographers(available, "") == available
    assert filter_photographers(available, "   ") == available
    assert filter_photographers(available, None) == available


def test_query_matches_specialty_case_insensitively(listing) -> None:
    service, _ = listing
    available = service.list_available_photographers()

    assert _names(filter_photographers(available, "wedding")) == ["Ada Lens"]


def test_query_matches_name_and_city(listing) -> None:
    service, _ = listing
    available = service.list_available_photographers()

    assert _names(filter_photographers(available, "SHUTTER")) == ["Bo Shutter"]
    assert _names(filter_photographers(available, "chic")) == ["Bo Shutter"]


def test_unavailable_photographer_never_matches(listing) -> None:
    service, _ = listing
    available = service.list_available_photographers()

    assert "Cy Hidden" not in _names(filter_photographers(available, "hidden"))
    assert "Cy Hidden" not in _names(filter_photographers(available, ""))


def test_filtering_issues_no_fetch(listing) -> None:
    service, repository = listing
    available = service.list_available_photographers()
    calls_before = list(repository.calls)

    filter_photographers(available, "boston")
    filter_photographers(available, "portrait")

    assert repository.calls == calls_before


def test_missing_fields_do_not_match() -> None:
    profiles = InMemoryProfileRepository()
    photographers = InMemoryPhotographerRepository()
    photographers.put(uuid4(), specialty=None, city=None)
    service = ListingService(InMemoryListingRepository(profiles, photographers))

    assert filter_photographers(service.list_available_photographers(), "a") == []


def test_listing_store_error_is_fetch_failure(listing) -> None:
    service, repository = listing
    repository.fail = True

    with pytest.raises(FetchFailureError, match="Failed to load photographers"):
        service.list_available_photographers()


def test_get_photographer_returns_none_when_absent(listing) -> None:
    service, _ = listing

    assert service.get_photographer(uuid4()) is None
