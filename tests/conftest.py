"""Shared pytest fixtures and factory functions for lookshift tests.

This module provides reusable test data and mock objects to reduce boilerplate
across tests and maintain consistency.
"""

from typing import Any
from unittest.mock import MagicMock

import pytest

from lookshift.content.looks import LookService
from lookshift.content.palettes import ColorPaletteRewriter
from lookshift.content.reconciler import LookReconciler
from lookshift.content.resolver import IdentityResolver
from lookshift.looker.store import LookStore
from lookshift.messenger import Messenger

#
# Factory Functions
#


def make_look(
    look_id: str,
    title: str,
    slug: str | None = None,
    folder_id: str = "F",
    deleted: bool = False,
    **extra: Any,
) -> dict[str, Any]:
    """Create a look dict as returned by the store.

    Args:
        look_id: Look ID
        title: Look title
        slug: Optional slug
        folder_id: Folder the look lives in
        deleted: Whether the look is in the trash
        **extra: Additional fields

    Returns:
        dict: Look attributes.
    """
    look = {"id": look_id, "title": title, "folder_id": folder_id, "deleted": deleted}
    if slug is not None:
        look["slug"] = slug
    look.update(extra)
    return look


def make_search(looks: list[dict[str, Any]]):
    """Build a ``search_looks`` side effect that filters ``looks`` like the API does.

    Without ``deleted=True`` only looks outside the trash match; with it only
    looks in the trash match.
    """

    def search_looks(**criteria: Any) -> list[dict[str, Any]]:
        want_deleted = bool(criteria.pop("deleted", False))
        results = []
        for look in looks:
            if bool(look.get("deleted")) != want_deleted:
                continue
            if all(str(look.get(k)) == str(v) for k, v in criteria.items()):
                results.append(dict(look))
        return results

    return search_looks


#
# Mock Fixtures
#


@pytest.fixture
def mock_store():
    """Mock LookStore with an empty instance behind it.

    Returns:
        MagicMock: Mock store whose searches return nothing and whose writes echo
        the body back with an ID.
    """
    store = MagicMock(spec=LookStore)
    store.search_looks.side_effect = make_search([])
    store.color_collections_custom.return_value = []
    store.create_look.side_effect = lambda body: {"id": "100", **body}
    store.update_look.side_effect = lambda look_id, body: {"id": look_id, **body}
    store.create_query.side_effect = lambda body: {"id": "Q", **body}
    store.create_merge_query.side_effect = lambda body: {"id": "M", **body}
    store.me.return_value = {"id": "U"}
    store.folder.return_value = {"id": "F", "name": "Shared"}
    store.scheduled_plans_for_look.return_value = []
    return store


@pytest.fixture
def mock_messenger():
    """Mock Messenger.

    Returns:
        MagicMock: Mock messenger recording warn/error/ok/info calls.
    """
    return MagicMock(spec=Messenger)


@pytest.fixture
def rewriter(mock_store):
    return ColorPaletteRewriter(mock_store)


@pytest.fixture
def resolver(mock_store):
    return IdentityResolver(mock_store)


@pytest.fixture
def reconciler(mock_store, resolver, rewriter, mock_messenger):
    return LookReconciler(mock_store, resolver, rewriter, mock_messenger)


@pytest.fixture
def service(mock_store, rewriter, reconciler, mock_messenger):
    return LookService(mock_store, rewriter, reconciler, mock_messenger)


#
# Sample Data Fixtures
#


@pytest.fixture
def custom_collection() -> dict[str, Any]:
    """Custom color collection with one categorical and one sequential palette.

    Returns:
        dict: Color collection as returned by the API.
    """
    return {
        "id": "cc-1",
        "label": "Brand",
        "categoricalPalettes": [
            {
                "id": "brand-cat",
                "label": "Brand colors",
                "type": "Categorical",
                "colors": ["#111111", "#222222", "#333333"],
            }
        ],
        "sequentialPalettes": [
            {
                "id": "brand-seq",
                "label": "Brand gradient",
                "type": "Sequential",
                "stops": [{"color": "#000000", "offset": 0}, {"color": "#ffffff", "offset": 100}],
            }
        ],
        "divergingPalettes": [],
    }


@pytest.fixture
def sample_look() -> dict[str, Any]:
    """Look as returned by the API, with a query and read-only fields.

    Returns:
        dict: Look attributes.
    """
    return {
        "id": "1",
        "title": "Sales",
        "slug": "abc",
        "description": "Monthly sales",
        "deleted": False,
        "public": False,
        "is_run_on_load": True,
        "folder_id": "F0",
        "user_id": "U0",
        "query_id": "5",
        "can": {"update": True},
        "view_count": 12,
        "short_url": "/x/abc",
        "query": {
            "id": "5",
            "model": "thelook",
            "view": "orders",
            "fields": ["orders.count"],
            "client_id": "AbCdEf",
            "share_url": "https://example.com/x/AbCdEf",
            "vis_config": {
                "type": "looker_column",
                "color_application": {"collection_id": "cc-1", "palette_id": "brand-cat"},
            },
        },
    }
