"""Tests for LookStore response conversion and error mapping."""

from datetime import datetime, timezone
from enum import Enum
from types import SimpleNamespace
from unittest.mock import Mock

import pytest
from looker_sdk import error as looker_error
from looker_sdk.rtl import serialize, transport
from looker_sdk.sdk.api40.methods import Looker40SDK

from lookshift.content.resolver import IdentityResolver
from lookshift.exceptions import NotFoundError, RemoteQueryError, RemoteWriteError
from lookshift.looker.store import LookStore, to_attrs


class Color(Enum):
    RED = "red"


@pytest.fixture
def sdk():
    return Mock()


@pytest.fixture
def store(sdk):
    return LookStore(Mock(sdk=sdk))


class TestToAttrs:
    """Tests for to_attrs()."""

    def test_nested_model(self):
        look = SimpleNamespace(
            id="1",
            title="Sales",
            description=None,
            _private="x",
            query=SimpleNamespace(id="5", fields=["a", "b"], vis_config={"type": "line"}),
        )

        assert to_attrs(look) == {
            "id": "1",
            "title": "Sales",
            "query": {"id": "5", "fields": ["a", "b"], "vis_config": {"type": "line"}},
        }

    def test_scalars(self):
        when = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        assert to_attrs(when) == "2024-01-02T03:04:05+00:00"
        assert to_attrs(Color.RED) == "red"
        assert to_attrs(None) is None
        assert to_attrs(3) == 3

    def test_mapping_drops_none(self):
        assert to_attrs({"a": 1, "b": None}) == {"a": 1}


class TestReads:
    """Tests for LookStore read methods."""

    def test_look(self, store, sdk):
        sdk.look.return_value = SimpleNamespace(id="1", title="Sales")

        assert store.look(1) == {"id": "1", "title": "Sales"}
        sdk.look.assert_called_once_with("1")

    def test_search_passes_criteria_as_query_params(self, store, sdk):
        sdk.get.return_value = '[{"id": "1", "slug": "abc", "description": null}]'

        results = store.search_looks(slug="abc", folder_id="F", deleted=True)

        assert results == [{"id": "1", "slug": "abc"}]
        sdk.get.assert_called_once_with(
            "/looks/search",
            structure=str,
            query_params={"slug": "abc", "folder_id": "F", "deleted": True},
        )

    def test_search_empty_body(self, store, sdk):
        sdk.get.return_value = ""
        assert store.search_looks(title="Sales") == []

    @pytest.mark.parametrize("body", ["not json", '{"id": "1"}'])
    def test_search_invalid_body(self, store, sdk, body):
        sdk.get.return_value = body

        with pytest.raises(RemoteQueryError, match="Invalid search_looks response"):
            store.search_looks(title="Sales")

    def test_scheduled_plans_for_all_users(self, store, sdk):
        sdk.scheduled_plans_for_look.return_value = []

        store.scheduled_plans_for_look("7")

        sdk.scheduled_plans_for_look.assert_called_once_with("7", all_users=True)

    def test_not_found(self, store, sdk):
        sdk.look.side_effect = looker_error.SDKError("404 Not Found")

        with pytest.raises(NotFoundError, match=r"look\(42\) not found") as exc_info:
            store.look("42")

        assert isinstance(exc_info.value.__cause__, looker_error.SDKError)

    def test_other_error_is_query_error(self, store, sdk):
        sdk.folder.side_effect = looker_error.SDKError("500 Internal Server Error")

        with pytest.raises(RemoteQueryError, match=r"Error calling folder\(F\)"):
            store.folder("F")

    def test_search_error_includes_criteria(self, store, sdk):
        sdk.get.side_effect = looker_error.SDKError("Bad Request")

        with pytest.raises(RemoteQueryError, match="slug"):
            store.search_looks(slug="abc")

    def test_non_sdk_errors_propagate(self, store, sdk):
        sdk.me.side_effect = KeyError("boom")

        with pytest.raises(KeyError):
            store.me()


class TestWrites:
    """Tests for LookStore write methods."""

    def test_create_look_defaults_public_to_false(self, store, sdk):
        sdk.create_look.return_value = SimpleNamespace(id="100", public=False)
        body = {"title": "Sales", "public": None}

        store.create_look(body)

        assert sdk.create_look.call_args.kwargs["body"] == {"title": "Sales", "public": False}
        assert body["public"] is None

    def test_create_look_keeps_public_true(self, store, sdk):
        sdk.create_look.return_value = SimpleNamespace(id="100")

        store.create_look({"title": "Sales", "public": True})

        assert sdk.create_look.call_args.kwargs["body"]["public"] is True

    def test_update_look(self, store, sdk):
        sdk.update_look.return_value = SimpleNamespace(id="9", title="Sales")

        result = store.update_look(9, {"title": "Sales"})

        sdk.update_look.assert_called_once_with("9", body={"title": "Sales"})
        assert result == {"id": "9", "title": "Sales"}

    def test_write_error(self, store, sdk):
        sdk.create_query.side_effect = looker_error.SDKError("422 Validation Failed")

        with pytest.raises(RemoteWriteError, match="Error calling create_query"):
            store.create_query({"model": "m"})

    def test_write_not_found(self, store, sdk):
        sdk.update_look.side_effect = looker_error.SDKError("404 Not Found")

        with pytest.raises(NotFoundError, match=r"update_look\(9\) not found"):
            store.update_look("9", {})

    def test_delete_look(self, store, sdk):
        assert store.delete_look("9") is None
        sdk.delete_look.assert_called_once_with("9")


class StubTransport:
    """Transport that records requests and replays canned responses."""

    def __init__(self, *responses: transport.Response):
        self.responses = list(responses)
        self.requests: list[dict] = []

    def request(
        self,
        method,
        path,
        query_params=None,
        body=None,
        authenticator=None,
        transport_options=None,
    ) -> transport.Response:
        self.requests.append({"method": method, "path": path, "query_params": query_params})
        return self.responses.pop(0)


def _response(value: bytes, ok: bool = True) -> transport.Response:
    return transport.Response(ok=ok, value=value, response_mode=transport.ResponseMode.STRING)


def _real_store(stub: StubTransport) -> LookStore:
    sdk = Looker40SDK(
        auth=Mock(settings=Mock(base_url="https://looker.example.com:19999")),
        deserialize=serialize.deserialize40,
        serialize=serialize.serialize40,
        transport=stub,
        api_version="4.0",
    )
    return LookStore(Mock(sdk=sdk))


class TestSearchAgainstSdk:
    """search_looks() through a real Looker40SDK with a stub transport."""

    def test_slug_search(self):
        stub = StubTransport(
            _response(b'[{"id": "9", "title": "Sales", "slug": "abc", "folder_id": "F"}]')
        )

        results = _real_store(stub).search_looks(slug="abc", folder_id="F", deleted=True)

        assert results == [{"id": "9", "title": "Sales", "slug": "abc", "folder_id": "F"}]
        request = stub.requests[0]
        assert request["method"] == transport.HttpMethod.GET
        assert request["path"] == "https://looker.example.com:19999/api/4.0/looks/search"
        assert request["query_params"] == {"slug": "abc", "folder_id": "F", "deleted": "true"}

    def test_find_by_slug_falls_back_to_trash(self):
        stub = StubTransport(
            _response(b"[]"),
            _response(b'[{"id": "7", "slug": "abc", "deleted": true}]'),
        )

        results = IdentityResolver(_real_store(stub)).find_by_slug("abc", "F")

        assert [r["id"] for r in results] == ["7"]
        assert results[0]["slug"] == "abc"
        assert stub.requests[1]["query_params"]["deleted"] == "true"

    def test_failed_request_is_query_error(self):
        stub = StubTransport(_response(b"boom", ok=False))

        with pytest.raises(RemoteQueryError, match="boom"):
            _real_store(stub).search_looks(slug="abc")

    def test_not_found(self):
        stub = StubTransport(_response(b"Not Found", ok=False))

        with pytest.raises(NotFoundError):
            _real_store(stub).search_looks(slug="abc")
