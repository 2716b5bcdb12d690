"""Looker API access for looks and the objects they depend on.

LookStore is the only place that calls the SDK. Every response is converted to
plain dicts, and every SDK failure goes through ``remote_call``: it is logged
and re-raised as NotFoundError, RemoteQueryError or RemoteWriteError.
"""

import json
import logging
from collections.abc import Mapping
from datetime import date, datetime
from enum import Enum
from typing import Any

from lookshift.exceptions import RemoteQueryError, RemoteWriteError
from lookshift.looker.client import LookerClient
from lookshift.utils.error_handling import remote_call

logger = logging.getLogger(__name__)


def to_attrs(obj: Any) -> Any:
    """Convert an SDK model (and anything nested in it) to plain Python data.

    None values and private attributes are dropped.
    """
    if obj is None or isinstance(obj, str | int | float | bool):
        return obj
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, datetime | date):
        return obj.isoformat()
    if isinstance(obj, Mapping):
        return {k: to_attrs(v) for k, v in obj.items() if v is not None}
    if isinstance(obj, list | tuple):
        return [to_attrs(v) for v in obj]
    if hasattr(obj, "__dict__"):
        return {
            k: to_attrs(v)
            for k, v in vars(obj).items()
            if v is not None and not k.startswith("_")
        }
    return obj


class LookStore:
    """Remote content store backed by the Looker 4.0 API."""

    def __init__(self, client: LookerClient):
        self.client = client

    @property
    def sdk(self) -> Any:
        return self.client.sdk

    # Reads

    @remote_call("me()")
    def me(self) -> dict[str, Any]:
        return to_attrs(self.sdk.me())

    @remote_call("look({look_id})")
    def look(self, look_id: str) -> dict[str, Any]:
        return to_attrs(self.sdk.look(str(look_id)))

    @remote_call("search_looks({criteria})")
    def search_looks(self, **criteria: Any) -> list[dict[str, Any]]:
        """Search looks with raw query parameters (slug, title, folder_id, deleted).

        The typed ``Looker40SDK.search_looks`` accepts no ``slug`` and its Look
        model has no ``slug`` field, so this goes through the untyped GET on
        ``/looks/search`` and the response body is parsed as plain JSON.

        Raises:
            RemoteQueryError: If the request fails or the body is not a JSON list
        """
        logger.debug(f"search_looks {criteria}")
        text = self.sdk.get("/looks/search", structure=str, query_params=criteria)
        if not text:
            return []
        try:
            results = json.loads(text)
        except json.JSONDecodeError as e:
            raise RemoteQueryError(f"Invalid search_looks response: {e}") from e
        if not isinstance(results, list):
            raise RemoteQueryError(
                f"Invalid search_looks response: expected a list, got {type(results).__name__}"
            )
        return [to_attrs(look) for look in results]

    @remote_call("folder({folder_id})")
    def folder(self, folder_id: str) -> dict[str, Any]:
        return to_attrs(self.sdk.folder(str(folder_id)))

    @remote_call("scheduled_plans_for_look({look_id})")
    def scheduled_plans_for_look(self, look_id: str) -> list[dict[str, Any]]:
        return [
            to_attrs(plan)
            for plan in self.sdk.scheduled_plans_for_look(str(look_id), all_users=True)
        ]

    @remote_call("color_collections_custom()")
    def color_collections_custom(self) -> list[dict[str, Any]]:
        return [to_attrs(cc) for cc in self.sdk.color_collections_custom()]

    # Writes

    @remote_call("create_look", RemoteWriteError)
    def create_look(self, body: dict[str, Any]) -> dict[str, Any]:
        body = dict(body)
        if not body.get("public"):
            body["public"] = False
        logger.debug(f"create_look {body}")
        return to_attrs(self.sdk.create_look(body=body))

    @remote_call("update_look({look_id})", RemoteWriteError)
    def update_look(self, look_id: str, body: dict[str, Any]) -> dict[str, Any]:
        logger.debug(f"update_look {look_id} {body}")
        return to_attrs(self.sdk.update_look(str(look_id), body=body))

    @remote_call("delete_look({look_id})", RemoteWriteError)
    def delete_look(self, look_id: str) -> None:
        self.sdk.delete_look(str(look_id))

    @remote_call("create_query", RemoteWriteError)
    def create_query(self, body: dict[str, Any]) -> dict[str, Any]:
        logger.debug(f"create_query {body}")
        return to_attrs(self.sdk.create_query(body=body))

    @remote_call("create_merge_query", RemoteWriteError)
    def create_merge_query(self, body: dict[str, Any]) -> dict[str, Any]:
        logger.debug(f"create_merge_query {body}")
        return to_attrs(self.sdk.create_merge_query(body=body))

    @remote_call("create_scheduled_plan", RemoteWriteError)
    def create_scheduled_plan(self, body: dict[str, Any]) -> dict[str, Any]:
        return to_attrs(self.sdk.create_scheduled_plan(body=body))

    @remote_call("update_scheduled_plan({plan_id})", RemoteWriteError)
    def update_scheduled_plan(self, plan_id: str, body: dict[str, Any]) -> dict[str, Any]:
        return to_attrs(self.sdk.update_scheduled_plan(str(plan_id), body=body))

    @remote_call("create_color_collection", RemoteWriteError)
    def create_color_collection(self, body: dict[str, Any]) -> dict[str, Any]:
        logger.debug(f"create_color_collection {body}")
        return to_attrs(self.sdk.create_color_collection(body=body))
