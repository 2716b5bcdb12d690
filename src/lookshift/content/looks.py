"""Exporting looks from one instance and importing them into another."""

import copy
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from rich.console import Console

from lookshift.content.fields import project
from lookshift.content.palettes import ColorPaletteRewriter, for_each_color_palette_reference
from lookshift.content.reconciler import LookReconciler, MatchResult
from lookshift.exceptions import ValidationError
from lookshift.looker.store import LookStore
from lookshift.messenger import Messenger

logger = logging.getLogger(__name__)

# Identity and ownership of a plan belong to the destination
PLAN_EXCLUDED_FIELDS = frozenset(
    {"look_id", "user_id", "dashboard_id", "lookml_dashboard_id", "query_id"}
)
_DESTINATION_EXCLUDED_FIELDS = frozenset({"id", "scheduled_plan_id"})


def trim_look(data: dict[str, Any]) -> dict[str, Any]:
    """Reduce a look to the fields needed to import it again.

    Keeps the writable look fields plus ``id``, the writable query fields plus
    the query ``id``, and the writable fields plus ``id`` of each scheduled plan.
    """
    trimmed = project(data, "update_look")
    if "id" in data:
        trimmed["id"] = data["id"]

    query = data.get("query")
    if isinstance(query, Mapping):
        trimmed["query"] = project(query, "create_query")
        if "id" in query:
            trimmed["query"]["id"] = query["id"]

    if data.get("scheduled_plans") is not None:
        trimmed["scheduled_plans"] = []
        for plan in data["scheduled_plans"]:
            trimmed_plan = project(plan, "create_scheduled_plan")
            if "id" in plan:
                trimmed_plan["id"] = plan["id"]
            trimmed["scheduled_plans"].append(trimmed_plan)

    return trimmed


class ImportAction(StrEnum):
    CREATE = "create"
    UPDATE = "update"
    CONFLICT = "conflict"


@dataclass
class ImportPlan:
    """What importing a look would do, worked out without writing anything."""

    action: ImportAction
    match: MatchResult
    slug_dropped: bool = False

    def describe(self) -> str:
        target = self.match.target or {}
        if self.action is ImportAction.CREATE:
            text = "Would create a new look"
        elif self.action is ImportAction.UPDATE:
            text = f"Would update look {target.get('id')} {target.get('title')}"
        elif self.match.title_conflict:
            other = self.match.title_match or {}
            text = f"Conflicts with look {other.get('id')} {other.get('title')} of the same title"
        else:
            text = f"Conflicts with existing look {target.get('id')} (use --force to overwrite)"
        if self.action is not ImportAction.CREATE and target.get("deleted"):
            text += "; that look is in the Trash and would be restored"
        if self.slug_dropped:
            text += "; the slug is used elsewhere and would be dropped"
        return text


class LookService:
    """Look export and import against a single Looker instance."""

    def __init__(
        self,
        store: LookStore,
        rewriter: ColorPaletteRewriter,
        reconciler: LookReconciler,
        messenger: Messenger,
    ):
        self.store = store
        self.rewriter = rewriter
        self.reconciler = reconciler
        self.messenger = messenger

    def cat_look(self, look_id: str, plans: bool = False) -> dict[str, Any]:
        """Fetch a look ready to be written to an export file.

        References to custom palettes are replaced with their colors, since the
        destination will not have the same custom collections.
        """
        data = self.store.look(look_id)
        for_each_color_palette_reference(data, self.rewriter.canonicalize)
        if plans:
            data["scheduled_plans"] = self.store.scheduled_plans_for_look(look_id)
        return data

    def create_fetch_query(self, source_query: Mapping[str, Any]) -> dict[str, Any]:
        """Create a new query at the destination from an exported query."""
        new_query = copy.deepcopy(project(source_query, "create_query", {"client_id"}))
        for_each_color_palette_reference(new_query, self.rewriter.bind)
        return self.store.create_query(new_query)

    def create_merge_result(self, merge_result: Mapping[str, Any]) -> dict[str, Any]:
        """Create a merge query at the destination, recreating each of its source queries."""
        new_merge_result = copy.deepcopy(
            project(merge_result, "create_merge_query", {"client_id", "source_queries"})
        )
        new_merge_result["source_queries"] = [
            {
                "query_id": self.create_fetch_query(source["query"])["id"],
                "name": source.get("name"),
                "merge_fields": source.get("merge_fields"),
            }
            for source in merge_result.get("source_queries") or []
        ]
        for_each_color_palette_reference(new_merge_result, self.rewriter.bind)
        return self.store.create_merge_query(new_merge_result)

    @staticmethod
    def validate_source(source: Mapping[str, Any]) -> None:
        """Check that an exported look can be imported.

        Raises:
            ValidationError: If the title or query is missing
        """
        if not source.get("title"):
            raise ValidationError("Look has no title")
        if not isinstance(source.get("query"), Mapping):
            raise ValidationError(f"Look {source.get('title')} has no query")

    def plan_import(
        self, source: dict[str, Any], folder_id: str, force: bool = False
    ) -> ImportPlan:
        """Work out what ``import_look`` would do, without writing anything."""
        self.validate_source(source)
        self.store.folder(folder_id)
        match = self.reconciler.match(source, folder_id)
        if match.target is None:
            action = ImportAction.CREATE
        elif match.title_conflict or not force:
            action = ImportAction.CONFLICT
        else:
            action = ImportAction.UPDATE
        return ImportPlan(action=action, match=match, slug_dropped=match.slug_conflict)

    def import_look(
        self,
        source: dict[str, Any],
        folder_id: str,
        force: bool = False,
        plans: bool = False,
        console: Console | None = None,
    ) -> dict[str, Any]:
        """Import an exported look into ``folder_id``.

        Conflicts are checked before anything is written. Then the look's query
        is created, the look itself is created or updated, and (with ``plans``)
        its scheduled plans follow.

        Raises:
            ValidationError: If the source cannot be imported
            NotFoundError: If the folder does not exist
            ConflictError: If the look collides with existing content
        """
        self.validate_source(source)
        self.store.folder(folder_id)
        match = self.reconciler.match(source, folder_id)
        self.reconciler.check_conflicts(source, folder_id, match, force)

        query = self.create_fetch_query(source["query"])
        me = self.store.me()
        look = self.reconciler.upsert(
            me["id"], query["id"], folder_id, source, force=force, console=console, match=match
        )

        if plans and source.get("scheduled_plans"):
            self.upsert_plans_for_look(look["id"], me["id"], source["scheduled_plans"], console)
        return look

    def upsert_plans_for_look(
        self,
        look_id: str,
        user_id: str,
        plans: list[dict[str, Any]],
        console: Console | None = None,
    ) -> list[dict[str, Any]]:
        """Create or update scheduled plans on a look, matching existing plans by name."""
        existing = {
            plan.get("name"): plan for plan in self.store.scheduled_plans_for_look(look_id)
        }
        results = []
        for plan in plans:
            body = project(plan, "create_scheduled_plan", PLAN_EXCLUDED_FIELDS)
            if body.get("scheduled_plan_destination"):
                body["scheduled_plan_destination"] = [
                    {
                        k: v
                        for k, v in destination.items()
                        if k not in _DESTINATION_EXCLUDED_FIELDS
                    }
                    for destination in body["scheduled_plan_destination"]
                ]

            match = existing.get(plan.get("name"))
            if match is not None:
                self.messenger.ok(
                    f"Modifying existing plan {match.get('id')} {match.get('name')}",
                    console=console,
                )
                results.append(self.store.update_scheduled_plan(match["id"], body))
            else:
                body["look_id"] = look_id
                body["user_id"] = user_id
                created = self.store.create_scheduled_plan(body)
                self.messenger.ok(
                    f"Created plan {created.get('id')} {created.get('name')}", console=console
                )
                results.append(created)
        return results
