"""Create-or-update of an imported look at the destination.

A look is matched by slug (inside the target folder) first and by title (inside
the target folder) second. Slugs are unique across the whole instance, so the
slug is also looked up globally: when another look already owns it, the import
goes ahead without a slug.
"""

import logging
from dataclasses import dataclass
from typing import Any

from rich.console import Console

from lookshift.content.fields import project
from lookshift.content.palettes import ColorPaletteRewriter, for_each_color_palette_reference
from lookshift.content.resolver import IdentityResolver, first_match
from lookshift.exceptions import ConflictError
from lookshift.looker.store import LookStore
from lookshift.messenger import Messenger

logger = logging.getLogger(__name__)

# Set explicitly by the reconciler, never copied from the source look
UPSERT_EXCLUDED_FIELDS = frozenset({"space_id", "folder_id", "user_id", "query_id", "slug"})


def _same_look(a: dict[str, Any] | None, b: dict[str, Any] | None) -> bool:
    return a is not None and b is not None and a.get("id") == b.get("id")


@dataclass
class MatchResult:
    """Destination looks that match an imported look.

    Attributes:
        existing_by_slug: Look with the source slug in the target folder
        title_match: Look with the source title in the target folder
        slug_used: Look with the source slug anywhere in the instance
    """

    existing_by_slug: dict[str, Any] | None = None
    title_match: dict[str, Any] | None = None
    slug_used: dict[str, Any] | None = None

    @property
    def target(self) -> dict[str, Any] | None:
        """The look to update; a slug match wins over a title match."""
        return self.existing_by_slug or self.title_match

    @property
    def same_title(self) -> bool:
        return _same_look(self.title_match, self.target)

    @property
    def same_slug(self) -> bool:
        return _same_look(self.slug_used, self.target)

    @property
    def title_conflict(self) -> bool:
        """A different look in the folder already has the source title."""
        return self.target is not None and self.title_match is not None and not self.same_title

    @property
    def slug_conflict(self) -> bool:
        """The source slug belongs to a look other than the one being updated."""
        return self.slug_used is not None and not self.same_slug


class LookReconciler:
    """Decides between updating an existing look and creating a new one."""

    def __init__(
        self,
        store: LookStore,
        resolver: IdentityResolver,
        rewriter: ColorPaletteRewriter,
        messenger: Messenger,
    ):
        self.store = store
        self.resolver = resolver
        self.rewriter = rewriter
        self.messenger = messenger

    def match(self, source: dict[str, Any], folder_id: str) -> MatchResult:
        """Look up every destination look the source could collide with."""
        slug = source.get("slug")
        result = MatchResult()
        if slug:
            result.existing_by_slug = first_match(self.resolver.find_by_slug(slug, folder_id))
        result.title_match = first_match(
            self.resolver.find_by_title(source.get("title"), folder_id)
        )
        if slug:
            result.slug_used = first_match(self.resolver.find_by_slug(slug))
        return result

    def check_conflicts(
        self,
        source: dict[str, Any],
        folder_id: str,
        match: MatchResult,
        force: bool = False,
    ) -> None:
        """Raise if importing ``source`` would overwrite a look it should not.

        Raises:
            ConflictError: If another look in the folder has the source title, or
                a matching look exists and ``force`` is not set
        """
        target = match.target
        if target is None:
            return
        if match.title_conflict:
            title_match = match.title_match or {}
            raise ConflictError(
                f"Look {source.get('title')} already exists in folder {folder_id}\n"
                f"Delete it before trying to update another Look to have that title.",
                title=title_match.get("title"),
                slug=title_match.get("slug"),
                folder_id=folder_id,
                existing_id=title_match.get("id"),
            )
        if not force:
            raise ConflictError(
                f"Look {target.get('title')} with slug {target.get('slug')} already exists "
                f"in folder {folder_id}\nUse --force if you want to overwrite it",
                title=target.get("title"),
                slug=target.get("slug"),
                folder_id=folder_id,
                existing_id=target.get("id"),
            )

    def upsert(
        self,
        user_id: str,
        query_id: str,
        folder_id: str,
        source: dict[str, Any],
        force: bool = False,
        console: Console | None = None,
        match: MatchResult | None = None,
    ) -> dict[str, Any]:
        """Update the matching look in ``folder_id`` or create a new one.

        Args:
            user_id: Owner of a newly created look
            query_id: Query already created at the destination for this look
            folder_id: Destination folder
            source: Look as read from an export file
            force: Allow overwriting an existing look
            console: Optional console for operator messages
            match: Result of an earlier ``match`` call for the same source and
                folder; looked up again when omitted

        Returns:
            The created or updated look

        Raises:
            ConflictError: If another look in the folder has the source title, or
                a matching look exists and ``force`` is not set
            RemoteQueryError: If a lookup fails
            RemoteWriteError: If the create or update fails
        """
        if match is None:
            match = self.match(source, folder_id)
        slug = source.get("slug")

        if match.slug_conflict:
            used = match.slug_used or {}
            self.messenger.warn(
                f"slug {used.get('slug')} already used for look {used.get('title')} "
                f"in folder {used.get('folder_id')}",
                console=console,
            )
            if used.get("deleted"):
                self.messenger.warn(
                    "That look is in the 'Trash' but not fully deleted yet", console=console
                )
            self.messenger.warn("look will be imported with new slug", console=console)

        self.check_conflicts(source, folder_id, match, force)
        keep_slug = bool(slug) and not match.slug_conflict
        target = match.target

        if target is not None:
            if target.get("deleted"):
                self.messenger.warn(
                    f"Look {target.get('id')} {target.get('title')} is in the 'Trash' "
                    f"and will be restored",
                    console=console,
                )
            self.messenger.ok(
                f"Modifying existing Look {target.get('id')} {target.get('title')} "
                f"in folder {folder_id}",
                console=console,
            )
            body = project(source, "update_look", UPSERT_EXCLUDED_FIELDS)
            if keep_slug:
                body["slug"] = slug
            if target.get("deleted"):
                body["deleted"] = False
            body["query_id"] = query_id
            return self.store.update_look(target["id"], body)

        body = project(source, "create_look", UPSERT_EXCLUDED_FIELDS)
        if keep_slug:
            body["slug"] = slug
        body["query_id"] = query_id
        body["user_id"] = user_id
        body["folder_id"] = folder_id

        for_each_color_palette_reference(body, self.rewriter.bind)
        created = self.store.create_look(body)
        self.messenger.ok(
            f"Created Look {created.get('id')} {created.get('title')} in folder {folder_id}",
            console=console,
        )
        return created
