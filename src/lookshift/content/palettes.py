"""Color palette references embedded in visualization configs.

A vis config may carry a ``color_application`` that points at a palette inside
a color collection (``collection_id`` + ``palette_id``) or holds an inline
``custom`` palette. Custom collections are instance-specific and deletable, so
exported content replaces pointers into them with the concrete colors, and
imported content is rebound to a matching palette at the destination (creating
one when none matches).
"""

import hashlib
import json
import logging
import re
from collections.abc import Callable, Iterator, Mapping, MutableMapping, Sequence
from typing import Any

from lookshift.content.fields import project
from lookshift.looker.store import LookStore
from lookshift.utils.paths import get_path

logger = logging.getLogger(__name__)

PaletteVisitor = Callable[[MutableMapping[str, Any], Sequence[str]], None]

PALETTE_KINDS = ("categoricalPalettes", "sequentialPalettes", "divergingPalettes")

# Where a vis config can live inside a look, query or merge result
_VIS_CONFIG_PATHS: tuple[tuple[str, ...], ...] = (("vis_config",), ("query", "vis_config"))


def find_vis_config_references(obj: Any) -> Iterator[MutableMapping[str, Any]]:
    """Yield every vis config mapping found inside ``obj``."""
    for path in _VIS_CONFIG_PATHS:
        vis_config = get_path(obj, *path)
        if isinstance(vis_config, MutableMapping):
            yield vis_config


def for_each_color_palette_reference(obj: Any, visit: PaletteVisitor) -> None:
    """Call ``visit(ref, default_colors)`` for each color palette reference in ``obj``.

    ``default_colors`` is the vis config's own ``colors`` list, or an empty
    tuple. ``visit`` may rewrite ``ref`` in place. Missing vis configs or
    references are skipped.
    """
    for vis_config in find_vis_config_references(obj):
        ref = get_path(vis_config, "color_application")
        if not isinstance(ref, MutableMapping):
            continue
        colors = vis_config.get("colors")
        default_colors = tuple(colors) if isinstance(colors, list) else ()
        visit(ref, default_colors)


def palette_colors(palette: Mapping[str, Any]) -> list[str]:
    """Concrete color list of a palette, from ``colors`` or from gradient ``stops``."""
    if palette.get("colors"):
        return list(palette["colors"])
    return [stop["color"] for stop in palette.get("stops") or [] if "color" in stop]


def iter_palettes(collection: Mapping[str, Any]) -> Iterator[Mapping[str, Any]]:
    for kind in PALETTE_KINDS:
        yield from collection.get(kind) or []


def _palette_kind(palette_type: str | None) -> str:
    kind = f"{(palette_type or 'categorical').lower()}Palettes"
    return kind if kind in PALETTE_KINDS else "categoricalPalettes"


def _same_type(a: str | None, b: str | None) -> bool:
    return (a or "categorical").lower() == (b or "categorical").lower()


class ColorPaletteRewriter:
    """Rewrites color palette references against a Looker instance.

    Custom color collections read from the instance are cached for the life of
    the rewriter, so one rewriter should serve a single export or import run.
    """

    def __init__(self, store: LookStore):
        self.store = store
        self._custom_collections: list[dict[str, Any]] | None = None

    @property
    def custom_collections(self) -> list[dict[str, Any]]:
        if self._custom_collections is None:
            self._custom_collections = self.store.color_collections_custom()
        return self._custom_collections

    def _find_custom_palette(
        self, collection_id: str | None, palette_id: str
    ) -> tuple[bool, Mapping[str, Any] | None]:
        """Locate a palette in the custom collections.

        Returns (collection_is_custom, palette). A reference without a
        collection id is looked up across every custom collection.
        """
        for collection in self.custom_collections:
            if collection_id and collection.get("id") != collection_id:
                continue
            for palette in iter_palettes(collection):
                if palette.get("id") == palette_id:
                    return True, palette
            if collection_id:
                return True, None
        return False, None

    def canonicalize(self, ref: MutableMapping[str, Any], default_colors: Sequence[str]) -> None:
        """Replace a pointer into a custom collection with an inline palette.

        Pointers into standard collections are left alone. A pointer into a
        custom collection whose palette cannot be found falls back to
        ``default_colors`` when there are any.
        """
        palette_id = ref.get("palette_id")
        if not palette_id:
            return

        is_custom, palette = self._find_custom_palette(ref.get("collection_id"), palette_id)
        if not is_custom:
            return

        if palette is not None:
            custom: dict[str, Any] = {
                "id": "custom",
                "label": palette.get("label") or "Custom",
                "type": palette.get("type") or "Categorical",
                "colors": palette_colors(palette),
            }
            if palette.get("stops"):
                custom["stops"] = [dict(stop) for stop in palette["stops"]]
        elif default_colors:
            logger.warning(
                f"Palette {palette_id} not found in collection {ref.get('collection_id')}, "
                f"using the vis config colors"
            )
            custom = {
                "id": "custom",
                "label": "Custom",
                "type": "Categorical",
                "colors": list(default_colors),
            }
        else:
            logger.warning(f"Palette {palette_id} not found and no colors to fall back to")
            return

        ref["custom"] = custom
        ref.pop("collection_id", None)
        ref.pop("palette_id", None)

    def bind(self, ref: MutableMapping[str, Any], default_colors: Sequence[str]) -> None:
        """Point an inline palette at a matching destination palette.

        When no custom collection at the destination holds a palette with the
        same type and colors, a new collection is created for it.
        """
        custom = ref.get("custom")
        if not isinstance(custom, Mapping):
            return
        colors = palette_colors(custom)
        if not colors:
            return

        palette_type = custom.get("type")
        match = self._find_matching_palette(palette_type, colors)
        if match is None:
            match = self._create_palette(custom, palette_type, colors)

        ref["collection_id"], ref["palette_id"] = match
        ref.pop("custom", None)

    def _find_matching_palette(
        self, palette_type: str | None, colors: list[str]
    ) -> tuple[str, str] | None:
        for collection in self.custom_collections:
            for palette in iter_palettes(collection):
                if _same_type(palette.get("type"), palette_type) and palette_colors(
                    palette
                ) == colors:
                    return collection["id"], palette["id"]
        return None

    def _create_palette(
        self, custom: Mapping[str, Any], palette_type: str | None, colors: list[str]
    ) -> tuple[str, str]:
        digest = hashlib.sha256(
            json.dumps({"type": (palette_type or "").lower(), "colors": colors}).encode("utf-8")
        ).hexdigest()[:8]
        label = f"lookshift {digest}"
        palette: dict[str, Any] = {
            "id": re.sub(r"[^a-z0-9]+", "-", f"{label} {palette_type or 'categorical'}".lower()),
            "label": custom.get("label") or "Custom",
            "type": palette_type or "Categorical",
        }
        if custom.get("stops"):
            palette["stops"] = [dict(stop) for stop in custom["stops"]]
        else:
            palette["colors"] = colors

        body = project(
            {"label": label, _palette_kind(palette_type): [palette]}, "create_color_collection"
        )
        logger.info(f"Creating color collection '{label}' for a custom palette")
        created = self.store.create_color_collection(body)
        self.custom_collections.append(created)

        for created_palette in iter_palettes(created):
            if palette_colors(created_palette) == colors:
                return created["id"], created_palette["id"]
        return created["id"], palette["id"]
