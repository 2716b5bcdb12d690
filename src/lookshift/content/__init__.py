"""Look export, reconciliation and import.

The pieces are layered: ``fields`` narrows payloads, ``palettes`` rewrites color
palette references, ``resolver`` finds matching looks, ``reconciler`` decides
between update and create, and ``looks`` ties them into export/import flows.
"""

from lookshift.content.fields import FIELD_ALLOW_LISTS, allowed_fields, project
from lookshift.content.looks import LookService, trim_look
from lookshift.content.palettes import ColorPaletteRewriter, for_each_color_palette_reference
from lookshift.content.reconciler import LookReconciler, MatchResult
from lookshift.content.resolver import IdentityResolver, MatchPolicy

__all__ = [
    "FIELD_ALLOW_LISTS",
    "ColorPaletteRewriter",
    "IdentityResolver",
    "LookReconciler",
    "LookService",
    "MatchPolicy",
    "MatchResult",
    "allowed_fields",
    "for_each_color_palette_reference",
    "project",
    "trim_look",
]
