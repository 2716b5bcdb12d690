"""Per-operation writable field sets and projection onto them.

Each Looker write endpoint only accepts a fixed set of body fields. Objects read
from one instance carry many more (ids, timestamps, permissions, URLs), so every
payload is narrowed with ``project`` before it is sent.
"""

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from lookshift.exceptions import UnknownOperationError

# Looker API version the field sets below were taken from
FIELD_ALLOW_LIST_VERSION = "4.0"

_LOOK_FIELDS = frozenset(
    {
        "title",
        "description",
        "deleted",
        "is_run_on_load",
        "public",
        "slug",
        "query_id",
        "folder_id",
        "space_id",
        "user_id",
    }
)

_QUERY_FIELDS = frozenset(
    {
        "model",
        "view",
        "fields",
        "pivots",
        "fill_fields",
        "filters",
        "filter_expression",
        "sorts",
        "limit",
        "column_limit",
        "total",
        "row_total",
        "subtotals",
        "vis_config",
        "filter_config",
        "visible_ui_sections",
        "dynamic_fields",
        "client_id",
        "query_timezone",
    }
)

_MERGE_QUERY_FIELDS = frozenset(
    {
        "column_limit",
        "dynamic_fields",
        "pivots",
        "sorts",
        "source_queries",
        "total",
        "vis_config",
        "client_id",
    }
)

_SCHEDULED_PLAN_FIELDS = frozenset(
    {
        "name",
        "user_id",
        "run_as_recipient",
        "enabled",
        "look_id",
        "dashboard_id",
        "lookml_dashboard_id",
        "filters_string",
        "dashboard_filters",
        "require_results",
        "require_no_results",
        "require_change",
        "send_all_results",
        "crontab",
        "datagroup",
        "timezone",
        "query_id",
        "scheduled_plan_destination",
        "run_once",
        "include_links",
        "custom_url_base",
        "custom_url_params",
        "custom_url_label",
        "show_custom_url",
        "pdf_paper_size",
        "pdf_landscape",
        "embed",
        "color_theme",
        "long_tables",
        "inline_table_width",
    }
)

_COLOR_COLLECTION_FIELDS = frozenset(
    {
        "label",
        "categoricalPalettes",
        "sequentialPalettes",
        "divergingPalettes",
    }
)

FIELD_ALLOW_LISTS: Mapping[str, frozenset[str]] = MappingProxyType(
    {
        "create_look": _LOOK_FIELDS,
        "update_look": _LOOK_FIELDS,
        "create_query": _QUERY_FIELDS,
        "create_merge_query": _MERGE_QUERY_FIELDS,
        "create_scheduled_plan": _SCHEDULED_PLAN_FIELDS,
        "update_scheduled_plan": _SCHEDULED_PLAN_FIELDS,
        "create_color_collection": _COLOR_COLLECTION_FIELDS,
    }
)


def allowed_fields(operation: str) -> frozenset[str]:
    """Return the writable field set for ``operation``.

    Raises:
        UnknownOperationError: If no field set is registered for the operation
    """
    try:
        return FIELD_ALLOW_LISTS[operation]
    except KeyError:
        raise UnknownOperationError(operation) from None


def project(
    source: Mapping[str, Any],
    operation: str,
    exclude: Iterable[str] = frozenset(),
) -> dict[str, Any]:
    """Keep only the keys of ``source`` that ``operation`` accepts.

    Args:
        source: Attribute mapping to narrow (not modified)
        operation: Registered operation name, e.g. "create_look"
        exclude: Extra keys to drop even when the operation accepts them

    Returns:
        New dict holding the permitted keys of ``source``

    Raises:
        UnknownOperationError: If no field set is registered for the operation

    Example:
        >>> project({"id": "1", "title": "Sales", "can": {}}, "update_look")
        {'title': 'Sales'}
    """
    keep = allowed_fields(operation) - frozenset(exclude)
    return {k: v for k, v in source.items() if k in keep}
