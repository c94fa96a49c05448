"""Field access on TeamForge artifact records."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

# Properties of ArtifactSoapDO; anything else is looked up in flexFields.
ARTIFACT_FIELDS = frozenset(
    {
        "id",
        "title",
        "description",
        "category",
        "group",
        "status",
        "statusClass",
        "customer",
        "priority",
        "estimatedHours",
        "actualHours",
        "estimatedEffort",
        "actualEffort",
        "remainingEffort",
        "autosumming",
        "assignedTo",
        "closeDate",
        "folderId",
        "planningFolderId",
        "reportedReleaseId",
        "resolvedReleaseId",
        "path",
        "version",
        "createdBy",
        "createdDate",
        "lastModifiedBy",
        "lastModifiedDate",
    }
)


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def get_field_value(artifact: Mapping[str, Any], field_name: str) -> str | None:
    """Get the value of an artifact field as text.

    Known artifact properties are read directly; other names are matched
    against the artifact's flexible fields.

    Args:
        artifact: Artifact data as returned by getArtifactData
        field_name: Property or flexible field name

    Returns:
        Field value ("" when the field is set to nothing), or None if the
        artifact has no such field
    """
    if field_name in ARTIFACT_FIELDS:
        return _as_text(artifact.get(field_name))

    flex_fields = artifact.get("flexFields")
    if not flex_fields:
        return None

    names = flex_fields.get("names")
    values = flex_fields.get("values")
    if names is None or values is None:
        return None

    for name, value in zip(names, values, strict=False):
        if name == field_name:
            return _as_text(value)

    return None
