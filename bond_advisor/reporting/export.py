"""
Export helpers for recommendation output.

All functions write to disk and return the written ``Path``. CSV exports
are flat (one row per recommendation, action items joined with
``" | "``) so they open directly in a spreadsheet.
"""

from __future__ import annotations

import csv
import json
from collections.abc import Sequence
from pathlib import Path

from bond_advisor.models.recommendation import Recommendation

ACTION_ITEM_SEPARATOR = " | "

EXPORT_COLUMNS = [
    "user_id", "as_of", "position", "category", "title",
    "description", "action_items", "region", "link",
]


def export_to_csv(
    records: list[dict],
    path: Path,
    fieldnames: list[str] | None = None,
) -> Path:
    """Write ``records`` to a UTF-8 CSV file.

    Args:
        records:    List of row dicts.
        path:       Destination file path (parent dirs created if missing).
        fieldnames: Column order. If None, uses the keys of the first record.

    Returns:
        ``path`` as written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    if not records:
        path.write_text("", encoding="utf-8")
        return path
    cols = fieldnames or list(records[0].keys())
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=cols, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(records)
    return path


def export_to_json(data: dict | list, path: Path) -> Path:
    """Write ``data`` to a pretty-printed JSON file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(data, indent=2, default=str, ensure_ascii=False), encoding="utf-8"
    )
    return path


def recommendations_to_json(
    recommendations: Sequence[Recommendation],
    user_id: str,
    as_of: str,
) -> dict:
    """JSON-ready payload: report metadata plus the recommendation list.

    Action items are dumped under the stored key ``actionItems``.
    """
    return {
        "user_id": user_id,
        "as_of": as_of,
        "count": len(recommendations),
        "recommendations": [
            {
                "category": rec.category.value,
                "title": rec.title,
                "description": rec.description,
                "actionItems": list(rec.action_items),
                **({"link": rec.link} if rec.link else {}),
                **({"region": rec.region} if rec.region else {}),
            }
            for rec in recommendations
        ],
    }


def flatten_recommendations_for_export(
    recommendations: Sequence[Recommendation],
    user_id: str = "",
    as_of: str = "",
) -> list[dict]:
    """One flat row per recommendation, in engine order (``position`` is 1-based)."""
    return [
        {
            "user_id":      user_id,
            "as_of":        as_of,
            "position":     i,
            "category":     rec.category.value,
            "title":        rec.title,
            "description":  rec.description,
            "action_items": ACTION_ITEM_SEPARATOR.join(rec.action_items),
            "region":       rec.region or "",
            "link":         rec.link or "",
        }
        for i, rec in enumerate(recommendations, start=1)
    ]
