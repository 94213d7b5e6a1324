"""CSV exchange for asset portfolios and risk results."""

import re
from pathlib import Path
from typing import Union

import pandas as pd
from loguru import logger

from flood_risk.core.exceptions import AssetValidationError
from flood_risk.core.models import RiskResult

HEADER_ALIASES = {
    "name": ("name",),
    "lat": ("lat", "latitude"),
    "lon": ("lon", "lng", "longitude"),
    "asset_value": ("assetvalue", "value"),
    "type": ("type",),
}

RESULT_COLUMNS = ["inundation_depth_m", "damage_ratio", "financial_loss"]


def _norm(header: str) -> str:
    return re.sub(r"[\s_]", "", str(header).lower())


def read_assets_csv(path: Union[str, Path]) -> list:
    """
    Read an asset CSV into raw rows for the normalizer.

    Headers match case-insensitively, ignoring spaces and underscores. Each
    returned row carries the normalized keys plus `_source`, the original
    row as read.
    """
    df = pd.read_csv(path, dtype=str, keep_default_na=False, encoding="utf-8-sig")
    if df.empty:
        raise AssetValidationError("CSV needs header + at least 1 row.")

    normalized = {_norm(col): col for col in df.columns}
    columns = {}
    for key, aliases in HEADER_ALIASES.items():
        match = next((normalized[a] for a in aliases if a in normalized), None)
        if match is None:
            raise AssetValidationError("Required columns: name, lat, lon, asset_value, type")
        columns[key] = match

    rows = []
    for source in df.to_dict(orient="records"):
        if not any(str(v).strip() for v in source.values()):
            continue
        row = {key: source[col] for key, col in columns.items()}
        row["_source"] = source
        rows.append(row)

    logger.info(f"Read {len(rows)} rows from {path}")
    return rows


def write_results_csv(result: RiskResult, rows: list, path: Union[str, Path]) -> Path:
    """
    Write the original CSV columns plus depth, damage ratio and loss.

    `rows` are the raw rows from read_assets_csv; records are matched back to
    them by name and coordinates.
    """
    sources = [row.get("_source", {}) for row in rows]
    headers = list(sources[0].keys()) if sources else ["name", "lat", "lon", "asset_value", "type"]

    by_key = {}
    for row, source in zip(rows, sources):
        by_key.setdefault(_row_key(row.get("name"), row.get("lat"), row.get("lon")), source)

    out = []
    for record in result.records:
        asset = record.asset
        source = by_key.get(_row_key(asset.name, asset.lat, asset.lon)) or {
            "name": asset.name,
            "lat": asset.lat,
            "lon": asset.lon,
            "asset_value": asset.asset_value,
            "type": asset.asset_class,
        }
        out.append({
            **{h: source.get(h, "") for h in headers},
            "inundation_depth_m": round(record.depth_used, 4),
            "damage_ratio": round(record.damage_ratio, 6),
            "financial_loss": round(record.financial_loss),
        })

    path = Path(path)
    pd.DataFrame(out, columns=headers + RESULT_COLUMNS).to_csv(path, index=False, encoding="utf-8-sig")
    logger.info(f"Wrote {len(out)} results to {path}")
    return path


def _row_key(name, lat, lon) -> tuple:
    try:
        return (str(name).strip(), round(float(lat), 7), round(float(lon), 7))
    except (TypeError, ValueError):
        return (str(name).strip(), None, None)
