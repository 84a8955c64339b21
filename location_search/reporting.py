"""Output reporting helpers."""
from __future__ import annotations

import csv
import json
import os
import tempfile
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Iterator, List, Optional, TextIO

from .models import SearchOutcome

RESULT_FIELDNAMES = [
    "rank",
    "place_id",
    "name",
    "address",
    "lat",
    "lon",
    "distance_miles",
    "rating",
    "price_level",
    "types",
    "phone",
    "website",
    "open_now",
]


def ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat()


def _fsync_dir(path: str) -> None:
    try:
        dir_fd = os.open(path, os.O_DIRECTORY)
    except OSError:
        return
    try:
        os.fsync(dir_fd)
    except OSError:
        pass
    finally:
        os.close(dir_fd)


@contextmanager
def atomic_writer(
    path: str,
    mode: str = "w",
    encoding: str = "utf-8",
    newline: Optional[str] = None,
) -> Iterator[TextIO]:
    dir_path = os.path.dirname(path) or "."
    base = os.path.basename(path)
    fd, tmp_path = tempfile.mkstemp(prefix=f".{base}.", suffix=".tmp", dir=dir_path)
    try:
        with os.fdopen(fd, mode, encoding=encoding, newline=newline) as f:
            yield f
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
        _fsync_dir(dir_path)
    except Exception:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise


def build_result_rows(outcome: SearchOutcome) -> List[Dict[str, Any]]:
    rows = []
    for idx, place in enumerate(outcome.ranked_places, start=1):
        row = place.to_dict()
        hours = row.pop("opening_hours")
        row["open_now"] = hours.get("open_now") if hours else None
        row["rank"] = idx
        rows.append(row)
    return rows


def write_results_csv(path: str, rows: Iterable[Dict[str, Any]]) -> None:
    rows = list(rows)
    with atomic_writer(path, mode="w", encoding="utf-8", newline="") as f:
        if not rows:
            f.write("")
            return
        writer = csv.DictWriter(f, fieldnames=RESULT_FIELDNAMES, extrasaction="ignore")
        writer.writeheader()
        for row in rows:
            out = dict(row)
            out["types"] = json.dumps(out.get("types", []), ensure_ascii=False)
            writer.writerow(out)


def write_results_json(path: str, rows: Iterable[Dict[str, Any]]) -> None:
    with atomic_writer(path, mode="w", encoding="utf-8") as f:
        json.dump(list(rows), f, ensure_ascii=False, indent=2)


def write_json_object(path: str, payload: Dict[str, Any]) -> None:
    with atomic_writer(path, mode="w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)


def build_summary(outcome: SearchOutcome, request_count: Optional[int] = None) -> Dict[str, Any]:
    return {
        "generated_at": utc_now_iso(),
        "radius_miles_used": outcome.request.radius_miles,
        "ranked_count": len(outcome.ranked_places),
        "total_unique_found": outcome.total_unique_found,
        "network_requests": request_count,
        "request": outcome.request.to_dict(),
    }


def render_summary(outcome: SearchOutcome) -> List[str]:
    origin = outcome.request.origin
    where = origin.label or f"{origin.coordinate.latitude},{origin.coordinate.longitude}"
    lines = [
        f"Found {outcome.total_unique_found} place(s) within "
        f"{outcome.request.radius_miles:g} mi of {where}; showing {len(outcome.ranked_places)}",
    ]
    for idx, place in enumerate(outcome.ranked_places, start=1):
        rating = f"{place.rating:.1f}" if place.rating is not None else "n/a"
        lines.append(
            f"{idx:>2}. {place.name} ({place.distance_miles} mi, rating {rating}) - {place.address}"
        )
    return lines
