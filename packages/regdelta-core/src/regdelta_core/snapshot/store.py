"""JSON persistence for snapshots, so an earlier capture can be compared later."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from regdelta_core.errors import SnapshotFormatError, SnapshotIOError
from regdelta_core.regfile.models import KeyRecord, ValueRecord
from regdelta_core.snapshot.models import Snapshot

logger = logging.getLogger(__name__)

SNAPSHOT_FORMAT_VERSION = 1


def snapshot_to_json(snapshot: Snapshot) -> str:
    """Serialize *snapshot*; keys and values are emitted in sorted order."""
    data = {
        "version": SNAPSHOT_FORMAT_VERSION,
        "base_path": snapshot.base_path,
        "label": snapshot.label,
        "keys": [
            {
                "path": key.path,
                "values": [
                    {"name": v.name, "type": int(v.type), "data": v.data.hex()}
                    for _, v in sorted(key.values.items())
                ],
            }
            for _, key in sorted(snapshot.keys.items())
        ],
    }
    return json.dumps(data, indent=2)


def snapshot_from_json(text: str, source: str = "<string>") -> Snapshot:
    """Deserialize a snapshot written by snapshot_to_json()."""
    try:
        obj = json.loads(text)
    except json.JSONDecodeError as e:
        raise SnapshotFormatError(source, f"not JSON ({e})") from e

    if not isinstance(obj, dict):
        raise SnapshotFormatError(source, "top level must be an object")
    version = obj.get("version")
    if version != SNAPSHOT_FORMAT_VERSION:
        raise SnapshotFormatError(source, f"unsupported version {version!r}")

    try:
        keys: dict[str, KeyRecord] = {}
        for kdata in obj["keys"]:
            values: dict[str, ValueRecord] = {}
            for vdata in kdata.get("values", []):
                if not isinstance(vdata["name"], str):
                    raise TypeError(f"value name must be a string, got {vdata['name']!r}")
                record = ValueRecord(
                    name=vdata["name"],
                    type=int(vdata["type"]),
                    data=bytes.fromhex(vdata.get("data", "")),
                )
                values[record.lookup_key] = record
            path = kdata["path"]
            if not isinstance(path, str):
                raise TypeError(f"key path must be a string, got {path!r}")
            keys[path.lower()] = KeyRecord(path=path, values=values)
        return Snapshot(base_path=obj["base_path"], label=obj.get("label", ""), keys=keys)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise SnapshotFormatError(source, f"malformed entry ({e})") from e


def save_snapshot(snapshot: Snapshot, path: Path) -> None:
    """Write *snapshot* to a JSON file."""
    try:
        path.write_text(snapshot_to_json(snapshot), encoding="utf-8")
    except OSError as e:
        raise SnapshotIOError(str(path), "written", e) from e
    logger.info("Saved snapshot of %s to %s", snapshot.base_path, path)


def load_snapshot(path: Path) -> Snapshot:
    """Read a snapshot from a JSON file."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SnapshotIOError(str(path), "read", e) from e
    except UnicodeDecodeError as e:
        raise SnapshotFormatError(str(path), f"not UTF-8 ({e})") from e
    return snapshot_from_json(text, source=str(path))
