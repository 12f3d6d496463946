from __future__ import annotations

import base64
import binascii
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator

from uptime_audit.errors import SnapshotFormatError
from uptime_audit.io.snapshots import Snapshot

LOGGER = logging.getLogger(__name__)

VALID_AFTER_FORMAT = "%Y-%m-%d %H:%M:%S"
FINGERPRINT_BYTES = 20


def decode_identity(identity: str) -> str:
    """Turn the unpadded base64 identity of an ``r`` line into a hex fingerprint."""
    padded = identity + "=" * (-len(identity) % 4)
    try:
        raw = base64.b64decode(padded, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise SnapshotFormatError(f"invalid relay identity: {identity!r}") from exc
    if len(raw) != FINGERPRINT_BYTES:
        raise SnapshotFormatError(
            f"relay identity decodes to {len(raw)} bytes, expected {FINGERPRINT_BYTES}"
        )
    return raw.hex().upper()


def _parse_valid_after(value: str) -> datetime:
    try:
        parsed = datetime.strptime(value.strip(), VALID_AFTER_FORMAT)
    except ValueError as exc:
        raise SnapshotFormatError(f"invalid valid-after timestamp: {value!r}") from exc
    return parsed.replace(tzinfo=timezone.utc)


def parse_consensus(text: str, *, source: str | None = None) -> Snapshot:
    """Parse a network-status consensus into the set of listed relay fingerprints.

    Both full and microdescriptor consensuses work: in either flavor the
    identity is the third token of every ``r`` line.
    """
    valid_after: datetime | None = None
    fingerprints: set[str] = set()
    for line in text.splitlines():
        keyword, _, arguments = line.partition(" ")
        if keyword == "valid-after" and valid_after is None:
            valid_after = _parse_valid_after(arguments)
        elif keyword == "r":
            fields = arguments.split()
            if len(fields) < 2:
                raise SnapshotFormatError(f"truncated router line in {source or 'consensus'}")
            fingerprints.add(decode_identity(fields[1]))

    if valid_after is None:
        raise SnapshotFormatError(f"no valid-after line in {source or 'consensus'}")
    return Snapshot(valid_after=valid_after, identifiers=frozenset(fingerprints))


def iter_consensus_snapshots(path: Path, pattern: str = "*consensus*") -> Iterator[Snapshot]:
    """Lazily parse consensus files in file-name order.

    ``path`` is either a single document or a directory searched recursively
    for ``pattern``. Archived file names start with their timestamp, so name
    order is chronological.
    """
    if path.is_file():
        files = [path]
    else:
        files = sorted(candidate for candidate in path.rglob(pattern) if candidate.is_file())
    LOGGER.info("Found %d consensus documents under %s.", len(files), path)

    for document_path in files:
        text = document_path.read_text(encoding="utf-8", errors="replace")
        yield parse_consensus(text, source=str(document_path))
