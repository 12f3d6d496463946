from __future__ import annotations


class UptimeAuditError(ValueError):
    """Base class for analysis failures. Every subclass aborts the run."""


class PreconditionError(UptimeAuditError):
    """Input is unusable for analysis (no snapshots, no columns, no days)."""


class InvalidStateError(UptimeAuditError):
    """An operation was asked of a history that cannot support it."""


class LengthMismatchError(UptimeAuditError):
    """Two histories compared against each other cover different day counts."""


class SnapshotFormatError(UptimeAuditError):
    """A snapshot document or table could not be parsed."""
