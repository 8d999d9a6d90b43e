from __future__ import annotations

from ..extensions import db
from ..time_utils import to_utc_z, utcnow


class SyncLock(db.Model):
    """
    Advisory single-writer lock.

    A row exists while a run holds the lock; the primary key on name makes
    a second concurrent insert fail.
    """
    __tablename__ = "sync_locks"

    name = db.Column(db.String(64), primary_key=True)
    holder = db.Column(db.String(128), nullable=True)
    acquired_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "holder": self.holder,
            "acquired_at": to_utc_z(self.acquired_at),
        }
