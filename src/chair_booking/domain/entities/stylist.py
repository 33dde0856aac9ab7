"""Stylist entity owning a chair's calendar."""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4


class Stylist:
    """Stylist entity. Owns every appointment booked against it."""

    def __init__(
        self,
        name: str,
        stylist_id: Optional[UUID] = None,
        created_at: Optional[datetime] = None
    ):
        if not name or not name.strip():
            raise ValueError("Stylist name cannot be empty")

        self._id = stylist_id or uuid4()
        self._name = name.strip()
        self._created_at = created_at or datetime.now()

    @property
    def id(self) -> UUID:
        """Get stylist ID."""
        return self._id

    @property
    def name(self) -> str:
        """Get stylist name."""
        return self._name

    @property
    def created_at(self) -> datetime:
        """Get creation timestamp."""
        return self._created_at

    def __eq__(self, other: object) -> bool:
        """Check equality based on stylist ID."""
        if not isinstance(other, Stylist):
            return False
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __str__(self) -> str:
        return f"Stylist({self._id}, {self._name})"
