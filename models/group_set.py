"""Datenmodell für Gruppen und Gruppen-Sets (Pydantic v2)."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class GroupSetKind(str, Enum):
    LINKED = "linked"        # Spiegelt ein LMS-Gruppen-Set (read-only)
    COPIED = "copied"        # Lokale Kopie eines LMS-Sets (editierbar)
    UNLINKED = "unlinked"    # Rein manuell angelegt
    SYSTEM = "system"        # Automatisch abgeleitete Partition


class GroupSetConnection(BaseModel):
    """Herkunft eines LMS-Gruppen-Sets."""

    lms_type: str                         # "canvas" / "moodle"
    base_url: str
    course_id: str
    lms_group_set_id: Optional[str] = None
    last_updated: Optional[str] = None    # ISO-Zeitstempel des letzten Abgleichs


class Group(BaseModel):
    """Eine Gruppe von Roster-Mitgliedern.

    Bei LMS-gespiegelten Gruppen stehen die LMS-IDs in ``lms_member_ids``;
    die Auflösung auf Roster-IDs (``resolved_member_ids``) passiert beim Import.
    """

    id: str
    name: str
    member_ids: list[str] = Field(default_factory=list)
    lms_group_id: Optional[str] = None
    lms_member_ids: list[str] = Field(default_factory=list)
    resolved_member_ids: list[str] = Field(default_factory=list)
    unresolved_count: int = 0             # LMS-Mitglieder ohne Roster-Treffer


class GroupSet(BaseModel):
    """Benannte Sammlung von Gruppen.

    WICHTIG: Linked-Sets sind read-only. Zum Bearbeiten muss erst eine Kopie
    (copied/unlinked) angelegt werden.
    """

    id: str
    name: str
    kind: GroupSetKind = GroupSetKind.UNLINKED
    connection: Optional[GroupSetConnection] = None
    groups: list[Group] = Field(default_factory=list)

    @property
    def is_system(self) -> bool:
        return self.kind == GroupSetKind.SYSTEM

    @property
    def is_editable(self) -> bool:
        """True für copied/unlinked Sets."""
        return self.kind in (GroupSetKind.COPIED, GroupSetKind.UNLINKED)
