"""Datenmodell für ein Roster-Mitglied (Pydantic v2)."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class MemberStatus(str, Enum):
    ACTIVE = "active"
    DROPPED = "dropped"
    INCOMPLETE = "incomplete"


class RosterMember(BaseModel):
    """Repräsentiert eine Person im Roster (Studierende oder Lehrpersonal)."""

    id: str                                   # Roster-lokale ID ("s1", "m_4f2a")
    name: str                                 # "Lovelace, Ada"
    email: str = ""
    status: MemberStatus = MemberStatus.ACTIVE
    student_number: Optional[str] = None
    git_username: Optional[str] = None
    lms_user_id: Optional[str] = None         # ID im LMS (nur bei Import aus LMS)
    custom_fields: dict[str, str] = Field(default_factory=dict)

    @property
    def is_active(self) -> bool:
        return self.status == MemberStatus.ACTIVE
