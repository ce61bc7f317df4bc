"""Datenmodell für eine Aufgabe (Pydantic v2)."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class AssignmentType(str, Enum):
    CLASS_WIDE = "class_wide"    # Alle aktiven Studierenden müssen abgedeckt sein
    SELECTIVE = "selective"


class Assignment(BaseModel):
    """Eine Aufgabe; verweist auf genau ein Gruppen-Set (keine Ownership)."""

    id: str
    name: str
    group_set_id: str
    assignment_type: AssignmentType = AssignmentType.CLASS_WIDE
    description: Optional[str] = None
