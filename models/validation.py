"""Ergebnisse der (externen) Roster-Validierung.

Die Validierung selbst läuft außerhalb dieses Pakets; hier liegen nur die
Datenmodelle, die von der Issue-Aggregation gelesen werden.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ValidationKind(str, Enum):
    DUPLICATE_STUDENT_ID = "duplicate_student_id"
    DUPLICATE_EMAIL = "duplicate_email"
    INVALID_EMAIL = "invalid_email"
    MISSING_EMAIL = "missing_email"
    DUPLICATE_ASSIGNMENT_NAME = "duplicate_assignment_name"
    DUPLICATE_GROUP_ID_IN_ASSIGNMENT = "duplicate_group_id_in_assignment"
    DUPLICATE_GROUP_NAME_IN_ASSIGNMENT = "duplicate_group_name_in_assignment"
    DUPLICATE_REPO_NAME_IN_ASSIGNMENT = "duplicate_repo_name_in_assignment"
    STUDENT_IN_MULTIPLE_GROUPS_IN_ASSIGNMENT = "student_in_multiple_groups_in_assignment"
    ORPHAN_GROUP_MEMBER = "orphan_group_member"
    MISSING_GIT_USERNAME = "missing_git_username"
    INVALID_GIT_USERNAME = "invalid_git_username"
    EMPTY_GROUP = "empty_group"
    UNASSIGNED_STUDENT = "unassigned_student"
    SYSTEM_GROUP_SETS_MISSING = "system_group_sets_missing"
    INVALID_ENROLLMENT_PARTITION = "invalid_enrollment_partition"
    INVALID_GROUP_ORIGIN = "invalid_group_origin"


class ValidationIssue(BaseModel):
    """Ein einzelnes gefundenes Problem."""

    kind: ValidationKind
    affected_ids: list[str] = Field(default_factory=list)
    context: Optional[str] = None


class ValidationResult(BaseModel):
    """Bündel von Problemen (Roster-weit oder pro Aufgabe)."""

    issues: list[ValidationIssue] = Field(default_factory=list)


class ValidationResults(BaseModel):
    """Alle aktuellen Validierungsergebnisse eines Profils.

    ``per_assignment`` behält die Einfügereihenfolge; sie bestimmt die
    Reihenfolge der Aufgaben-Karten bei gleichem Count.
    """

    roster: Optional[ValidationResult] = None
    per_assignment: dict[str, ValidationResult] = Field(default_factory=dict)
