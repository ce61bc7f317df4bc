from models.member import RosterMember, MemberStatus
from models.group_set import Group, GroupSet, GroupSetKind, GroupSetConnection
from models.assignment import Assignment, AssignmentType
from models.roster import Roster
from models.validation import (
    ValidationIssue, ValidationKind, ValidationResult, ValidationResults,
)
from models.profile import (
    CourseInfo, ExportSettings, OperationConfigs, ProfileDocument,
    ProfileSettings, saveable_state,
)

__all__ = [
    "RosterMember",
    "MemberStatus",
    "Group",
    "GroupSet",
    "GroupSetKind",
    "GroupSetConnection",
    "Assignment",
    "AssignmentType",
    "Roster",
    "ValidationIssue",
    "ValidationKind",
    "ValidationResult",
    "ValidationResults",
    "CourseInfo",
    "ExportSettings",
    "OperationConfigs",
    "ProfileDocument",
    "ProfileSettings",
    "saveable_state",
]
