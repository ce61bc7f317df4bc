from config.schema import IssueConfig, RosterCheckConfig, TrackerConfig
from models.validation import ValidationKind


# Anzeigetexte für alle Problemarten (auch solche ohne eigene Karte)
VALIDATION_KIND_LABELS: dict[ValidationKind, str] = {
    ValidationKind.DUPLICATE_STUDENT_ID: "Duplicate student IDs",
    ValidationKind.DUPLICATE_EMAIL: "Duplicate emails",
    ValidationKind.INVALID_EMAIL: "Invalid emails",
    ValidationKind.MISSING_EMAIL: "Missing emails",
    ValidationKind.DUPLICATE_ASSIGNMENT_NAME: "Duplicate assignment names",
    ValidationKind.DUPLICATE_GROUP_ID_IN_ASSIGNMENT: "Duplicate group IDs",
    ValidationKind.DUPLICATE_GROUP_NAME_IN_ASSIGNMENT: "Duplicate group names",
    ValidationKind.DUPLICATE_REPO_NAME_IN_ASSIGNMENT: "Duplicate repo names",
    ValidationKind.STUDENT_IN_MULTIPLE_GROUPS_IN_ASSIGNMENT: "Students in multiple groups",
    ValidationKind.ORPHAN_GROUP_MEMBER: "Unknown students",
    ValidationKind.MISSING_GIT_USERNAME: "Missing git usernames",
    ValidationKind.INVALID_GIT_USERNAME: "Invalid git usernames",
    ValidationKind.EMPTY_GROUP: "Empty groups",
    ValidationKind.UNASSIGNED_STUDENT: "Unassigned students",
    ValidationKind.SYSTEM_GROUP_SETS_MISSING: "System group sets missing",
    ValidationKind.INVALID_ENROLLMENT_PARTITION: "Invalid enrollment partition",
    ValidationKind.INVALID_GROUP_ORIGIN: "Invalid group origin",
}

# Problemarten, deren affected_ids Mitglieder-IDs sind (Anzeige über Namen)
MEMBER_ID_ISSUE_KINDS: frozenset[ValidationKind] = frozenset({
    ValidationKind.DUPLICATE_STUDENT_ID,
    ValidationKind.DUPLICATE_EMAIL,
    ValidationKind.INVALID_EMAIL,
    ValidationKind.MISSING_EMAIL,
})

# Zusammenfassung: Schlüssel → (Anzeigetext, zugehörige Kartenquellen).
# Reihenfolge = Priorität in der Übersicht.
ISSUE_SUMMARY_KEYS: dict[str, tuple[str, tuple[str, ...]]] = {
    "unknown": ("unknown", ("unknown_students",)),
    # keine Kartenquelle: Summe aus der Abdeckung der class-wide Aufgaben
    "unassigned": ("unassigned", ()),
    "empty": ("empty", ("empty_groups",)),
    "duplicate_ids": ("duplicate IDs", (ValidationKind.DUPLICATE_STUDENT_ID.value,)),
    "invalid_emails": ("invalid emails", (ValidationKind.INVALID_EMAIL.value,)),
    "missing_emails": ("missing emails", (ValidationKind.MISSING_EMAIL.value,)),
    "duplicate_emails": ("duplicate emails", (ValidationKind.DUPLICATE_EMAIL.value,)),
    "duplicate_assignments": (
        "duplicate assignments", (ValidationKind.DUPLICATE_ASSIGNMENT_NAME.value,),
    ),
    "duplicate_groups": (
        "duplicate groups",
        (
            ValidationKind.DUPLICATE_GROUP_ID_IN_ASSIGNMENT.value,
            ValidationKind.DUPLICATE_GROUP_NAME_IN_ASSIGNMENT.value,
        ),
    ),
    "duplicate_repos": (
        "duplicate repos", (ValidationKind.DUPLICATE_REPO_NAME_IN_ASSIGNMENT.value,),
    ),
}


def validation_kind_label(kind: ValidationKind) -> str:
    """Anzeigetext einer Problemart; unbekannte Arten fallen auf den Rohwert zurück."""
    return VALIDATION_KIND_LABELS.get(kind, getattr(kind, "value", str(kind)))


def default_issue_config() -> IssueConfig:
    """Standard: Vorschau mit 3 Einträgen, 5 Roster- und 3 Aufgaben-Problemarten."""
    return IssueConfig()


def default_roster_check_config() -> RosterCheckConfig:
    """Vollständige Default-Konfiguration."""
    return RosterCheckConfig(
        issues=default_issue_config(),
        tracker=TrackerConfig(),
    )
