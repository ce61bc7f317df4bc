from pydantic import BaseModel, Field, model_validator

from models.validation import ValidationKind


# ─── ISSUE-AGGREGATION ───

class IssueConfig(BaseModel):
    """Steuert, welche Validierungsprobleme als Issue-Karten erscheinen."""
    # Maximale Anzahl Einträge in einer Detail-Vorschau ("a; b; c + 2 more")
    detail_preview_limit: int = Field(3, ge=1, le=20,
        description="Einträge pro Detail-Vorschau")
    # Roster-weite Problemarten, die als Karte angezeigt werden
    roster_issue_kinds: list[ValidationKind] = Field(
        default=[
            ValidationKind.DUPLICATE_STUDENT_ID,
            ValidationKind.DUPLICATE_EMAIL,
            ValidationKind.INVALID_EMAIL,
            ValidationKind.MISSING_EMAIL,
            ValidationKind.DUPLICATE_ASSIGNMENT_NAME,
        ],
        description="Roster-Probleme mit eigener Karte")
    # Aufgaben-bezogene Problemarten, die als Karte angezeigt werden
    assignment_issue_kinds: list[ValidationKind] = Field(
        default=[
            ValidationKind.DUPLICATE_GROUP_ID_IN_ASSIGNMENT,
            ValidationKind.DUPLICATE_GROUP_NAME_IN_ASSIGNMENT,
            ValidationKind.DUPLICATE_REPO_NAME_IN_ASSIGNMENT,
        ],
        description="Aufgaben-Probleme mit eigener Karte")

    @model_validator(mode='after')
    def validate_kind_lists(self):
        """Mindestens eine Problemart pro Quelle, keine Doppelungen."""
        for field_name in ("roster_issue_kinds", "assignment_issue_kinds"):
            kinds = getattr(self, field_name)
            if not kinds:
                raise ValueError(f"{field_name} darf nicht leer sein")
            if len(set(kinds)) != len(kinds):
                raise ValueError(f"{field_name} enthält doppelte Einträge")
        return self


# ─── DIRTY-STATE ───

class TrackerConfig(BaseModel):
    """Einstellungen für die Erkennung ungespeicherter Änderungen."""
    # Profilwechsel im Log (INFO) protokollieren
    log_switches: bool = Field(True,
        description="Profilwechsel protokollieren")


# ─── GESAMT-CONFIG ───

class RosterCheckConfig(BaseModel):
    """Gesamtkonfiguration der Roster-Prüfung."""
    issues: IssueConfig = Field(default_factory=IssueConfig)
    tracker: TrackerConfig = Field(default_factory=TrackerConfig)
