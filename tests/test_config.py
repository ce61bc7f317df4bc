"""Tests für das Konfigurationssystem und die Profil-Datenmodelle."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from config.schema import IssueConfig, RosterCheckConfig, TrackerConfig
from config.defaults import (
    ISSUE_SUMMARY_KEYS,
    MEMBER_ID_ISSUE_KINDS,
    VALIDATION_KIND_LABELS,
    default_issue_config,
    default_roster_check_config,
    validation_kind_label,
)
from config.manager import ConfigManager
from models.validation import ValidationKind


# ─── DEFAULT-KONFIGURATION ────────────────────────────────────────────────────

class TestDefaultConfig:
    def test_default_issue_config(self):
        """Default: Vorschau 3, fünf Roster- und drei Aufgaben-Problemarten."""
        ic = default_issue_config()
        assert ic.detail_preview_limit == 3
        assert ic.roster_issue_kinds == [
            ValidationKind.DUPLICATE_STUDENT_ID,
            ValidationKind.DUPLICATE_EMAIL,
            ValidationKind.INVALID_EMAIL,
            ValidationKind.MISSING_EMAIL,
            ValidationKind.DUPLICATE_ASSIGNMENT_NAME,
        ]
        assert ic.assignment_issue_kinds == [
            ValidationKind.DUPLICATE_GROUP_ID_IN_ASSIGNMENT,
            ValidationKind.DUPLICATE_GROUP_NAME_IN_ASSIGNMENT,
            ValidationKind.DUPLICATE_REPO_NAME_IN_ASSIGNMENT,
        ]

    def test_default_roster_check_config(self):
        config = default_roster_check_config()
        assert config.tracker.log_switches is True
        assert config == RosterCheckConfig()

    def test_every_kind_has_label(self):
        """Jede Problemart hat einen Anzeigetext."""
        for kind in ValidationKind:
            assert kind in VALIDATION_KIND_LABELS, f"Label für {kind.value} fehlt"

    def test_label_lookup(self):
        assert validation_kind_label(ValidationKind.DUPLICATE_EMAIL) == "Duplicate emails"

    def test_member_kinds_are_roster_kinds(self):
        """Namensauflösung nur für Problemarten, die Mitglieder-IDs liefern."""
        assert MEMBER_ID_ISSUE_KINDS <= set(default_issue_config().roster_issue_kinds)

    def test_summary_keys_order(self):
        assert list(ISSUE_SUMMARY_KEYS)[:3] == ["unknown", "unassigned", "empty"]
        assert list(ISSUE_SUMMARY_KEYS)[-1] == "duplicate_repos"


# ─── SCHEMA-VALIDIERUNG ───────────────────────────────────────────────────────

class TestIssueConfigValidation:
    def test_preview_limit_bounds(self):
        """detail_preview_limit außerhalb 1–20 → ValidationError."""
        with pytest.raises(ValidationError):
            IssueConfig(detail_preview_limit=0)
        with pytest.raises(ValidationError):
            IssueConfig(detail_preview_limit=21)
        assert IssueConfig(detail_preview_limit=20).detail_preview_limit == 20

    def test_empty_kind_list_rejected(self):
        with pytest.raises(ValidationError, match="darf nicht leer sein"):
            IssueConfig(roster_issue_kinds=[])

    def test_duplicate_kinds_rejected(self):
        with pytest.raises(ValidationError, match="doppelte"):
            IssueConfig(assignment_issue_kinds=[
                ValidationKind.DUPLICATE_REPO_NAME_IN_ASSIGNMENT,
                ValidationKind.DUPLICATE_REPO_NAME_IN_ASSIGNMENT,
            ])

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError):
            IssueConfig(roster_issue_kinds=["not_a_kind"])

    def test_kinds_accept_raw_strings(self):
        ic = IssueConfig(roster_issue_kinds=["missing_git_username"])
        assert ic.roster_issue_kinds == [ValidationKind.MISSING_GIT_USERNAME]


# ─── CONFIG MANAGER ───────────────────────────────────────────────────────────

class TestConfigManager:
    def test_save_and_load_roundtrip(self, tmp_path: Path):
        """Config speichern, laden und validieren — vollständiger Roundtrip."""
        config = RosterCheckConfig(
            issues=IssueConfig(
                detail_preview_limit=5,
                roster_issue_kinds=[ValidationKind.MISSING_GIT_USERNAME],
            ),
            tracker=TrackerConfig(log_switches=False),
        )
        mgr = ConfigManager()
        mgr.CONFIG_DIR = tmp_path
        mgr.DEFAULT_CONFIG = tmp_path / "roster_check.yaml"

        mgr.save(config)
        assert mgr.DEFAULT_CONFIG.exists()

        loaded = mgr.load(mgr.DEFAULT_CONFIG)
        assert loaded == config

    def test_saved_yaml_has_comments(self, tmp_path: Path):
        mgr = ConfigManager()
        target = tmp_path / "roster_check.yaml"
        mgr.save(default_roster_check_config(), target)
        text = target.read_text(encoding="utf-8")
        assert text.startswith("# ====")
        assert "issues:" in text
        assert "detail_preview_limit: 3" in text

    def test_first_run_check_no_file(self, tmp_path: Path):
        """first_run_check gibt True zurück wenn keine Config existiert."""
        mgr = ConfigManager()
        mgr.DEFAULT_CONFIG = tmp_path / "nonexistent.yaml"
        assert mgr.first_run_check() is True

    def test_first_run_check_with_file(self, tmp_path: Path):
        """first_run_check gibt False zurück wenn Config existiert."""
        mgr = ConfigManager()
        mgr.CONFIG_DIR = tmp_path
        mgr.DEFAULT_CONFIG = tmp_path / "roster_check.yaml"
        mgr.save(default_roster_check_config())
        assert mgr.first_run_check() is False

    def test_load_nonexistent_raises(self, tmp_path: Path):
        """Laden einer nicht-existenten Datei → FileNotFoundError."""
        mgr = ConfigManager()
        with pytest.raises(FileNotFoundError):
            mgr.load(tmp_path / "not_there.yaml")

    def test_load_invalid_raises_value_error(self, tmp_path: Path):
        """Ungültige Werte → ValueError mit Dateipfad."""
        target = tmp_path / "broken.yaml"
        target.write_text("issues:\n  detail_preview_limit: 99\n", encoding="utf-8")
        with pytest.raises(ValueError, match="ungültig"):
            ConfigManager().load(target)

    def test_load_empty_file_gives_defaults(self, tmp_path: Path):
        target = tmp_path / "empty.yaml"
        target.write_text("", encoding="utf-8")
        assert ConfigManager().load(target) == RosterCheckConfig()

    def test_load_or_default_without_file(self, tmp_path: Path):
        mgr = ConfigManager()
        assert mgr.load_or_default(tmp_path / "missing.yaml") == RosterCheckConfig()


# ─── MODELLE ──────────────────────────────────────────────────────────────────

class TestModels:
    def test_member_defaults(self):
        """RosterMember: aktiv, leere E-Mail, keine Zusatzfelder."""
        from models.member import MemberStatus, RosterMember
        m = RosterMember(id="s1", name="Lovelace, Ada")
        assert m.status == MemberStatus.ACTIVE
        assert m.is_active
        assert m.email == ""
        assert m.custom_fields == {}

    def test_group_set_kinds(self):
        from models.group_set import GroupSet, GroupSetKind
        assert GroupSet(id="a", name="A").is_editable
        assert not GroupSet(id="b", name="B", kind=GroupSetKind.LINKED).is_editable
        assert GroupSet(id="c", name="C", kind=GroupSetKind.SYSTEM).is_system

    def test_roster_lookups(self):
        from models.assignment import Assignment
        from models.group_set import GroupSet
        from models.member import RosterMember
        from models.roster import Roster
        roster = Roster(
            students=[RosterMember(id="s1", name="Alice")],
            staff=[RosterMember(id="t1", name="Turing")],
            group_sets=[GroupSet(id="gs1", name="Teams")],
            assignments=[Assignment(id="a1", name="Lab 1", group_set_id="gs1")],
        )
        assert [m.id for m in roster.members] == ["s1", "t1"]
        assert roster.find_group_set("gs1").name == "Teams"
        assert roster.find_assignment("a1").name == "Lab 1"
        assert roster.find_assignment("a9") is None

    def test_course_info_frozen(self):
        from models.profile import CourseInfo
        course = CourseInfo(id="c1", name="Programmieren 1")
        with pytest.raises(ValidationError):
            course.name = "Anders"

    def test_saveable_state_excludes_course(self):
        """Kurs-Identität gehört nicht zum speicherbaren Ausschnitt."""
        from models.profile import CourseInfo, ProfileDocument, ProfileSettings, saveable_state
        doc = ProfileDocument(settings=ProfileSettings(
            course=CourseInfo(id="c1", name="Programmieren 1"),
        ))
        state = saveable_state(doc)
        assert set(state) == {
            "git_connection", "course_verified_at", "operations", "exports", "roster",
        }
        assert state["roster"] is None
        assert saveable_state(None) is None

    def test_profile_document_json_roundtrip(self, tmp_path: Path):
        from models.profile import CourseInfo, ProfileDocument, ProfileSettings
        from models.roster import Roster
        from models.member import RosterMember
        doc = ProfileDocument(
            settings=ProfileSettings(
                course=CourseInfo(id="c1", name="Programmieren 1"),
                git_connection="uni-gitlab",
            ),
            roster=Roster(students=[RosterMember(id="s1", name="Alice")]),
        )
        path = tmp_path / "profiles" / "p1.json"
        doc.save_json(path)
        loaded = ProfileDocument.load_json(path)
        assert loaded == doc
        assert "Studierende: 1" in loaded.summary()

    def test_profile_document_load_missing(self, tmp_path: Path):
        from models.profile import ProfileDocument
        with pytest.raises(FileNotFoundError):
            ProfileDocument.load_json(tmp_path / "missing.json")
