# tests/test_permissions.py
import pytest

from ecolepro.core.exceptions import InvalidPermissionError
from ecolepro.core.permissions import (
    ALL_MODULE_IDS,
    DEFAULT_PERMISSIONS,
    can_access_module,
    default_permissions_for,
    default_role_permissions,
    has_permission,
    known_permission_ids,
    module_catalog,
    permissions_for_module,
    toggle_permission,
    validate_role_permissions,
)
from ecolepro.schemas.enums import SchoolModule, UserRole


def test_unknown_module_gets_read_write_fallback():
    perms = permissions_for_module("PAYROLL")
    assert [p.id for p in perms] == ["PAYROLL.read", "PAYROLL.write"]
    assert perms[0].label == "Consultation"
    assert perms[0].description == "Voir les données"
    assert perms[1].label == "Modification"
    assert perms[1].description == "Ajouter/Modifier"


def test_declared_module_permissions():
    ids = [p.id for p in permissions_for_module(SchoolModule.STUDENTS)]
    assert ids == ["STUDENTS.read", "STUDENTS.enroll", "STUDENTS.transfer"]


def test_catalog_covers_every_module():
    catalog = module_catalog()
    assert [m.id for m in catalog] == ALL_MODULE_IDS
    assert len(catalog) == 13
    assert all(m.permissions for m in catalog)


def test_default_permissions_for_role():
    teacher = default_permissions_for(UserRole.TEACHER)
    assert "GRADES.write" in teacher
    assert "FINANCE.read" not in teacher
    assert "SETTINGS.write" in default_permissions_for("ADMIN")


def test_has_permission_missing_role_means_nothing():
    assert has_permission({"ADMIN": ["GRADES.read"]}, UserRole.ADMIN, "GRADES.read")
    assert not has_permission({"ADMIN": ["GRADES.read"]}, UserRole.TEACHER, "GRADES.read")
    assert not has_permission(None, UserRole.ADMIN, "GRADES.read")


def test_toggle_twice_restores_map():
    original = default_role_permissions()
    once = toggle_permission(UserRole.TEACHER, "FINANCE.read", original)
    assert "FINANCE.read" in once["TEACHER"]
    twice = toggle_permission(UserRole.TEACHER, "FINANCE.read", once)
    assert twice == original


def test_toggle_removal_then_add_keeps_grants():
    original = default_role_permissions()
    removed = toggle_permission("TEACHER", "GRADES.write", original)
    assert "GRADES.write" not in removed["TEACHER"]
    restored = toggle_permission("TEACHER", "GRADES.write", removed)
    assert set(restored["TEACHER"]) == set(original["TEACHER"])


def test_toggle_does_not_mutate_input():
    current = {"TEACHER": ["GRADES.read"]}
    toggle_permission("TEACHER", "GRADES.write", current)
    toggle_permission("STUDENT", "GRADES.read", current)
    assert current == {"TEACHER": ["GRADES.read"]}


def test_toggle_adds_missing_role():
    result = toggle_permission(UserRole.LIBRARIAN, "LIBRARY.write", {})
    assert result == {"LIBRARIAN": ["LIBRARY.write"]}


def test_validate_accepts_defaults_and_settings_permission():
    validated = validate_role_permissions(DEFAULT_PERMISSIONS)
    assert validated == DEFAULT_PERMISSIONS
    assert "SETTINGS.write" in known_permission_ids()


def test_validate_collapses_duplicates():
    validated = validate_role_permissions({"TEACHER": ["GRADES.read", "GRADES.write", "GRADES.read"]})
    assert validated == {"TEACHER": ["GRADES.read", "GRADES.write"]}


def test_validate_rejects_unknown_role():
    with pytest.raises(InvalidPermissionError) as exc:
        validate_role_permissions({"JANITOR": ["GRADES.read"]})
    assert exc.value.status_code == 422
    assert exc.value.detail["value"] == "JANITOR"


def test_validate_rejects_unknown_permission():
    with pytest.raises(InvalidPermissionError) as exc:
        validate_role_permissions({"TEACHER": ["GRADES.delete"]})
    assert exc.value.detail["value"] == "GRADES.delete"


def test_settings_access_needs_settings_write():
    assert can_access_module(None, [], UserRole.ADMIN, "SETTINGS")
    assert not can_access_module(None, ALL_MODULE_IDS, UserRole.TEACHER, "SETTINGS")


def test_module_access_needs_enabled_module_and_read():
    perms = {"TEACHER": ["GRADES.read"]}
    assert can_access_module(perms, ["GRADES"], "TEACHER", SchoolModule.GRADES)
    assert not can_access_module(perms, ["STUDENTS"], "TEACHER", "GRADES")
    assert not can_access_module(perms, ["GRADES", "FINANCE"], "TEACHER", "FINANCE")


def test_module_access_falls_back_to_defaults():
    assert can_access_module(None, ["FINANCE"], UserRole.BURSAR, "FINANCE")
    assert not can_access_module(None, ["FINANCE"], UserRole.STUDENT, "FINANCE")
