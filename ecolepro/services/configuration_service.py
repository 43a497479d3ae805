# ecolepro/services/configuration_service.py
"""School configuration, security PIN, subjects and system users."""
import logging
import re
import time
from typing import Dict, Iterable, List, Optional, Union

from ..core.config import settings
from ..core.exceptions import (
    DuplicateSubjectError,
    IncorrectPin,
    InsufficientRole,
    InvalidPinFormat,
    NoSchoolAvailable,
    PinMismatch,
    SchoolNotFound,
    UserNotFound,
    ValidationError,
)
from ..core.permissions import (
    ALL_MODULE_IDS,
    default_role_permissions,
    default_subjects,
    validate_role_permissions,
)
from ..core.seed_data import default_school_config
from ..schemas.enums import AuditLevel, SchoolModule, SchoolType, UserRole, UserStatus
from ..schemas.school_schemas import (
    GeneralSettingsUpdate,
    School,
    SchoolConfig,
    SchoolDraft,
    SettingsView,
)
from ..schemas.user_schemas import SessionContext, SystemUser, SystemUserDraft
from ..schemas.audit_schemas import AuditLogEntry
from ..utils.merge import merge_records
from .audit_service import AuditService
from .store_service import PersistedStore

logger = logging.getLogger(__name__)

DEFAULT_PIN = "0000"
PIN_PATTERN = re.compile(r"[0-9]{4}")

# Config fields owned by the permissions/subjects tab, never touched by identity edits
GUARDED_CONFIG_FIELDS = ("role_permissions", "subjects")

ModuleKey = Union[SchoolModule, str]


def _epoch_ms() -> int:
    return int(time.time() * 1000)


def _module_value(module: ModuleKey) -> str:
    return module.value if isinstance(module, SchoolModule) else str(module)


# --- pure editing helpers ---

def reset_permissions() -> Dict[str, List[str]]:
    return default_role_permissions()


def reset_subjects() -> List[str]:
    return default_subjects()


def add_subject(subjects: List[str], name: str) -> List[str]:
    """Append a subject, ignoring blank names and refusing duplicates."""
    cleaned = (name or "").strip()
    if not cleaned:
        return list(subjects)
    if cleaned in subjects:
        raise DuplicateSubjectError(cleaned)
    return [*subjects, cleaned]


def remove_subject(subjects: List[str], name: str) -> List[str]:
    return [s for s in subjects if s != name]


def toggle_module(modules: Iterable[ModuleKey], module: ModuleKey) -> List[str]:
    current = [_module_value(m) for m in modules]
    target = _module_value(module)
    if target in current:
        return [m for m in current if m != target]
    return [*current, target]


def toggle_all_modules(modules: Iterable[ModuleKey]) -> List[str]:
    """Clear the selection when every module is on, otherwise select them all."""
    current = {_module_value(m) for m in modules}
    if all(module_id in current for module_id in ALL_MODULE_IDS):
        return []
    return list(ALL_MODULE_IDS)


class ConfigurationService:
    def __init__(self, store: PersistedStore):
        self.store = store
        self.audit = AuditService(store)

    # --- reads ---

    async def load_active_school(self, session: SessionContext) -> Optional[School]:
        """The session's own school, or the first school for an unscoped user."""
        if session.school_id:
            record = await self.store.get_school_by_id(session.school_id)
        else:
            schools = await self.store.get_schools()
            record = schools[0] if schools else None
        return School(**record) if record else None

    async def load_settings(self, session: SessionContext) -> SettingsView:
        school = await self.load_active_school(session)
        if school is None:
            raise NoSchoolAvailable()

        role_permissions = school.config.role_permissions
        subjects = school.config.subjects
        return SettingsView(
            school=school,
            role_permissions=role_permissions if role_permissions is not None else reset_permissions(),
            subjects=subjects if subjects is not None else reset_subjects(),
        )

    async def list_schools(self) -> List[School]:
        return [School(**record) for record in await self.store.get_schools()]

    async def get_school(self, school_id: str) -> School:
        record = await self.store.get_school_by_id(school_id)
        if not record:
            raise SchoolNotFound(school_id)
        return School(**record)

    # --- school writes ---

    async def save_school(self, session: SessionContext, draft: SchoolDraft) -> School:
        """Create a school or merge a form over the stored one.

        Identity fields come from the draft; the permission matrix and the
        subject list are always carried over from the stored config.
        """
        if not draft.name or not draft.name.strip():
            raise ValidationError("School name is required", field="name")

        existing = await self.store.get_school_by_id(draft.id) if draft.id else None
        base_config = existing["config"] if existing else default_school_config()

        overlay = draft.config.model_dump(exclude_unset=True) if draft.config else {}
        overlay["school_name"] = draft.name
        supplied = draft.model_fields_set
        if "address" in supplied or not existing:
            address = draft.address or ""
        else:
            address = existing.get("address", "")
        overlay["address"] = address
        config = merge_records(base_config, overlay, preserve=GUARDED_CONFIG_FIELDS)

        if "logo_url" in supplied:
            logo_url = draft.logo_url
        else:
            logo_url = existing.get("logo_url") if existing else None

        if draft.type is not None:
            school_type = draft.type
        elif existing:
            school_type = existing.get("type", SchoolType.SECONDAIRE)
        else:
            school_type = SchoolType.SECONDAIRE

        if draft.modules is not None:
            modules = draft.modules
        elif existing:
            modules = existing.get("modules", [])
        else:
            modules = list(ALL_MODULE_IDS)

        school = School(
            id=draft.id or f"SCHOOL_{_epoch_ms()}",
            name=draft.name,
            address=address,
            logo_url=logo_url,
            type=school_type,
            modules=modules,
            config=SchoolConfig(**config),
        )

        created = await self.store.save_school(school.model_dump(mode="json"))
        if created:
            logger.info(f"School created: {school.id} ({school.name})")
            await self.audit.record(
                "Création École", session.name, f"Nouvelle école: {school.name}",
                AuditLevel.CRITICAL, school.id,
            )
        else:
            await self.audit.record(
                "Mise à jour École", session.name, f"Modification de {school.name}",
                AuditLevel.INFO, school.id,
            )
        return school

    async def save_general_settings(
        self, session: SessionContext, school_id: str, update: GeneralSettingsUpdate
    ) -> School:
        """Apply the general tab: identity, logo and modules only."""
        school = await self._school_for_session(session, school_id)
        changes = update.model_dump(exclude_unset=True)

        if "name" in changes:
            if not changes["name"]:
                raise ValidationError("School name is required", field="name")
            school.name = changes["name"]
            school.config.school_name = changes["name"]
        if "address" in changes:
            school.address = changes["address"] or ""
            school.config.address = changes["address"] or ""
        if "logo_url" in changes:
            school.logo_url = changes["logo_url"]
        if "modules" in changes and changes["modules"] is not None:
            school.modules = changes["modules"]

        for field in ("phone", "email", "academic_year", "director_name"):
            if field in changes and changes[field] is not None:
                setattr(school.config, field, changes[field])

        await self.store.save_school(school.model_dump(mode="json"))
        await self.audit.record(
            "Mise à jour École", session.name, f"Paramètres généraux de {school.name}",
            AuditLevel.INFO, school.id,
        )
        return school

    async def save_permissions_and_subjects(
        self,
        session: SessionContext,
        school_id: str,
        role_permissions: Dict[str, List[str]],
        subjects: List[str],
    ) -> School:
        """Overwrite the permission matrix and subject list, nothing else."""
        school = await self._school_for_session(session, school_id)

        validated = validate_role_permissions(role_permissions)
        cleaned_subjects: List[str] = []
        for subject in subjects:
            name = (subject or "").strip()
            if not name:
                continue
            if name in cleaned_subjects:
                raise DuplicateSubjectError(name)
            cleaned_subjects.append(name)

        school.config.role_permissions = validated
        school.config.subjects = cleaned_subjects

        await self.store.save_school(school.model_dump(mode="json"))
        await self.audit.record(
            "Mise à jour Permissions", session.name,
            f"Droits et matières de {school.name} ({len(cleaned_subjects)} matières)",
            AuditLevel.INFO, school.id,
        )
        return school

    # --- security PIN ---

    async def change_pin(
        self,
        session: SessionContext,
        school_id: str,
        current_pin: str,
        new_pin: str,
        confirm_pin: str,
    ) -> None:
        school = await self._school_for_session(session, school_id)
        stored_pin = school.config.admin_pin or DEFAULT_PIN

        if current_pin != stored_pin:
            raise IncorrectPin()
        if new_pin != confirm_pin:
            raise PinMismatch()
        if not PIN_PATTERN.fullmatch(new_pin or ""):
            raise InvalidPinFormat()

        school.config.admin_pin = new_pin
        await self.store.save_school(school.model_dump(mode="json"))
        await self.audit.record(
            "Changement PIN", session.name, f"Code PIN modifié pour {school.name}",
            AuditLevel.WARNING, school.id,
        )

    async def verify_pin(self, school_id: str, pin: str) -> bool:
        school = await self.get_school(school_id)
        return pin == (school.config.admin_pin or DEFAULT_PIN)

    # --- system users ---

    async def list_system_users(self, school_id: Optional[str] = None) -> List[SystemUser]:
        return [SystemUser(**user) for user in await self.store.get_system_users(school_id)]

    async def save_system_user(self, session: SessionContext, draft: SystemUserDraft) -> SystemUser:
        if not draft.name or not draft.email or not draft.role:
            raise ValidationError("Name, email and role are required")

        if not session.is_super_admin:
            if draft.role == UserRole.SUPER_ADMIN:
                raise InsufficientRole("Only a super administrator can grant SUPER_ADMIN")
            if draft.school_id and draft.school_id != session.school_id:
                raise InsufficientRole("This school belongs to another tenant")

        school_id = draft.school_id
        if school_id is None and not session.is_super_admin:
            school_id = session.school_id

        if school_id is None and draft.role != UserRole.SUPER_ADMIN:
            if settings.strict_user_scoping:
                raise ValidationError(
                    f"A {draft.role.value} account must belong to a school", field="school_id"
                )
            logger.warning(f"System user '{draft.email}' with role {draft.role.value} has no school")

        user = SystemUser(
            id=draft.id or str(_epoch_ms()),
            school_id=school_id,
            name=draft.name,
            email=draft.email,
            role=draft.role,
            status=draft.status or UserStatus.ACTIVE,
            last_login=draft.last_login or "Jamais",
        )

        created = await self.store.save_system_user(user.model_dump(mode="json"))
        await self.audit.record(
            "Création Utilisateur" if created else "Modification Utilisateur",
            session.name, f"{user.name} ({user.role.value})",
            AuditLevel.INFO, user.school_id,
        )
        return user

    async def delete_system_user(self, session: SessionContext, user_id: str) -> None:
        users = await self.store.get_system_users()
        target = next((u for u in users if u.get("id") == user_id), None)
        if target is None:
            raise UserNotFound(user_id)
        if not session.is_super_admin and target.get("school_id") != session.school_id:
            raise InsufficientRole("This user belongs to another tenant")
        if not await self.store.delete_system_user(user_id):
            raise UserNotFound(user_id)

        await self.audit.record(
            "Suppression Utilisateur", session.name, f"Suppression de {target.get('name')}",
            AuditLevel.WARNING, target.get("school_id"),
        )

    # --- audit trail ---

    async def list_audit_logs(self, school_id: Optional[str] = None) -> List[AuditLogEntry]:
        return await self.audit.list_entries(school_id)

    # --- helpers ---

    async def _school_for_session(self, session: SessionContext, school_id: str) -> School:
        school = await self.get_school(school_id)
        if not session.is_super_admin and session.school_id != school_id:
            raise InsufficientRole("This school belongs to another tenant")
        return school
