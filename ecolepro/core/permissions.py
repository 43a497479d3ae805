# ecolepro/core/permissions.py
"""Module catalog, fine-grained permissions and default role grants.

Permission identifiers are ``<MODULE>.<action>`` strings. Every module of the
catalog gets its permissions either from ``DETAILED_PERMISSIONS`` or, when it
has no entry there, from a synthesized read/write pair. ``SETTINGS`` is a
system pseudo-module: it is never enabled per school but ``SETTINGS.write``
gates access to the administration screens.
"""
import copy
from typing import Dict, Iterable, List, Mapping, Optional, Set, Union

from .exceptions import InvalidPermissionError
from ..schemas.enums import SchoolModule, UserRole
from ..schemas.permission_schemas import ModuleDefinition, PermissionDefinition

SETTINGS_MODULE = "SETTINGS"
SETTINGS_PERMISSION = f"{SETTINGS_MODULE}.write"
SYSTEM_PERMISSIONS = (SETTINGS_PERMISSION,)

AVAILABLE_MODULES: List[Dict[str, str]] = [
    {"id": "STUDENTS", "label": "Élèves & Inscriptions", "description": "Gestion des dossiers élèves, inscriptions et transferts."},
    {"id": "TEACHERS", "label": "Personnel & RH", "description": "Gestion des enseignants, contrats et spécialités."},
    {"id": "ACADEMIC", "label": "Académique (Classes)", "description": "Gestion des classes, salles et professeurs principaux."},
    {"id": "TIMETABLE", "label": "Emploi du Temps", "description": "Planification des cours, gestion des salles et horaires."},
    {"id": "HOMEWORK", "label": "Cahier de Texte", "description": "Suivi des séances, devoirs et calendrier pédagogique."},
    {"id": "GRADES", "label": "Gestion des Notes", "description": "Saisie des notes, calcul des moyennes et bulletins."},
    {"id": "FINANCE", "label": "Finances & Paie", "description": "Suivi des paiements scolarité, dépenses et salaires."},
    {"id": "LIBRARY", "label": "Bibliothèque", "description": "Gestion du fonds documentaire et des emprunts."},
    {"id": "CANTEEN", "label": "Cantine", "description": "Gestion des stocks, approvisionnements et recettes repas."},
    {"id": "RESOURCES", "label": "Ressources Pédagogiques", "description": "Partage de fichiers, cours et exercices."},
    {"id": "COMMUNICATION", "label": "Messagerie", "description": "Chat interne et annonces globales."},
    {"id": "CALENDAR", "label": "Calendrier", "description": "Emploi du temps et événements scolaires."},
    {"id": "AI_ASSISTANT", "label": "Assistant IA", "description": "Aide à la rédaction de rapports et analyses."},
]

ALL_MODULE_IDS: List[str] = [m["id"] for m in AVAILABLE_MODULES]


def _perm(perm_id: str, label: str, description: str) -> Dict[str, str]:
    return {"id": perm_id, "label": label, "description": description}


DETAILED_PERMISSIONS: Dict[str, List[Dict[str, str]]] = {
    "STUDENTS": [
        _perm("STUDENTS.read", "Consultation Élèves", "Voir la liste et dossiers des élèves"),
        _perm("STUDENTS.enroll", "Inscription", "Droit d'inscrire un nouvel élève"),
        _perm("STUDENTS.transfer", "Gestion Transferts", "Gérer les transferts entrants/sortants"),
    ],
    "GRADES": [
        _perm("GRADES.read", "Lecture Notes", "Voir les bulletins et relevés"),
        _perm("GRADES.write", "Saisie Notes", "Ajouter et modifier les notes des élèves"),
    ],
    "TIMETABLE": [
        _perm("TIMETABLE.read", "Voir Emploi du Temps", "Consulter les plannings"),
        _perm("TIMETABLE.write", "Modifier Emploi du Temps", "Créer et modifier les créneaux de cours"),
    ],
    "HOMEWORK": [
        _perm("HOMEWORK.read", "Lecture Cahier de Texte", "Consulter le planning et les devoirs"),
        _perm("HOMEWORK.write", "Édition Cahier de Texte", "Saisir séances, devoirs et évaluations"),
    ],
    "RESOURCES": [
        _perm("RESOURCES.read", "Accès Ressources", "Voir et télécharger les fichiers"),
        _perm("RESOURCES.write", "Ajout Ressources", "Publier des cours et exercices"),
    ],
    "COMMUNICATION": [
        _perm("COMMUNICATION.read", "Lecture Messages", "Lire les messages reçus"),
        _perm("COMMUNICATION.write", "Envoi Messages", "Envoyer des messages et annonces"),
    ],
    "TEACHERS": [
        _perm("TEACHERS.read", "Annuaire Personnel", "Voir la liste du personnel"),
        _perm("TEACHERS.write", "Gestion RH", "Ajouter/Modifier des enseignants"),
    ],
    "ACADEMIC": [
        _perm("ACADEMIC.read", "Vue Classes", "Voir la structure pédagogique"),
        _perm("ACADEMIC.write", "Gestion Classes", "Créer classes et emploi du temps"),
    ],
    "FINANCE": [
        _perm("FINANCE.read", "Vue Financière", "Voir l'historique financier"),
        _perm("FINANCE.write", "Opérations Financières", "Saisir paiements, dépenses et salaires"),
    ],
    "LIBRARY": [
        _perm("LIBRARY.read", "Catalogue", "Consulter le catalogue"),
        _perm("LIBRARY.write", "Gestion Prêts", "Gérer emprunts, retours et stock"),
    ],
    "CANTEEN": [
        _perm("CANTEEN.read", "Vue Cantine", "Voir menus et stocks"),
        _perm("CANTEEN.write", "Gestion Cantine", "Gérer approvisionnements et ventes"),
    ],
    "CALENDAR": [
        _perm("CALENDAR.read", "Vue Calendrier", "Voir le calendrier scolaire"),
        _perm("CALENDAR.write", "Édition Calendrier", "Ajouter des événements"),
    ],
    "AI_ASSISTANT": [
        _perm("AI_ASSISTANT.read", "Utilisation IA", "Générer du contenu assisté"),
        _perm("AI_ASSISTANT.write", "Admin IA", "Configuration avancée IA"),
    ],
}

_FULL_ACCESS = [
    "STUDENTS.read", "STUDENTS.enroll", "STUDENTS.transfer",
    "TEACHERS.read", "TEACHERS.write",
    "ACADEMIC.read", "ACADEMIC.write", "TIMETABLE.read", "TIMETABLE.write",
    "HOMEWORK.read", "HOMEWORK.write",
    "GRADES.read", "GRADES.write", "FINANCE.read", "FINANCE.write",
    "LIBRARY.read", "LIBRARY.write", "RESOURCES.read", "RESOURCES.write",
    "COMMUNICATION.read", "COMMUNICATION.write", "CALENDAR.read", "CALENDAR.write",
    "AI_ASSISTANT.read", "AI_ASSISTANT.write", SETTINGS_PERMISSION,
    "CANTEEN.read", "CANTEEN.write",
]

DEFAULT_PERMISSIONS: Dict[str, List[str]] = {
    UserRole.SUPER_ADMIN.value: list(_FULL_ACCESS),
    UserRole.ADMIN.value: list(_FULL_ACCESS),
    UserRole.TEACHER.value: [
        "STUDENTS.read",
        "ACADEMIC.read", "TIMETABLE.read",
        "HOMEWORK.read", "HOMEWORK.write",
        "GRADES.read", "GRADES.write",
        "RESOURCES.read", "RESOURCES.write",
        "LIBRARY.read",
        "AI_ASSISTANT.read", "AI_ASSISTANT.write",
        "COMMUNICATION.read", "COMMUNICATION.write",
        "CALENDAR.read",
        "CANTEEN.read",
    ],
    UserRole.STUDENT.value: [
        "HOMEWORK.read", "GRADES.read", "TIMETABLE.read",
        "LIBRARY.read", "RESOURCES.read",
        "COMMUNICATION.read", "COMMUNICATION.write", "CALENDAR.read",
        "CANTEEN.read",
    ],
    UserRole.PARENT.value: [
        "HOMEWORK.read", "GRADES.read", "FINANCE.read", "TIMETABLE.read",
        "COMMUNICATION.read", "COMMUNICATION.write", "CALENDAR.read",
        "CANTEEN.read",
    ],
    UserRole.BURSAR.value: [
        "STUDENTS.read", "FINANCE.read", "FINANCE.write",
        "COMMUNICATION.read", "CALENDAR.read", "CANTEEN.read", "CANTEEN.write",
    ],
    UserRole.LIBRARIAN.value: [
        "STUDENTS.read", "TEACHERS.read",
        "LIBRARY.read", "LIBRARY.write",
        "COMMUNICATION.read", "COMMUNICATION.write",
        "CALENDAR.read", "FINANCE.read",
    ],
}

DEFAULT_SUBJECTS: List[str] = [
    "Mathématiques", "Français", "Anglais", "Physique-Chimie",
    "Histoire-Géo", "SVT", "Philosophie", "EPS",
    "Espagnol", "Allemand", "Arts Plastiques", "Musique", "Informatique",
]

# Roles offered in the permission editor; SUPER_ADMIN is not configurable
CONFIGURABLE_ROLES: List[UserRole] = [
    UserRole.TEACHER, UserRole.STUDENT, UserRole.PARENT,
    UserRole.BURSAR, UserRole.LIBRARIAN, UserRole.ADMIN,
]

RoleKey = Union[UserRole, str]


def _role_key(role: RoleKey) -> str:
    return role.value if isinstance(role, UserRole) else str(role)


def _module_key(module_id: Union[SchoolModule, str]) -> str:
    return module_id.value if isinstance(module_id, SchoolModule) else str(module_id)


def default_role_permissions() -> Dict[str, List[str]]:
    """Fresh deep copy of the default permission matrix."""
    return copy.deepcopy(DEFAULT_PERMISSIONS)


def default_subjects() -> List[str]:
    return list(DEFAULT_SUBJECTS)


def default_permissions_for(role: RoleKey) -> Set[str]:
    return set(DEFAULT_PERMISSIONS.get(_role_key(role), []))


def permissions_for_module(module_id: Union[SchoolModule, str]) -> List[PermissionDefinition]:
    """Declared permissions of a module, or the generic read/write pair."""
    key = _module_key(module_id)
    declared = DETAILED_PERMISSIONS.get(key)
    if declared:
        return [PermissionDefinition(**perm) for perm in declared]
    return [
        PermissionDefinition(id=f"{key}.read", label="Consultation", description="Voir les données"),
        PermissionDefinition(id=f"{key}.write", label="Modification", description="Ajouter/Modifier"),
    ]


def module_catalog() -> List[ModuleDefinition]:
    return [
        ModuleDefinition(**module, permissions=permissions_for_module(module["id"]))
        for module in AVAILABLE_MODULES
    ]


def known_permission_ids() -> Set[str]:
    known = set(SYSTEM_PERMISSIONS)
    for module_id in ALL_MODULE_IDS:
        known.update(perm.id for perm in permissions_for_module(module_id))
    return known


def has_permission(role_permissions: Optional[Mapping[str, Iterable[str]]], role: RoleKey, permission_id: str) -> bool:
    if not role_permissions:
        return False
    return permission_id in set(role_permissions.get(_role_key(role), ()))


def toggle_permission(role: RoleKey, permission_id: str, current_map: Mapping[str, List[str]]) -> Dict[str, List[str]]:
    """Return a new mapping with permission_id flipped for role.

    Removal keeps the order of the remaining grants and adding appends, so two
    toggles in a row give back the same grants for every role. The input map
    is never mutated.
    """
    key = _role_key(role)
    new_map = {r: list(perms) for r, perms in current_map.items()}
    current = new_map.get(key, [])
    if permission_id in current:
        new_map[key] = [p for p in current if p != permission_id]
    else:
        new_map[key] = current + [permission_id]
    return new_map


def validate_role_permissions(role_permissions: Mapping[str, Iterable[str]]) -> Dict[str, List[str]]:
    """Check a mapping against the role enum and permission catalog.

    Returns a normalised copy with duplicate grants collapsed in order.
    """
    valid_roles = {role.value for role in UserRole}
    known = known_permission_ids()
    validated: Dict[str, List[str]] = {}

    for role, permissions in role_permissions.items():
        role_name = _role_key(role)
        if role_name not in valid_roles:
            raise InvalidPermissionError(f"Unknown role '{role_name}'", value=role_name)

        cleaned: List[str] = []
        for permission_id in permissions:
            if permission_id not in known:
                raise InvalidPermissionError(
                    f"Unknown permission '{permission_id}' for role {role_name}",
                    value=permission_id,
                )
            if permission_id not in cleaned:
                cleaned.append(permission_id)
        validated[role_name] = cleaned

    return validated


def can_access_module(
    role_permissions: Optional[Mapping[str, Iterable[str]]],
    enabled_modules: Iterable[Union[SchoolModule, str]],
    role: RoleKey,
    module_id: Union[SchoolModule, str],
) -> bool:
    """Whether a role sees a module for a school.

    ``role_permissions`` is the school's stored map; ``None`` falls back to the
    default matrix.
    """
    permissions = role_permissions if role_permissions is not None else DEFAULT_PERMISSIONS
    key = _module_key(module_id)

    if key == SETTINGS_MODULE:
        return has_permission(permissions, role, SETTINGS_PERMISSION)

    if key not in {_module_key(m) for m in enabled_modules}:
        return False
    return has_permission(permissions, role, f"{key}.read")
