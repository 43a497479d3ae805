# ecolepro/core/seed_data.py
"""Demo dataset the store is initialised from, and reset back to."""
import copy
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List

from .permissions import ALL_MODULE_IDS, default_role_permissions, default_subjects

DEMO_SCHOOL_ID = "SCHOOL_01"

# Store collection keys; also the field names of a JSON backup
CORE_COLLECTIONS = (
    "schools", "students", "teachers", "classes",
    "transactions", "messages", "events", "users",
)
OPTIONAL_COLLECTIONS = (
    "books", "loans", "resources", "notifications",
    "lesson_logs", "canteen_items", "time_slots", "audit_logs", "tickets",
)
COLLECTION_KEYS = CORE_COLLECTIONS + OPTIONAL_COLLECTIONS

# Table names used by the SQL export, in dump order
SQL_TABLE_NAMES = {
    "schools": "schools",
    "students": "students",
    "teachers": "teachers",
    "classes": "classes",
    "transactions": "transactions",
    "messages": "messages",
    "events": "events",
    "users": "system_users",
    "books": "books",
    "loans": "loans",
    "resources": "resources",
    "notifications": "notifications",
    "lesson_logs": "lesson_logs",
    "canteen_items": "canteen_items",
    "time_slots": "time_slots",
    "audit_logs": "audit_logs",
    "tickets": "support_tickets",
}


def default_school_config() -> Dict[str, Any]:
    return {
        "school_name": "Mon École",
        "address": "Abidjan, Côte d'Ivoire",
        "phone": "+225 07 00 00 00",
        "email": "contact@ecole.ci",
        "academic_year": "2024-2025",
        "director_name": "M. le Directeur",
        "admin_pin": "0000",
        "role_permissions": default_role_permissions(),
        "subjects": default_subjects(),
    }


def _initial_schools() -> List[Dict[str, Any]]:
    pepites = default_school_config()
    pepites.update(school_name="Groupe Scolaire Les Pépites", director_name="M. Koné")
    savoir = default_school_config()
    savoir.update(school_name="Collège Moderne du Savoir", director_name="Mme. Kouassi")

    return [
        {
            "id": DEMO_SCHOOL_ID,
            "name": "Lycée d'Excellence EcolePro",
            "address": "Plateau, Abidjan",
            "logo_url": None,
            "type": "SECONDAIRE",
            "modules": list(ALL_MODULE_IDS),
            "config": default_school_config(),
        },
        {
            "id": "SCHOOL_02",
            "name": "Groupe Scolaire Les Pépites",
            "address": "Cocody, Abidjan",
            "logo_url": None,
            "type": "PRIMAIRE",
            "modules": ["FINANCE", "STUDENTS", "ACADEMIC", "COMMUNICATION"],
            "config": pepites,
        },
        {
            "id": "SCHOOL_03",
            "name": "Collège Moderne du Savoir",
            "address": "Yopougon, Abidjan",
            "logo_url": None,
            "type": "SECONDAIRE",
            "modules": ["STUDENTS", "GRADES", "FINANCE", "TEACHERS", "TIMETABLE", "HOMEWORK"],
            "config": savoir,
        },
    ]


def build_seed_collections() -> Dict[str, List[Dict[str, Any]]]:
    """Fresh copy of every collection, with dates relative to now."""
    now = datetime.now(timezone.utc)
    today = now.date()

    seed: Dict[str, List[Dict[str, Any]]] = {
        "schools": _initial_schools(),
        "students": [
            {
                "id": "1", "matricule": "2023-001", "school_id": DEMO_SCHOOL_ID,
                "first_name": "Jean", "last_name": "Dupont", "class_grade": "Terminale C",
                "average": 14.5,
                "grades": [
                    {"id": "g1", "subject": "Mathématiques", "value": 16, "coefficient": 4, "type": "Devoir", "date": "2023-10-15"},
                    {"id": "g2", "subject": "Physique-Chimie", "value": 14, "coefficient": 3, "type": "Interro", "date": "2023-10-20"},
                ],
                "status": "Actif", "attendance": 95, "behavior_notes": ["Bonne participation"],
                "parent_name": "M. Dupont", "parent_relation": "Père", "parent_phone": "0102030405",
            },
            {
                "id": "2", "matricule": "2023-002", "school_id": DEMO_SCHOOL_ID,
                "first_name": "Alice", "last_name": "Koffi", "class_grade": "Terminale C",
                "average": 16.0, "grades": [],
                "status": "Actif", "attendance": 98, "behavior_notes": [],
                "parent_name": "Mme. Koffi", "parent_relation": "Mère", "parent_phone": "0708091011",
            },
        ],
        "teachers": [
            {
                "id": "T1", "matricule": "839633V", "school_id": DEMO_SCHOOL_ID,
                "first_name": "Landry", "last_name": "IRIE BI BOHI",
                "specialty": "Sciences Exactes", "subject": "Mathématiques",
                "email": "irie.landry@ecolepro.ci", "phone": "0171511950",
                "contract_type": "CDI", "status": "Actif", "join_date": "2020-09-01",
                "base_salary": 250000, "sex": "M", "is_bivalent": True,
                "employment_label": "Professeur de Collège", "years_experience": 5,
            },
            {
                "id": "T2", "matricule": "T2021002", "school_id": DEMO_SCHOOL_ID,
                "first_name": "Sophie", "last_name": "Durand",
                "specialty": "Lettres", "subject": "Français",
                "email": "sophie.durand@ecolepro.ci", "phone": "0504030201",
                "contract_type": "CDI", "status": "Actif", "join_date": "2021-09-01",
                "base_salary": 240000, "sex": "F", "is_bivalent": False,
                "employment_label": "Professeur Certifié", "years_experience": 8,
            },
        ],
        "classes": [
            {"id": "C1", "school_id": DEMO_SCHOOL_ID, "name": "Terminale C", "level": "Terminale", "main_teacher_id": "T1", "student_count": 35, "room": "Bat A - 101"},
            {"id": "C2", "school_id": DEMO_SCHOOL_ID, "name": "Première D", "level": "Première", "main_teacher_id": "T2", "student_count": 40, "room": "Bat A - 102"},
            {"id": "C3", "school_id": DEMO_SCHOOL_ID, "name": "Seconde C", "level": "Seconde", "main_teacher_id": "", "student_count": 45, "room": "Bat B - 201"},
        ],
        "transactions": [
            {
                "id": "TRX-001", "school_id": DEMO_SCHOOL_ID, "student_id": "1", "student_name": "Jean Dupont",
                "amount": 50000, "type": "Tuition", "flow": "IN", "date": now.isoformat(),
                "status": "Paid", "description": "Scolarité Trimestre 1",
            },
            {
                "id": "TRX-002", "school_id": DEMO_SCHOOL_ID,
                "amount": 25000, "type": "Material", "flow": "OUT", "date": (now - timedelta(days=1)).isoformat(),
                "status": "Paid", "description": "Achat Fournitures Bureau",
            },
        ],
        "messages": [
            {
                "id": "M1", "school_id": DEMO_SCHOOL_ID, "sender": "Administration",
                "content": "Bienvenue sur la nouvelle plateforme !", "timestamp": "10:00",
                "read": False, "is_me": False, "is_broadcast": True,
            },
        ],
        "events": [
            {
                "id": "E1", "school_id": DEMO_SCHOOL_ID, "title": "Conseil de Classe Tle C",
                "date": (today + timedelta(days=2)).isoformat(), "start_time": "16:00", "end_time": "18:00",
                "category": "PEDAGOGIC", "status": "PLANNED", "location": "Salle des Profs",
                "description": "Bilan du premier trimestre.",
            },
            {
                "id": "E2", "school_id": DEMO_SCHOOL_ID, "title": "Sortie Pédagogique Musée",
                "date": (today + timedelta(days=5)).isoformat(), "start_time": "08:00", "end_time": "14:00",
                "category": "EXTRA_CURRICULAR", "status": "PLANNED", "location": "Musée des Civilisations",
                "description": "Sortie pour les classes de 3ème.",
            },
        ],
        "users": [
            {"id": "USER_ADMIN", "name": "Admin Principal", "email": "admin@ecole.com", "role": "ADMIN", "last_login": "2024-03-10", "status": "ACTIVE", "school_id": DEMO_SCHOOL_ID, "avatar_url": None},
            {"id": "USER_TEACHER", "name": "Prof. Test", "email": "prof@ecole.com", "role": "TEACHER", "last_login": "2024-03-11", "status": "ACTIVE", "school_id": DEMO_SCHOOL_ID, "avatar_url": None},
        ],
        "books": [
            {"id": "B1", "school_id": DEMO_SCHOOL_ID, "title": "Le Petit Prince", "author": "Antoine de Saint-Exupéry", "isbn": "978-0156012195", "category": "Roman", "status": "AVAILABLE", "provenance": "ACHAT"},
            {"id": "B2", "school_id": DEMO_SCHOOL_ID, "title": "Maths Tle C", "author": "Collection CIAM", "isbn": "978-2841295671", "category": "Manuel Scolaire", "status": "BORROWED", "provenance": "ACHAT"},
        ],
        "loans": [
            {"id": "L1", "school_id": DEMO_SCHOOL_ID, "book_id": "B2", "book_title": "Maths Tle C", "student_name": "Jean Dupont", "borrow_date": "2024-03-01", "due_date": "2024-03-15", "status": "ACTIVE"},
        ],
        "resources": [
            {"id": "R1", "school_id": DEMO_SCHOOL_ID, "title": "Cours Chapitre 1 : Nombres Complexes", "description": "Introduction aux nombres complexes, forme algébrique.", "subject": "Mathématiques", "level": "Terminale", "type": "COURSE", "author_name": "M. Dubois", "upload_date": "2024-02-15", "size": "2.4 MB", "download_count": 12},
            {"id": "R2", "school_id": DEMO_SCHOOL_ID, "title": "Exercices Probabilités", "description": "Série d'exercices corrigés sur les probabilités conditionnelles.", "subject": "Mathématiques", "level": "Terminale", "type": "EXERCISE", "author_name": "M. Dubois", "upload_date": "2024-02-20", "size": "1.1 MB", "download_count": 8},
        ],
        "notifications": [],
        "lesson_logs": [
            {
                "id": "LOG_001", "school_id": DEMO_SCHOOL_ID, "class_id": "C1", "class_name": "Terminale C",
                "subject": "Mathématiques", "teacher_name": "M. IRIE BI BOHI", "date": now.isoformat(),
                "start_time": "08:00", "end_time": "10:00",
                "lesson_plan": "Chapitre 3: Les Nombres Complexes.\nI. Forme Algébrique\nII. Conjugué",
                "pedagogical_activities": "Résolution exercices 1 et 2 page 45.",
                "homework": "Exercice 3 page 45 à faire.", "due_date": (now + timedelta(days=2)).isoformat(),
                "validation_status": "VALIDATED", "validated_by": "M. IRIE BI BOHI",
            },
        ],
        "canteen_items": [
            {"id": "CI1", "school_id": DEMO_SCHOOL_ID, "name": "Riz Parfum", "category": "CEREALE", "quantity": 50, "unit": "kg", "unit_price": 500, "min_threshold": 10, "last_restock_date": "2024-03-01"},
            {"id": "CI2", "school_id": DEMO_SCHOOL_ID, "name": "Huile Dinor", "category": "EPICERIE", "quantity": 5, "unit": "L", "unit_price": 1200, "min_threshold": 10, "last_restock_date": "2024-02-20"},
        ],
        "time_slots": [
            {"id": f"TS{i}", "school_id": DEMO_SCHOOL_ID, "class_id": "C1", "teacher_id": "T1", "subject": "Mathématiques", "day_of_week": "Lundi", "start_time": start, "end_time": end, "room": "Bat A - 101"}
            for i, (start, end) in enumerate(
                [("09:05", "10:00"), ("10:15", "11:10"), ("11:15", "12:05"), ("14:25", "15:20"), ("15:30", "16:25")],
                start=1,
            )
        ],
        "audit_logs": [
            {"id": "LOG1", "school_id": DEMO_SCHOOL_ID, "action": "Connexion", "user": "Admin Principal", "timestamp": now.isoformat(), "details": "Connexion réussie", "type": "INFO"},
        ],
        "tickets": [],
    }
    return seed


def seed_collection(key: str) -> List[Dict[str, Any]]:
    return copy.deepcopy(build_seed_collections().get(key, []))
