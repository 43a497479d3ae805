# ecolepro/schemas/enums.py
"""Closed enumerations shared by schemas and services."""
import enum


class UserRole(str, enum.Enum):
    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN = "ADMIN"
    BURSAR = "BURSAR"
    TEACHER = "TEACHER"
    STUDENT = "STUDENT"
    PARENT = "PARENT"
    LIBRARIAN = "LIBRARIAN"


class SchoolModule(str, enum.Enum):
    STUDENTS = "STUDENTS"
    TEACHERS = "TEACHERS"
    ACADEMIC = "ACADEMIC"
    TIMETABLE = "TIMETABLE"
    HOMEWORK = "HOMEWORK"
    GRADES = "GRADES"
    FINANCE = "FINANCE"
    LIBRARY = "LIBRARY"
    CANTEEN = "CANTEEN"
    RESOURCES = "RESOURCES"
    COMMUNICATION = "COMMUNICATION"
    CALENDAR = "CALENDAR"
    AI_ASSISTANT = "AI_ASSISTANT"


class SchoolType(str, enum.Enum):
    PRIMAIRE = "PRIMAIRE"
    SECONDAIRE = "SECONDAIRE"
    SUPERIEUR = "SUPERIEUR"


class UserStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class AuditLevel(str, enum.Enum):
    INFO = "INFO"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"


class BackupFormat(str, enum.Enum):
    JSON = "JSON"
    SQL = "SQL"
