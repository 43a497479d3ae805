# ecolepro/schemas/ai_schemas.py
from typing import List
from pydantic import BaseModel, Field


class StudentSummary(BaseModel):
    """Student fields the report generator reads"""
    first_name: str
    last_name: str = ""
    class_grade: str = ""
    average: float = Field(default=0, ge=0, le=20)
    attendance: float = Field(default=0, ge=0, le=100)
    behavior_notes: List[str] = Field(default_factory=list)


class CohortAnalysisRequest(BaseModel):
    students: List[StudentSummary]


class GeneratedText(BaseModel):
    text: str
