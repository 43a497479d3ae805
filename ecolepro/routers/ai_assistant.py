# ecolepro/routers/ai_assistant.py
from fastapi import APIRouter, Depends

from ..core.session import get_session_context
from ..schemas.ai_schemas import CohortAnalysisRequest, GeneratedText, StudentSummary
from ..schemas.user_schemas import SessionContext
from ..services.ai_report_service import AIReportService, get_ai_report_service

router = APIRouter(prefix="/api/v1/ai", tags=["AI Assistant"])


@router.post("/report", response_model=GeneratedText)
async def generate_report(
    student: StudentSummary,
    session: SessionContext = Depends(get_session_context),
    service: AIReportService = Depends(get_ai_report_service)
):
    """Report-card comment for one student"""
    return GeneratedText(text=await service.generate_report(student))


@router.post("/cohort-analysis", response_model=GeneratedText)
async def analyze_cohort(
    request: CohortAnalysisRequest,
    session: SessionContext = Depends(get_session_context),
    service: AIReportService = Depends(get_ai_report_service)
):
    return GeneratedText(text=await service.analyze_cohort(request.students))
