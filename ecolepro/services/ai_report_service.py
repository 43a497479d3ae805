# ecolepro/services/ai_report_service.py
"""Report-card comments and class analyses written by Gemini.

Every public call returns text: a missing key, a remote failure or an empty
answer each map to a fixed French message instead of an exception.
"""
import logging
from typing import Any, List, Optional

import google.generativeai as genai

from ..core.config import settings
from ..schemas.ai_schemas import StudentSummary

logger = logging.getLogger(__name__)

REPORT_MISSING_KEY = "Erreur: Clé API manquante. Veuillez configurer GEMINI_API_KEY."
REPORT_REMOTE_ERROR = "Une erreur est survenue lors de la génération du rapport via l'IA."
REPORT_EMPTY = "Impossible de générer le rapport."

ANALYSIS_MISSING_KEY = "Erreur de configuration API."
ANALYSIS_REMOTE_ERROR = "Erreur d'analyse."
ANALYSIS_EMPTY = "Analyse indisponible."


def _number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def build_report_prompt(student: StudentSummary) -> str:
    return f"""
Tu es un directeur d'école pédagogique et bienveillant.
Génère un commentaire de bulletin scolaire concis mais complet (environ 50-80 mots) pour l'élève suivant.
Utilise un ton professionnel.

Données de l'élève :
- Nom : {student.first_name} {student.last_name}
- Classe : {student.class_grade}
- Moyenne générale : {_number(student.average)}/20
- Taux de présence : {_number(student.attendance)}%
- Notes de comportement : {", ".join(student.behavior_notes)}

Le commentaire doit mettre en avant les points forts, aborder les points faibles avec tact, et donner un conseil pour le prochain trimestre.
Ne pas mettre de titre, juste le paragraphe.
"""


def build_cohort_prompt(students: List[StudentSummary]) -> str:
    summary = ", ".join(f"{s.first_name}: {_number(s.average)}/20" for s in students)
    return f"""
Analyse brièvement les performances globales de cette liste d'élèves :
{summary}

Donne 3 points clés (positifs ou négatifs) sur le niveau global de la classe sous forme de liste à puces HTML (<ul><li>...</li></ul>).
"""


class AIReportService:
    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: Optional[str] = None,
        timeout: Optional[float] = None,
        model: Any = None,
    ):
        self.api_key = api_key if api_key is not None else settings.gemini_api_key
        self.model_name = model_name or settings.gemini_model
        self.timeout = timeout or settings.gemini_timeout_seconds
        self._model = model

    def _get_model(self):
        if self._model is not None:
            return self._model
        if not self.api_key:
            logger.warning("Gemini API key missing, AI features disabled")
            return None

        genai.configure(api_key=self.api_key)
        self._model = genai.GenerativeModel(self.model_name)
        return self._model

    async def _generate(self, prompt: str) -> str:
        model = self._get_model()
        response = await model.generate_content_async(
            prompt,
            request_options={"timeout": self.timeout},
        )
        try:
            return (response.text or "").strip()
        except ValueError:
            # Blocked or empty candidates have no text accessor
            return ""

    async def generate_report(self, student: StudentSummary) -> str:
        if self._get_model() is None:
            return REPORT_MISSING_KEY

        try:
            text = await self._generate(build_report_prompt(student))
        except Exception as e:
            logger.error(f"Gemini report generation failed: {e}")
            return REPORT_REMOTE_ERROR
        return text or REPORT_EMPTY

    async def analyze_cohort(self, students: List[StudentSummary]) -> str:
        if self._get_model() is None:
            return ANALYSIS_MISSING_KEY

        try:
            text = await self._generate(build_cohort_prompt(students))
        except Exception as e:
            logger.error(f"Gemini cohort analysis failed: {e}")
            return ANALYSIS_REMOTE_ERROR
        return text or ANALYSIS_EMPTY


def get_ai_report_service() -> AIReportService:
    return AIReportService()
