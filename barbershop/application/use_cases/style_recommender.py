from __future__ import annotations

import logging
from dataclasses import replace

from barbershop.application.exceptions import GenerationError, UpstreamServiceError
from barbershop.application.ports.style_advisor import StyleAdvisorPort
from barbershop.domain.entities.style import FaceAnalysis, HaircutRecommendation, Preferences

MAX_RECOMMENDATIONS = 4
LENGTHS = {"short", "medium", "long", "any"}
STYLES = {"classic", "modern", "casual", "any"}


class StyleRecommenderUseCase:
    """Face analysis and haircut suggestions. Never touches the ledger."""

    def __init__(self, advisor: StyleAdvisorPort) -> None:
        self._advisor = advisor
        self._logger = logging.getLogger(__name__)

    def analyze(self, image: bytes, mime_type: str) -> FaceAnalysis:
        if not image:
            raise ValueError("Image is empty.")
        return self._advisor.analyze_face(image, mime_type)

    def recommend(
        self,
        analysis: FaceAnalysis,
        preferences: Preferences,
        with_examples: bool = False,
    ) -> list[HaircutRecommendation]:
        if preferences.length not in LENGTHS or preferences.style not in STYLES:
            raise ValueError(f"Unsupported preferences: {preferences}")

        recommendations = self._advisor.get_recommendations(analysis, preferences)
        seen: set[str] = set()
        out: list[HaircutRecommendation] = []
        for rec in recommendations:
            key = rec.name.strip().lower()
            if not key or key in seen:
                continue
            seen.add(key)
            out.append(rec)
        out = out[:MAX_RECOMMENDATIONS]

        if with_examples:
            out = [self._with_example(rec, analysis.face_shape) for rec in out]
        return out

    def example_image(self, name: str, face_shape: str) -> str:
        return self._advisor.generate_example_image(name, face_shape)

    def simulate(self, image: bytes, mime_type: str, name: str) -> str:
        if not image:
            raise ValueError("Image is empty.")
        return self._advisor.simulate_haircut(image, mime_type, name)

    def _with_example(self, rec: HaircutRecommendation, face_shape: str) -> HaircutRecommendation:
        try:
            return replace(rec, example_image=self._advisor.generate_example_image(rec.name, face_shape))
        except (GenerationError, UpstreamServiceError) as e:
            # One missing picture should not cost the whole list.
            self._logger.warning("Example image failed", extra={"service": rec.name, "reason": str(e)})
            return rec
