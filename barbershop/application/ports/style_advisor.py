from __future__ import annotations

from abc import ABC, abstractmethod

from barbershop.domain.entities.style import FaceAnalysis, HaircutRecommendation, Preferences


class StyleAdvisorPort(ABC):
    """
    Generative-AI capability used by the style recommender.

    Raises:
        UpstreamServiceError: networking/provider failures
        GenerationError: empty or malformed provider response
    Image references are returned as `data:` URIs.
    """

    @abstractmethod
    def analyze_face(self, image: bytes, mime_type: str) -> FaceAnalysis:
        raise NotImplementedError

    @abstractmethod
    def get_recommendations(
        self, analysis: FaceAnalysis, preferences: Preferences
    ) -> list[HaircutRecommendation]:
        raise NotImplementedError

    @abstractmethod
    def generate_example_image(self, name: str, face_shape: str) -> str:
        raise NotImplementedError

    @abstractmethod
    def simulate_haircut(self, image: bytes, mime_type: str, name: str) -> str:
        raise NotImplementedError
