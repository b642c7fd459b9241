from __future__ import annotations

import base64

from barbershop.application.ports.style_advisor import StyleAdvisorPort
from barbershop.domain.entities.style import FaceAnalysis, HaircutRecommendation, Preferences

# 1x1 transparent PNG
_PIXEL = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


class MockStyleAdvisor(StyleAdvisorPort):
    def analyze_face(self, image: bytes, mime_type: str) -> FaceAnalysis:
        shape = ("Oval", "Round", "Square", "Heart")[len(image) % 4]
        return FaceAnalysis(face_shape=shape, features=["beard"] if len(image) % 2 else [])

    def get_recommendations(
        self, analysis: FaceAnalysis, preferences: Preferences
    ) -> list[HaircutRecommendation]:
        length = "" if preferences.length == "any" else f"{preferences.length} "
        style = "" if preferences.style == "any" else f"{preferences.style} "
        base = ["Textured Crop", "Side Part", "Pompadour", "Buzz Cut", "Quiff"]
        return [
            HaircutRecommendation(
                name=f"{style}{length}{name}".strip().title(),
                description=f"Balances a {analysis.face_shape.lower()} face shape.",
            )
            for name in base
        ]

    def generate_example_image(self, name: str, face_shape: str) -> str:
        return "data:image/png;base64," + base64.b64encode(_PIXEL).decode("ascii")

    def simulate_haircut(self, image: bytes, mime_type: str, name: str) -> str:
        return f"data:{mime_type};base64," + base64.b64encode(image).decode("ascii")
