from __future__ import annotations

import base64
import json
from typing import Any

from openai import OpenAI

from barbershop.application.exceptions import GenerationError, UpstreamServiceError
from barbershop.application.ports.style_advisor import StyleAdvisorPort
from barbershop.core.config import settings
from barbershop.domain.entities.style import FaceAnalysis, HaircutRecommendation, Preferences
from barbershop.infrastructure.ai.prompts import (
    build_analyze_prompt,
    build_example_image_prompt,
    build_recommendations_prompt,
    build_simulation_prompt,
)


class OpenAIStyleAdvisor(StyleAdvisorPort):
    """
    OpenAI-backed adapter implementing StyleAdvisorPort.

    Contract guarantees:
    - analyze_face returns FaceAnalysis with a non-empty face_shape
    - get_recommendations returns a non-empty list of HaircutRecommendation
    - image methods return `data:image/...;base64,` URIs
    - Raises:
        UpstreamServiceError: networking/provider failures
        GenerationError: empty response, invalid JSON or wrong shape
    """

    def __init__(self, client: OpenAI | None = None) -> None:
        self.client = client or OpenAI(api_key=settings.OPENAI_API_KEY)

    def analyze_face(self, image: bytes, mime_type: str) -> FaceAnalysis:
        data_uri = f"data:{mime_type};base64,{base64.b64encode(image).decode('ascii')}"
        text = self._call_json(
            [
                {"type": "text", "text": build_analyze_prompt()},
                {"type": "image_url", "image_url": {"url": data_uri}},
            ]
        )
        data = _parse_json(text, what="analyze")

        if not isinstance(data, dict):
            raise GenerationError("Analyze: expected a JSON object with 'faceShape' and 'features'.")
        face_shape = data.get("faceShape")
        features = data.get("features", [])
        if not isinstance(face_shape, str) or not face_shape.strip():
            raise GenerationError("Analyze: 'faceShape' must be a non-empty string.")
        if not isinstance(features, list) or not all(isinstance(f, str) for f in features):
            raise GenerationError("Analyze: 'features' must be a list of strings.")

        return FaceAnalysis(face_shape=face_shape.strip(), features=[f.strip() for f in features if f.strip()])

    def get_recommendations(
        self, analysis: FaceAnalysis, preferences: Preferences
    ) -> list[HaircutRecommendation]:
        text = self._call_json([{"type": "text", "text": build_recommendations_prompt(analysis, preferences)}])
        data = _parse_json(text, what="recommendations")

        items = data.get("recommendations") if isinstance(data, dict) else data
        if not isinstance(items, list) or not items:
            raise GenerationError("Recommendations: expected a non-empty 'recommendations' list.")

        out: list[HaircutRecommendation] = []
        for item in items:
            if not isinstance(item, dict):
                raise GenerationError("Recommendations: each item must be an object.")
            name = item.get("name")
            description = item.get("description", "")
            if not isinstance(name, str) or not name.strip() or not isinstance(description, str):
                raise GenerationError("Recommendations: items need a string 'name' and 'description'.")
            out.append(HaircutRecommendation(name=name.strip(), description=description.strip()))
        return out

    def generate_example_image(self, name: str, face_shape: str) -> str:
        try:
            resp = self.client.images.generate(
                model=settings.OPENAI_MODEL_IMAGE,
                prompt=build_example_image_prompt(name, face_shape),
                size=settings.OPENAI_IMAGE_SIZE,
                n=1,
            )
        except Exception as e:
            raise UpstreamServiceError(f"OpenAI image API error: {e}") from e
        return _image_ref(resp, what="example image")

    def simulate_haircut(self, image: bytes, mime_type: str, name: str) -> str:
        extension = mime_type.split("/")[-1] or "png"
        try:
            resp = self.client.images.edit(
                model=settings.OPENAI_MODEL_IMAGE,
                image=(f"photo.{extension}", image, mime_type),
                prompt=build_simulation_prompt(name),
                size=settings.OPENAI_IMAGE_SIZE,
                n=1,
            )
        except Exception as e:
            raise UpstreamServiceError(f"OpenAI image API error: {e}") from e
        return _image_ref(resp, what="simulation")

    def _call_json(self, content: list[dict[str, Any]]) -> str:
        try:
            resp = self.client.chat.completions.create(
                model=settings.OPENAI_MODEL_VISION,
                messages=[
                    {"role": "system", "content": "Return only valid JSON. Do not include markdown or extra text."},
                    {"role": "user", "content": content},
                ],
                temperature=settings.OPENAI_TEMPERATURE,
                max_tokens=1000,
                response_format={"type": "json_object"},
            )
        except Exception as e:
            raise UpstreamServiceError(f"OpenAI API error: {e}") from e

        text = (resp.choices[0].message.content or "").strip() if resp.choices else ""
        if not text:
            raise GenerationError("Provider returned an empty response.")
        return text


def _parse_json(text: str, what: str) -> Any:
    try:
        return json.loads(text)
    except Exception:
        snippet = text[:200].replace("\n", " ")
        raise GenerationError(f"{what.capitalize()}: invalid JSON. Snippet: {snippet!r}")


def _image_ref(resp: Any, what: str) -> str:
    data = getattr(resp, "data", None) or []
    if not data:
        raise GenerationError(f"The provider returned no {what}. Try another photo or style.")
    first = data[0]
    if getattr(first, "b64_json", None):
        return f"data:image/png;base64,{first.b64_json}"
    if getattr(first, "url", None):
        return first.url
    raise GenerationError(f"The provider returned an empty {what}.")
