from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class FaceAnalysis:
    face_shape: str
    features: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Preferences:
    length: str = "any"  # "short", "medium", "long", "any"
    style: str = "any"  # "classic", "modern", "casual", "any"


@dataclass(frozen=True)
class HaircutRecommendation:
    name: str
    description: str
    example_image: str | None = None
