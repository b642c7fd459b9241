"""
Tests for the style recommender and its OpenAI adapter (with a stand-in client).
"""

from __future__ import annotations

import json
from types import SimpleNamespace

import pytest

from barbershop.application.exceptions import GenerationError, UpstreamServiceError
from barbershop.application.ports.style_advisor import StyleAdvisorPort
from barbershop.application.use_cases.style_recommender import StyleRecommenderUseCase
from barbershop.domain.entities.style import FaceAnalysis, HaircutRecommendation, Preferences
from barbershop.infrastructure.ai.mock_advisor import MockStyleAdvisor
from barbershop.infrastructure.ai.openai_advisor import OpenAIStyleAdvisor

OVAL = FaceAnalysis(face_shape="Oval", features=["strong jawline"])


class _FakeChat:
    def __init__(self, reply: str | None = None, error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.calls: list[dict] = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        message = SimpleNamespace(content=self.reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class _FakeImages:
    def __init__(self, data=None, error: Exception | None = None) -> None:
        self.data = data if data is not None else [SimpleNamespace(b64_json="AAAA", url=None)]
        self.error = error
        self.calls: list[tuple[str, dict]] = []

    def generate(self, **kwargs):
        self.calls.append(("generate", kwargs))
        if self.error:
            raise self.error
        return SimpleNamespace(data=self.data)

    def edit(self, **kwargs):
        self.calls.append(("edit", kwargs))
        if self.error:
            raise self.error
        return SimpleNamespace(data=self.data)


def _client(reply: str | None = None, chat_error=None, images: _FakeImages | None = None):
    chat = _FakeChat(reply, chat_error)
    return SimpleNamespace(chat=SimpleNamespace(completions=chat), images=images or _FakeImages())


def test_analyze_face_parses_json():
    client = _client(json.dumps({"faceShape": " Oval ", "features": ["beard", " "]}))
    advisor = OpenAIStyleAdvisor(client=client)

    analysis = advisor.analyze_face(b"\x89PNG", "image/png")

    assert analysis == FaceAnalysis(face_shape="Oval", features=["beard"])
    content = client.chat.completions.calls[0]["messages"][1]["content"]
    assert content[1]["image_url"]["url"].startswith("data:image/png;base64,")


@pytest.mark.parametrize(
    "reply",
    ["", "not json", json.dumps({"features": []}), json.dumps({"faceShape": "Oval", "features": "beard"})],
)
def test_analyze_face_rejects_bad_replies(reply):
    advisor = OpenAIStyleAdvisor(client=_client(reply))

    with pytest.raises(GenerationError):
        advisor.analyze_face(b"img", "image/jpeg")


def test_provider_errors_become_upstream_errors():
    advisor = OpenAIStyleAdvisor(client=_client(chat_error=TimeoutError("slow"), images=_FakeImages(error=OSError("down"))))

    with pytest.raises(UpstreamServiceError):
        advisor.get_recommendations(OVAL, Preferences())
    with pytest.raises(UpstreamServiceError):
        advisor.generate_example_image("Quiff", "Oval")
    with pytest.raises(UpstreamServiceError):
        advisor.simulate_haircut(b"img", "image/jpeg", "Quiff")


def test_recommendations_and_images():
    reply = json.dumps(
        {"recommendations": [{"name": "Quiff", "description": "Adds height."}, {"name": "Crop", "description": ""}]}
    )
    images = _FakeImages(data=[SimpleNamespace(b64_json=None, url="https://img.example/quiff.png")])
    advisor = OpenAIStyleAdvisor(client=_client(reply, images=images))

    recs = advisor.get_recommendations(OVAL, Preferences(length="short", style="modern"))
    assert [r.name for r in recs] == ["Quiff", "Crop"]

    assert advisor.generate_example_image("Quiff", "Oval") == "https://img.example/quiff.png"
    assert advisor.simulate_haircut(b"img", "image/jpeg", "Quiff") == "https://img.example/quiff.png"
    kind, kwargs = images.calls[1]
    assert kind == "edit"
    assert kwargs["image"] == ("photo.jpeg", b"img", "image/jpeg")


def test_empty_image_response_is_a_generation_error():
    advisor = OpenAIStyleAdvisor(client=_client(images=_FakeImages(data=[])))

    with pytest.raises(GenerationError):
        advisor.generate_example_image("Quiff", "Oval")


def test_recommend_dedupes_and_caps():
    uc = StyleRecommenderUseCase(MockStyleAdvisor())

    recs = uc.recommend(OVAL, Preferences(length="short", style="classic"))

    assert len(recs) == 4
    assert len({r.name.lower() for r in recs}) == 4
    assert all(r.example_image is None for r in recs)
    assert recs[0].name == "Classic Short Textured Crop"


def test_recommend_rejects_unknown_preferences():
    uc = StyleRecommenderUseCase(MockStyleAdvisor())

    with pytest.raises(ValueError):
        uc.recommend(OVAL, Preferences(length="shaved"))


def test_example_failures_do_not_drop_recommendations():
    class FlakyAdvisor(MockStyleAdvisor):
        def get_recommendations(self, analysis, preferences):
            return [
                HaircutRecommendation(name="Quiff", description="a"),
                HaircutRecommendation(name="quiff ", description="dup"),
                HaircutRecommendation(name="Crop", description="b"),
            ]

        def generate_example_image(self, name, face_shape):
            if name == "Crop":
                raise GenerationError("blocked")
            return "data:image/png;base64,AAAA"

    recs = StyleRecommenderUseCase(FlakyAdvisor()).recommend(OVAL, Preferences(), with_examples=True)

    assert [(r.name, r.example_image) for r in recs] == [("Quiff", "data:image/png;base64,AAAA"), ("Crop", None)]


def test_empty_images_are_rejected():
    uc = StyleRecommenderUseCase(MockStyleAdvisor())

    with pytest.raises(ValueError):
        uc.analyze(b"", "image/png")
    with pytest.raises(ValueError):
        uc.simulate(b"", "image/png", "Quiff")

    assert uc.simulate(b"abc", "image/png", "Quiff") == "data:image/png;base64,YWJj"
    assert isinstance(uc.analyze(b"abc", "image/png"), FaceAnalysis)
    assert isinstance(MockStyleAdvisor(), StyleAdvisorPort)
