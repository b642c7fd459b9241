from __future__ import annotations

import base64
import binascii

from fastapi import APIRouter, Depends, HTTPException

from barbershop.api.v1.schemas import (
    ExampleImageRequestSchema,
    FaceAnalysisSchema,
    ImageRefSchema,
    ImageUploadSchema,
    RecommendationSchema,
    RecommendationsRequestSchema,
    SimulateRequestSchema,
)
from barbershop.application.exceptions import GenerationError, UpstreamServiceError
from barbershop.application.use_cases.style_recommender import StyleRecommenderUseCase
from barbershop.domain.entities.style import FaceAnalysis, Preferences
from barbershop.wiring.dependencies import get_style_recommender

router = APIRouter()


def _decode_image(payload: str) -> bytes:
    # Accept raw base64 or a full data: URI
    if payload.startswith("data:") and "," in payload:
        payload = payload.split(",", 1)[1]
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        raise HTTPException(status_code=400, detail="image_base64 is not valid base64")


def _retryable(e: Exception) -> HTTPException:
    return HTTPException(status_code=502, detail={"message": str(e), "retryable": True})


@router.post("/analyze", response_model=FaceAnalysisSchema)
def analyze(req: ImageUploadSchema, uc: StyleRecommenderUseCase = Depends(get_style_recommender)):
    image = _decode_image(req.image_base64)
    try:
        analysis = uc.analyze(image, req.mime_type)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (GenerationError, UpstreamServiceError) as e:
        raise _retryable(e)
    return FaceAnalysisSchema(face_shape=analysis.face_shape, features=analysis.features)


@router.post("/recommendations", response_model=list[RecommendationSchema])
def recommendations(
    req: RecommendationsRequestSchema,
    uc: StyleRecommenderUseCase = Depends(get_style_recommender),
):
    try:
        recs = uc.recommend(
            FaceAnalysis(face_shape=req.analysis.face_shape, features=req.analysis.features),
            Preferences(length=req.length.value, style=req.style.value),
            with_examples=req.with_examples,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (GenerationError, UpstreamServiceError) as e:
        raise _retryable(e)
    return [
        RecommendationSchema(name=r.name, description=r.description, example_image=r.example_image)
        for r in recs
    ]


@router.post("/example-image", response_model=ImageRefSchema)
def example_image(
    req: ExampleImageRequestSchema,
    uc: StyleRecommenderUseCase = Depends(get_style_recommender),
):
    try:
        return ImageRefSchema(image=uc.example_image(req.name, req.face_shape))
    except (GenerationError, UpstreamServiceError) as e:
        raise _retryable(e)


@router.post("/simulate", response_model=ImageRefSchema)
def simulate(req: SimulateRequestSchema, uc: StyleRecommenderUseCase = Depends(get_style_recommender)):
    image = _decode_image(req.image_base64)
    try:
        return ImageRefSchema(image=uc.simulate(image, req.mime_type, req.name))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (GenerationError, UpstreamServiceError) as e:
        raise _retryable(e)
