from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from barbershop.api.v1.schemas import LoginSchema, RegisterSchema, UserSchema
from barbershop.application.exceptions import AuthenticationError, ValidationError
from barbershop.application.use_cases.auth import AuthUseCase
from barbershop.wiring.dependencies import get_auth

router = APIRouter()


@router.post("/register", response_model=UserSchema, status_code=201)
def register(req: RegisterSchema, auth: AuthUseCase = Depends(get_auth)):
    try:
        user = auth.register(name=req.name, email=req.email, phone=req.phone, password=req.password)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail={"code": e.code, "message": str(e)})
    return UserSchema(username=user.username, role=user.role, customer_id=user.customer_id)


@router.post("/login", response_model=UserSchema)
def login(req: LoginSchema, auth: AuthUseCase = Depends(get_auth)):
    try:
        user = auth.login(req.username, req.password)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))
    return UserSchema(username=user.username, role=user.role, customer_id=user.customer_id)
