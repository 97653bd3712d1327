from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..shared.database import db_dependency
from ..shared.errors import PortalError, to_http
from .crud import get_user, login, register
from .schemas import LoginIn, RegisterIn, UserOut


def build_router(SessionLocal) -> APIRouter:
    router = APIRouter()
    get_db = db_dependency(SessionLocal)

    @router.post("/register", response_model=UserOut, status_code=201)
    def register_user(payload: RegisterIn, db: Session = Depends(get_db)):
        try:
            return register(db, payload.name, payload.contact_info, payload.location, payload.role.value)
        except PortalError as e:
            raise to_http(e)

    @router.post("/login", response_model=UserOut)
    def login_user(payload: LoginIn, db: Session = Depends(get_db)):
        try:
            return login(db, payload.contact_info)
        except PortalError as e:
            raise to_http(e)

    @router.get("/{user_id}", response_model=UserOut)
    def get_one(user_id: str, db: Session = Depends(get_db)):
        u = get_user(db, user_id)
        if not u:
            raise HTTPException(404, "User not found")
        return u

    return router
