from fastapi import APIRouter, Depends
from sqlmodel import Session

from nexgig.api.endpoints.auth import get_current_user
from nexgig.database import get_session
from nexgig.models.user import User
from nexgig.schemas.overview import Overview
from nexgig.services.overview_service import build_overview

router = APIRouter()


@router.get("/me", response_model=Overview)
def my_overview(
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return build_overview(session, current_user.id)
