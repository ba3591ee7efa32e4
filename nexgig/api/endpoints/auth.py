import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, status, Depends
from fastapi.security import OAuth2PasswordBearer, OAuth2PasswordRequestForm
from sqlmodel import Session, select

from nexgig.models.user import User, UserRole
from nexgig.schemas.user import UserCreate, UserRead, UserEnvelope, LoginRequest, Token, OAuthToken
from nexgig.core.security import verify_password, get_password_hash, create_access_token, decode_access_token
from nexgig.core.errors import ConflictError
from nexgig.database import get_session
from nexgig.services.authorization import require_role
from nexgig.services.transaction import atomic

logger = logging.getLogger(__name__)

router = APIRouter()
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/token")


@router.post("/register", response_model=UserEnvelope)
def register(user_in: UserCreate, session: Session = Depends(get_session)):
    duplicate = f"Email already registered for {user_in.role.value} role."
    existing = session.exec(
        select(User).where(User.email == user_in.email).where(User.role == user_in.role)
    ).first()
    if existing:
        raise ConflictError(duplicate)
    user = User(
        email=user_in.email,
        password_hash=get_password_hash(user_in.password),
        name=user_in.name,
        role=user_in.role,
    )
    with atomic(session, "register user", conflict=duplicate):
        session.add(user)
    session.refresh(user)
    logger.info("Registered user %s as %s", user.id, user.role.value)
    return {"user": user}


def authenticate(session: Session, email: str, password: str, role: Optional[UserRole] = None) -> User:
    query = select(User).where(User.email == email)
    if role is not None:
        query = query.where(User.role == role)
    users = session.exec(query.order_by(User.id)).all()

    if not users:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    if role is None and len(users) > 1:
        raise HTTPException(
            status_code=409,
            detail={
                "message": "Multiple accounts found. Please specify role.",
                "accounts": [{"role": u.role.value} for u in users],
            },
        )
    user = users[0]
    if not verify_password(password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return user


def issue_token(user: User) -> str:
    return create_access_token({"sub": str(user.id), "email": user.email, "role": user.role.value})


@router.post("/login", response_model=Token)
def login(credentials: LoginRequest, session: Session = Depends(get_session)):
    user = authenticate(session, credentials.email, credentials.password, credentials.role)
    return Token(access_token=issue_token(user), user=UserRead.model_validate(user))


@router.post("/token", response_model=OAuthToken)
def login_for_access_token(form_data: OAuth2PasswordRequestForm = Depends(), session: Session = Depends(get_session)):
    """Form-encoded login for OAuth2 password-flow clients; the username is the email.

    A scope of "client" or "freelancer" picks the account when the email holds both.
    """
    roles = [UserRole(scope) for scope in form_data.scopes if scope in UserRole.__members__]
    user = authenticate(session, form_data.username, form_data.password, roles[0] if roles else None)
    return OAuthToken(access_token=issue_token(user))


def get_current_user(token: str = Depends(oauth2_scheme), session: Session = Depends(get_session)) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    payload = decode_access_token(token)
    if payload is None:
        raise credentials_exception
    user_id = payload.get("sub")
    if user_id is None or not str(user_id).isdigit():
        raise credentials_exception
    user = session.get(User, int(user_id))
    if user is None:
        raise credentials_exception
    return user


def get_current_client(current_user: User = Depends(get_current_user)) -> User:
    return require_role(current_user, UserRole.client)


def get_current_freelancer(current_user: User = Depends(get_current_user)) -> User:
    return require_role(current_user, UserRole.freelancer)


@router.get("/me", response_model=UserEnvelope)
def me(current_user: User = Depends(get_current_user)):
    return {"user": current_user}
