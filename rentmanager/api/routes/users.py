"""
User Endpoints
Login, account CRUD and password changes
"""
import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from rentmanager.core.deps import get_current_user
from rentmanager.core.security import (
    create_access_token,
    encode_password,
    get_password_hash,
    normalize_password,
    verify_password,
)
from rentmanager.database import get_db
from rentmanager.models.user import User, UserStatus
from rentmanager.repositories import UserRepository
from rentmanager.schemas.user import (
    ChangePasswordRequest,
    LoginResponse,
    UserCreate,
    UserLogin,
    UserResponse,
    UserUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Users"])
public_router = APIRouter(tags=["Users"])

PENDING_LOGIN_MESSAGE = (
    "EL ESTADO DE TU USUARIO ES INACTIVO, ESTAMOS ESPERANDO TU PAGO O APROBACION "
    "EN EL SISTEMA PARA QUE PUEDAS ACCEDER"
)
DISABLED_LOGIN_MESSAGE = "Tu cuenta ha sido deshabilitada. Contacta a soporte para más información."


# ==================== LOGIN ====================

@public_router.post("/login", response_model=LoginResponse)
def login(credentials: UserLogin, db: Session = Depends(get_db)):
    """Login and get an access token"""
    try:
        user = UserRepository(db).get_by_email(credentials.email)
    except Exception as e:
        logger.error(f"Database error during login: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    if user is None:
        logger.info(f"Login failed, unknown email: {credentials.email}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    if user.status == UserStatus.PENDING:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=PENDING_LOGIN_MESSAGE)
    if user.status == UserStatus.DISABLED:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=DISABLED_LOGIN_MESSAGE)

    if not verify_password(normalize_password(credentials.password), user.password_hash):
        logger.info(f"Login failed, bad password for {credentials.email}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    logger.info(f"User logged in: {user.email} ({user.role.value})")
    return {"success": True, "user": user, "token": create_access_token(user)}


# ==================== USERS ====================

@router.get("", response_model=List[UserResponse])
def list_users(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return UserRepository(db).get_all()


@router.get("/email", response_model=UserResponse)
def get_user_by_email(
    email: str = Query(""),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if not email:
        raise HTTPException(status_code=400, detail="Email is required")
    user = UserRepository(db).get_by_email(email)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    user = UserRepository(db).get(user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    user_in: UserCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Create a user; status defaults to pending"""
    repo = UserRepository(db)
    try:
        if repo.get_by_email(user_in.email):
            raise HTTPException(status_code=400, detail="A user with this email already exists")

        data = user_in.model_dump(exclude={"password", "password_base64"})
        raw_password = user_in.password_base64 or user_in.password
        if raw_password:
            data["password_hash"] = get_password_hash(normalize_password(raw_password))

        user = repo.create(data)
        logger.info(f"User created: {user.email} ({user.role.value})")
        return user
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Error creating user: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: UUID,
    user_in: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Update a user; the password is kept unless a new one is supplied"""
    repo = UserRepository(db)
    try:
        user = repo.get(user_id)
        if user is None:
            raise HTTPException(status_code=404, detail="User not found")

        data = user_in.model_dump(exclude_unset=True, exclude={"password", "password_base64"})
        raw_password = user_in.password_base64 or user_in.password
        if raw_password:
            logger.info(f"Password update requested for user {user.email}")
            data["password_hash"] = get_password_hash(normalize_password(raw_password))

        return repo.update(user, data)
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Error updating user {user_id}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.put("/{user_id}/change-password")
def change_password(
    user_id: UUID,
    request: ChangePasswordRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    repo = UserRepository(db)
    try:
        user = repo.get(user_id)
        if user is None:
            raise HTTPException(status_code=404, detail="User not found")

        if not verify_password(encode_password(request.current_password), user.password_hash):
            logger.info(f"Current password verification failed for {user.email}")
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Contraseña actual incorrecta")

        repo.update(user, {"password_hash": get_password_hash(encode_password(request.new_password))})
        logger.info(f"Password changed for {user.email}")
        return {
            "success": True,
            "message": "Contraseña actualizada exitosamente",
            "user": {"id": str(user.id), "email": user.email, "role": user.role.value},
        }
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    repo = UserRepository(db)
    user = repo.get(user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    try:
        repo.delete(user)
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    return None
