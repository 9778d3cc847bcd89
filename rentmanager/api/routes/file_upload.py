"""
File Upload Endpoints

Admins and managers issue one-time upload links; recipients upload through
the public token endpoint, signed-in users through the authenticated one.
Files are kept in Supabase storage under user_{user_id}/.
"""
import logging
import os
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Response, UploadFile, status
from sqlalchemy.orm import Session

from rentmanager.core.config import settings
from rentmanager.core.deps import get_current_user
from rentmanager.database import get_db
from rentmanager.models.user import User, UserRole
from rentmanager.repositories import UserRepository, to_uuid
from rentmanager.schemas.file_upload import GenerateLinkRequest, GenerateLinkResponse, UploadResponse
from rentmanager.services import email_service, upload_tokens
from rentmanager.services.storage_service import (
    StorageError,
    StorageService,
    get_storage_service,
    validate_file_type,
)

logger = logging.getLogger(__name__)

admin_router = APIRouter(tags=["File Upload"])
public_router = APIRouter(tags=["File Upload"])
router = APIRouter(tags=["File Upload"])

UNAVAILABLE = "Servicio de archivos no disponible"


def _require_storage(storage: Optional[StorageService]) -> StorageService:
    if storage is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=UNAVAILABLE)
    return storage


def _require_staff(user: User, detail: str) -> None:
    if user.role not in (UserRole.ADMIN, UserRole.MANAGER):
        raise HTTPException(status_code=403, detail=detail)


def _require_admin(user: User, detail: str) -> None:
    if user.role != UserRole.ADMIN:
        raise HTTPException(status_code=403, detail=detail)


async def _store_upload(
    file: UploadFile,
    storage: Optional[StorageService],
    user_id: str,
    uploaded_by: str,
) -> UploadResponse:
    try:
        validate_file_type(file.filename)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    content = await file.read()
    if len(content) > settings.MAX_UPLOAD_SIZE:
        raise HTTPException(
            status_code=400,
            detail=f"Archivo demasiado grande (máximo {settings.MAX_UPLOAD_SIZE // (1024 * 1024)}MB)"
        )

    storage = _require_storage(storage)
    try:
        return storage.upload(content, file.filename, file.content_type, user_id, uploaded_by)
    except StorageError:
        raise HTTPException(status_code=500, detail="Error subiendo archivo")


def _download_response(path: str, data: bytes) -> Response:
    return Response(
        content=data,
        media_type="application/octet-stream",
        headers={"Content-Disposition": f'attachment; filename="{os.path.basename(path)}"'},
    )


# ==================== ADMIN / MANAGER ====================

@admin_router.post("/generate-link", response_model=GenerateLinkResponse)
def generate_upload_link(
    request: GenerateLinkRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Issue a one-time upload token for an existing user and email them the link.

    The recipient email must match the user's email on record.
    """
    _require_staff(current_user, "Solo administradores y managers pueden generar enlaces de subida")

    try:
        target_id = to_uuid(request.user_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="ID de usuario inválido")

    target = UserRepository(db).get(target_id)
    if target is None:
        raise HTTPException(status_code=404, detail="Usuario destinatario no encontrado")
    if target.email != request.recipient_email:
        raise HTTPException(status_code=400, detail="El email no coincide con el usuario especificado")

    token = upload_tokens.create_token(
        email=request.recipient_email,
        name=request.recipient_name,
        user_id=str(target.id),
        person_id=str(target.person_id) if target.person_id else "",
        created_by=str(current_user.id),
        expiration_days=request.expiration_days,
    )

    upload_link = f"/upload/file?token={token.token}"
    days = (token.expires_at - token.created_at).days
    if not email_service.send_upload_link_email(
        request.recipient_email, request.recipient_name, f"{settings.APP_BASE_URL}{upload_link}", days
    ):
        logger.warning(f"[UPLOAD] Upload link email to {request.recipient_email} could not be delivered")

    return GenerateLinkResponse(
        message="Enlace de subida generado exitosamente",
        token=token.token,
        expires_at=token.expires_at,
        upload_link=upload_link,
    )


@admin_router.get("/tokens")
def list_upload_tokens(current_user: User = Depends(get_current_user)):
    _require_staff(current_user, "Solo administradores y managers pueden ver tokens")
    return {"success": True, "tokens": upload_tokens.list_tokens()}


@admin_router.get("/files")
def list_uploaded_files(
    current_user: User = Depends(get_current_user),
    storage: Optional[StorageService] = Depends(get_storage_service),
):
    _require_staff(current_user, "Solo administradores y managers pueden ver archivos")
    storage = _require_storage(storage)
    try:
        files = storage.list_all()
    except StorageError:
        raise HTTPException(status_code=500, detail="Error obteniendo archivos")
    return {"success": True, "files": files, "count": len(files)}


@admin_router.get("/files/download/{file_path:path}")
def download_file(
    file_path: str,
    current_user: User = Depends(get_current_user),
    storage: Optional[StorageService] = Depends(get_storage_service),
):
    """Download a file and remove it from storage"""
    _require_admin(current_user, "Solo administradores pueden descargar archivos")
    storage = _require_storage(storage)
    path = file_path.lstrip("/")
    try:
        data = storage.download_and_remove(path)
    except StorageError:
        raise HTTPException(status_code=500, detail="Error descargando archivo")
    logger.info(f"[UPLOAD] {path} downloaded and removed by {current_user.email}")
    return _download_response(path, data)


@admin_router.get("/files/download-only/{file_path:path}")
def download_file_only(
    file_path: str,
    current_user: User = Depends(get_current_user),
    storage: Optional[StorageService] = Depends(get_storage_service),
):
    _require_admin(current_user, "Solo administradores pueden descargar archivos")
    storage = _require_storage(storage)
    path = file_path.lstrip("/")
    try:
        data = storage.download(path)
    except StorageError:
        raise HTTPException(status_code=500, detail="Error descargando archivo")
    return _download_response(path, data)


@admin_router.get("/files/{user_id}")
def list_user_files(
    user_id: str,
    current_user: User = Depends(get_current_user),
    storage: Optional[StorageService] = Depends(get_storage_service),
):
    if current_user.role not in (UserRole.ADMIN, UserRole.MANAGER) and str(current_user.id) != user_id:
        raise HTTPException(status_code=403, detail="Solo puede ver sus propios archivos")
    storage = _require_storage(storage)
    try:
        files = storage.list_user(user_id)
    except StorageError:
        raise HTTPException(status_code=500, detail="Error obteniendo archivos del usuario")
    return {"success": True, "files": files, "count": len(files), "user_id": user_id}


@admin_router.delete("/files/{file_path:path}")
def delete_file(
    file_path: str,
    current_user: User = Depends(get_current_user),
    storage: Optional[StorageService] = Depends(get_storage_service),
):
    _require_admin(current_user, "Solo administradores pueden eliminar archivos")
    storage = _require_storage(storage)
    path = file_path.lstrip("/")
    try:
        storage.remove(path)
    except StorageError:
        raise HTTPException(status_code=500, detail="Error eliminando archivo")
    return {"success": True, "message": "Archivo eliminado exitosamente", "path": path}


# ==================== PUBLIC (token) ====================

@public_router.get("/validate-token/{token}")
def validate_upload_token(token: str):
    upload_token = upload_tokens.get_token(token)
    if upload_token is None:
        raise HTTPException(status_code=404, detail="Token no válido")
    try:
        upload_tokens.validate_token(upload_token)
    except upload_tokens.TokenError as e:
        raise HTTPException(status_code=401, detail=str(e))
    return {
        "success": True,
        "message": "Token válido",
        "recipient": upload_token.name,
        "expires_at": upload_token.expires_at,
    }


@public_router.post("/file", response_model=UploadResponse)
async def upload_file_with_token(
    token: str = Form(...),
    file: UploadFile = File(...),
    storage: Optional[StorageService] = Depends(get_storage_service),
):
    """Upload through a one-time link; the token is spent on success"""
    upload_token = upload_tokens.get_token(token)
    if upload_token is None:
        raise HTTPException(status_code=401, detail="Token no válido")
    try:
        upload_tokens.validate_token(upload_token)
    except upload_tokens.TokenError as e:
        raise HTTPException(status_code=401, detail=str(e))

    response = await _store_upload(file, storage, upload_token.user_id, upload_token.email)
    upload_tokens.mark_used(upload_token)
    logger.info(f"[UPLOAD] {file.filename} uploaded with token by {upload_token.email}")
    return response


# ==================== AUTHENTICATED ====================

@router.post("/file-authenticated", response_model=UploadResponse)
async def upload_file_authenticated(
    file: UploadFile = File(...),
    current_user: User = Depends(get_current_user),
    storage: Optional[StorageService] = Depends(get_storage_service),
):
    response = await _store_upload(file, storage, str(current_user.id), current_user.email)
    logger.info(f"[UPLOAD] {file.filename} uploaded by user {current_user.email}")
    return response
