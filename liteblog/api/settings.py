"""Site settings API endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..core.auth import AuthContext, require_admin
from ..database import get_db
from ..schemas.setting import SiteSettings
from ..services import setting_service

router = APIRouter(prefix="/api/settings", tags=["settings"])
admin_router = APIRouter(prefix="/api/admin/settings", tags=["admin"])


@router.get("", response_model=SiteSettings)
def get_settings(db: Session = Depends(get_db)):
    return setting_service.get_site_settings(db)


@admin_router.get("", response_model=SiteSettings)
def admin_get_settings(
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin),
):
    return setting_service.get_site_settings(db)


@admin_router.put("", response_model=SiteSettings)
def update_settings(
    body: SiteSettings,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin),
):
    return setting_service.update_site_settings(db, body)
