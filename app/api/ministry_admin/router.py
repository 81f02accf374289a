from fastapi import APIRouter
from app.api.ministry_admin import form_configurations

router = APIRouter()
router.include_router(form_configurations.router, prefix="/form-configurations", tags=["FormSettings"])
