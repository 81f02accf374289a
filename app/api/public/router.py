from fastapi import APIRouter
from app.api.public import forms

router = APIRouter()
router.include_router(forms.router, prefix="/forms", tags=["PublicForms"])
