"""Dashboard API route."""

from fastapi import APIRouter, Depends, HTTPException

from learnhub.auth import Principal
from learnhub.progress import ProgressError, get_dashboard
from web_api.auth import require_principal
from web_api.errors import http_error
from web_api.serialize import dashboard

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("")
async def get_dashboard_endpoint(principal: Principal = Depends(require_principal)):
    """Stats, enrolled courses with progress, and earned certificates.

    Students only: admins use the admin area and have no learner dashboard.
    """
    if principal.is_admin:
        raise HTTPException(status_code=403, detail="Dashboard is for students")

    try:
        aggregate = await get_dashboard(principal.user_id)
    except ProgressError as e:
        raise http_error(e)

    return dashboard(aggregate)
