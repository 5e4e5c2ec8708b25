from fastapi import APIRouter, status

from src.api.response import ApiResponse, ok
from src.domain.base import utcnow

router = APIRouter()


@router.get("/health", status_code=status.HTTP_200_OK, response_model=ApiResponse[dict])
async def health_check():
    """Liveness check"""
    return ok({"status": "healthy", "timestamp": utcnow().isoformat()}, "Service is running")
