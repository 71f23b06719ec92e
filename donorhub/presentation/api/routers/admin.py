from typing import Dict

from fastapi import APIRouter, Depends

from ....application.services.stats_service import AdminStatsService
from ....core.dependencies import get_stats_service
from ....domain.models import Identity
from ...api.dependencies import require_admin

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/stats")
def admin_stats(
    _: Identity = Depends(require_admin),
    stats_service: AdminStatsService = Depends(get_stats_service),
) -> Dict[str, int]:
    return stats_service.overview()
