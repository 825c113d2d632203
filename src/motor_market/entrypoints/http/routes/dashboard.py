from fastapi import APIRouter, Depends

from motor_market.domain.viewer import Viewer
from motor_market.entrypoints.http.dependencies import get_current_viewer, get_dashboard_use_case
from motor_market.entrypoints.http.dtos.dashboard import DashboardResponseDTO
from motor_market.entrypoints.http.error_responses import ErrorResponse
from motor_market.entrypoints.http.mappers.listing_mapper import ListingMapper
from motor_market.use_cases.get_dashboard import GetDashboard


router = APIRouter(tags=["Dashboard"])


@router.get(
    "/me/dashboard",
    response_model=DashboardResponseDTO,
    summary="Your listings and saved listings at a glance",
    responses={401: {"model": ErrorResponse, "description": "Not signed in"}},
)
def get_dashboard(
    viewer: Viewer | None = Depends(get_current_viewer),
    use_case: GetDashboard = Depends(get_dashboard_use_case),
) -> DashboardResponseDTO:
    return ListingMapper.to_dashboard_response(use_case.execute(viewer))
