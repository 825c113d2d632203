from pydantic import BaseModel

from motor_market.entrypoints.http.dtos.listings import ListingSummaryDTO


class DashboardResponseDTO(BaseModel):
    listing_count: int
    saved_count: int
    recent_listings: list[ListingSummaryDTO]
    saved_listings: list[ListingSummaryDTO]
