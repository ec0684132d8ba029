from app.schemas.common import CamelModel


class KPISummary(CamelModel):
    """Headline numbers for the admin dashboard."""

    new_this_week: int
    approved: int
    bought: int
    sold: int
    avg_estimated_profit: int
    avg_actual_profit: int
