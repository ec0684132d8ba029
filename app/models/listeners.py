from datetime import datetime, timezone
from sqlalchemy import event, inspect
from sqlalchemy.orm import Session

from app.core.constants import INITIAL_STATUS, SETTLEMENT_STATUS
from app.models.lead import Lead
from app.models.settings import AppSettings

ACTUAL_FIELDS = (
    "actual_sale_price",
    "actual_expenses",
    "actual_profit",
    "actual_commission",
)


# Auto updated_at
@event.listens_for(Lead, "before_update")
@event.listens_for(AppSettings, "before_update")
def update_timestamp(mapper, connection, target):
    target.updated_at = datetime.now(timezone.utc)


def _check_actuals_complete(lead: Lead) -> None:
    values = [getattr(lead, name) for name in ACTUAL_FIELDS]
    present = [v is not None for v in values]
    if any(present) and not all(present):
        raise ValueError(
            f"Lead {lead.id}: actual sale figures must be set together, got "
            + ", ".join(f"{n}={v}" for n, v in zip(ACTUAL_FIELDS, values))
        )


# Settlement figures are owned by the SOLD transition
@event.listens_for(Session, "before_flush")
def guard_actual_figures(session: Session, flush_context, instances):
    for obj in session.new:
        if isinstance(obj, Lead):
            if obj.status not in (None, INITIAL_STATUS):
                raise ValueError(f"New leads must start as {INITIAL_STATUS}")
            if any(getattr(obj, name) is not None for name in ACTUAL_FIELDS):
                raise ValueError("New leads cannot carry actual sale figures")

    for obj in session.dirty:
        if not isinstance(obj, Lead):
            continue
        state = inspect(obj)
        changed = [
            name for name in ACTUAL_FIELDS if state.attrs[name].history.has_changes()
        ]
        if not changed:
            continue
        if obj.status != SETTLEMENT_STATUS:
            raise ValueError(
                f"Lead {obj.id}: {', '.join(changed)} may only change on the "
                f"{SETTLEMENT_STATUS} transition (status is {obj.status})"
            )
        _check_actuals_complete(obj)
