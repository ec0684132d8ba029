import logging
from typing import List

from fastapi import APIRouter, Depends

from app.core.exceptions import DuplicateVAError
from app.schemas.va import VACreate, VAOut
from app.repositories.va_repository import VARepository
from app.api.deps import get_va_repo

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/vas", tags=["VAs"])


@router.get("", response_model=List[VAOut])
async def list_vas(
    va_repo: VARepository = Depends(get_va_repo),
) -> List[VAOut]:
    """All VAs ordered by name, for the submission form's picker."""
    return [VAOut.model_validate(va) for va in await va_repo.list_all()]


@router.post("", response_model=VAOut, status_code=201)
async def create_va(
    body: VACreate,
    va_repo: VARepository = Depends(get_va_repo),
) -> VAOut:
    if await va_repo.get_by_name(body.name):
        raise DuplicateVAError(f"VA with name {body.name!r} already exists")
    va = await va_repo.create(body.name)
    await va_repo.commit()
    logger.info("Created VA %s", body.name)
    return VAOut.model_validate(va)
