from typing import List

from fastapi import APIRouter

from app.models.poster import PoliticalParty
from app.schemas.poster import PartyOut
from app.services.catalog import party_out

router = APIRouter(prefix="/api/parties", tags=["parties"])


@router.get("", response_model=List[PartyOut])
async def list_parties():
    parties = await PoliticalParty.all().order_by("name")
    return [party_out(p) for p in parties]
