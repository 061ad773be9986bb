from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from ecoeats.api.dependencies import get_current_user, get_service
from ecoeats.api.routes.pantry import item_payload
from ecoeats.domain.User import User
from ecoeats.logic.donation.ngo_directory import find_nearby_ngos
from ecoeats.logic.service import EcoEatsService
from ecoeats.utilities.config import NGO_SEARCH_RADIUS_KM
from ecoeats.utilities.validators import DonationInput

router = APIRouter(prefix="/api/donations", tags=["donations"])


@router.get("/items")
def donatable_items(user: User = Depends(get_current_user), service: EcoEatsService = Depends(get_service)):
    return [item_payload(i, service) for i in service.donations.donatable_items(user.id)]


@router.get("/ngos")
def nearby_ngos(lat: float = Query(...), lon: float = Query(...),
                radius_km: Optional[float] = Query(default=None, gt=0)):
    ngos = find_nearby_ngos(lat, lon, radius_km or NGO_SEARCH_RADIUS_KM)
    return [n.to_dict() for n in ngos]


@router.post("")
def donate(payload: DonationInput, user: User = Depends(get_current_user),
           service: EcoEatsService = Depends(get_service)):
    donation = service.donations.record_donation(user.id, payload.item_ids, payload.ngo_name)
    return donation.to_dict()


@router.get("")
def donation_history(user: User = Depends(get_current_user), service: EcoEatsService = Depends(get_service)):
    return [d.to_dict() for d in service.donations.history(user.id)]


@router.get("/report.pdf")
def donation_report(user: User = Depends(get_current_user), service: EcoEatsService = Depends(get_service)):
    pdf = service.donation_report_pdf(user.id)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="ecoeats_donations.pdf"'},
    )
