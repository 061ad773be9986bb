from fastapi import APIRouter, Depends, HTTPException, Response

from ecoeats.api.dependencies import get_current_user, get_service
from ecoeats.domain.PantryItem import PantryItem
from ecoeats.domain.User import User
from ecoeats.infra.image_store import decode_data_url
from ecoeats.logic.expiry.classifier import classify, days_until_expiry
from ecoeats.logic.service import EcoEatsService
from ecoeats.utilities.validators import BulkDeleteInput, PantryItemInput, StatusUpdateInput

router = APIRouter(tags=["pantry"])


def item_payload(item: PantryItem, service: EcoEatsService) -> dict:
    today, tz = service.clock.today(), service.clock.tz
    data = item.to_dict()
    data['days_left'] = days_until_expiry(item.expiry_date, today, tz)
    data['expiry_status'] = classify(item.expiry_date, today, tz).value
    return data


@router.get("/api/pantry")
def pantry_view(user: User = Depends(get_current_user), service: EcoEatsService = Depends(get_service)):
    groups = service.pantry.view(user.id)
    return {name: [item_payload(i, service) for i in items] for name, items in groups.items()}


@router.post("/api/pantry/items")
async def add_item(payload: PantryItemInput, user: User = Depends(get_current_user),
                   service: EcoEatsService = Depends(get_service)):
    result = await service.pantry.add_item(user.id, payload.model_dump())
    return {"item": item_payload(result.item, service), "warnings": result.warnings}


@router.put("/api/pantry/items/{item_id}/status")
def update_status(item_id: str, payload: StatusUpdateInput, user: User = Depends(get_current_user),
                  service: EcoEatsService = Depends(get_service)):
    item = service.pantry.update_status(user.id, item_id, payload.status)
    return item_payload(item, service)


@router.delete("/api/pantry/items/{item_id}")
def delete_item(item_id: str, user: User = Depends(get_current_user),
                service: EcoEatsService = Depends(get_service)):
    item = service.pantry.delete_item(user.id, item_id)
    return {"deleted": item.id}


@router.post("/api/pantry/items/bulk-delete")
def bulk_delete(payload: BulkDeleteInput, user: User = Depends(get_current_user),
                service: EcoEatsService = Depends(get_service)):
    return {"deleted": service.pantry.delete_multiple(user.id, payload.item_ids)}


@router.get("/api/pantry/items/{item_id}/image")
def item_image(item_id: str, user: User = Depends(get_current_user),
               service: EcoEatsService = Depends(get_service)):
    """Serves images kept in the local image store (items referencing localimage:<id>)."""
    item = service.store.get_item(user.id, item_id)
    image_store = service.pantry.image_store
    data_url = image_store.get(item.id) if (item.has_local_image and image_store is not None) else None
    if not data_url:
        raise HTTPException(status_code=404, detail="No stored image for this item")
    mime, raw = decode_data_url(data_url)
    return Response(content=raw, media_type=mime)


@router.post("/api/pantry/backfill-images")
async def backfill_images(user: User = Depends(get_current_user), service: EcoEatsService = Depends(get_service)):
    return {"updated": await service.pantry.backfill_images(user.id)}


@router.post("/api/pantry/expiry-check")
def expiry_check(user: User = Depends(get_current_user), service: EcoEatsService = Depends(get_service)):
    return service.daily_expiry_check()


@router.get("/api/stats")
def stats(user: User = Depends(get_current_user), service: EcoEatsService = Depends(get_service)):
    return service.impact_stats(user.id)
