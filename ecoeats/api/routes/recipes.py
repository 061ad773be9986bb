from fastapi import APIRouter, Depends

from ecoeats.api.dependencies import get_current_user, get_service
from ecoeats.domain.User import User
from ecoeats.logic.service import EcoEatsService
from ecoeats.utilities.validators import RecipeInput, RecipeRequest

router = APIRouter(prefix="/api/recipes", tags=["recipes"])


@router.post("/generate")
async def generate_recipes(payload: RecipeRequest, user: User = Depends(get_current_user),
                           service: EcoEatsService = Depends(get_service)):
    result = await service.cookbook.generate(user.id, payload.ingredients)
    return {
        "ingredients": result.ingredients,
        "recipes": [r.to_dict() for r in result.recipes],
        "warnings": result.warnings,
    }


@router.post("/cooked")
def mark_cooked(payload: RecipeInput, user: User = Depends(get_current_user),
                service: EcoEatsService = Depends(get_service)):
    result = service.cookbook.mark_cooked(user.id, payload.model_dump())
    return {
        "recipe": result.recipe_title,
        "points_awarded": result.points_awarded,
        "used_item_ids": [i.id for i in result.used_items],
        "eco_points": user.eco_points,
        "level": user.level.value,
    }
