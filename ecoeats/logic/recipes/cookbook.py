"""RecipeCookbook: recipe suggestions from the pantry and the "mark cooked" reward."""
from __future__ import annotations
import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Union

from ecoeats.domain.PantryItem import ItemStatus, PantryItem
from ecoeats.domain.Recipe import Recipe
from ecoeats.events.event_helpers import notify
from ecoeats.logic.expiry.classifier import eligible_for_use
from ecoeats.logic.pantry.ledger import PantryLedger
from ecoeats.logic.recipes.fallback import fallback_recipes
from ecoeats.utilities.config import COLLABORATOR_TIMEOUT_SECONDS
from ecoeats.utilities.constants import POINTS_ITEM_USED, POINTS_RECIPE_COOKED, REASON_RECIPE_COOKED

logger = logging.getLogger(__name__)


@dataclass
class GenerateResult:
    recipes: List[Recipe]
    ingredients: List[str]
    warnings: List[str] = field(default_factory=list)


@dataclass
class CookResult:
    recipe_title: str
    points_awarded: int
    used_items: List[PantryItem] = field(default_factory=list)


class RecipeCookbook:
    def __init__(self, pantry: PantryLedger, collaborators=None, timeout: float = COLLABORATOR_TIMEOUT_SECONDS):
        self.pantry = pantry
        self.store = pantry.store
        self.points = pantry.points
        self.clock = pantry.clock
        self.bus = pantry.bus
        self.collaborators = collaborators
        self.timeout = timeout

    def candidate_ingredients(self, user_id: str) -> List[str]:
        """Names of active, unexpired items, most urgent first."""
        items = eligible_for_use(self.store.pantry(user_id), self.clock.today(), self.clock.tz)
        return [i.product_name for i in items]

    async def generate(self, user_id: str, ingredient_names: Optional[List[str]] = None) -> GenerateResult:
        '''
        Asks the recipe generator for ideas. With no names given the user's
        eligible pantry items are used. Generator failures fall back to the
        built-in recipes with a warning.
        '''
        self.store.get_user(user_id)
        names = [n.strip() for n in (ingredient_names or []) if n and n.strip()]
        if not names:
            names = self.candidate_ingredients(user_id)

        recipes: List[Recipe] = []
        warnings: List[str] = []
        if self.collaborators is not None:
            try:
                recipes = await asyncio.wait_for(self.collaborators.generate_recipes(names), timeout=self.timeout)
            except Exception as e:
                logger.warning(f"Recipe generation failed: {e}")
                recipes = []
        if not recipes:
            warnings.append("Could not generate recipes right now. Here are a few ideas to get you started.")
            recipes = fallback_recipes(names)
            for warning in warnings:
                notify(self.bus, warning, 'warning')
        return GenerateResult(recipes=list(recipes), ingredients=names, warnings=warnings)

    def mark_cooked(self, user_id: str, recipe: Union[Recipe, dict]) -> CookResult:
        '''
        Awards the cooking bonus, then marks one matching Active item Used per
        name in used_ingredients. Matching is case-insensitive and each item is
        consumed at most once per call.
        '''
        if not isinstance(recipe, Recipe):
            recipe = Recipe.from_dict(recipe)
        self.store.get_user(user_id)
        self.points.award(user_id, POINTS_RECIPE_COOKED, REASON_RECIPE_COOKED)

        available = {i.id for i in self.store.pantry(user_id) if i.status == ItemStatus.ACTIVE}
        used: List[PantryItem] = []
        for name in recipe.used_ingredients:
            wanted = Recipe.normalize_name(name)
            match = next((i for i in self.store.pantry(user_id)
                          if i.id in available and Recipe.normalize_name(i.product_name) == wanted), None)
            if match is None:
                continue
            available.discard(match.id)
            used.append(self.pantry.update_status(user_id, match.id, ItemStatus.USED))

        logger.info(f"{user_id} cooked '{recipe.title}' using {len(used)} pantry items")
        return CookResult(
            recipe_title=recipe.title,
            points_awarded=POINTS_RECIPE_COOKED + POINTS_ITEM_USED * len(used),
            used_items=used,
        )
