from decimal import Decimal
from typing import Final

DATE_FORMAT: Final[str] = "%d-%m-%Y"
ISO_DAY_FORMAT: Final[str] = "%Y-%m-%d"

# Expiry bands (days until expiry, inclusive)
EXPIRING_SOON_DAYS: Final[int] = 3

# EcoPoints awarded per action
POINTS_ITEM_USED: Final[int] = 5
POINTS_PER_DONATED_ITEM: Final[int] = 15
POINTS_RECIPE_COOKED: Final[int] = 10

REASON_ITEM_USED: Final[str] = "Item marked as used"
REASON_DONATION: Final[str] = "Thank you for donating"
REASON_RECIPE_COOKED: Final[str] = "Recipe cooked"

# Lowest point total for each level, highest first
LEVEL_THRESHOLDS: Final[tuple] = (
    (501, "Planet Protector"),
    (301, "EcoHero"),
    (101, "EcoWarrior"),
    (0, "EcoSaver"),
)

# Impact estimates used by the home statistics
KG_PER_ITEM: Final[Decimal] = Decimal("0.3")
CO2_KG_PER_FOOD_KG: Final[Decimal] = Decimal("0.3")

CURRENCY_SYMBOL: Final[str] = "₹"

PLACEHOLDER_IMAGE_URL: Final[str] = "https://placehold.co/400x300/161B22/E5E7EB?text={name}"
PLACEHOLDER_IMAGE_HOSTS: Final[tuple] = ("placehold.co", "picsum.photos")
LOCAL_IMAGE_PREFIX: Final[str] = "localimage:"

RECIPE_SYSTEM_PROMPT: Final[str] = (
    "You are a creative and sustainable cooking assistant named 'Chef Sage'. "
    "Help users reduce food waste with easy recipes from the ingredients they have on hand."
)
RECIPE_PROMPT_TEMPLATE: Final[str] = (
    """
    Suggest between 3 and 5 quick, low-waste recipes using these ingredients: {ingredients}.
    Prioritize the ingredients that might be expiring soon. The 'usedIngredients' array must
    contain the exact product names from my list that the recipe uses.
    Return ONLY a JSON array in the following format:
    """
)
RECIPE_JSON_FORMAT: Final[str] = (
    """
[
  {
    "title": str,
    "ingredients": [str, str],
    "steps": [str, str],
    "estimatedTime": str(e.g. "15 mins"),
    "sustainabilityTip": str,
    "usedIngredients": [str, str]
  }
]
    """
)
NUTRITION_PROMPT_TEMPLATE: Final[str] = (
    """
    Provide typical nutritional values per 100g for: {product}.
    Return ONLY a JSON object with string values including units:
    {{"calories": "50 kcal", "protein": "1g", "carbs": "10g", "fat": "0.2g", "fiber": "2g"}}
    If you do not know the product, return {{"calories": "N/A"}}.
    """
)
FOOD_CHECK_PROMPT_TEMPLATE: Final[str] = (
    """
    Is "{product}" a common food, beverage, or grocery item?
    Return ONLY a JSON object: {{"isFoodItem": bool, "reason": str}}
    """
)
IMAGE_PROMPT_TEMPLATE: Final[str] = (
    "A single, photorealistic image of {product}{unit_hint}. Centered on a clean, plain white "
    "background, well-lit, like a professional product shot for a grocery app."
)
