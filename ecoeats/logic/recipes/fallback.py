"""Built-in recipes served when the recipe generator is unavailable."""
import re
from typing import List

from ecoeats.domain.Recipe import Recipe

OMELETTE_PATTERN = re.compile(r"spinach|tomato|egg", re.I)
SMOOTHIE_PATTERN = re.compile(r"yogurt|milk|berry", re.I)


def fallback_recipes(ingredient_names: List[str]) -> List[Recipe]:
    """Two fixed recipes; used_ingredients lists the given names each one actually uses."""
    names = list(ingredient_names or [])
    return [
        Recipe(
            title="Fallback: Quick Spinach & Tomato Omelette",
            ingredients=["2 Eggs", "Handful of Spinach", "5 Cherry Tomatoes", "Splash of Milk", "Salt & Pepper"],
            steps=[
                "Whisk eggs, milk, salt, and pepper.",
                "Pour into a hot, oiled pan.",
                "Add spinach and halved tomatoes.",
                "Cook until set, then fold and serve.",
            ],
            estimated_time="10 mins",
            sustainability_tip="Using fresh produce before it wilts saves nutrients and reduces your carbon footprint.",
            used_ingredients=[n for n in names if OMELETTE_PATTERN.search(n)],
        ),
        Recipe(
            title="Fallback: Creamy Yogurt & Berry Smoothie",
            ingredients=["1 cup Greek Yogurt", "1/2 cup Milk", "Handful of berries (frozen or fresh)",
                         "1 tsp Honey (optional)"],
            steps=[
                "Combine all ingredients in a blender.",
                "Blend until smooth.",
                "Pour into a glass and enjoy immediately.",
            ],
            estimated_time="5 mins",
            sustainability_tip="Rescued dairy items that are near their expiry date are perfect for smoothies, "
                               "preventing waste.",
            used_ingredients=[n for n in names if SMOOTHIE_PATTERN.search(n)],
        ),
    ]
