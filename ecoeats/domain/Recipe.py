"""Recipe domain entity: a generated low-waste recipe and the pantry names it uses."""
from typing import List, Optional


class Recipe:
    def __init__(self, title: str = "", ingredients: Optional[List[str]] = None,
                 steps: Optional[List[str]] = None, estimated_time: str = "",
                 sustainability_tip: str = "", used_ingredients: Optional[List[str]] = None):
        self.title = title
        self.ingredients = ingredients[:] if ingredients else []
        self.steps = steps[:] if steps else []
        self.estimated_time = estimated_time
        self.sustainability_tip = sustainability_tip
        self.used_ingredients = used_ingredients[:] if used_ingredients else []

    def __str__(self) -> str:
        return f"{self.title} - {self.estimated_time} - Uses: {', '.join(self.used_ingredients)}"

    __repr__ = __str__

    @staticmethod
    def normalize_name(name: str) -> str:
        """Normalize a product name for case-insensitive matching."""
        if not isinstance(name, str):
            return ""
        return name.strip().lower()

    @staticmethod
    def from_dict(data) -> "Recipe":
        d = dict(data) if isinstance(data, dict) else {}
        # Normalize key synonyms (AI output uses camelCase)
        synonyms = {
            'usedIngredients': 'used_ingredients',
            'estimatedTime': 'estimated_time',
            'sustainabilityTip': 'sustainability_tip',
            'name': 'title',
        }
        for src, dst in synonyms.items():
            if src in d and dst not in d:
                d[dst] = d.pop(src)
        return Recipe(
            title=str(d.get('title', '')),
            ingredients=[str(i) for i in d.get('ingredients') or []],
            steps=[str(s) for s in d.get('steps') or []],
            estimated_time=str(d.get('estimated_time', '')),
            sustainability_tip=str(d.get('sustainability_tip', '')),
            used_ingredients=[str(u) for u in d.get('used_ingredients') or []],
        )

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "ingredients": self.ingredients,
            "steps": self.steps,
            "estimated_time": self.estimated_time,
            "sustainability_tip": self.sustainability_tip,
            "used_ingredients": self.used_ingredients,
        }
