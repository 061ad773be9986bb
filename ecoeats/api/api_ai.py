import re
import json
import logging
from json import JSONDecodeError
from typing import Any, Dict, List, Optional

from openai import AsyncOpenAI, OpenAIError
from fastapi import APIRouter, Body

from ecoeats.domain.Recipe import Recipe
from ecoeats.logic.pantry.ledger import placeholder_image_url
from ecoeats.logic.recipes.fallback import fallback_recipes
from ecoeats.utilities import config
from ecoeats.utilities.constants import (
    FOOD_CHECK_PROMPT_TEMPLATE,
    IMAGE_PROMPT_TEMPLATE,
    NUTRITION_PROMPT_TEMPLATE,
    RECIPE_JSON_FORMAT,
    RECIPE_PROMPT_TEMPLATE,
    RECIPE_SYSTEM_PROMPT,
)
from ecoeats.utilities.errors import CollaboratorUnavailable

logger = logging.getLogger(__name__)

# Used when no API key is configured
MOCK_NUTRITION = {
    'apple': {'calories': '52 kcal', 'protein': '0.3g', 'carbs': '14g', 'fat': '0.2g', 'fiber': '2.4g'},
    'banana': {'calories': '89 kcal', 'protein': '1.1g', 'carbs': '23g', 'fat': '0.3g', 'fiber': '2.6g'},
    'orange': {'calories': '47 kcal', 'protein': '0.9g', 'carbs': '12g', 'fat': '0.1g', 'fiber': '2.4g'},
    'milk': {'calories': '42 kcal', 'protein': '3.4g', 'carbs': '5g', 'fat': '1g', 'fiber': '0g'},
    'bread': {'calories': '265 kcal', 'protein': '9g', 'carbs': '49g', 'fat': '3.2g', 'fiber': '2.7g'},
}

NUTRITION_KEYS = ('calories', 'protein', 'carbs', 'fat', 'fiber')
MISSING_VALUE = re.compile(r"^(0|N/A|null)", re.I)


# === Helper: Get OpenAI Client ===
def _get_openai_client(api_key: Optional[str] = None) -> Optional[AsyncOpenAI]:
    """Return an AsyncOpenAI client if an API key is configured, otherwise None."""
    api_key = api_key if api_key is not None else config.OPENAI_API_KEY
    if not api_key:
        return None
    return AsyncOpenAI(api_key=api_key)


def _unit_hint(unit: str) -> str:
    if unit in ('L', 'ml'):
        return ' typically sold in a bottle, carton, or liquid container'
    if unit in ('kg', 'g'):
        return ' as a solid item or in packaged form'
    return ''


# === Text Cleaning Helpers ===
def _strip_code_fences(text: str) -> str:
    """Remove common markdown code fences and leading/trailing whitespace."""
    text = re.sub(r"```(?:json)?\n(.*?)```", r"\1", text, flags=re.S)
    text = re.sub(r"^```|```$", "", text)
    return text.strip()


def _remove_trailing_commas(text: str) -> str:
    """Remove common trailing commas in JSON-like text to help json.loads succeed."""
    return re.sub(r",\s*(\}|\])", r"\1", text)


def _extract_json_by_balancing(text: str) -> Optional[str]:
    """Extract the first JSON object/array by balancing braces/brackets."""
    start = None
    stack = []
    in_string = False
    escape = False

    for i, ch in enumerate(text):
        if ch == '"' and not escape:
            in_string = not in_string
        if in_string and ch == "\\" and not escape:
            escape = True
            continue
        else:
            escape = False

        if not in_string:
            if ch in "{[":
                if start is None:
                    start = i
                stack.append(ch)
            elif ch in "}]":
                if not stack:
                    continue
                opening = stack.pop()
                if (opening == "{" and ch != "}") or (opening == "[" and ch != "]"):
                    return None
                if not stack and start is not None:
                    return text[start:i + 1]
    return None


def parse_ai_json(text: str) -> Optional[Any]:
    """Best-effort decoding of model output that should be JSON. Returns None when nothing decodes."""
    text = (text or "").strip()
    if not text:
        return None
    try:
        return json.loads(text)
    except JSONDecodeError:
        pass
    cleaned = _remove_trailing_commas(_strip_code_fences(text))
    try:
        return json.loads(cleaned)
    except JSONDecodeError:
        pass
    candidate = _extract_json_by_balancing(cleaned)
    if candidate:
        try:
            return json.loads(_remove_trailing_commas(candidate))
        except JSONDecodeError:
            logger.warning("Failed to decode extracted JSON from AI output")
    return None


class AICollaborator:
    """Nutrition, image, recipe and food-check lookups backed by the OpenAI API.

    Without an API key every call answers from simulation data so the app
    stays usable offline. With a key, failures raise CollaboratorUnavailable
    and the caller decides on the fallback.
    """

    def __init__(self, api_key: Optional[str] = None, model: str = config.OPENAI_MODEL,
                 image_model: str = config.OPENAI_IMAGE_MODEL):
        self.client = _get_openai_client(api_key)
        self.model = model
        self.image_model = image_model

    @property
    def simulation(self) -> bool:
        return self.client is None

    async def _complete(self, prompt: str, instructions: Optional[str] = None) -> str:
        try:
            response = await self.client.responses.create(
                model=self.model,
                instructions=instructions,
                input=prompt,
            )
        except OpenAIError as e:
            raise CollaboratorUnavailable(f"OpenAI request failed: {e}") from e
        return (response.output_text or "").strip()

    async def _request_json_fix(self, previous_output: str) -> Optional[str]:
        """Ask the model to reformat previous_output as strict JSON."""
        prompt = (
            "The previous response was not valid JSON. "
            "Please reformat it as valid JSON (no surrounding text) using the same keys. "
            "Here is the original output:\n\n" + previous_output
        )
        try:
            return await self._complete(prompt)
        except CollaboratorUnavailable:
            logger.exception("Error while requesting AI to fix JSON formatting")
            return None

    async def _complete_json(self, prompt: str, instructions: Optional[str] = None) -> Any:
        raw = await self._complete(prompt, instructions)
        parsed = parse_ai_json(raw)
        if parsed is None and raw:
            fixed = await self._request_json_fix(raw)
            parsed = parse_ai_json(fixed or "")
        if parsed is None:
            raise CollaboratorUnavailable("AI output is not valid JSON")
        return parsed

    # === Nutrition ===
    async def lookup_nutrition(self, product_name: str) -> Optional[Dict[str, str]]:
        if self.simulation:
            logger.info("SIMULATION: No API key. Returning mock nutrition data.")
            mock = MOCK_NUTRITION.get(product_name.strip().lower())
            return dict(mock) if mock else None

        data = await self._complete_json(NUTRITION_PROMPT_TEMPLATE.format(product=product_name))
        if not isinstance(data, dict):
            return None
        calories = str(data.get('calories') or '')
        if not calories or MISSING_VALUE.match(calories):
            return None
        return {k: str(data.get(k, 'N/A')) for k in NUTRITION_KEYS}

    # === Product images ===
    async def generate_product_image(self, product_name: str, quantity: float = 0, unit: str = '') -> str:
        """Returns a data: URL for a generated image, or the placeholder URL in simulation mode."""
        if self.simulation:
            logger.info("SIMULATION: No API key. Returning fallback image URL.")
            return placeholder_image_url(product_name.strip())

        prompt = IMAGE_PROMPT_TEMPLATE.format(product=product_name, unit_hint=_unit_hint(unit))
        try:
            response = await self.client.images.generate(model=self.image_model, prompt=prompt, size="1024x1024")
        except OpenAIError as e:
            raise CollaboratorUnavailable(f"Image generation failed: {e}") from e
        b64 = response.data[0].b64_json if response.data else None
        if not b64:
            raise CollaboratorUnavailable("Image model returned no image data")
        return f"data:image/png;base64,{b64}"

    # === Recipe Generation ===
    async def generate_recipes(self, ingredient_names: List[str]) -> List[Recipe]:
        if self.simulation:
            logger.info("SIMULATION: No API key. Returning fallback recipes.")
            return fallback_recipes(ingredient_names)

        prompt = RECIPE_PROMPT_TEMPLATE.format(ingredients=", ".join(ingredient_names)) + RECIPE_JSON_FORMAT
        data = await self._complete_json(prompt, RECIPE_SYSTEM_PROMPT)
        if isinstance(data, dict):
            data = data.get('recipes', [data])
        if not isinstance(data, list):
            raise CollaboratorUnavailable("Recipe output is not a list")
        recipes = [Recipe.from_dict(r) for r in data if isinstance(r, dict)]
        return [r for r in recipes if r.title]

    # === Food item check ===
    async def validate_food_item(self, product_name: str) -> Dict[str, Any]:
        """Fails open: any error is reported as a food item so the user is never blocked."""
        if self.simulation:
            logger.info("SIMULATION: No API key. Skipping item validation.")
            return {'is_food_item': True, 'reason': 'API validation skipped in simulation mode.'}
        try:
            data = await self._complete_json(FOOD_CHECK_PROMPT_TEMPLATE.format(product=product_name))
        except CollaboratorUnavailable as e:
            logger.warning(f"Food check for '{product_name}' failed: {e}")
            return {'is_food_item': True, 'reason': 'API validation failed.'}
        if not isinstance(data, dict):
            return {'is_food_item': True, 'reason': 'API validation failed.'}
        return {
            'is_food_item': bool(data.get('isFoodItem', data.get('is_food_item', True))),
            'reason': str(data.get('reason', '')),
        }


_collaborator: Optional[AICollaborator] = None


def get_ai_collaborator() -> AICollaborator:
    global _collaborator
    if _collaborator is None:
        _collaborator = AICollaborator()
    return _collaborator


# === FastAPI Endpoints ===
router = APIRouter(prefix="/api/ai", tags=["ai"])


@router.get("/status")
async def ai_status():
    return {"simulation": get_ai_collaborator().simulation}


@router.post("/validate-item")
async def validate_item(product_name: str = Body(..., embed=True)):
    return await get_ai_collaborator().validate_food_item(product_name.strip())


@router.post("/nutrition")
async def nutrition(product_name: str = Body(..., embed=True)):
    try:
        data = await get_ai_collaborator().lookup_nutrition(product_name.strip())
    except CollaboratorUnavailable as e:
        logger.warning(f"Nutrition lookup failed: {e}")
        data = None
    return {"product_name": product_name.strip(), "nutrition": data}
