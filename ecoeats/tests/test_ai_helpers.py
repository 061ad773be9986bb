import pytest

from ecoeats.api.api_ai import AICollaborator, parse_ai_json


def test_parse_plain_json():
    assert parse_ai_json('{"calories": "52 kcal"}') == {"calories": "52 kcal"}


def test_parse_fenced_json_with_trailing_comma():
    text = '```json\n[{"title": "Soup", "steps": ["Boil",],},]\n```'
    assert parse_ai_json(text) == [{"title": "Soup", "steps": ["Boil"]}]


def test_parse_json_buried_in_prose():
    text = 'Sure! Here you go: {"isFoodItem": true, "reason": "fruit {fresh}"} Enjoy.'
    assert parse_ai_json(text) == {"isFoodItem": True, "reason": "fruit {fresh}"}


def test_parse_garbage_returns_none():
    assert parse_ai_json("no json here") is None
    assert parse_ai_json("") is None


@pytest.mark.asyncio
async def test_simulation_mode_answers_offline():
    ai = AICollaborator(api_key="")
    assert ai.simulation

    assert (await ai.lookup_nutrition("Apple"))['calories'] == '52 kcal'
    assert await ai.lookup_nutrition("Dragonfruit") is None
    assert (await ai.generate_product_image("Oat milk", 1, "L")).startswith("https://placehold.co/")
    recipes = await ai.generate_recipes(["Eggs", "Milk"])
    assert recipes[0].used_ingredients == ["Eggs"]
    assert recipes[1].used_ingredients == ["Milk"]
    assert (await ai.validate_food_item("Chair"))['is_food_item'] is True
