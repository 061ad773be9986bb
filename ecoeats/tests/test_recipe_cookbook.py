import pytest

from ecoeats.domain.PantryItem import ItemStatus
from ecoeats.domain.Recipe import Recipe
from ecoeats.tests.support import StubCollaborators, add_active_item, make_service, make_user


def test_mark_cooked_uses_matching_items_once():
    service = make_service()
    user = make_user(service)
    egg1 = add_active_item(service, user.id, "Eggs")
    egg2 = add_active_item(service, user.id, "Eggs")
    spinach = add_active_item(service, user.id, "Spinach")
    add_active_item(service, user.id, "Rice")
    recipe = Recipe(title="Omelette", used_ingredients=["eggs", "SPINACH", "Tomato"])

    result = service.cookbook.mark_cooked(user.id, recipe)

    assert result.points_awarded == 20
    assert user.eco_points == 20
    assert [i.id for i in result.used_items] == [egg1.id, spinach.id]
    assert egg2.status == ItemStatus.ACTIVE


def test_mark_cooked_repeated_name_consumes_distinct_items():
    service = make_service()
    user = make_user(service)
    egg1 = add_active_item(service, user.id, "Eggs")
    egg2 = add_active_item(service, user.id, "Eggs")

    result = service.cookbook.mark_cooked(user.id, {"title": "Double omelette", "usedIngredients": ["Eggs", "Eggs"]})

    assert {i.id for i in result.used_items} == {egg1.id, egg2.id}
    assert user.eco_points == 20


def test_mark_cooked_without_matches_still_rewards_cooking():
    service = make_service()
    user = make_user(service)

    result = service.cookbook.mark_cooked(user.id, Recipe(title="Toast", used_ingredients=["Bread"]))

    assert result.used_items == []
    assert user.eco_points == 10


@pytest.mark.asyncio
async def test_generate_uses_eligible_pantry_items_by_default():
    suggestion = Recipe(title="Rice bowl", used_ingredients=["Rice"])
    collaborators = StubCollaborators(recipes=[suggestion])
    service = make_service(collaborators)
    user = make_user(service)
    add_active_item(service, user.id, "Rice", days=1)
    add_active_item(service, user.id, "Old milk", days=-3)

    result = await service.cookbook.generate(user.id)

    assert result.ingredients == ["Rice"]
    assert result.recipes == [suggestion]
    assert result.warnings == []


@pytest.mark.asyncio
async def test_generate_falls_back_when_generator_fails():
    service = make_service(StubCollaborators(fail=True))
    user = make_user(service)

    result = await service.cookbook.generate(user.id, ["Spinach", "Greek yogurt", "Bread"])

    assert len(result.warnings) == 1
    titles = [r.title for r in result.recipes]
    assert titles[0].startswith("Fallback:")
    assert result.recipes[0].used_ingredients == ["Spinach"]
    assert result.recipes[1].used_ingredients == ["Greek yogurt"]
