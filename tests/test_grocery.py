"""
Tests for grocery list aggregation and the checked-state checklist.
"""

import uuid
from types import SimpleNamespace

from services.grocery import GroceryChecklist, aggregate, collation_key, recipe_ids_in
from test_constants import REALISTIC_RECIPES


def test_empty_input_gives_empty_list():
    assert aggregate([]) == []
    assert aggregate([{"ingredients": None}, SimpleNamespace(ingredients=[])]) == []


def test_trims_and_drops_blank_lines():
    assert aggregate([{"ingredients": ["  milk ", "", "   ", "eggs"]}]) == ["eggs", "milk"]


def test_first_occurrence_casing_wins():
    recipes = [
        {"ingredients": ["Black Pepper", "salt"]},
        {"ingredients": ["black pepper", "SALT", "olive oil"]},
    ]

    assert aggregate(recipes) == ["Black Pepper", "olive oil", "salt"]


def test_two_recipes_sharing_ingredients():
    a = {"ingredients": ["2 eggs", "Milk"]}
    b = {"ingredients": ["milk", "2 Eggs", "Salt"]}

    assert aggregate([a, b]) == ["2 eggs", "Milk", "Salt"]


def test_aggregating_a_grocery_list_again_changes_nothing():
    recipes = [{"ingredients": r["ingredients"]} for r in REALISTIC_RECIPES.values()
               if isinstance(r["ingredients"], list)]
    recipes.append({"ingredients": ["  black pepper", "Salt", "", "Édamame", "edamame"]})

    once = aggregate(recipes)

    assert aggregate([{"ingredients": once}]) == once


def test_output_has_no_case_insensitive_duplicates():
    recipes = [
        SimpleNamespace(ingredients=["4 eggs", "1 onion", "Black Pepper", "cumin"]),
        SimpleNamespace(ingredients=["2 eggs", "black pepper", "Cumin ", "rolled oats"]),
    ]

    result = aggregate(recipes)

    keys = [line.strip().casefold() for line in result]
    assert len(keys) == len(set(keys))
    assert result == sorted(result, key=collation_key)
    assert "Black Pepper" in result and "black pepper" not in result


def test_sort_ignores_case_and_accents():
    result = aggregate([{"ingredients": ["zucchini", "Édamame", "apples", "Bananas"]}])

    assert result == ["apples", "Bananas", "Édamame", "zucchini"]


def test_identical_input_gives_identical_output():
    recipes = [{"ingredients": r["ingredients"]} for r in REALISTIC_RECIPES.values()
               if isinstance(r["ingredients"], list)]

    assert aggregate(recipes) == aggregate(recipes)


def test_recipe_ids_in_keeps_first_seen_order():
    a, b = uuid.uuid4(), uuid.uuid4()
    entries = [
        {"recipe_id": b},
        {"recipe_id": None, "notes": "Eat out"},
        SimpleNamespace(recipe_id=a),
        {"recipe_id": b},
    ]

    assert recipe_ids_in(entries) == [b, a]


# =============================================================================
# CHECKLIST
# =============================================================================


def test_checklist_toggle_and_reset():
    checklist = GroceryChecklist(["eggs", "milk"])

    assert checklist.toggle("eggs") is True
    assert checklist.is_checked("eggs")
    assert checklist.checked == frozenset({"eggs"})

    assert checklist.toggle("eggs") is False
    assert not checklist.is_checked("eggs")

    checklist.toggle("milk")
    checklist.reset(["bread"])
    assert checklist.checked == frozenset()
    assert checklist.items == ("bread",)


def test_checklist_ignores_lines_not_on_the_list():
    checklist = GroceryChecklist(["eggs"])

    assert checklist.toggle("caviar") is False
    assert checklist.checked == frozenset()
    assert len(checklist) == 1
