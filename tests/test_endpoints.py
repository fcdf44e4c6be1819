"""
End-to-end API tests through FastAPI's TestClient.

Covers the recipe box, the weekly planner, grocery lists and signed image
downloads. Each test runs against a fresh in-memory database.
"""

from urllib.parse import urlparse

from test_constants import MONDAY, NEXT_MONDAY, PREVIOUS_MONDAY, REALISTIC_RECIPES

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake"


def create_recipe(api_client, headers, key="carbonara", **overrides):
    payload = dict(REALISTIC_RECIPES[key], **overrides)
    response = api_client.post("/recipes", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def add_entry(api_client, headers, week="2024-03-11", **payload):
    return api_client.post(f"/plans/{week}/entries", json=payload, headers=headers)


# =============================================================================
# HEALTH
# =============================================================================


def test_health_check(api_client):
    response = api_client.get("/health-check")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert response.json()["service"] == "MealGrid"
    assert "X-Request-ID" in response.headers
    assert "X-Process-Time" in response.headers


def test_health_check_db(api_client):
    assert api_client.get("/health-check/db").json() == {"database": "ok"}


# =============================================================================
# RECIPES
# =============================================================================


def test_recipe_crud(api_client, headers):
    created = create_recipe(api_client, headers)
    recipe_id = created["recipe_id"]

    assert created["tags"] == ["pasta", "italian", "quick"]
    assert created["ingredients"][0] == "200 g spaghetti"

    fetched = api_client.get(f"/recipes/{recipe_id}", headers=headers)
    assert fetched.status_code == 200
    assert fetched.json()["title"] == "Spaghetti Carbonara"

    patched = api_client.patch(
        f"/recipes/{recipe_id}",
        json={"description": None, "tags": "dinner, pasta"},
        headers=headers,
    )
    assert patched.status_code == 200
    assert patched.json()["description"] is None
    assert patched.json()["tags"] == ["dinner", "pasta"]
    assert patched.json()["cook_time_min"] == 25

    deleted = api_client.delete(f"/recipes/{recipe_id}", headers=headers)
    assert deleted.status_code == 200
    assert deleted.json()["success"] is True
    assert api_client.get(f"/recipes/{recipe_id}", headers=headers).status_code == 404


def test_patch_cannot_blank_the_title(api_client, headers):
    recipe = create_recipe(api_client, headers)

    response = api_client.patch(f"/recipes/{recipe['recipe_id']}", json={"title": " "}, headers=headers)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "TITLE_REQUIRED"


def test_list_recipes_with_search(api_client, headers):
    create_recipe(api_client, headers, "carbonara")
    create_recipe(api_client, headers, "shakshuka")

    everything = api_client.get("/recipes", headers=headers).json()
    assert [r["title"] for r in everything] == ["Shakshuka", "Spaghetti Carbonara"]

    found = api_client.get("/recipes", params={"q": "spag"}, headers=headers).json()
    assert [r["title"] for r in found] == ["Spaghetti Carbonara"]


def test_recipes_of_other_users_are_invisible(api_client, headers):
    from test_fixtures import auth_headers, make_identity

    recipe = create_recipe(api_client, headers)
    stranger = auth_headers(make_identity(profile_type="cook"))

    assert api_client.get("/recipes", headers=stranger).json() == []
    assert api_client.get(f"/recipes/{recipe['recipe_id']}", headers=stranger).status_code == 404
    assert api_client.delete(f"/recipes/{recipe['recipe_id']}", headers=stranger).status_code == 404


def test_image_upload_and_signed_download(api_client, headers):
    recipe = create_recipe(api_client, headers)

    response = api_client.put(
        f"/recipes/{recipe['recipe_id']}/image",
        files={"file": ("dish.png", PNG_BYTES, "image/png")},
        headers=headers,
    )
    assert response.status_code == 200, response.text
    image_url = response.json()["image_url"]
    assert response.json()["image_path"].endswith(".png")

    parsed = urlparse(image_url)
    download = api_client.get(f"{parsed.path}?{parsed.query}")
    assert download.status_code == 200
    assert download.content == PNG_BYTES
    assert download.headers["content-type"] == "image/png"

    tampered = api_client.get(f"{parsed.path}?token=forged")
    assert tampered.status_code == 401

    removed = api_client.delete(f"/recipes/{recipe['recipe_id']}/image", headers=headers)
    assert removed.json()["image_path"] is None
    assert api_client.get(f"{parsed.path}?{parsed.query}").status_code == 404


def test_image_upload_rejects_other_content(api_client, headers):
    recipe = create_recipe(api_client, headers)

    response = api_client.put(
        f"/recipes/{recipe['recipe_id']}/image",
        files={"file": ("notes.txt", b"hello", "text/plain")},
        headers=headers,
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_IMAGE"


def test_public_download_disabled_for_private_bucket(api_client):
    response = api_client.get("/storage/public/recipe-images/any/thing.png")

    assert response.status_code == 404


# =============================================================================
# PLANNER
# =============================================================================


def test_week_view_normalizes_to_monday(api_client, headers):
    response = api_client.get("/plans/week", params={"date": "2024-03-14"}, headers=headers)

    assert response.status_code == 200
    data = response.json()
    assert data["week_start"] == MONDAY.isoformat()
    assert data["week_end"] == "2024-03-17"
    assert data["previous_week"] == PREVIOUS_MONDAY.isoformat()
    assert data["next_week"] == NEXT_MONDAY.isoformat()
    assert len(data["days"]) == 7
    assert data["meal_types"] == ["breakfast", "lunch", "dinner", "snack"]
    assert all(len(data["grid"][meal]) == 7 for meal in data["meal_types"])
    assert data["entry_count"] == 0


def test_week_view_offset(api_client, headers):
    response = api_client.get("/plans/week", params={"date": "2024-03-14", "offset": -1}, headers=headers)

    assert response.json()["week_start"] == PREVIOUS_MONDAY.isoformat()


def test_malformed_week_is_a_400(api_client, headers):
    response = api_client.get("/plans/week", params={"date": "next tuesday"}, headers=headers)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_DATE"


def test_plan_commands_then_refresh(api_client, headers):
    recipe = create_recipe(api_client, headers, "shakshuka")

    added = add_entry(api_client, headers, day=0, meal_type="breakfast", recipe_id=recipe["recipe_id"])
    assert added.status_code == 201
    # Mid-week path values address the same week
    add_entry(api_client, headers, week="2024-03-13", day=0, meal_type="breakfast", notes="Coffee")
    add_entry(api_client, headers, day=4, meal_type="dinner", notes="Pizza night")

    week = api_client.get("/plans/week", params={"date": "2024-03-11"}, headers=headers).json()
    cell = week["grid"]["breakfast"]["0"]
    assert [item["label"] for item in cell] == ["Shakshuka", "Coffee"]
    assert week["entry_count"] == 3

    entry_id = cell[1]["entry_id"]
    removed = api_client.delete(f"/plans/2024-03-11/entries/{entry_id}", headers=headers)
    assert removed.status_code == 200

    cleared = api_client.delete("/plans/2024-03-11/cells/0/breakfast", headers=headers)
    assert cleared.json()["data"] == {"deleted": 1}

    wiped = api_client.delete("/plans/2024-03-11/entries", headers=headers)
    assert wiped.json()["data"] == {"deleted": 1}

    week = api_client.get("/plans/week", params={"date": "2024-03-11"}, headers=headers).json()
    assert week["entry_count"] == 0


def test_entry_with_recipe_and_notes_is_rejected(api_client, headers):
    recipe = create_recipe(api_client, headers)

    response = add_entry(
        api_client, headers, day=1, meal_type="lunch", recipe_id=recipe["recipe_id"], notes="also this"
    )

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_entry_validation_errors(api_client, headers):
    assert add_entry(api_client, headers, day=7, meal_type="lunch", notes="x").status_code == 422
    assert add_entry(api_client, headers, day=0, meal_type="brunch", notes="x").status_code == 422
    missing = add_entry(
        api_client, headers, day=0, meal_type="lunch", recipe_id="00000000-0000-0000-0000-000000000000"
    )
    assert missing.status_code == 404


def test_removing_unknown_entry_is_404(api_client, headers):
    response = api_client.delete(
        "/plans/2024-03-11/entries/00000000-0000-0000-0000-000000000000", headers=headers
    )

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "ENTRY_NOT_FOUND"


def test_deleted_recipe_shows_placeholder(api_client, headers):
    recipe = create_recipe(api_client, headers)
    add_entry(api_client, headers, day=2, meal_type="dinner", recipe_id=recipe["recipe_id"])

    api_client.delete(f"/recipes/{recipe['recipe_id']}", headers=headers)

    week = api_client.get("/plans/week", params={"date": "2024-03-11"}, headers=headers).json()
    assert week["grid"]["dinner"]["2"][0]["label"] == "Recipe"


def test_grocery_list(api_client, headers):
    shakshuka = create_recipe(api_client, headers, "shakshuka")
    carbonara = create_recipe(api_client, headers, "carbonara")
    add_entry(api_client, headers, day=0, meal_type="breakfast", recipe_id=shakshuka["recipe_id"])
    add_entry(api_client, headers, day=3, meal_type="dinner", recipe_id=carbonara["recipe_id"])
    add_entry(api_client, headers, day=5, meal_type="dinner", recipe_id=shakshuka["recipe_id"])

    response = api_client.get("/plans/2024-03-14/groceries", headers=headers)

    assert response.status_code == 200
    data = response.json()
    assert data["week_start"] == "2024-03-11"
    assert data["count"] == len(data["items"])
    assert "Black Pepper" in data["items"]
    assert "black pepper" not in data["items"]
    assert data["items"].count("4 eggs") == 1

    empty = api_client.get("/plans/2024-03-18/groceries", headers=headers).json()
    assert empty["items"] == []


def test_planner_requires_sign_in(api_client):
    assert api_client.get("/plans/week").status_code == 401
    assert api_client.delete("/plans/2024-03-11/entries").status_code == 401
