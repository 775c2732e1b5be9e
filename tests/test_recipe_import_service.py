import logging

import pytest

from feast_recipes.app.services import recipe_import_service
from feast_recipes.app.services.url_parsing import errors
from feast_recipes.app.services.url_parsing.models import ParsedIngredient, ParsedRecipe


def _fake_fetch(html=None, exc=None):
    async def fake_fetch(url: str) -> str:
        if exc is not None:
            raise exc
        return html

    return fake_fetch


@pytest.mark.asyncio
async def test_import_success(monkeypatch, fixture_html):
    monkeypatch.setattr(recipe_import_service, "fetch_url", _fake_fetch(fixture_html("full_recipe.html")))

    result = await recipe_import_service.import_recipe_from_url("  https://example.com/cookies  ")
    assert result.success is True
    assert result.error_code is None
    assert result.source_url == "https://example.com/cookies"
    assert result.recipe.name == "Classic Chocolate Chip Cookies"
    assert len(result.recipe.ingredients) == 9


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "exc,code,message",
    [
        (errors.InvalidUrlError("empty URL"), "invalid_url", "Please enter a valid website URL"),
        (errors.InvalidUrlSchemeError("ftp"), "invalid_url", "Please enter a valid website URL"),
        (errors.ConnectionFailedError("refused"), "connection_failed", "Could not connect to the website"),
        (errors.TooManyRedirectsError(5), "too_many_redirects", "Could not connect to the website"),
        (errors.FetchTimeoutError(30), "fetch_timeout", "The website took too long to respond"),
        (errors.HttpStatusError(404, "page not found"), "http_error", "The website returned an error (HTTP 404)"),
        (
            errors.InvalidContentTypeError("application/pdf"),
            "unsupported_content_type",
            "This URL does not appear to be a recipe page",
        ),
        (errors.ResponseTooLargeError(1024), "response_too_large", "The page is too large to process"),
        (errors.ResponseReadError("reset"), "read_error", "Could not read the website response"),
    ],
)
async def test_import_fetch_failures(monkeypatch, exc, code, message):
    monkeypatch.setattr(recipe_import_service, "fetch_url", _fake_fetch(exc=exc))

    result = await recipe_import_service.import_recipe_from_url("https://example.com/recipe")
    assert result.success is False
    assert result.recipe is None
    assert result.error_code == code
    assert result.error_message == message


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "html,code,message",
    [
        ("<html><body>nothing</body></html>", "no_json_ld", "Could not find recipe data on this page"),
        (
            '<script type="application/ld+json">{"@type": "Article"}</script>',
            "no_recipe_found",
            "Could not find recipe data on this page",
        ),
        (
            '<script type="application/ld+json">[{"@type": "Recipe"}, {"@type": "Recipe"}]</script>',
            "multiple_recipes_found",
            "This page contains multiple recipes. Please try a more specific URL",
        ),
        (
            '<script type="application/ld+json">{"@type": "Recipe", "recipeIngredient": ["1 egg"]}</script>',
            "malformed_recipe",
            "The recipe data on this page could not be read: missing name",
        ),
    ],
)
async def test_import_parse_failures(monkeypatch, html, code, message):
    monkeypatch.setattr(recipe_import_service, "fetch_url", _fake_fetch(html))

    result = await recipe_import_service.import_recipe_from_url("https://example.com/recipe")
    assert result.success is False
    assert result.error_code == code
    assert result.error_message == message


def test_parsed_to_input():
    parsed = ParsedRecipe(
        name="Pancakes",
        description="Fluffy",
        prep_minutes=10,
        cook_minutes=15,
        total_minutes=25,
        servings=3,
        image_url="https://example.com/p.jpg",
        ingredients=[ParsedIngredient(quantity=1.5, unit="cups", name="flour")],
        instructions=["Mix", "Cook"],
        author="Someone",
    )
    record = recipe_import_service.parsed_to_input(parsed, "https://example.com/pancakes")
    assert record.name == "Pancakes"
    assert record.prep_time == 10
    assert record.cook_time == 15
    assert record.servings == 3
    assert record.image_path == "https://example.com/p.jpg"
    assert record.source_url == "https://example.com/pancakes"
    assert record.tags == []
    assert record.notes is None
    assert record.instructions == ["Mix", "Cook"]
    ingredient = record.ingredients[0]
    assert (ingredient.name, ingredient.quantity, ingredient.unit) == ("flour", 1.5, "cups")
    assert ingredient.category is None


@pytest.mark.asyncio
async def test_deeply_nested_block_does_not_break_import(monkeypatch):
    html = (
        '<script type="application/ld+json">' + "[" * 100000 + "]" * 100000 + "</script>"
        '<script type="application/ld+json">'
        '{"@type": "Recipe", "name": "Toast", "recipeIngredient": ["2 slices bread"],'
        ' "recipeInstructions": ["Toast it."]}'
        "</script>"
    )
    monkeypatch.setattr(recipe_import_service, "fetch_url", _fake_fetch(html))

    result = await recipe_import_service.import_recipe_from_url("https://example.com/toast")
    assert result.success is True
    assert result.recipe.name == "Toast"


def test_ensure_correlation_id():
    assert recipe_import_service.ensure_correlation_id("abc12345") == "abc12345"
    generated = recipe_import_service.ensure_correlation_id("  ")
    assert len(generated) == 8
    assert generated != recipe_import_service.ensure_correlation_id(None)


@pytest.mark.asyncio
async def test_logs_use_caller_correlation_id_and_omit_url(monkeypatch, caplog, fixture_html):
    monkeypatch.setattr(recipe_import_service, "fetch_url", _fake_fetch(fixture_html("full_recipe.html")))
    caplog.set_level(logging.DEBUG, logger=recipe_import_service.__name__)

    url = "https://example.com/private/cookies?token=secret"
    result = await recipe_import_service.import_recipe_from_url(url, correlation_id="trace-42")
    assert result.success is True

    messages = [record.getMessage() for record in caplog.records if record.name == recipe_import_service.__name__]
    assert messages
    assert all("[cid:trace-42]" in message for message in messages)
    assert not any("secret" in message or "example.com" in message for message in messages)


@pytest.mark.asyncio
async def test_failure_logs_omit_url(monkeypatch, caplog):
    exc = errors.ConnectionFailedError("could not reach example.com")
    monkeypatch.setattr(recipe_import_service, "fetch_url", _fake_fetch(exc=exc))
    caplog.set_level(logging.WARNING, logger=recipe_import_service.__name__)

    await recipe_import_service.import_recipe_from_url("https://example.com/recipe", correlation_id="c1")

    warnings = [record.getMessage() for record in caplog.records if record.levelno == logging.WARNING]
    assert warnings == ["[cid:c1] fetch failed (connection_failed): ConnectionFailedError"]
