import importlib.util
import json
from pathlib import Path

import pytest

from feast_recipes.app.services import recipe_import_service
from feast_recipes.app.services.url_parsing.models import ParsedIngredient, ParsedRecipe

SCRIPT_PATH = Path(__file__).resolve().parents[1] / "scripts" / "import_recipe.py"


@pytest.fixture
def script():
    spec = importlib.util.spec_from_file_location("import_recipe", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _success(url):
    recipe = ParsedRecipe(
        name="Toast",
        servings=1,
        ingredients=[ParsedIngredient(quantity=2, unit="slices", name="bread"), ParsedIngredient(name="butter")],
        instructions=["Toast the bread.", "Butter it."],
    )
    return recipe_import_service.ImportResult(success=True, recipe=recipe, source_url=url)


def test_prints_recipe(monkeypatch, capsys, script):
    async def fake_import(url: str):
        return _success(url)

    monkeypatch.setattr(recipe_import_service, "import_recipe_from_url", fake_import)

    assert script.main(["https://example.com/toast"]) == 0
    out = capsys.readouterr().out
    assert "Toast" in out
    assert "- 2 slices bread" in out
    assert "- butter" in out
    assert "2. Butter it." in out


def test_prints_json(monkeypatch, capsys, script):
    async def fake_import(url: str):
        return _success(url)

    monkeypatch.setattr(recipe_import_service, "import_recipe_from_url", fake_import)

    assert script.main(["https://example.com/toast", "--json"]) == 0
    record = json.loads(capsys.readouterr().out)
    assert record["name"] == "Toast"
    assert record["source_url"] == "https://example.com/toast"
    assert record["ingredients"][0]["unit"] == "slices"


def test_reports_failure(monkeypatch, capsys, script):
    async def fake_import(url: str):
        return recipe_import_service.ImportResult(
            success=False,
            source_url=url,
            error_code="http_error",
            error_message="The website returned an error (HTTP 404)",
        )

    monkeypatch.setattr(recipe_import_service, "import_recipe_from_url", fake_import)

    assert script.main(["https://example.com/missing"]) == 1
    assert "HTTP 404" in capsys.readouterr().err
