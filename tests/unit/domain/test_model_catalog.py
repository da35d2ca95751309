"""
Tests for ModelCatalog loading and lookup.

These tests demonstrate:
- Testing factory methods (from_json_file) against the shipped catalog and tmp files
- Testing typed failures (CatalogIoError vs CatalogParseError)
- Testing business rules (file order preserved, lookups)
- NOT testing field range validation for its own sake (that's Pydantic's job)
"""

import json
from pathlib import Path

import pytest

from voisia.domain.domain_type import ErrorStage
from voisia.domain.errors import CatalogIoError, CatalogParseError
from voisia.domain.model_catalog import ModelCatalog


@pytest.fixture
def shipped_catalog() -> ModelCatalog:
    """Load the real model catalog from resources/."""
    catalog_path = Path(__file__).parents[3] / "resources" / "llm-info.json"
    return ModelCatalog.from_json_file(catalog_path)


def test_shipped_catalog_loads_with_both_providers(shipped_catalog: ModelCatalog):
    """
    Demonstrates: Testing the configuration we actually ship.

    The UI needs at least one model per provider to offer anything.
    """
    providers = {info.provider for info in shipped_catalog.models()}

    assert {"anthropic", "openai"} <= providers


def test_models_preserve_file_order(catalog_file: Path):
    """
    Demonstrates: Testing a business rule (UI shows models in file order).
    """
    catalog = ModelCatalog.from_json_file(catalog_file)

    assert [info.id for info in catalog.models()] == ["claude-x", "gpt-x"]
    first = catalog.models()[0]
    assert first.display_name == "Claude X"
    assert first.tags == ("chat",)
    assert first.params.max_tokens == 1024


def test_single_entry_catalog(tmp_path: Path):
    """
    Demonstrates: Exact loading of a minimal document.
    """
    path = tmp_path / "one.json"
    path.write_text(
        '{"models":[{"id":"m1","display_name":"M1","provider":"anthropic","tags":["chat"],'
        '"params":{"max_tokens":1024,"temperature":0.7,"top_p":1.0}}]}',
        encoding="utf-8",
    )

    models = ModelCatalog.from_json_file(path).models()

    assert len(models) == 1
    assert models[0].id == "m1"
    assert models[0].provider == "anthropic"
    assert models[0].params.temperature == 0.7
    assert models[0].params.top_p == 1.0


def test_missing_file_is_io_error(tmp_path: Path):
    """
    Demonstrates: Testing typed failure for an unreadable file.
    """
    missing = tmp_path / "nope.json"

    with pytest.raises(CatalogIoError) as exc_info:
        ModelCatalog.from_json_file(missing)

    assert exc_info.value.stage == ErrorStage.CATALOG
    assert exc_info.value.path == missing


def test_malformed_json_is_parse_error(tmp_path: Path):
    """
    Demonstrates: Not-JSON and wrong-shape both surface as parse errors.
    """
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")

    with pytest.raises(CatalogParseError):
        ModelCatalog.from_json_file(broken)


def test_wrong_shape_is_parse_error(tmp_path: Path):
    """
    Demonstrates: A JSON document missing required fields names the offending location.
    """
    path = tmp_path / "shape.json"
    path.write_text(json.dumps({"models": [{"id": "m1"}]}), encoding="utf-8")

    with pytest.raises(CatalogParseError) as exc_info:
        ModelCatalog.from_json_file(path)

    assert "models.0" in exc_info.value.parse_detail
    assert exc_info.value.to_ui_string().startswith("catalog: ")


def test_find_and_for_provider(catalog_file: Path):
    """
    Demonstrates: Testing lookup helpers used by the UI layer.
    """
    catalog = ModelCatalog.from_json_file(catalog_file)

    assert catalog.find("gpt-x").display_name == "GPT X"
    assert [info.id for info in catalog.for_provider("anthropic")] == ["claude-x"]
    assert catalog.for_provider("gemini") == ()
    with pytest.raises(KeyError):
        catalog.find("unknown")
