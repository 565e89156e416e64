"""
Tests for the category registry.
"""

import pytest

from riskforecast.config import ALL_CATEGORIES
from riskforecast.core.registry import CATEGORY_REGISTRY, get_category


def test_registry_matches_known_categories():
    assert list(CATEGORY_REGISTRY) == ALL_CATEGORIES


def test_weights():
    weights = {name: d.weight for name, d in CATEGORY_REGISTRY.items()}
    assert weights == {
        "technical": 0.25,
        "schedule": 0.20,
        "resource": 0.15,
        "quality": 0.15,
        "security": 0.10,
        "dependency": 0.10,
        "team": 0.05,
    }


def test_every_category_is_complete():
    for definition in CATEGORY_REGISTRY.values():
        assert len(definition.factor_names) == 4
        assert len(definition.mitigations) == 3
        assert callable(definition.collector)
        assert definition.title.endswith("Risk")


def test_factor_names():
    assert get_category("technical").factor_names == (
        "complexity", "dependencies", "performance", "maintainability",
    )


def test_unknown_category():
    with pytest.raises(KeyError):
        get_category("external")
