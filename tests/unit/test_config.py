"""Unit tests for madness_index.config."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from madness_index.config import TIER_NAMES, ScoringConfig


@pytest.mark.unit
class TestScoringConfig:
    def test_defaults_are_v32(self) -> None:
        config = ScoringConfig()
        assert config.revision == "v3.2"
        assert config.resume_weak_adjustment == pytest.approx(-0.05)
        assert config.resume_fragile_adjustment == pytest.approx(-0.10)
        assert all(config.leverage_multiplier(tier) == 1.0 for tier in TIER_NAMES)

    def test_partial_multipliers_are_merged(self) -> None:
        config = ScoringConfig(leverage_multipliers={"Elite": 1.25})
        assert config.leverage_multiplier("Elite") == pytest.approx(1.25)
        assert config.leverage_multiplier("Fragile") == 1.0

    def test_unknown_tier_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Unknown résumé tier"):
            ScoringConfig(leverage_multipliers={"Legendary": 2.0})

    def test_positive_penalty_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ScoringConfig(resume_weak_adjustment=0.05)

    def test_extra_keys_forbidden(self) -> None:
        with pytest.raises(ValidationError):
            ScoringConfig.model_validate({"tempo_formula": "multiplicative"})

    def test_frozen(self) -> None:
        config = ScoringConfig()
        with pytest.raises(ValidationError):
            config.resume_weak_adjustment = -0.5  # type: ignore[misc]

    def test_from_json_marks_custom(self, tmp_path: Path) -> None:
        path = tmp_path / "later.json"
        path.write_text(json.dumps({"resume_weak_adjustment": -0.15, "resume_fragile_adjustment": -0.25}))
        config = ScoringConfig.from_json(path)
        assert config.revision == "custom"
        assert config.resume_weak_adjustment == pytest.approx(-0.15)
        assert config.resume_fragile_adjustment == pytest.approx(-0.25)

    def test_from_json_keeps_explicit_revision(self, tmp_path: Path) -> None:
        path = tmp_path / "v32.json"
        path.write_text(json.dumps({"revision": "v3.2"}))
        assert ScoringConfig.from_json(path).revision == "v3.2"
