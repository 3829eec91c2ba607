import pytest
from pydantic import ValidationError

from intent_analyzer.core.config import Settings
from intent_analyzer.modules.analysis import ValidationThresholds


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.SAFETY_FLOOR == 0.30
    assert settings.MAX_DISTANCE_TO_GOLD == 0.30
    assert settings.MAX_DISTANCE_TO_REF1 == 0.15
    assert settings.MAX_DISTANCE_TO_REF2 == 0.15
    assert settings.MAX_SENTENCE_LENGTH == 500
    assert settings.LOG_HISTORY_SIZE == 100


def test_thresholds_from_environment(monkeypatch):
    monkeypatch.setenv("SAFETY_FLOOR", "0.45")
    monkeypatch.setenv("MAX_DISTANCE_TO_REF2", "0.05")
    thresholds = ValidationThresholds.from_settings(Settings(_env_file=None))
    assert thresholds.safety_floor == 0.45
    assert thresholds.max_distance_to_ref2 == 0.05
    assert thresholds.max_distance_to_gold == 0.30


def test_out_of_range_threshold_rejected(monkeypatch):
    monkeypatch.setenv("MAX_DISTANCE_TO_GOLD", "1.2")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_allowed_origins_list():
    settings = Settings(_env_file=None, ALLOWED_ORIGINS="http://a.test, http://b.test,")
    assert settings.allowed_origins_list == ["http://a.test", "http://b.test"]
