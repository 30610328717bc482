import pytest
from pydantic import ValidationError

from src.zone_dispatch.config import Settings


def test_settings_read_prefixed_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("ZD_DEFAULT_RADIUS_KM", "25")
    monkeypatch.setenv("ZD_ZONE_OVERLAP_POLICY", "smallest_area")
    monkeypatch.setenv("ZD_FRONTEND_ALLOWED_ORIGINS", '["https://partners.example.com"]')

    settings = Settings()

    assert settings.default_radius_km == 25.0
    assert settings.zone_overlap_policy == "smallest_area"
    assert settings.frontend_allowed_origins == ("https://partners.example.com",)


def test_settings_reject_unknown_overlap_policy(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("ZD_ZONE_OVERLAP_POLICY", "largest")
    with pytest.raises(ValidationError):
        Settings()


def test_settings_defaults(tmp_path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.chdir(tmp_path)
    settings = Settings()

    assert settings.default_radius_km == 70.0
    assert settings.detection_buffer_km == 0.1
    assert settings.zone_overlap_policy == "first_match"
    assert settings.data_root == (tmp_path / "data").resolve()
    assert settings.zones_file == settings.data_root / "zones.json"


def test_data_files_follow_data_root(tmp_path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("ZD_DATA_ROOT", str(tmp_path))
    settings = Settings()

    assert settings.data_root == tmp_path.resolve()
    assert settings.zones_file == tmp_path.resolve() / "zones.json"
    assert settings.restaurants_file == tmp_path.resolve() / "restaurants.json"


def test_explicit_data_file_overrides_data_root(tmp_path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("ZD_DATA_ROOT", str(tmp_path))
    monkeypatch.setenv("ZD_ZONES_FILE", str(tmp_path / "exports" / "zones-2024.json"))
    settings = Settings()

    assert settings.zones_file == (tmp_path / "exports" / "zones-2024.json").resolve()
    assert settings.restaurants_file == tmp_path.resolve() / "restaurants.json"
    assert settings.zones_order_by == "created_at"
