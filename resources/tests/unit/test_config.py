from phonology.utils.config import PhonologySettings, get_settings, reload_settings


def test_defaults():
    settings = PhonologySettings()
    assert settings.diagnostics_enabled is True
    assert settings.log_level == "INFO"
    assert settings.get_default_features_path() is None
    assert settings.get_log_file_path() is None


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PHONOLOGY_DIAGNOSTICS_ENABLED", "false")
    monkeypatch.setenv("PHONOLOGY_LOG_LEVEL", "debug")

    settings = reload_settings()
    assert get_settings() is settings
    assert settings.diagnostics_enabled is False
    assert settings.log_level == "debug"


def test_validate_settings_reports_problems(tmp_path):
    settings = PhonologySettings(
        log_level="LOUD",
        default_features_path=str(tmp_path / "missing.features"),
        diagnostics_enabled=False,
    )
    status = settings.validate_settings()
    assert not status.valid
    assert len(status.errors) == 2
    assert any("Unknown log level" in e for e in status.errors)
    assert status.warnings


def test_validate_settings_accepts_existing_file(tmp_path):
    path = tmp_path / "mine.features"
    path.write_text("voice\tprivative\n", encoding="utf-8")
    status = PhonologySettings(default_features_path=str(path)).validate_settings()
    assert status.valid
    assert status.errors == []
