import pytest
from pydantic import ValidationError

from docfiler.config.settings import Settings


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        s = Settings()
        assert s.app_env == "dev"

    def test_default_db_port(self) -> None:
        s = Settings()
        assert s.db_port == 5432

    def test_default_runs_twice_daily(self) -> None:
        s = Settings()
        assert s.run_interval_seconds == 12 * 60 * 60

    def test_default_classification_provider(self) -> None:
        s = Settings()
        assert s.classification_provider == "openai"

    def test_default_completion_bounds(self) -> None:
        s = Settings()
        assert s.openai_max_output_tokens == 800
        assert s.openai_temperature == 0.2

    def test_auto_create_folders_disabled_by_default(self) -> None:
        s = Settings()
        assert s.auto_create_folders is False

    def test_default_upload_overrides_name_collision(self) -> None:
        s = Settings()
        assert s.upload_override_name_collision is True


class TestSettingsFromEnv:
    def test_loads_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        s = Settings()
        assert s.log_level == "DEBUG"

    def test_loads_db_host(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DB_HOST", "db.example.com")
        s = Settings()
        assert s.db_host == "db.example.com"

    def test_loads_bucket_name(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AWS_S3_BUCKET_NAME", "uploads")
        s = Settings()
        assert s.aws_s3_bucket_name == "uploads"

    def test_loads_schedule_flag(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SCHEDULE_ENABLED", "false")
        s = Settings()
        assert s.schedule_enabled is False

    def test_loads_match_threshold(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FOLDER_MATCH_THRESHOLD", "0.65")
        s = Settings()
        assert s.folder_match_threshold == 0.65


class TestSettingsValidation:
    def test_invalid_db_port_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DB_PORT", "not_a_number")
        with pytest.raises(ValidationError):
            Settings()

    def test_invalid_batch_size_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CLAIM_BATCH_SIZE", "abc")
        with pytest.raises(ValidationError):
            Settings()
