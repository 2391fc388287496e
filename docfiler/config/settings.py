from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "docfiler"
    db_username: str = "docfiler"
    db_password: str = "secret"

    run_interval_seconds: int = 43200
    schedule_enabled: bool = True
    claim_batch_size: int = 25
    stale_claim_timeout_minutes: int = 60

    aws_region: str = "us-east-1"
    aws_access_key_id: str = ""
    aws_secret_access_key: str = ""
    aws_s3_bucket_name: str = ""
    aws_s3_endpoint_url: str | None = None
    object_store_timeout_seconds: int = 30
    presign_expires_seconds: int = 3600

    classification_provider: str = "openai"
    openai_api_key: str = ""
    openai_model_name: str = "gpt-4o-mini"
    openai_timeout_seconds: int = 60
    openai_max_output_tokens: int = 800
    openai_temperature: float = 0.2

    zoho_client_id: str = ""
    zoho_client_secret: str = ""
    zoho_access_token: str = ""
    zoho_refresh_token: str = ""
    zoho_crm_base_url: str = "https://www.zohoapis.com/crm/v2"
    zoho_workdrive_base_url: str = "https://www.zohoapis.com/workdrive/api/v1"
    zoho_auth_url: str = "https://accounts.zoho.com/oauth/v2/token"
    zoho_timeout_seconds: int = 30
    zoho_upload_timeout_seconds: int = 120
    zoho_root_folder_field: str = "easyworkdriveforcrm__Workdrive_Folder_ID_EXT"

    folder_match_threshold: float = 0.4
    upload_override_name_collision: bool = True
    auto_create_folders: bool = False
