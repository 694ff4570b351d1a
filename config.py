from typing import Optional

from pydantic import AliasChoices, Field, PrivateAttr, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "Enrollment Intake API"
    debug: bool = False
    log_level: str = "INFO"

    database_url: str = "sqlite+aiosqlite:///./enrollment.db"
    database_ssl: bool = False
    cors_origins: str = (
        "https://asesoriasth.com,"
        "http://127.0.0.1:5500,"
        "https://jostyn07.github.io,"
        "https://asesoriasth-backend-der.onrender.com"
    )

    # Google Sheets tabs used as tables
    spreadsheet_id: str = ""
    policies_sheet: str = "Pólizas"
    plans_sheet: str = "Cigna Complementario"
    payments_sheet: str = "Pagos"
    drafts_sheet: str = "Borrador"
    drafts_sheet_gid: Optional[int] = None

    drive_folder_id: str = Field(
        "",
        validation_alias=AliasChoices("drive_folder_id", "google_drive_folder_id"),
    )
    google_credentials: Optional[str] = Field(
        None,
        validation_alias=AliasChoices(
            "google_credentials",
            "google_application_credentials",
            "google_sa_credentials",
        ),
    )

    timezone: str = "America/New_York"
    session_duration_hours: int = 24 * 7

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @field_validator("database_url")
    @classmethod
    def use_async_driver(cls, v: str) -> str:
        """Hosting providers hand out postgres:// URLs; the engine needs the asyncpg driver."""
        for prefix in ("postgres://", "postgresql://"):
            if v.startswith(prefix):
                return "postgresql+asyncpg://" + v[len(prefix):]
        return v

    _is_sqlite: bool = PrivateAttr(default=False)
    _is_postgresql: bool = PrivateAttr(default=False)

    def model_post_init(self, __context: object) -> None:
        _scheme = self.database_url.split(":")[0].lower()
        object.__setattr__(self, "_is_sqlite", "sqlite" in _scheme)
        object.__setattr__(self, "_is_postgresql", "postgresql" in _scheme)

    @property
    def is_sqlite(self) -> bool:
        return self._is_sqlite

    @property
    def is_postgresql(self) -> bool:
        return self._is_postgresql

    @property
    def allowed_origins(self) -> list[str]:
        return [o.strip().rstrip("/") for o in self.cors_origins.split(",") if o.strip()]


settings = Settings()
