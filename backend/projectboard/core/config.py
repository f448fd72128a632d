from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="", case_sensitive=False)

    database_url: str | None = None
    dev_mode: bool = True
    log_level: str = "INFO"
    on_track_tolerance: float = 10.0
    utilization_weeks: int = 26
    utilization_excluded_teams: list[str] = ["LIBBY"]

    @property
    def sqlalchemy_database_uri(self) -> str:
        if self.database_url:
            return self.database_url
        repo_root = Path(__file__).resolve().parents[3]
        default_path = repo_root / "data" / "projectboard.db"
        return f"sqlite:///{default_path}"

    @property
    def excluded_team_names(self) -> set[str]:
        return {team.strip().upper() for team in self.utilization_excluded_teams if team.strip()}


settings = Settings()
