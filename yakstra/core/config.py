from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., APP_NAME, DEBUG, DATA_DIR, DB_FILENAME, STRICT_AMOUNTS).
    """

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Basic app metadata
    app_name: str = "Yakstra Income & Expense Tracker"
    debug: bool = False
    version: str = "2.0.0"

    # Data & persistence
    data_dir: Path = Path("data")
    db_filename: str = "yakstra.sqlite3"
    db_path: Optional[Path] = None  # derived if not provided

    # Import / export
    # Reject non-numeric amounts on import instead of carrying NaN into totals.
    strict_amounts: bool = False
    export_prefix: str = "yakstra_transactions"

    # Statistics
    top_categories_limit: int = 5
    chart_width: int = 400
    chart_height: int = 300

    def init_post_load(self) -> None:
        """Finalize derived fields and ensure directories exist."""
        if self.db_path is None:
            self.db_path = self.data_dir / self.db_filename
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        if self.top_categories_limit < 1:
            raise ValueError(
                f"top_categories_limit must be positive, got {self.top_categories_limit}"
            )
        if self.chart_width <= 0 or self.chart_height <= 0:
            raise ValueError("chart dimensions must be positive")


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    settings.init_post_load()
    return settings
