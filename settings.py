from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "geoindex"
    debug: bool = False
    log_level: str = "INFO"
    points_csv_path: str = ""  # Empty: bundled sample points; relative paths resolve from the working directory
    points_csv_gtfs: bool = False  # CSV is GTFS stops.txt (stop_lat, stop_lon)

    # Queries slower than this are logged at WARNING
    slow_query_ms: float = 50.0


def get_settings() -> Settings:
    return Settings()
