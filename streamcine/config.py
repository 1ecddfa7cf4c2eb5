from pathlib import Path
import logging

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


logger = logging.getLogger(__name__)

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class CustomSettings(BaseSettings):
    """Application settings loaded from environment variables.

    Validates configuration at startup to catch misconfiguration early.
    """

    data_dir: str = "./data"
    channels_file: str = "canais_tv.csv"
    movies_file: str = "filmes.csv"
    personal_movies_file: str = "filmes_pessoais.csv"
    series_file: str = "series_episodios.csv"
    soap_operas_file: str = "novelas.csv"

    default_poster: str = "https://www.stremio.com/website/stremio-logo-small.png"
    addon_id: str = "org.streamcine.iptv"
    addon_name: str = "StreamCine"
    addon_version: str = "5.3.0"
    addon_description: str = (
        "Canais de TV, filmes, filmes pedidos, séries e novelas "
        "a partir de listas e CSVs personalizados"
    )

    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 7000
    preload_catalogs: bool = False  # Load every catalog at startup instead of on first request

    playlist_url: str | None = None
    playlist_output_file: str = "canais_streamcine.csv"
    download_timeout_sec: float = 120.0
    download_max_retries: int = 3

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate log level is a standard logging level name."""
        normalized = value.upper()
        if normalized not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}")
        return normalized

    @field_validator("port")
    @classmethod
    def validate_port(cls, value: int) -> int:
        """Validate TCP port range."""
        if not 1 <= value <= 65535:
            raise ValueError("port must be between 1 and 65535")
        return value

    @field_validator(
        "channels_file",
        "movies_file",
        "personal_movies_file",
        "series_file",
        "soap_operas_file",
        "playlist_output_file",
    )
    @classmethod
    def validate_file_names(cls, value: str, info) -> str:
        """Ensure catalog file names are not blank."""
        if not value.strip():
            raise ValueError(f"{info.field_name} must not be empty")
        return value.strip()

    @field_validator("playlist_url", mode="before")
    @classmethod
    def parse_playlist_url(cls, value):
        """Treat a blank playlist URL as unset."""
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("playlist_url", mode="after")
    @classmethod
    def validate_playlist_url(cls, value):
        """Validate playlist URL is HTTP/HTTPS."""
        if value and not value.lower().startswith(("http://", "https://")):
            raise ValueError(f"Playlist URL must be HTTP/HTTPS: {value}")
        return value

    @field_validator("download_timeout_sec")
    @classmethod
    def validate_download_timeout(cls, value: float) -> float:
        """Ensure download timeout is positive."""
        if value <= 0:
            raise ValueError("download_timeout_sec must be > 0")
        return value

    @field_validator("download_max_retries")
    @classmethod
    def validate_max_retries(cls, value: int) -> int:
        """Ensure at least one download attempt is made."""
        if value <= 0:
            raise ValueError("download_max_retries must be > 0")
        return value

    @model_validator(mode="after")
    def validate_data_dir(self):
        """Warn when the catalog directory is missing; catalogs will load empty."""
        if not Path(self.data_dir).is_dir():
            logger.warning(
                "Data directory %s does not exist - catalogs will be empty",
                self.data_dir,
            )
        return self

    def __init__(self, **data):
        """Initialize settings and log configuration."""
        super().__init__(**data)

        logger.info("Configuration loaded:")
        logger.info("  Data Directory: %s", self.data_dir)
        logger.info(
            "  Catalog Files: %s, %s, %s, %s, %s",
            self.channels_file,
            self.movies_file,
            self.personal_movies_file,
            self.series_file,
            self.soap_operas_file,
        )
        logger.info("  Addon: %s %s (%s)", self.addon_name, self.addon_version, self.addon_id)
        logger.info("  Listen: %s:%s", self.host, self.port)
        logger.info("  Preload Catalogs: %s", self.preload_catalogs)
        logger.info("  Playlist Source: %s", "configured" if self.playlist_url else "not configured")

    def catalog_path(self, file_name: str) -> Path:
        return Path(self.data_dir) / file_name


settings = CustomSettings()


def setup_logging() -> None:
    """Configure application logging."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
