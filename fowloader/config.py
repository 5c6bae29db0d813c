from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "FoW Deck Loader"
    debug: bool = False

    # Local development server: http://localhost:1337
    fow_base_url: str = "https://forceofwind.online"

    # Prefix for card image paths. The production API returns absolute URLs.
    image_base_url: str = ""

    card_back_url: str = "https://i.imgur.com/QRiof4H.jpeg"

    spawn_face_down: bool = False

    # Seconds
    zone_timeout: float = 5.0
    import_timeout: float = 10.0
    request_timeout: float = 30.0

    @model_validator(mode="after")
    def check_timeouts(self) -> "Settings":
        """The import deadline must leave every zone time to report its own timeout."""
        if self.zone_timeout <= 0:
            raise ValueError("zone_timeout must be positive")
        if self.import_timeout <= self.zone_timeout:
            raise ValueError(
                f"import_timeout ({self.import_timeout}) must be longer than "
                f"zone_timeout ({self.zone_timeout})"
            )
        return self


settings = Settings()


# =============================================================================
# ZONE LAYOUT
# =============================================================================

# Anchor of the first zone, local to the loader object
ZONE_ORIGIN = (1.47, 0.2, 0.0)

# Each new zone is placed this far along the x axis from the previous one
ZONE_STEP_X = -0.7286
