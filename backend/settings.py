from pydantic_settings import BaseSettings, SettingsConfigDict

from src.geofilter.geo import EARTH_RADIUS_KM, ReferencePoint


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Customer Geofilter API"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000
    # CORS: "*" for dev; in production set to comma-separated origins
    cors_origins: str = "*"

    # HTTP Basic credentials. Both must be set or every protected request is rejected.
    admin_user: str = ""
    admin_password: str = ""

    # Office location (Mumbai) and inclusion radius for the customer filter
    office_latitude: float = 19.0590317
    office_longitude: float = 72.7553452
    radius_km: float = 100.0
    earth_radius_km: float = EARTH_RADIUS_KM

    upload_rate_limit: str = "60/minute"  # slowapi limit string for the upload route

    def reference_point(self) -> ReferencePoint:
        return ReferencePoint(
            latitude=self.office_latitude,
            longitude=self.office_longitude,
            radius_km=self.radius_km,
            earth_radius_km=self.earth_radius_km,
        )


def get_settings() -> Settings:
    return Settings()
