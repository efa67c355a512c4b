from pydantic_settings import BaseSettings, SettingsConfigDict


class RoutingSettings(BaseSettings):
    # Candidate stops kept per side before pairing
    ROUTING_MAX_CANDIDATES: int = 3
    ROUTING_MAX_RESULTS: int = 5

    # Graph weights
    ROUTING_TRANSIT_WEIGHT_FACTOR: float = 0.1  # Discount so scheduled rides win over walking
    ROUTING_MAX_WALKING_KM: float = 0.8
    ROUTING_WALKING_PENALTY: float = 1.5

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


class Settings(BaseSettings):
    # Database - No default password for security
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = ""  # Required via .env
    POSTGRES_DB: str = "gtfs"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432

    # Full SQLAlchemy URL, takes precedence over the POSTGRES_* parts
    DATABASE_URL_OVERRIDE: str = ""

    # Upper bound for any single query against the transit store
    DB_STATEMENT_TIMEOUT_MS: int = 10000

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = False  # Default to False for security

    # Google Directions (walking leg to the first stop)
    GOOGLE_MAPS_API_KEY: str = ""
    DIRECTIONS_TIMEOUT_SECONDS: float = 10.0

    # Rate limiting (slowapi)
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_STORAGE_URI: str = "memory://"
    RATE_LIMIT_ROUTE_PLANNER: str = "30/minute"
    RATE_LIMIT_DEFAULT: str = "200/minute"

    # Routing settings (nested)
    routing: RoutingSettings = RoutingSettings()

    @property
    def DATABASE_URL(self) -> str:
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE
        return (
            f"postgresql+psycopg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    def validate_production_settings(self) -> None:
        """Validate critical settings for production environment.

        Raises ValueError if production settings are invalid.
        """
        errors = []

        if self.is_production:
            if not self.DATABASE_URL_OVERRIDE and (
                not self.POSTGRES_PASSWORD or self.POSTGRES_PASSWORD == "postgres"
            ):
                errors.append(
                    "POSTGRES_PASSWORD must be set to a secure value in production"
                )

            if self.DEBUG:
                errors.append("DEBUG must be False in production")

            if self.DIRECTIONS_TIMEOUT_SECONDS <= 0:
                errors.append("DIRECTIONS_TIMEOUT_SECONDS must be positive")

        if errors:
            raise ValueError(
                "Production configuration errors:\n" + "\n".join(f"  - {e}" for e in errors)
            )

    def validate_development_settings(self) -> None:
        """Set sensible defaults for development if not configured."""
        if not self.POSTGRES_PASSWORD and not self.DATABASE_URL_OVERRIDE:
            self.POSTGRES_PASSWORD = "postgres"
            print("WARNING: Using default POSTGRES_PASSWORD for development")

        if not self.GOOGLE_MAPS_API_KEY:
            print("WARNING: GOOGLE_MAPS_API_KEY not set, walking directions are disabled")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


# Create settings instance
settings = Settings()

# Validate based on environment
if settings.is_production:
    settings.validate_production_settings()
else:
    settings.validate_development_settings()
