"""Configuration management for mhimmo."""

from dataclasses import dataclass, field
from pathlib import Path

from mhimmo.exceptions import ConfigurationError

STORAGE_BACKENDS = ("memory", "json", "postgres")


@dataclass
class PostgresConfig:
    """PostgreSQL connection configuration for the remote key-value store."""

    host: str = "localhost"
    port: int = 5432
    database: str = "mhimmo"
    user: str = "postgres"
    password: str = "postgres"
    table: str = "kv_store"

    @property
    def connection_string(self) -> str:
        """Get connection string."""
        return f"postgresql://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"


@dataclass
class StorageConfig:
    """Durable key-value backend selection."""

    backend: str = "json"
    json_dir: Path = field(default_factory=lambda: Path("data"))
    pretty_json: bool = False

    def __post_init__(self) -> None:
        if self.backend not in STORAGE_BACKENDS:
            raise ConfigurationError(
                f"Unknown storage backend {self.backend!r}, expected one of {', '.join(STORAGE_BACKENDS)}"
            )


@dataclass
class ApiConfig:
    """HTTP backend configuration."""

    host: str = "127.0.0.1"
    port: int = 8000
    prefix: str = ""
    cors_origins: list[str] = field(default_factory=lambda: ["http://localhost:5173"])


@dataclass
class MhImmoConfig:
    """Main configuration for mhimmo."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    postgres: PostgresConfig = field(default_factory=PostgresConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    strict_references: bool = False
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "MhImmoConfig":
        """Create config from environment variables."""
        import os

        storage = StorageConfig(
            backend=os.getenv("MHIMMO_STORAGE", "json"),
            json_dir=Path(os.getenv("MHIMMO_DATA_DIR", "data")),
            pretty_json=os.getenv("MHIMMO_PRETTY_JSON", "false").lower() == "true",
        )

        postgres = PostgresConfig(
            host=os.getenv("POSTGRES_HOST", "localhost"),
            port=int(os.getenv("POSTGRES_PORT", "5432")),
            database=os.getenv("POSTGRES_DB", "mhimmo"),
            user=os.getenv("POSTGRES_USER", "postgres"),
            password=os.getenv("POSTGRES_PASSWORD", "postgres"),
            table=os.getenv("POSTGRES_KV_TABLE", "kv_store"),
        )

        origins = os.getenv("MHIMMO_CORS_ORIGINS")
        api = ApiConfig(
            host=os.getenv("MHIMMO_HOST", "127.0.0.1"),
            port=int(os.getenv("MHIMMO_PORT", "8000")),
            prefix=os.getenv("MHIMMO_API_PREFIX", ""),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()]
            if origins
            else ["http://localhost:5173"],
        )

        return cls(
            storage=storage,
            postgres=postgres,
            api=api,
            strict_references=os.getenv("MHIMMO_STRICT_REFERENCES", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )
