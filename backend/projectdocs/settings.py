"""
Application Settings Management

Central place for every runtime option: storage backend, Redis connection,
data/log directories and access-policy constants.

IMPORTANT:
- Values are read from environment variables prefixed with PROJECTDOCS_
- For local development create a .env.local file at the project root
- Production deployments should rely on real environment variables
"""

from pathlib import Path

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# backend/projectdocs/settings.py -> backend/projectdocs/ -> backend/ -> project root
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

ENV_FILE = PROJECT_ROOT / ".env.local"

# Names of the persisted collections, one per entity kind
COLLECTION_NAMES = (
    "companies",
    "areas",
    "workers",
    "positions",
    "projects",
    "folders",
    "files",
    "activity-log",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # ==================== Environment ====================
    # "local-dev" | "test" | "production"
    environment: str = "local-dev"

    # ==================== Server ====================
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = True

    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    api_prefix: str = "/api/v1"

    # ==================== Storage ====================
    # "memory" | "file" | "redis"
    # - memory: process-local, lost on restart (tests, local-dev)
    # - file: one JSON document per collection under data_dir
    # - redis: one Redis key per collection, shared across instances
    storage_type: str = "memory"

    # Directory for the file backend. Relative paths resolve against the workspace.
    data_dir: str = "data"

    # Seed default records on startup when every collection is empty
    seed_on_startup: bool = True

    # ==================== Redis ====================
    # "redis" | "fake"
    # - fake: in-process fakeredis server, no external service required
    redis_type: str = "redis"

    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_index: int = 0
    redis_password: str | None = None
    redis_socket_timeout: int = 5
    redis_socket_connect_timeout: int = 5

    # ==================== Access policy ====================
    # Global worker role allowed to write into "final" folders
    privileged_role: str = "central_office"

    # ==================== Paths ====================
    workspace_name: str = "projectdocs-workspace"
    logs_subdir: str = "logs"

    # ==================== Logging ====================
    log_max_bytes: int = 20 * 1024 * 1024  # 20MB
    log_backup_count: int = 5

    model_config = SettingsConfigDict(
        env_prefix="PROJECTDOCS_",
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @model_validator(mode="after")
    def validate_storage_type(self) -> "Settings":
        """Reject unknown storage or Redis modes at load time."""
        if self.storage_type not in ("memory", "file", "redis"):
            raise ValueError(f"Unsupported storage_type: {self.storage_type}")
        if self.redis_type not in ("redis", "fake"):
            raise ValueError(f"Unsupported redis_type: {self.redis_type}")
        return self

    # ==================== Paths ====================

    @classmethod
    def get_project_root(cls) -> Path:
        """Absolute path of the repository root."""
        return PROJECT_ROOT

    def is_local_dev(self) -> bool:
        """Check if running in local development mode."""
        return self.environment == "local-dev"

    def get_workspace_root(self) -> Path:
        """
        Workspace root directory

        - local-dev: {project_root}/projectdocs-workspace/
        - test/production: /app/
        """
        if self.is_local_dev():
            return self.get_project_root() / self.workspace_name
        return Path("/app")

    def get_data_dir(self) -> Path:
        """Directory holding one JSON file per collection (file backend)."""
        path = Path(self.data_dir)
        if path.is_absolute():
            return path
        return self.get_workspace_root() / path

    def get_logs_root(self) -> Path:
        """
        Log directory

        - local-dev: {project_root}/projectdocs-workspace/logs/
        - production: /app/logs/
        """
        return self.get_workspace_root() / self.logs_subdir


settings = Settings()
