"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for every field except
``mongodb_uri``, which must be supplied before the application can
reach its database.  Override values via environment variables in
deployment.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "ClassCart API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")
    # Level of the per-request log lines; set to WARNING to silence them.
    request_log_level: str = os.getenv("REQUEST_LOG_LEVEL", "INFO")

    # MongoDB connection string (e.g. a mongodb+srv:// Atlas URI).  There
    # is no default; startup fails when it is empty.
    mongodb_uri: str = os.getenv("MONGODB_URI", "")
    db_name: str = os.getenv("DB_NAME", "classcart")
    # Passed to the driver as ``serverSelectionTimeoutMS``.
    mongo_timeout_ms: int = int(os.getenv("MONGO_TIMEOUT_MS", "5000"))

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    # Directory holding lesson images served under ``/images``.  Relative
    # paths are resolved against the current working directory.
    images_dir: str = os.getenv("IMAGES_DIR", "assets")

    # Comma-separated list of allowed CORS origins; ``*`` allows all.
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
