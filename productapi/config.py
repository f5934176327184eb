"""
Application configuration.

Values are read from environment variables, after ``python-dotenv`` has
loaded a ``.env`` file from the working directory if one exists.  The
document store credentials themselves are not handled here: the Firestore
client picks them up through Application Default Credentials.
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()


def _split_csv(raw: str) -> List[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class Settings:
    """Settings for the product API process."""

    host: str = "0.0.0.0"
    port: int = 8080
    host_url: str = "http://localhost:8080"
    api_prefix: str = "/api"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    # "firestore" talks to Google Cloud Firestore, "memory" keeps documents
    # in the process and is meant for local runs and tests.
    store_backend: str = "firestore"
    products_collection: str = "products"
    firestore_project_id: Optional[str] = None
    firestore_database: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Settings":
        port = int(os.getenv("PORT", "8080"))
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=port,
            host_url=os.getenv("HOST_URL", f"http://localhost:{port}"),
            api_prefix=os.getenv("API_PREFIX", "/api").rstrip("/"),
            cors_origins=_split_csv(os.getenv("CORS_ORIGINS", "*")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            store_backend=os.getenv("STORE_BACKEND", "firestore").lower(),
            products_collection=os.getenv("PRODUCTS_COLLECTION", "products"),
            firestore_project_id=os.getenv("FIRESTORE_PROJECT_ID") or None,
            firestore_database=os.getenv("FIRESTORE_DATABASE") or None,
        )


settings = Settings.from_env()
