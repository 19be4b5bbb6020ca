"""
Centralized runtime configuration for the backend.

This module uses `python-dotenv` to read a local `.env` file during
development and exposes a Pydantic `Settings` model named `settings`.

Environment variables used:
- `HOST` / `PORT` — bind address used when running `python main.py`.
- `UPLOAD_DIR` — directory where uploaded images are written.
- `PUBLIC_BASE_URL` — base for upload URLs returned to clients. Leave
  empty to build URLs from the incoming request.
- `CORS_ORIGINS` — comma-separated list of allowed origins (`*` for all).
- `LOG_LEVEL` — root logger level.

Example `.env`:
PORT=3000
UPLOAD_DIR=uploads
PUBLIC_BASE_URL=http://192.168.1.20:3000

"""

from typing import List
from pydantic import BaseModel
import os
from dotenv import load_dotenv

load_dotenv()


def _split_origins(raw: str) -> List[str]:
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings(BaseModel):
    """Typed settings container.

    All downstream code should import `settings` from this module, or
    receive a `Settings` instance through `create_app()`. Tests build
    their own instance instead of monkeypatching the environment.
    """

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))
    upload_dir: str = os.getenv("UPLOAD_DIR", "uploads")
    public_base_url: str = os.getenv("PUBLIC_BASE_URL", "")
    cors_origins: List[str] = _split_origins(os.getenv("CORS_ORIGINS", "*"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
