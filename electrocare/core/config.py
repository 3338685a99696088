import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


# -----------------------
# Database Config
# -----------------------
DB_TYPE = os.getenv("DB_TYPE", "sqlite").lower()

if DB_TYPE == "postgres":
    DATABASE_URL = os.getenv("DATABASE_URL")
    if not DATABASE_URL:
        raise ValueError("DATABASE_URL is required for Postgres setup")
elif DB_TYPE == "sqlite":
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./electrocare.db")
else:
    raise ValueError(f"Unsupported DB_TYPE: {DB_TYPE}")

DB_SSL = _env_flag("DB_SSL")

# -----------------------
# JWT Config (legacy bearer identity)
# -----------------------
JWT_SECRET = os.getenv("JWT_SECRET")
if not JWT_SECRET:
    raise ValueError("JWT_SECRET environment variable must be set")

JWT_ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

# -----------------------
# Session Config
# -----------------------
SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "electrocare_session")
SESSION_MAX_AGE_DAYS = int(os.getenv("SESSION_MAX_AGE_DAYS", "7"))
SESSION_COOKIE_SECURE = _env_flag("SESSION_COOKIE_SECURE")

# -----------------------
# App / Logging
# -----------------------
DEBUG = _env_flag("DEBUG")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

INITIAL_ADMIN_EMAIL = os.getenv("INITIAL_ADMIN_EMAIL", "admin@electrocare.com")
INITIAL_ADMIN_PASSWORD = os.getenv("INITIAL_ADMIN_PASSWORD", "admin123")
