# jobboard/config.py
import os
from pathlib import Path
from dotenv import load_dotenv

# Project root is one level above the jobboard package
PROJECT_ROOT = Path(__file__).resolve().parents[1]

# jobboard/.env wins over ./.env; real environment variables win over both
for _candidate in (PROJECT_ROOT / "jobboard" / ".env", PROJECT_ROOT / ".env"):
    if _candidate.exists():
        load_dotenv(_candidate)
        break


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


def _csv(name: str, default: str) -> list:
    return [part.strip() for part in os.getenv(name, default).split(",") if part.strip()]


# === 🌍 App Configuration ===
ENV = os.getenv("ENV", "dev").lower()
IS_DEV = ENV == "dev"
# Outside dev, tables come from alembic unless this is set
AUTO_MIGRATE = _flag("AUTO_MIGRATE")

# === 🌍 CORS Settings ===
ALLOWED_ORIGINS = _csv(
    "ALLOWED_ORIGINS",
    "http://localhost:5173,http://127.0.0.1:5173,http://localhost:3000,http://127.0.0.1:3000",
)


# === 🗄️ Structured store ===
def _sqlite_under_root(url: str) -> str:
    """Pin relative sqlite paths to the project root so cwd doesn't matter."""
    prefix = "sqlite:///"
    if not url.startswith(prefix) or ":memory:" in url:
        return url
    db_path = Path(url[len(prefix):])
    if not db_path.is_absolute():
        db_path = (PROJECT_ROOT / db_path).resolve()
    return "sqlite:////" + db_path.as_posix().lstrip("/")


def _default_database_url() -> str:
    data_dir = PROJECT_ROOT / "data"
    data_dir.mkdir(parents=True, exist_ok=True)
    return _sqlite_under_root(f"sqlite:///{data_dir / 'jobboard.db'}")


DATABASE_URL = _sqlite_under_root(os.getenv("DATABASE_URL") or _default_database_url())
SQL_ECHO = _flag("SQL_ECHO")

# === 📦 Fallback dataset (static snapshot loaded once at startup) ===
FALLBACK_JOBS_PATH = os.getenv(
    "FALLBACK_JOBS_PATH",
    str(Path(__file__).resolve().parent / "data" / "fallback_jobs.json"),
)

# === 📄 Listing / pagination ===
PAGE_SIZE = int(os.getenv("JOBS_PAGE_SIZE", "10"))
MAX_LIMIT = int(os.getenv("JOBS_MAX_LIMIT", "50"))
STATS_TOP_N = int(os.getenv("JOBS_STATS_TOP_N", "10"))

# === 🔐 Tokens (issued by the auth service, only read here) ===
JWT_SECRET = os.getenv("JWT_SECRET", "dev_insecure_change_me")
JWT_ALGO = os.getenv("JWT_ALGO", "HS256")
JWT_LEEWAY_SEC = int(os.getenv("JWT_LEEWAY_SEC", "30"))

# === 🌐 Recommendation service ===
# Search-history tracking is skipped (log only) when this is empty
RECOMMENDER_URL = os.getenv("RECOMMENDER_URL", "").rstrip("/")
RECOMMENDER_TIMEOUT_SECS = float(os.getenv("RECOMMENDER_TIMEOUT_SECS", "5"))
