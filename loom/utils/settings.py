# loom/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./loom.db")
# only consumed as the Celery broker default below
REDIS_URL = os.getenv("REDIS_URL", "redis://redis:6379/0")
CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", REDIS_URL)
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", "redis://redis:6379/2")

AUTH_SECRET_KEY = os.getenv("AUTH_SECRET_KEY", "dev-secret-change-me-before-deploying")
AUTH_ALGORITHM = os.getenv("AUTH_ALGORITHM", "HS256")

# optimistic transactions: attempts before giving up with INTERNAL
TX_MAX_ATTEMPTS = int(os.getenv("TX_MAX_ATTEMPTS", 5))

SENDGRID_API_KEY = os.getenv("SENDGRID_API_KEY", "")
SENDGRID_FROM_EMAIL = os.getenv("SENDGRID_FROM_EMAIL", "orders@artisansloom.example")
SENDGRID_API_URL = os.getenv("SENDGRID_API_URL", "https://api.sendgrid.com/v3/mail/send")

# no default: the closing job is only scheduled when an interval is configured
_close_interval = os.getenv("AUCTION_CLOSE_INTERVAL_SECONDS")
AUCTION_CLOSE_INTERVAL_SECONDS = float(_close_interval) if _close_interval else None

SEED_DEMO_DATA = os.getenv("SEED_DEMO_DATA", "0") == "1"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
