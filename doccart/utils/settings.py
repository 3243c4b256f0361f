# doccart/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./doccart.db")
REDIS_URL = os.getenv("REDIS_URL", "redis://redis:6379/0")
CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", "redis://redis:6379/1")
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", "redis://redis:6379/2")

#session | redis | database
CART_BACKEND = os.getenv("CART_BACKEND", "session")
CART_TTL_SECONDS = int(os.getenv("CART_TTL_SECONDS", 24*60*60))
CART_LOCK_ENABLED = os.getenv("CART_LOCK_ENABLED", "0").lower() in ("1", "true", "yes")
CART_LOCK_TTL_SECONDS = int(os.getenv("CART_LOCK_TTL_SECONDS", 10))
#gorna granica ilosci jednej pozycji (niezaleznie od limitu dokumentu)
CART_MAX_QUANTITY = int(os.getenv("CART_MAX_QUANTITY", 10000))

#jesli ustawione, dokumenty pobierane z zewnetrznego serwisu zamiast z bazy
DOCUMENT_SERVICE_URL = os.getenv("DOCUMENT_SERVICE_URL") or None

SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "cart_session")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
CELERY_TASK_ALWAYS_EAGER = os.getenv("CELERY_TASK_ALWAYS_EAGER", "0").lower() in ("1", "true", "yes")
