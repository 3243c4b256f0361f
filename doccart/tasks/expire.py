# doccart/tasks/expire.py
from doccart.celery_worker import celery_app
from doccart.data.database import SessionLocal
from doccart.repos.cart_repo import CartRepo
from doccart.utils.settings import CART_TTL_SECONDS
from doccart.utils.logging import get_logger

logger = get_logger(__name__)


@celery_app.task(name="doccart.tasks.expire.expire_cart_sessions_task")
def expire_cart_sessions_task(ttl_seconds: int = CART_TTL_SECONDS):
    """Usuwa koszyki z bazy nieruszane dluzej niz TTL (backend database)."""
    logger.info("Expire cart sessions task started")

    db = SessionLocal()
    try:
        repo = CartRepo(db)
        removed = repo.delete_expired_sessions(ttl_seconds)
        repo.commit()
        logger.info(f"Expired {removed} cart session(s)")
        return removed
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
