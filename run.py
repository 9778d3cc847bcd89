import os

import uvicorn

from rentmanager.core.config import settings


def upgrade_schema() -> bool:
    """Apply Alembic revisions up to head; False when the upgrade fails."""
    from alembic import command
    from alembic.config import Config

    print("[STARTUP] Applying rentmanager migrations...")
    try:
        command.upgrade(Config("alembic.ini"), "head")
    except Exception as e:
        print(f"[WARN] Migration failed: {e}")
        return False
    print("[STARTUP] Schema is at head")
    return True


if __name__ == "__main__":
    # without RUN_MIGRATIONS the app creates missing tables itself on startup
    if os.getenv("RUN_MIGRATIONS") == "true" and not upgrade_schema():
        print("[WARN] Continuing with init_db() table creation")

    uvicorn.run(
        "rentmanager.main:app",
        host=os.environ.get("HOST", settings.HOST),
        port=int(os.environ.get("PORT", settings.PORT)),
        reload=os.getenv("ENV") == "development",
        log_level=settings.LOG_LEVEL.lower(),
        workers=1,
    )
