import logging.config
import os

from .core.config import settings

# Ensure logs directory exists
os.makedirs(settings.LOG_DIR, exist_ok=True)

logging.config.fileConfig(
    settings.LOG_CONFIG,
    defaults={"logdir": settings.LOG_DIR.replace("\\", "/")},
    disable_existing_loggers=False,
)


logger = logging.getLogger("ecocatalog")
