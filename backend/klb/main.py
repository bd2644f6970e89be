import logging
from typing import Dict

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings, get_settings
from .logging_config import configure_logging
from .schedule_routes import router as schedule_router


configure_logging(get_settings().log_level)
logger = logging.getLogger(__name__)
app = FastAPI(title="Knowledge Load Balancer", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(schedule_router)

settings_snapshot = get_settings()
logger.info(
    "Scheduler starting with max %s lessons/day and load ceiling %s",
    settings_snapshot.max_lessons_per_day,
    settings_snapshot.max_cognitive_load,
)


@app.get("/healthz")
def health(settings: Settings = Depends(get_settings)) -> Dict[str, str]:
    return {"status": "ok", "max_cognitive_load": str(settings.max_cognitive_load)}
