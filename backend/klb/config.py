import os
from functools import lru_cache

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings

from .models import DifficultyWeights, KLBConfig


class Settings(BaseSettings):
    max_lessons_per_day: int = Field(3, alias="KLB_MAX_LESSONS_PER_DAY")
    max_cognitive_load: float = Field(10.0, alias="KLB_MAX_COGNITIVE_LOAD")
    weight_easy: float = Field(2.0, alias="KLB_WEIGHT_EASY")
    weight_medium: float = Field(4.0, alias="KLB_WEIGHT_MEDIUM")
    weight_hard: float = Field(6.0, alias="KLB_WEIGHT_HARD")
    prefer_alternation: bool = Field(True, alias="KLB_PREFER_ALTERNATION")
    respect_deadlines: bool = Field(True, alias="KLB_RESPECT_DEADLINES")
    enforce_dependencies: bool = Field(True, alias="KLB_ENFORCE_DEPENDENCIES")
    default_day_count: int = Field(7, ge=1, alias="KLB_DEFAULT_DAY_COUNT")
    log_level: str = Field("INFO", alias="KLB_LOG_LEVEL")

    class Config:
        env_file = os.getenv("ENV_FILE", ".env")
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"

    def to_klb_config(self) -> KLBConfig:
        """Build a scheduling config; unusable limits raise ``ConfigurationError``."""
        return KLBConfig(
            max_lessons_per_day=self.max_lessons_per_day,
            max_cognitive_load=self.max_cognitive_load,
            difficulty_weights=DifficultyWeights(
                easy=self.weight_easy,
                medium=self.weight_medium,
                hard=self.weight_hard,
            ),
            prefer_heavy_light_alternation=self.prefer_alternation,
            respect_deadlines=self.respect_deadlines,
            enforce_dependencies=self.enforce_dependencies,
        )


@lru_cache
def get_settings() -> Settings:
    try:
        return Settings()  # type: ignore[arg-type]
    except ValidationError as exc:
        raise RuntimeError(f"Invalid scheduler configuration: {exc}") from exc
