"""FastAPI dependencies: repositories bound to the configured data directory.

Tests swap these through ``app.dependency_overrides``.
"""
from functools import lru_cache

from fastapi import Depends

from mealog.infra.paths import DATA_DIR
from mealog.infra.Template_Repository import TemplateRepository
from mealog.infra.Week_Repository import WeekRepository
from mealog.logic.meals.service import MealService


@lru_cache
def get_week_repository() -> WeekRepository:
    return WeekRepository(DATA_DIR)


@lru_cache
def get_template_repository() -> TemplateRepository:
    return TemplateRepository(DATA_DIR)


def get_meal_service(repo: WeekRepository = Depends(get_week_repository)) -> MealService:
    return MealService(repo)
