from datetime import date as _date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from mealog.api.deps import get_meal_service
from mealog.logic.meals.service import MealService, parse_index
from mealog.utilities.dates import parse_date
from mealog.utilities.validators import MealInput, MealUpdateInput

router = APIRouter(prefix="/api")


@router.get("/week")
def get_week(date: Optional[str] = Query(default=None), service: MealService = Depends(get_meal_service)):
    """Every logged meal of the week containing `date` (today when omitted)."""
    target = parse_date(date) if date else _date.today()
    return service.list_week(target)


@router.get("/meals/{date}")
def get_day(date: str, service: MealService = Depends(get_meal_service)):
    return service.list_day(date)


@router.post("/meals", status_code=201)
def add_meal(payload: MealInput, service: MealService = Depends(get_meal_service)):
    meal = service.create(payload.date, payload.time, payload.description)
    return {
        "success": True,
        "meal": {"date": payload.date, "time": meal.time, "description": meal.description},
    }


@router.put("/meals/{date}/{index}")
def update_meal(date: str, index: str, payload: MealUpdateInput, service: MealService = Depends(get_meal_service)):
    meal = service.update(date, parse_index(index), payload.new_date, payload.time, payload.description)
    return {
        "success": True,
        "meal": {"date": payload.new_date, "time": meal.time, "description": meal.description},
    }


@router.delete("/meals/{date}/{index}")
def delete_meal(date: str, index: str, service: MealService = Depends(get_meal_service)):
    service.delete(date, parse_index(index))
    return JSONResponse(content={"success": True})
