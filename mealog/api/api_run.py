from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

import logging

from mealog.api.deps import get_week_repository
from mealog.infra.paths import INDEX_HTML, STATIC_DIR
from mealog.utilities.errors import MealLogError, NotFoundError, StorageError

# Routers
from mealog.api.routes import meals, templates

# Logging
logger = logging.getLogger("mealog_app")

# Initialize FastAPI app
app = FastAPI(title="Meal Log API")

# Include routers
app.include_router(meals.router)
app.include_router(templates.router)

# Static files
app.mount("/static", StaticFiles(directory=str(STATIC_DIR), check_dir=False), name="static")


@app.on_event("startup")
def _ensure_data_dir():
    """Create the data directory when the app starts and report what it holds."""
    repo = app.dependency_overrides.get(get_week_repository, get_week_repository)()
    repo.data_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Meal data stored in %s (%d weeks)", repo.data_dir, len(repo.list_weeks()))


# -------------------- Error mapping --------------------
@app.exception_handler(StorageError)
def _storage_error(request: Request, exc: StorageError):
    # Details stay in the log; clients only learn that storage failed.
    logger.error("%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc)
    return JSONResponse(status_code=exc.status_code, content={"error": "Could not access meal data"})


@app.exception_handler(MealLogError)
def _meal_log_error(request: Request, exc: MealLogError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
def _invalid_body(request: Request, exc: RequestValidationError):
    logger.debug("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


# -------------------- Routes --------------------
@app.get("/api")
def health():
    return {"status": "ok"}


@app.get("/", response_class=FileResponse)
def index_page():
    if not INDEX_HTML.exists():
        raise NotFoundError("index.html not found")
    return FileResponse(str(INDEX_HTML))
