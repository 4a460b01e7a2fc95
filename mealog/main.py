import logging

import uvicorn

from mealog.api.api_run import app
from mealog.utilities.config import APP_HOST, APP_PORT, LOG_LEVEL

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=LOG_LEVEL,
)
log = logging.getLogger(__name__)


def run():
    log.info("Meal log running on http://localhost:%d (Press CTRL+C to quit)", APP_PORT)
    uvicorn.run(app, host=APP_HOST, port=APP_PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
