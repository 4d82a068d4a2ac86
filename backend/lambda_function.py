import logging
from mangum import Mangum

from config import ENVIRONMENT
from main import app

logger = logging.getLogger(__name__)

# main.app owns the store for this warm container; a cold start begins from the seed catalogue again
handler = Mangum(app, lifespan="off")
logger.info(f"Lambda cold start ({ENVIRONMENT}): {len(app.state.store.products)} products loaded")


def lambda_handler(event, context):
    return handler(event, context)
