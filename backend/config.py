import os
from dotenv import load_dotenv
from fastapi import Request
from storage import MemStorage

load_dotenv()

ENVIRONMENT = os.getenv("ENVIRONMENT", "dev")
DEBUG = ENVIRONMENT == "dev"
IS_PRODUCTION = ENVIRONMENT == "prod"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]

SEED_DATA = os.getenv("SEED_DATA", "true").lower() in ("1", "true", "yes")

# Checkout charges, in rupees
DELIVERY_FEE = float(os.getenv("DELIVERY_FEE", 30))
PLATFORM_FEE = float(os.getenv("PLATFORM_FEE", 5))
DELIVERY_WINDOW_MINUTES = int(os.getenv("DELIVERY_WINDOW_MINUTES", 15))

# When off, "verified" and "rejected" retailers cannot be moved again
ALLOW_VERIFICATION_REREVIEW = os.getenv("ALLOW_VERIFICATION_REREVIEW", "true").lower() in ("1", "true", "yes")


def init_store(seed: bool = None) -> MemStorage:
    if seed is None:
        seed = SEED_DATA
    return MemStorage(seed=seed)


def get_store(request: Request) -> MemStorage:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise Exception("Store not configured")
    return store
