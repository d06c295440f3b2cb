import logging
import os
import random
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

_seed_raw = os.getenv("DRAW_RANDOM_SEED", "").strip()
DRAW_RANDOM_SEED: Optional[int] = int(_seed_raw) if _seed_raw else None

DRAW_ALLOW_BYE_VS_BYE = os.getenv("DRAW_ALLOW_BYE_VS_BYE", "false").lower() in ("true", "1", "yes")


def cors_origins() -> List[str]:
    origins = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
    extra = os.getenv("CORS_ORIGINS", "")
    if extra:
        origins.extend(o.strip() for o in extra.split(",") if o.strip())
    return origins


def get_random_source(seed: Optional[int] = None) -> random.Random:
    """Random source for draws; seeded from DRAW_RANDOM_SEED when no seed is given."""
    if seed is None:
        seed = DRAW_RANDOM_SEED
    return random.Random(seed)


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=getattr(logging, (level or LOG_LEVEL), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
