"""
Centralized configuration for the recommendation engine.
Defines all paths, id prefixes, ingestion layout and query constants.
"""

import os
from datetime import datetime
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent.absolute()
DATA_DIR = Path(os.environ.get("RECO_DATA_DIR", PROJECT_ROOT / "data"))
LOGS_DIR = Path(os.environ.get("RECO_LOG_DIR", PROJECT_ROOT / "logs"))
APP_LOGS_DIR = LOGS_DIR / "app_logs"

date_str = datetime.now().strftime("%m%d%Y")
APP_LOG_FILE = str(APP_LOGS_DIR / f"{date_str}_1.log")

BANNER_WIDTH = 80

USER_ROLE = "user"
PRODUCT_ROLE = "product"

ID_PREFIXES = {
    USER_ROLE: "user_",
    PRODUCT_ROLE: "product_",
}

INGESTION = {
    # positional layout, header row is always skipped
    "interaction_min_fields": 2,  # user_id, product_id, ...
    "product_min_fields": 4,  # product_id, category, price_range, brand, [name], ...
    "product_name_column": 4,
    "delimiter": ",",
}

RECOMMEND = {
    "popularity_k": 5,
    "default_strategy": "collaborative",  # "collaborative" or "content"
}

PATHS = {
    "interactions": str(DATA_DIR / "user_activity.csv"),
    "products": str(DATA_DIR / "product.csv"),
    "app_log_file": APP_LOG_FILE,
}

SERVER = {
    # comma-separated; CORS stays off when empty
    "cors_origins": [o.strip() for o in os.environ.get("RECO_CORS_ORIGINS", "").split(",") if o.strip()],
    "host": "127.0.0.1",
    "port": 8000,
}
