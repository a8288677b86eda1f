import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./alterations.db")

# Firebase Configuration
FIREBASE_PROJECT_ID = os.getenv("FIREBASE_PROJECT_ID")

# Frontend base URL for CORS
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")

# Calendar Configuration
# IANA zone name (e.g. "America/Chicago"); empty means the server's local zone
SHOP_TIMEZONE = os.getenv("SHOP_TIMEZONE", "")
# Hour substituted when a stored due date has no time (end of business day)
PICKUP_DEFAULT_HOUR = int(os.getenv("PICKUP_DEFAULT_HOUR", "18"))
# Hour substituted when a stored wedding date has no time
WEDDING_DEFAULT_HOUR = int(os.getenv("WEDDING_DEFAULT_HOUR", "12"))

# Orders page shows the most recent N orders
ORDERS_PAGE_SIZE = int(os.getenv("ORDERS_PAGE_SIZE", "20"))
