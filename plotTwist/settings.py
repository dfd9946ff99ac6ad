from pathlib import Path
import os
from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent

# Load environment variables
load_dotenv(BASE_DIR / "secret.env")

TMDB_API_KEY   = os.getenv("TMDB_API_KEY")
TMDB_BASE_URL  = "https://api.themoviedb.org/3"
TMDB_IMAGE_URL = "https://image.tmdb.org/t/p"
TMDB_TIMEOUT   = float(os.getenv("TMDB_TIMEOUT", "10"))
TMDB_MIN_DELAY = float(os.getenv("TMDB_MIN_DELAY", "0.25"))   # ≈ 4 req/sec
WATCH_REGION   = os.getenv("WATCH_REGION", "US").upper()

# File / folder paths
DATA_DIR      = Path(os.getenv("PLOTTWIST_DATA_DIR") or Path.home() / ".plottwist")
DATABASE_PATH = DATA_DIR / "plottwist.sqlite"
SCHEMA_PATH   = BASE_DIR / "storage" / "schema.sql"
LOG_PATH      = DATA_DIR / "plottwist_debug.log"

# Local-storage keys
WATCHLIST_KEY = "watchlist"
USERS_KEY     = "plotwist_users"
SESSION_KEY   = "plotwist_user"
TOKEN_KEY     = "token"

# Catalogue layout
ROW_LIMIT         = 10
GRID_LIMIT        = 12
SEARCH_LIMIT      = 8
FEATURED_COUNT    = 3
GENRE_CHIP_LIMIT  = 15
GENRE_ROW_LIMIT   = 6
CAST_LIMIT        = 7
COMPANY_LIMIT     = 3
POPULAR_GENRE_IDS = [28, 35, 18, 27, 16, 10749, 878]

# UI constants
APP_NAME           = "PlotTwist"
ACCENT_COLOR       = "#e50914"
BANNER_INTERVAL_MS = 8000
SEARCH_DEBOUNCE_MS = 1000
TOAST_MS           = 3000
IMAGE_CACHE_SIZE   = 400     # posters kept in memory (LRU)
HISTORY_LIMIT      = 50      # back-stack depth
