import os
from dotenv import load_dotenv

load_dotenv(".env.local")
load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))

# Text generation
GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY") or os.getenv("VITE_GOOGLE_API_KEY", "")
LLM_MODEL = os.getenv("LLM_MODEL", "gemini-2.0-flash")
LLM_TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0"))

# Listing provider (Zillow via RapidAPI)
RAPID_ZILLOW_API_KEY = os.getenv("RAPID_ZILLOW_API_KEY", "")
ZILLOW_HOST = os.getenv("ZILLOW_HOST", "zillow56.p.rapidapi.com")
SEARCH_LOCATION = os.getenv("SEARCH_LOCATION", "seattle")
SEARCH_STATUS = os.getenv("SEARCH_STATUS", "forSale")

# HTTP transport
USER_AGENT = os.getenv("USER_AGENT", "Mozilla/5.0")
HTTP_TIMEOUT = int(os.getenv("HTTP_TIMEOUT", "15"))
HTTP_MAX_RETRIES = int(os.getenv("HTTP_MAX_RETRIES", "0"))
HTTP_BACKOFF_BASE = float(os.getenv("HTTP_BACKOFF_BASE", "1.8"))
HTTP_RATE_GAP_DEFAULT = float(os.getenv("HTTP_RATE_GAP_DEFAULT", "0"))
PROXY_URL = os.getenv("PROXY_URL", "")
