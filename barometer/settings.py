# barometer/settings.py
import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

# Where the dashboard fetches observations from (editable in the UI)
BACKEND_URL = os.getenv("BACKEND_URL", "http://localhost:8080")
# Seconds; one attempt per trigger, no retries
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "10"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Seed file the observation backend serves from memory
SEED_DATA_PATH = Path(os.getenv("SEED_DATA_PATH", str(Path(__file__).resolve().parent / "data" / "observations.json")))
