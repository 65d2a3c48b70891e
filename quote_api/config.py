import os

from dotenv import load_dotenv

load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

HOST = os.getenv("HOST", "0.0.0.0")

PORT_RAW = os.getenv("PORT", "3000")
try:
    PORT = int(PORT_RAW)
except ValueError:
    raise ValueError(f"PORT must be an integer, got {PORT_RAW!r}") from None

SERVICE_NAME = "Quote Generator API"
SERVICE_VERSION = "1.0.0"
