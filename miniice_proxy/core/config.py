# settings for the mini-ice proxy, read once at import
# a local .env is honoured; the script path and interpreter are deployment-specific and never hardcoded

import os
from dotenv import load_dotenv

load_dotenv()

# Server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3001"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Generation process
MINI_ICE_PYTHON = os.getenv("MINI_ICE_PYTHON", "python3")
MINI_ICE_SCRIPT = os.getenv("MINI_ICE_SCRIPT", "mini_ice.py")
MINI_ICE_MODEL = os.getenv("MINI_ICE_MODEL", "Mini-ICEBURG")
MINI_ICE_TIMEOUT_SECONDS = float(os.getenv("MINI_ICE_TIMEOUT_SECONDS", "30"))

# Admission control (0 = no cap)
MAX_CONCURRENT_PROCESSES = int(os.getenv("MAX_CONCURRENT_PROCESSES", "8"))
QUEUE_TIMEOUT_SECONDS = float(os.getenv("QUEUE_TIMEOUT_SECONDS", "30"))

# optional cap on message length (0 = no cap)
MESSAGE_MAX_CHARS = int(os.getenv("MESSAGE_MAX_CHARS", "0"))

SERVICE_NAME = "mini-ice API"
APOLOGY = "I apologize, but I couldn't generate a response at this time."
