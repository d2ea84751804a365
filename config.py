import os

from dotenv import load_dotenv

load_dotenv()

_HERE = os.path.dirname(os.path.abspath(__file__))

BPS_CONFIG_PATH = os.getenv("BPS_CONFIG_PATH") or os.path.join(_HERE, "config", "bps_medan.json")
LOG_LEVEL = (os.getenv("LOG_LEVEL") or "WARNING").upper()

try:
    REVEAL_INTERVAL_MS = int(os.getenv("REVEAL_INTERVAL_MS") or "20")
except ValueError:
    raise ValueError("REVEAL_INTERVAL_MS must be an integer number of milliseconds") from None
