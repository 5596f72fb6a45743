"""
Environment settings loaded from .env file.
"""
import os
from dotenv import load_dotenv

load_dotenv()


# --- Logging ---
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# --- Privacy ---
MAX_TEXT_LOG_CHARS: int = int(os.getenv("MAX_TEXT_LOG_CHARS", "120"))

# --- Styles ---
# Optional JSON file extending/overriding the built-in entity style table.
ENTITY_STYLE_TABLE_PATH: str = os.getenv("ENTITY_STYLE_TABLE_PATH", "")
