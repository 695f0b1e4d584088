import os
from dotenv import load_dotenv

# Load environment variables (only in development)
# In containers, environment variables are set directly
if os.getenv("ENVIRONMENT") != "production":
    load_dotenv()

# Text acquisition provider: 'openai', 'openrouter', 'anthropic', 'ocr' or 'mock'
ACQUISITION_PROVIDER = os.getenv("ACQUISITION_PROVIDER", "openai")

OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_VISION_MODEL = os.getenv("OPENAI_VISION_MODEL", "gpt-4o")

OPENROUTER_API_KEY = os.getenv("OPENROUTER_API_KEY")
OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
OPENROUTER_VISION_MODEL = os.getenv("OPENROUTER_VISION_MODEL", "openai/gpt-4o")

ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY")
ANTHROPIC_VISION_MODEL = os.getenv("ANTHROPIC_VISION_MODEL", "claude-3-haiku-20240307")

# Local OCR engine (optional explicit path to the tesseract binary)
TESSERACT_CMD = os.getenv("TESSERACT_CMD")

# Acquisition tuning
ACQUISITION_TIMEOUT_SECONDS = float(os.getenv("ACQUISITION_TIMEOUT_SECONDS", "30"))
DEFAULT_VISION_CONFIDENCE = float(os.getenv("DEFAULT_VISION_CONFIDENCE", "90"))
PDF_TEXT_CONFIDENCE = float(os.getenv("PDF_TEXT_CONFIDENCE", "95"))

# Record store configuration
DATABASE_TYPE = os.getenv("DATABASE_TYPE", "json")  # Options: 'json', 'memory'
JSON_DB_PATH = os.getenv("JSON_DB_PATH")  # Path to JSON store directory

# Keep the uploaded bytes as a data URI on the document record
STORE_RAW_CONTENT = os.getenv("STORE_RAW_CONTENT", "false").lower() == "true"

# Rate Limiting
RATE_LIMIT_ENABLED = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
RATE_LIMIT_PER_MINUTE = int(os.getenv("RATE_LIMIT_PER_MINUTE", "30"))

CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173").split(",")
