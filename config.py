import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    SECRET_KEY = os.getenv("SECRET_KEY") or os.getenv("FLASK_SECRET_KEY", "dev-secret-key-change-in-production")

    REVIEW_API_URL = os.getenv("REVIEW_API_URL", "http://localhost:3000").rstrip("/")
    REVIEW_API_TIMEOUT = float(os.getenv("REVIEW_API_TIMEOUT", 30))

    DRAFT_PHOTO_DIR = os.getenv("DRAFT_PHOTO_DIR", "data/draft_photos")
    MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", 50 * 1024 * 1024))  # 50MB max upload
    IMAGE_ENCODE_WORKERS = int(os.getenv("IMAGE_ENCODE_WORKERS", 4))
    PREVIEW_MAX_AGE = int(os.getenv("PREVIEW_MAX_AGE", 24 * 60 * 60))  # seconds before unsubmitted images are purged

    SUPABASE_URL = os.getenv("SUPABASE_URL", "").strip()
    SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY", "").strip()

    REDIS_URL = os.getenv("REDIS_URL")
    SESSION_FILE_DIR = os.getenv("SESSION_FILE_DIR", "data/flask_session")  # used when REDIS_URL is unset

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
