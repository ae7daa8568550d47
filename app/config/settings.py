"""
Application settings and configuration
"""
import os
from dotenv import load_dotenv

load_dotenv()

class Settings:
    # Application
    APP_NAME = os.getenv("APP_NAME", "서울아레나 업무요청")
    VERSION = "1.0.0"
    DEBUG = os.getenv("DEBUG", "True") == "True"

    # Admin gate (shared secret, deters casual access only)
    ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "alexbella")

    # Webhooks
    CHAT_WEBHOOK_URL = os.getenv(
        "CHAT_WEBHOOK_URL",
        "https://agit.in/webhook/fb2d4ac7-bda0-418f-9947-e5ce1dbe965a",
    )
    SHEETS_WEBHOOK_URL = os.getenv(
        "SHEETS_WEBHOOK_URL",
        "https://script.google.com/macros/s/AKfycbyqsVqcqnzbyHcIEfwl-v_QMJzev-ZOSSjBW2UCjWX0ntS-yT0TQmK0GY4rfToA_gM_/exec",
    )

    # CORS
    ALLOWED_ORIGINS = [
        origin.strip()
        for origin in os.getenv(
            "ALLOWED_ORIGINS",
            "http://localhost:3000,http://localhost:5173,http://127.0.0.1:5173",
        ).split(",")
        if origin.strip()
    ]

    # Database
    MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017")
    DATABASE_NAME = os.getenv("DATABASE_NAME", "request_portal")

    # Sessions
    SESSION_HEADER = "X-Session-ID"
    SESSION_MAX_ACTIVE = int(os.getenv("SESSION_MAX_ACTIVE", "1000"))
    SESSION_IDLE_SECONDS = int(os.getenv("SESSION_IDLE_SECONDS", "3600"))

settings = Settings()
