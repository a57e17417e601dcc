import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./park_auth.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    APP_BASE_URL = data.get("APP_BASE_URL", "http://localhost:3000")

    # Final session (JWT)
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    SESSION_TTL_MINUTES = int(data.get("SESSION_TTL_MINUTES", 60 * 24 * 30))

    # Password policy
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))
    PASSWORD_MIN_LENGTH = int(data.get("PASSWORD_MIN_LENGTH", 6))

    # Token ledger lifetimes
    TWO_FACTOR_CODE_TTL_MINUTES = int(data.get("TWO_FACTOR_CODE_TTL_MINUTES", 10))
    TEMP_LOGIN_SESSION_TTL_MINUTES = int(data.get("TEMP_LOGIN_SESSION_TTL_MINUTES", 15))
    VERIFIED_SESSION_TTL_MINUTES = int(data.get("VERIFIED_SESSION_TTL_MINUTES", 5))
    PASSWORD_RESET_TTL_MINUTES = int(data.get("PASSWORD_RESET_TTL_MINUTES", 60))

    # Background sweep of expired bridge tokens
    TOKEN_SWEEP_ENABLED = bool(data.get("TOKEN_SWEEP_ENABLED", True))
    TOKEN_SWEEP_INTERVAL_SECONDS = int(data.get("TOKEN_SWEEP_INTERVAL_SECONDS", 300))

    # Outbound delivery: "live" uses SMTP/Twilio, "log" only logs metadata
    DELIVERY_BACKEND = data.get("DELIVERY_BACKEND", "log")
    DELIVERY_TIMEOUT_SECONDS = float(data.get("DELIVERY_TIMEOUT_SECONDS", 10))

    SMTP_HOST = data.get("SMTP_HOST", "")
    SMTP_PORT = int(data.get("SMTP_PORT", 587))
    SMTP_USER = data.get("SMTP_USER", "")
    SMTP_PASSWORD = data.get("SMTP_PASSWORD", "")
    SMTP_USE_TLS = bool(data.get("SMTP_USE_TLS", True))
    SMTP_FROM = data.get("SMTP_FROM", "")
    SMTP_FROM_NAME = data.get("SMTP_FROM_NAME", "Park Portal")

    TWILIO_ACCOUNT_SID = data.get("TWILIO_ACCOUNT_SID", "")
    TWILIO_AUTH_TOKEN = data.get("TWILIO_AUTH_TOKEN", "")
    TWILIO_FROM_NUMBER = data.get("TWILIO_FROM_NUMBER", "")
    TWILIO_API_BASE = data.get("TWILIO_API_BASE", "https://api.twilio.com/2010-04-01")
