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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./forgot_password.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    APP_URL = data.get("APP_URL", "http://localhost:8000")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")

    # Forgot password flow
    REST = bool(data.get("REST", False))
    FORGOT_PASSWORD_ROUTE = data.get("FORGOT_PASSWORD_ROUTE", "/forgot-password")
    FORGOT_PASSWORD_VIEWS = data.get("FORGOT_PASSWORD_VIEWS", {})
    FORGOT_PASSWORD_TEMPLATE_DIRS = data.get("FORGOT_PASSWORD_TEMPLATE_DIRS", [])
    TOKEN_EXPIRATION = data.get("TOKEN_EXPIRATION", "1 day")
    HASH_ITERATIONS = data.get("HASH_ITERATIONS", 12)

    # User field names
    EMAIL_FIELD = data.get("EMAIL_FIELD", "email")
    NAME_FIELD = data.get("NAME_FIELD", "name")
    RECOVERY_EMAIL_FIELD = data.get("RECOVERY_EMAIL_FIELD", "recovery_email")
    RECOVERY_PHONE_FIELD = data.get("RECOVERY_PHONE_FIELD", "recovery_phone")
    RECOVERY_FIELD = data.get("RECOVERY_FIELD", "recovery_field")

    # Outbound delivery: "log" writes messages to the log, "smtp" sends mail
    MAIL_BACKEND = data.get("MAIL_BACKEND", "log")
    MAIL_FROM = data.get("MAIL_FROM", "no-reply@localhost")
    APP_NAME = data.get("APP_NAME", "Forgot Password")
    SMTP_HOST = data.get("SMTP_HOST", "localhost")
    SMTP_PORT = data.get("SMTP_PORT", 587)
    SMTP_USERNAME = data.get("SMTP_USERNAME", "")
    SMTP_PASSWORD = data.get("SMTP_PASSWORD", "")
    SMTP_USE_TLS = bool(data.get("SMTP_USE_TLS", True))
