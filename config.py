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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./onboarding.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_EXPIRY_MINUTES = int(data.get("JWT_EXPIRY_MINUTES", 60))
    # base64 of a 32-byte key; replace in every deployed environment
    ENCRYPTION_KEY = data.get(
        "ENCRYPTION_KEY", "ZGV2LW9ubHktZW5jcnlwdGlvbi1rZXktMzItYnl0ZXM="
    )

    # Invitations
    INVITATION_EXPIRY_DAYS = int(data.get("INVITATION_EXPIRY_DAYS", 7))
    INVITATION_BASE_URL = data.get(
        "INVITATION_BASE_URL", "http://localhost:5173/register"
    )

    # Approval workflow
    HR_NOTIFICATION_EMAIL = data.get("HR_NOTIFICATION_EMAIL", "hr@example.com")
    DEFAULT_EMPLOYEE_ROLE = data.get("DEFAULT_EMPLOYEE_ROLE", "viewer")
    APPROVAL_ENFORCE_DOCUMENTS = bool(data.get("APPROVAL_ENFORCE_DOCUMENTS", True))
    APPROVAL_VALIDATE_LICENSES = bool(data.get("APPROVAL_VALIDATE_LICENSES", True))
    APPROVAL_REQUIRE_BACKGROUND_CHECK = bool(
        data.get("APPROVAL_REQUIRE_BACKGROUND_CHECK", False)
    )

    # Document storage
    MAX_UPLOAD_SIZE_BYTES = int(data.get("MAX_UPLOAD_SIZE_BYTES", 10 * 1024 * 1024))
    STORAGE_BACKEND = data.get("STORAGE_BACKEND", "local")  # local | remote
    LOCAL_STORAGE_PATH = data.get(
        "LOCAL_STORAGE_PATH", os.path.join(ROOT_PATH, "uploads")
    )
    S3_BUCKET = data.get("S3_BUCKET", "")
    S3_ENDPOINT_URL = data.get("S3_ENDPOINT_URL", None)
    S3_ACCESS_KEY_ID = data.get("S3_ACCESS_KEY_ID", "")
    S3_SECRET_ACCESS_KEY = data.get("S3_SECRET_ACCESS_KEY", "")
    S3_REGION = data.get("S3_REGION", "us-east-1")

    # Background jobs
    ENABLE_SCHEDULER = bool(data.get("ENABLE_SCHEDULER", False))
    EXPIRATION_SWEEP_HOUR = int(data.get("EXPIRATION_SWEEP_HOUR", 6))
