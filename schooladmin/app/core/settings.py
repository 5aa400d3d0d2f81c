import os


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


class Settings:
    def __init__(self):
        self.app_name = "School Admin"
        self.api_version = "1.0.0"
        self.environment = os.getenv("ENVIRONMENT", "development")
        self.database_url = os.getenv("DATABASE_URL", "sqlite:///./schooladmin.db")
        self.log_level = os.getenv("LOG_LEVEL", "INFO")
        self.cors_origins = [
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173").split(",")
            if origin.strip()
        ]
        # Sessions expire after the TTL; validation inside the trailing renewal window pushes expiry out again.
        self.session_ttl_days = _env_int("SESSION_TTL_DAYS", 30)
        self.session_renewal_days = _env_int("SESSION_RENEWAL_DAYS", 15)
        self.password_hash_rounds = _env_int("PASSWORD_HASH_ROUNDS", 29000)
        # Inclusive bounds for grade values.
        self.grade_min = _env_int("GRADE_MIN", 1)
        self.grade_max = _env_int("GRADE_MAX", 6)
        self.admin_email = os.getenv("ADMIN_EMAIL")
        self.admin_password = os.getenv("ADMIN_PASSWORD")
        self.admin_name = os.getenv("ADMIN_NAME", "Administrator")

        if self.session_renewal_days > self.session_ttl_days:
            raise ValueError("SESSION_RENEWAL_DAYS cannot exceed SESSION_TTL_DAYS")
        if self.grade_min > self.grade_max:
            raise ValueError("GRADE_MIN cannot exceed GRADE_MAX")


_settings_instance = None


def get_settings():
    """Return a singleton Settings instance."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
