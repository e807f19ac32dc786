import os

EQUIPMENT_MODE_REFERENCED = "referenced"
EQUIPMENT_MODE_FREE_TEXT = "free_text"


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "lendtrack-secret-key")

    SQLALCHEMY_DATABASE_URI = os.getenv("SQLALCHEMY_DATABASE_URI", "sqlite:///lendtrack.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}

    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "lendtrack-jwt-secret")

    # referenced: loans point at an Equipment row
    # free_text: loans carry a plain equipment name (no equipment metrics)
    EQUIPMENT_TRACKING_MODE = os.getenv("EQUIPMENT_TRACKING_MODE", EQUIPMENT_MODE_REFERENCED)

    RECENT_ACTIVITY_LIMIT = int(os.getenv("RECENT_ACTIVITY_LIMIT", "5"))
    EQUIPMENT_DISTRIBUTION_LIMIT = int(os.getenv("EQUIPMENT_DISTRIBUTION_LIMIT", "4"))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
