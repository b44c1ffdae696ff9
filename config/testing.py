import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "field_attendance_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False

GMAP_API_KEY = "test-maps-key"
CLOUDINARY_CLOUD_NAME = "test-cloud"
CLOUDINARY_API_KEY = "test-key"
CLOUDINARY_API_SECRET = "test-secret"
MAX_IMAGE_KB = 10

TOKEN_MAX_AGE_DAYS = 1

ROSTER_EXCLUDED_EMAILS = ["admin@example.com"]
ROSTER_EXCLUDED_REGIONS = ["Delhi", "Denmark"]
