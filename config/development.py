import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# json (files under STORAGE_DIR) | mysql (kv_store table) | memory
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "json")
STORAGE_DIR = os.getenv("STORAGE_DIR", "instance/data")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "employee_db"),
}

COMPANY_NAME = os.getenv("COMPANY_NAME", "Company")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled with the mysql backend, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Insert the default admin account when the store is empty
AUTO_SEED_ADMIN = bool(int(os.getenv("AUTO_SEED_ADMIN", "1")))
