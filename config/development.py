import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "ponto_db"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Feriados nacionais (lib holidays) somados aos cadastrados pela empresa
INCLUDE_NATIONAL_HOLIDAYS = bool(int(os.getenv("INCLUDE_NATIONAL_HOLIDAYS", "1")))
# UF para feriados estaduais, ex.: "SP"
HOLIDAY_STATE = os.getenv("HOLIDAY_STATE") or None

MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(16 * 1024 * 1024)))

# Aplica schema.sql na inicialização (idempotente: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
