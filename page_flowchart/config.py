"""
Конфигурация через environment variables
"""

import os

HOST = os.getenv("FLOWCHART_HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "5000"))

# Загрузка страниц
FETCH_TIMEOUT = float(os.getenv("FETCH_TIMEOUT", "120"))
FETCH_USER_AGENT = os.getenv(
    "FETCH_USER_AGENT",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) page-flowchart/1.0",
)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

CORS_ORIGINS = [
    origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
]
