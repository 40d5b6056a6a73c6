import os

# In a real deployment, load these from the environment or a secrets manager
SECRET_KEY: str = os.getenv("SECRET_KEY", "your-secret-key-for-jwt-!ChangeMe!")
ALGORITHM: str = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30"))

DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite://./reseller_hub.sqlite3")

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
# Comma separated logger prefixes, e.g. "reseller_hub.features,reseller_hub.main"
LOG_NAMESPACES: list[str] = [
    ns.strip() for ns in os.getenv("LOG_NAMESPACES", "").split(",") if ns.strip()
]

# Analytics
ANALYTICS_WINDOW_DAYS: int = int(os.getenv("ANALYTICS_WINDOW_DAYS", "30"))
TOP_PRODUCTS_LIMIT: int = int(os.getenv("TOP_PRODUCTS_LIMIT", "5"))
