"""
Centralized application configuration
"""
from pydantic_settings import BaseSettings
from typing import Dict, List, Optional


class Settings(BaseSettings):
    """Application settings"""

    # API Settings
    API_TITLE: str = "Gab'z Laundromat API"
    API_VERSION: str = "1.0.0"
    API_DESCRIPTION: str = "Laundry booking, payments and notifications for Gab'z Laundromat"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    API_DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # Public URL of the web client (used in redirects and emails)
    APP_URL: str = "http://localhost:3000"

    # Supabase (auth + document store)
    SUPABASE_URL: str = ""
    SUPABASE_ANON_KEY: str = ""
    SUPABASE_SERVICE_ROLE_KEY: str = ""
    SUPABASE_JWT_SECRET: str = ""

    # Collection -> table names
    USERS_TABLE: str = "users"
    ADMIN_USERS_TABLE: str = "admin_users"
    ORDERS_TABLE: str = "orders"
    ORDER_ITEMS_TABLE: str = "order_items"
    SERVICES_TABLE: str = "services"
    ORDER_STATUS_HISTORY_TABLE: str = "order_status_history"

    # Paystack
    PAYSTACK_SECRET_KEY: str = ""
    PAYSTACK_BASE_URL: str = "https://api.paystack.co"
    PAYSTACK_CALLBACK_URL: str = "http://localhost:3000/payment/callback"

    # WhatsApp Cloud API
    WHATSAPP_API_URL: str = "https://graph.facebook.com/v19.0"
    WHATSAPP_ACCESS_TOKEN: str = ""
    WHATSAPP_PHONE_NUMBER_ID: str = ""

    # CORS - Can be string (comma-separated) or JSON array
    # Example: "http://localhost:3000,https://gabzlaundromat.com" or '["http://localhost:3000"]'
    ALLOWED_ORIGINS: Optional[str] = "http://localhost:3000,http://localhost:3001"

    def get_allowed_origins(self) -> List[str]:
        """Parse ALLOWED_ORIGINS string into list"""
        if not self.ALLOWED_ORIGINS:
            return ["http://localhost:3000"]

        # Try JSON parse first (for array format)
        import json
        try:
            origins = json.loads(self.ALLOWED_ORIGINS)
            if isinstance(origins, list):
                return origins
        except (json.JSONDecodeError, ValueError):
            pass

        # Fall back to comma-separated string
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]

    def get_collection_tables(self) -> Dict[str, str]:
        """Map logical collection names to table names"""
        return {
            "users": self.USERS_TABLE,
            "admin_users": self.ADMIN_USERS_TABLE,
            "orders": self.ORDERS_TABLE,
            "order_items": self.ORDER_ITEMS_TABLE,
            "services": self.SERVICES_TABLE,
            "order_status_history": self.ORDER_STATUS_HISTORY_TABLE,
        }

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


settings = Settings()
