"""
Web Configuration - Centralized settings management
"""
import os
from pathlib import Path

from pydantic import BaseModel
from dotenv import load_dotenv

# Load backend/.env when present
_backend_env = Path(__file__).parent.parent.parent / ".env"
if _backend_env.exists():
    load_dotenv(_backend_env)


class AppConfig(BaseModel):
    """Application configuration with environment variable support"""

    # Server settings
    host: str = "127.0.0.1"
    port: int = 4000
    debug: bool = False
    log_level: str = "INFO"

    # Record settings
    id_bytes: int = 10

    # Live events
    event_queue_maxsize: int = 1000
    sse_heartbeat_s: float = 15.0

    # Rate limiting
    rate_limit_enabled: bool = True
    rate_limit_default: str = "120/minute"
    rate_limit_write: str = "60/minute"

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Load configuration from environment variables"""
        return cls(
            host=os.getenv("MSGBOARD_HOST", "127.0.0.1"),
            port=int(os.getenv("MSGBOARD_PORT", "4000")),
            debug=os.getenv("MSGBOARD_DEBUG", "0") == "1",
            log_level=os.getenv("MSGBOARD_LOG_LEVEL", "INFO").upper(),
            id_bytes=int(os.getenv("MSGBOARD_ID_BYTES", "10")),
            event_queue_maxsize=int(os.getenv("MSGBOARD_EVENT_QUEUE_MAXSIZE", "1000")),
            sse_heartbeat_s=float(os.getenv("MSGBOARD_SSE_HEARTBEAT_S", "15.0")),
            rate_limit_enabled=os.getenv("MSGBOARD_RATE_LIMIT_ENABLED", "1") == "1",
            rate_limit_default=os.getenv("MSGBOARD_RATE_LIMIT_DEFAULT", "120/minute"),
            rate_limit_write=os.getenv("MSGBOARD_RATE_LIMIT_WRITE", "60/minute"),
        )


# Global config instance
config = AppConfig.from_env()
