from pydantic_settings import BaseSettings
from typing import Optional

from core.ratelimit import Admission, NoLimit, configure

class Settings(BaseSettings):
    API_KEY: str = ""
    BASE_URL: str = "https://exch.cx/api"
    TIMEOUT: float = 15.0

    # Rate limit: unset RATE_LIMIT_MAX means no limiter
    RATE_LIMIT_MAX: Optional[int] = None
    RATE_LIMIT_INTERVAL: float = 1.0

    LOG_LEVEL: str = "INFO"

    class Config:
        env_prefix = "EXCH_"
        env_file = ".env"
        extra = "ignore"

    def limiter(self) -> Admission:
        if self.RATE_LIMIT_MAX is None:
            return NoLimit()
        return configure(self.RATE_LIMIT_MAX, self.RATE_LIMIT_INTERVAL)
