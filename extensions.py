from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
import os

# Shared limiter; individual routes tighten it with @limiter.limit(...)
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=os.getenv("RATELIMIT_STORAGE_URL", "memory://"),
    strategy="fixed-window",
    default_limits=[os.getenv("RATELIMIT_DEFAULT", "200 per hour")],
    headers_enabled=True,
)
