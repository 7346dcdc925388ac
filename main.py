import os

from app import create_app
from app.config import get_config_class

app = create_app(get_config_class())


# ========================== Run ==========================
if __name__ == "__main__":
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", 8000)))
