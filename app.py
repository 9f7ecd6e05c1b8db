import os

from faqbot.config import validate_environment_variables
from faqbot.db import connect
from faqbot.server import create_app
from faqbot.store import MongoFaqStore

# Validate environment variables at startup
validate_environment_variables()

fastapi_app = create_app(MongoFaqStore(connect()))


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app:fastapi_app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", 3000)),
        reload=os.getenv("ENV") != "prod",
    )
