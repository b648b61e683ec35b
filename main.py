"""
Entry point for the User Records API
"""

import logging
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from userapi.app import create_app
from userapi.config.settings import PORT, get_settings

settings = get_settings()

# Configure logging
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = create_app(settings)

if __name__ == "__main__":
    import uvicorn
    logger.info(f"Starting User Records API on port {PORT}")
    # uvicorn traps SIGINT/SIGTERM and runs the lifespan shutdown, which closes the pool
    uvicorn.run(app, host="0.0.0.0", port=PORT)
