#!/usr/bin/env python3
"""Server startup script"""

import logging
import sys
import os

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

def check_dependencies():
    """Check if required packages are installed"""
    required = ['fastapi', 'uvicorn', 'pydantic', 'pydantic_settings', 'dotenv']

    missing = []
    for package in required:
        try:
            __import__(package.replace('-', '_'))
        except ImportError:
            missing.append(package)

    if missing:
        logger.error(f"Missing packages: {missing}")
        return False
    return True

def main():
    """Start the server"""
    if not check_dependencies():
        sys.exit(1)

    # Deferred until the packages are known to be installed
    import uvicorn
    from config import settings

    if not os.path.isdir(settings.root_path):
        logger.error(f"Root directory not found: {settings.root_path}")
        sys.exit(1)

    if settings.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    logger.info(f"Starting server on {settings.host}:{settings.port}")

    try:
        uvicorn.run("main:app", host=settings.host, port=settings.port, reload=False,
                    log_level=settings.log_level)
    except KeyboardInterrupt:
        logger.info("Server stopped")
    except Exception as e:
        logger.error(f"Server failed: {e}")
        sys.exit(1)

if __name__ == "__main__":
    main()
