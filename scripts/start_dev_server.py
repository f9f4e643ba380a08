#!/usr/bin/env python3
"""
Development server startup script
"""

import uvicorn
import os
import sys

# Make the project root importable when run from scripts/
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ecocatalog.core.config import settings  # noqa: E402

if __name__ == "__main__":
    print("Starting EcoCatalog API...")
    print(f"Server will be available at: http://localhost:{settings.PORT}{settings.API_PREFIX}")
    print("Press Ctrl+C to stop the server")

    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=True,
        log_level="info"
    )
