#!/usr/bin/env python3
"""
Production startup script for the poster gallery API
"""

import os
import uvicorn

def start_production_server():
    """Start the production server"""
    port = int(os.getenv("PORT", "8999"))
    print("🚀 Starting Kydy Poster Gallery API...")
    print(f"📊 API Documentation: http://localhost:{port}/docs")
    print("=" * 60)

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",  # Bind to all interfaces
        port=port,
        reload=False,
        workers=2,
        log_level="info",
        access_log=True
    )

if __name__ == "__main__":
    start_production_server()
