#!/usr/bin/env python3
"""
Vendor login service -- API key login for vendors acting on behalf of an organization.

Usage:
  python main.py
  python main.py --port 8080
  python main.py --host 127.0.0.1 --reload

Environment variables (see core/config.py for the full list):
  MU_SPARQL_ENDPOINT   SPARQL endpoint queried with sudo rights.
                       Default: http://database:8890/sparql
  LOG_SPARQL_QUERIES   Log every read query.
  LOG_SPARQL_UPDATES   Log every update query.
  LOGIN_RATE_LIMIT     slowapi limit string for POST /sessions. Default: 10/minute
"""

import argparse

import uvicorn

from core.config import get_settings


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Run the vendor login service.")
    parser.add_argument("--host", default=settings.host, help=f"Bind address (default: {settings.host})")
    parser.add_argument("--port", type=int, default=settings.port, help=f"Bind port (default: {settings.port})")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes (development only)")
    args = parser.parse_args()

    uvicorn.run(
        "api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
