"""
Run the SocialHub API with uvicorn.

Usage:
    python -m socialhub [--host 0.0.0.0] [--port 8000] [--reload]
"""
import argparse

import uvicorn


def main():
    parser = argparse.ArgumentParser(description="Run the SocialHub API server")
    parser.add_argument("--host", default="127.0.0.1", help="Interface to bind")
    parser.add_argument("--port", type=int, default=8000, help="Port to listen on")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    args = parser.parse_args()

    uvicorn.run("socialhub.main:app", host=args.host, port=args.port, reload=args.reload, log_level="info")


if __name__ == "__main__":
    main()
