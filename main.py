"""
JobHub API - CLI Entry Point.

Runs the FastAPI app with uvicorn.

Usage:
    python main.py [--host HOST] [--port PORT] [--reload]
"""

import argparse

from dotenv import load_dotenv

load_dotenv()

import uvicorn  # noqa: E402


def main():
    """Run the JobHub API server."""
    parser = argparse.ArgumentParser(description="JobHub API server")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    args = parser.parse_args()

    print("JobHub API")
    print("=" * 40)
    print(f"Listening on http://{args.host}:{args.port}")

    uvicorn.run("jobhub.api.app:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
