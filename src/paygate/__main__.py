"""Run the paygate HTTP server.

Usage:
    python -m paygate                       # listen on 0.0.0.0:$PORT (default 5000)
    python -m paygate --port 8000 --reload
"""

import argparse
import os

import uvicorn


def main():
    parser = argparse.ArgumentParser(description="paygate HTTP server")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "5000")))
    parser.add_argument("--reload", action="store_true", help="Reload on code changes (development)")
    args = parser.parse_args()

    uvicorn.run("paygate.app:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
