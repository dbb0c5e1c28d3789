from __future__ import annotations

import argparse
import functools

import uvicorn

from ..protocol.http.app import create_app


def main() -> None:
    parser = argparse.ArgumentParser(description="Serve the chess rules HTTP API")
    parser.add_argument("--host", type=str, default="127.0.0.1", help="Bind address")
    parser.add_argument("--port", type=int, default=8000, help="Bind port (default: 8000)")
    parser.add_argument(
        "--log-level",
        type=str,
        default="info",
        choices=["critical", "error", "warning", "info", "debug"],
        help="Log level for the app and uvicorn",
    )
    args = parser.parse_args()

    factory = functools.partial(create_app, log_level=args.log_level)
    uvicorn.run(factory, factory=True, host=args.host, port=args.port, log_level=args.log_level)


if __name__ == "__main__":
    main()
