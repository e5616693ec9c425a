"""Entry point for running the tracker API under uvicorn.

Usage:
    skate-tracker --host 0.0.0.0 --port 3000

The port defaults to $PORT (as set by most PaaS hosts), then 3000.
"""

import argparse
import os

DEFAULT_PORT = 3000


def _default_port() -> int:
    raw = os.environ.get("PORT", "")
    try:
        return int(raw) if raw else DEFAULT_PORT
    except ValueError:
        return DEFAULT_PORT


def parse_serve_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse serve-mode arguments (host, port)."""
    parser = argparse.ArgumentParser(description="Skate Order Tracker API server")
    parser.add_argument("--host", default="0.0.0.0", help="Bind address")
    parser.add_argument("--port", type=int, default=_default_port(), help="Listen port")
    parser.add_argument("--log-level", default="info", help="Uvicorn log level")
    return parser.parse_args(args)


def main(argv: list[str] | None = None) -> None:
    """Start the FastAPI server."""
    serve_args = parse_serve_args(argv)
    import uvicorn

    uvicorn.run(
        "src.api.main:app",
        host=serve_args.host,
        port=serve_args.port,
        workers=1,
        log_level=serve_args.log_level,
    )


if __name__ == "__main__":
    main()
