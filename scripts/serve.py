#!/usr/bin/env python3
"""Run the mhimmo HTTP API with uvicorn, configured from the environment."""

import argparse

import uvicorn

from mhimmo.config import MhImmoConfig


def main() -> None:
    config = MhImmoConfig.from_env()
    parser = argparse.ArgumentParser(description="Serve the mhimmo API")
    parser.add_argument("--host", default=config.api.host)
    parser.add_argument("--port", type=int, default=config.api.port)
    parser.add_argument("--reload", action="store_true")
    args = parser.parse_args()

    uvicorn.run(
        "mhimmo.api.app:create_app_from_env",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
