#!/usr/bin/env python
"""
Start the Wholesale Store API with uvicorn.

Usage:
    python scripts/run_api.py [--host 0.0.0.0] [--port 8000] [--no-reload] [--atomic-stock]
"""
import argparse
import os
import sys
from pathlib import Path

import uvicorn

PROJECT_ROOT = Path(__file__).parent.parent


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Run the Wholesale Store API")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--no-reload", action="store_true", help="Disable auto-reload on code changes")
    parser.add_argument("--data-dir", help="Directory holding products.csv, customers.csv and pricing_rules.csv")
    parser.add_argument("--atomic-stock", action="store_true", help="Reserve stock atomically when placing orders")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    # The reloader spawns a fresh process, so settings travel through the environment
    src_path = str(PROJECT_ROOT / "src")
    sys.path.insert(0, src_path)
    os.environ["PYTHONPATH"] = os.pathsep.join(filter(None, [src_path, os.environ.get("PYTHONPATH")]))
    if args.data_dir:
        os.environ["STORE_DATA_DIR"] = str(Path(args.data_dir).resolve())
    if args.atomic_stock:
        os.environ["STORE_ATOMIC_STOCK_RESERVATION"] = "true"

    print(f"Starting Wholesale Store API on http://{args.host}:{args.port} ...")
    if args.atomic_stock:
        print("Stock mode: atomic reservation")
    uvicorn.run(
        "wholesale_store.api.main:app",
        host=args.host,
        port=args.port,
        reload=not args.no_reload,
        app_dir=src_path,
    )


if __name__ == "__main__":
    main()
