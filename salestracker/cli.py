"""Command line entry point for running the sales tracker API."""
import argparse
import sys
from typing import List, Optional


def cmd_serve(args: argparse.Namespace) -> int:
    """Start the API server."""
    import uvicorn

    print("Starting sales tracker API server...")
    print(f"API docs: http://{args.host}:{args.port}/docs")

    # With reload, uvicorn needs the app as an import string
    app_target = "salestracker.main:app" if args.reload else None
    if app_target is None:
        from salestracker.main import app
        app_target = app

    uvicorn.run(
        app_target,
        host=args.host,
        port=args.port,
        reload=args.reload,
        workers=1,  # SQLite sessions are not shared across processes
    )
    return 0


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="salestracker",
        description="Inventory and sales order tracking for a small shop",
    )
    subparsers = parser.add_subparsers(dest="command")

    serve_parser = subparsers.add_parser("serve", help="Start the API server")
    serve_parser.add_argument(
        "--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)"
    )
    serve_parser.add_argument(
        "--port", "-p", type=int, default=8000, help="Port to bind to (default: 8000)"
    )
    serve_parser.add_argument(
        "--reload", action="store_true", help="Enable auto-reload for development"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command == "serve":
        return cmd_serve(args)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
