"""Run the development server: ``python -m user_registry``."""

import argparse

from .main import create_app


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the user registry API.")
    parser.add_argument("--host", type=str, default="127.0.0.1", help="Host to bind.")
    parser.add_argument("--port", type=int, default=8080, help="Port to bind.")
    args = parser.parse_args()

    app = create_app()
    app.run(host=args.host, port=args.port, debug=bool(app.config.get("DEBUG", False)))


if __name__ == "__main__":
    main()
