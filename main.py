"""Command line entrypoint for running StyleSense locally."""

import argparse
import json

from stylesense_app.app import StyleSenseApp
from stylesense_app.config import StyleSenseConfig


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="StyleSense personal stylist")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("serve", help="Run the HTTP API")

    recommend = sub.add_parser("recommend", help="Print one outfit recommendation as JSON")
    recommend.add_argument("--preferences", help="Style preference, e.g. Minimalist")
    recommend.add_argument("--occasion", help="Occasion, e.g. Job Interview")
    recommend.add_argument("--weather")
    recommend.add_argument("--location")
    recommend.add_argument("--gender")
    recommend.add_argument("--image", action="store_true", help="Also generate an outfit image")

    sub.add_parser("trends", help="Print current trend labels")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = _parser().parse_args(argv)
    config = StyleSenseConfig.from_env()

    if args.command == "serve":
        import uvicorn

        uvicorn.run("server.api:get_app", factory=True, host=config.host, port=config.port)
        return

    app = StyleSenseApp(config=config)
    if args.command == "recommend":
        result = app.generate_recommendation(
            args.occasion,
            preferences=args.preferences,
            weather=args.weather,
            location=args.location,
            gender=args.gender,
            include_image=args.image,
        )
        print(json.dumps(result, indent=2))
    elif args.command == "trends":
        print(json.dumps(app.refresh_trends(), indent=2))


if __name__ == "__main__":
    main()
