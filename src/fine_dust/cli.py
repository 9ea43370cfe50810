"""Command-line helpers for looking up and grading air quality."""

import argparse
import asyncio
import json
import sys
from dataclasses import asdict

from fine_dust.adapters.config import AppConfig, ConfigurationError
from fine_dust.adapters.app_context import ApplicationContext
from fine_dust.application.services import calculate_grade
from fine_dust.domain.errors import AirQualityError
from fine_dust.domain.models import AirQualityResult, GradeInfo


def format_grade(grade: GradeInfo) -> str:
    """Human-readable one-line summary of a grade."""
    text = f"{grade.emoji} {grade.label} (tier {grade.tier}, {grade.color})"
    if grade.warning:
        text += f" - {grade.warning}"
    return text


def format_result(result: AirQualityResult) -> str:
    """Human-readable multi-line summary of a lookup result."""
    lines = [
        f"Station: {result.station_name} ({result.sido_name})",
        f"Measured: {result.data_time}",
        f"PM10: {result.pm10_value} ug/m3 (grade {result.pm10_grade})",
        f"PM2.5: {result.pm25_value} ug/m3 (grade {result.pm25_grade})",
        f"Overall: {result.grade_emoji} {result.grade_label} (tier {result.grade_tier})",
    ]
    if result.warning_message:
        lines.append(f"Warning: {result.warning_message}")
    if result.has_weather:
        lines.append(
            f"Weather: {result.weather_description}, {result.temperature}°C "
            f"(feels like {result.feels_like}°C)"
        )
    return "\n".join(lines)


async def lookup(latitude: str, longitude: str, config: AppConfig) -> AirQualityResult:
    """Run one lookup through the full pipeline."""
    context = ApplicationContext(config)
    await context.start()
    try:
        return await context.service.get_air_quality(latitude, longitude)
    finally:
        await context.stop()


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Fine dust air-quality helper",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Look up air quality and weather for Seoul City Hall
  fine-dust-cli lookup 37.5665 126.978

  # Grade PM10/PM2.5 concentrations offline
  fine-dust-cli grade 45 22 --json
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    lookup_parser = subparsers.add_parser("lookup", help="Look up air quality for a coordinate")
    lookup_parser.add_argument("latitude", help="Latitude in degrees")
    lookup_parser.add_argument("longitude", help="Longitude in degrees")
    lookup_parser.add_argument("--json", action="store_true", help="Output as JSON")

    grade_parser = subparsers.add_parser("grade", help="Grade PM10/PM2.5 concentrations")
    grade_parser.add_argument("pm10", type=float, help="PM10 in ug/m3")
    grade_parser.add_argument("pm25", type=float, help="PM2.5 in ug/m3")
    grade_parser.add_argument("--json", action="store_true", help="Output as JSON")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point. Returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        if args.command == "grade":
            grade = calculate_grade(args.pm10, args.pm25)
            if args.json:
                print(json.dumps(asdict(grade), indent=2, ensure_ascii=False))
            else:
                print(format_grade(grade))

        elif args.command == "lookup":
            config = AppConfig()
            config.load_toml_overrides()
            result = asyncio.run(lookup(args.latitude, args.longitude, config))
            if args.json:
                print(json.dumps(result.to_response(), indent=2, ensure_ascii=False))
            else:
                print(format_result(result))

    except (ConfigurationError, FileNotFoundError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1
    except AirQualityError as e:
        print(f"{e.kind}: {e.message}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 1

    return 0


def cli_main() -> None:
    """Synchronous entry point for the CLI command."""
    sys.exit(main())


if __name__ == "__main__":
    cli_main()
