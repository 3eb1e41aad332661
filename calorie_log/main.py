"""Calorie Log - Entry point.

Loads the day log and runs the interactive menu.
"""

import argparse
import logging
import os
import sys

from .core.errors import CalorieLogError
from .shell.cli import ConsolePrompt, run
from .shell.nutrition_client import DEFAULT_BASE_URL, NutritionixClient, NutritionixConfig
from .shell.tracker import Tracker


logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def build_nutrition_client() -> NutritionixClient | None:
    """Create the online lookup client if credentials are configured."""
    app_id = os.environ.get("NUTRITIONIX_APP_ID")
    api_key = os.environ.get("NUTRITIONIX_APP_KEY")
    if not app_id or not api_key:
        logger.info("Nutritionix credentials not set, online lookup disabled")
        return None

    config = NutritionixConfig(
        app_id=app_id,
        api_key=api_key,
        base_url=os.environ.get("NUTRITIONIX_URL", DEFAULT_BASE_URL),
    )
    return NutritionixClient(config)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="calorie-log",
        description="Log daily foods and workouts and track calories.",
    )
    parser.add_argument(
        "--data-file",
        default=os.environ.get("CALORIE_LOG_FILE", "calories.json"),
        help="Day log JSON file (default: $CALORIE_LOG_FILE or calories.json)",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("LOG_LEVEL", "WARNING"),
        type=str.upper,
        help="Logging level (default: $LOG_LEVEL or WARNING)",
    )
    args = parser.parse_args(argv)
    # Defaults skip argparse choices, so $LOG_LEVEL is checked here too
    if args.log_level not in LOG_LEVELS:
        parser.error(f"invalid log level {args.log_level!r} (choose from {', '.join(LOG_LEVELS)})")
    return args


def main(argv: list[str] | None = None) -> int:
    """Run the calorie log. Returns the process exit code."""
    args = parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    nutrition = build_nutrition_client()
    try:
        tracker = Tracker(args.data_file, nutrition=nutrition)
    except CalorieLogError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logger.info("Loaded %d days from %s", len(tracker.days), args.data_file)

    try:
        run(tracker, ConsolePrompt())
    except (EOFError, KeyboardInterrupt):
        print()
    finally:
        if nutrition is not None:
            nutrition.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
