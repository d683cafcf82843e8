"""
CLI Runner for the Lead Scorer
Score lead-feature JSON files from the command line.

Usage:
    python -m src.core.cli_runner features.json [more.json ...] --radius-km 8
"""
import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

from src.scoring.errors import ConfigurationError, SchemaValidationError
from src.scoring.weights_registry import load_weights_file, register_weights
from src.services.lead_scoring_service import LeadScoringService, ScoredLead
from src.utils.observability import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Score restaurant lead-feature records.")
    parser.add_argument("paths", nargs="+", type=Path, help="Lead-feature JSON files")
    parser.add_argument("--radius-km", type=float, default=None, help="Delivery radius in km")
    parser.add_argument("--weights-version", default=None, help="Registered weights version")
    parser.add_argument("--weights-file", type=Path, default=None, help="JSON weights to register and use")
    parser.add_argument("--json", action="store_true", help="Print full breakdowns as JSON")
    return parser


def _format(path: Path, scored: ScoredLead) -> str:
    b = scored.breakdown
    lines = [
        f"{path.name}: {scored.features.restaurant.name}",
        f"   Score: {scored.lead_score} ({b.tier.value})  raw={b.raw:.2f} "
        f"after_confidence={b.after_confidence:.2f} multiplier={b.confidence_multiplier:.2f}",
    ]
    lines.extend(f"   - {reason}" for reason in b.reasons)
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Score each file and print the result.

    Returns:
        0 if every file scored, 1 if any file was rejected, 2 on bad weights
    """
    args = build_parser().parse_args(argv)
    configure_logging()

    version = args.weights_version
    try:
        if args.weights_file:
            version = register_weights(load_weights_file(args.weights_file), replace=True).version
        service = LeadScoringService(default_radius_km=args.radius_km, weights_version=version)
    except ConfigurationError as e:
        logger.error(str(e))
        return 2

    exit_code = 0
    for path in args.paths:
        try:
            candidate = json.loads(path.read_text(encoding="utf-8"))
            scored = service.score(candidate, lead_id=path.stem)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Cannot read {path}: {e}")
            exit_code = 1
            continue
        except SchemaValidationError as e:
            logger.error(f"{path} rejected:")
            for err in e.errors:
                logger.error(f"   {err}")
            exit_code = 1
            continue
        except ConfigurationError as e:
            logger.error(str(e))
            return 2

        if args.json:
            print(json.dumps({"file": str(path), **scored.breakdown.model_dump(mode="json")}, indent=2))
        else:
            print(_format(path, scored))

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
