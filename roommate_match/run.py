"""
Command-line runner for the compatibility scorer.

Usage:
    python -m roommate_match.run score profile_a.json profile_b.json
    python -m roommate_match.run match-score profile_a.json profile_b.json
    python -m roommate_match.run rank --viewer u1 --profiles profiles.csv --listings listings.csv
    python -m roommate_match.run report --profiles profiles.csv --output report.json

Every command accepts --config to point at a YAML configuration file;
the packaged default is used otherwise.
"""

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def setup_logging(log_level: str) -> None:
    """Configure logging level from config."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.getLogger().setLevel(level)


def _load_and_validate_config(config_path: Optional[str]) -> Dict[str, Any]:
    from .configs import load_config, validate_config

    config = load_config(config_path)
    for issue in validate_config(config):
        logger.warning(f"Config issue: {issue}")

    setup_logging(config.get("global", {}).get("log_level", "INFO"))
    return config


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, default=str))


def cmd_score(args: argparse.Namespace, config: Dict[str, Any]) -> int:
    """Print the rich compatibility result for two profile files."""
    from .data_loading import load_profile_record
    from .inference import create_scorer

    scorer = create_scorer(config)
    profile_a = load_profile_record(args.profile_a, strict=args.strict)
    profile_b = load_profile_record(args.profile_b, strict=args.strict)

    result = scorer.score(profile_a, profile_b, policy=args.policy)
    _print_json(result.to_dict())
    return 0


def cmd_match_score(args: argparse.Namespace, config: Dict[str, Any]) -> int:
    """Print the persisted match score for two profile files."""
    from .data_loading import load_profile_record
    from .inference import create_scorer

    scorer = create_scorer(config)
    profile_a = load_profile_record(args.profile_a, strict=args.strict)
    profile_b = load_profile_record(args.profile_b, strict=args.strict)

    print(scorer.match_score_str(profile_a, profile_b, policy=args.policy))
    return 0


def cmd_rank(args: argparse.Namespace, config: Dict[str, Any]) -> int:
    """Print listings ranked for one viewer."""
    from .data_loading import load_listings, load_profiles
    from .inference import create_scorer
    from .presentation import badge_text, profile_tags, score_tier, visible_tags
    from .ranking import rank_listings
    from .ranking.listings import get_owner_id

    scorer = create_scorer(config)
    profiles = load_profiles(args.profiles, strict=args.strict)
    listings = load_listings(args.listings)

    viewer = profiles.get(args.viewer)
    if viewer is None:
        logger.warning(f"Viewer {args.viewer} has no profile; all listings get the default score")

    ranked = rank_listings(
        viewer, listings, profiles, scorer,
        min_score=args.min_score, limit=args.limit
    )

    output: List[Dict[str, Any]] = []
    for item in ranked:
        entry = item.to_dict()
        entry["tier"] = score_tier(item.score)
        entry["badge"] = badge_text(item.score)

        owner = profiles.get(get_owner_id(item.listing))
        shown, remaining = visible_tags(profile_tags(owner), scorer.config.max_tags)
        entry["tags"] = [tag.label for tag in shown]
        entry["more_tags"] = remaining
        output.append(entry)
    _print_json(output)
    return 0


def cmd_report(args: argparse.Namespace, config: Dict[str, Any]) -> int:
    """Score all profile pairs and print a summary report."""
    from .configs import get_config_value
    from .data_loading import load_profiles
    from .evaluation import create_scoring_report
    from .inference import create_scorer
    from .pair_generation import generate_pairs_for_profiles

    scorer = create_scorer(config)
    profiles = load_profiles(args.profiles, strict=args.strict)
    pairs = generate_pairs_for_profiles(profiles, config)

    report = create_scoring_report(
        profiles,
        scorer,
        pairs=pairs,
        quantiles=get_config_value(config, "evaluation.quantiles", [0.1, 0.25, 0.5, 0.75, 0.9]),
    )

    print(report.summary())
    if args.output:
        report.save(args.output)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one sub-command per operation."""
    parser = argparse.ArgumentParser(
        description="Roommate lifestyle compatibility scoring"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to configuration file (packaged default if omitted)"
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject lifestyle values outside the known options"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, func, help_text in (
        ("score", cmd_score, "Full compatibility result for two profiles"),
        ("match-score", cmd_match_score, "Score persisted on a match record"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("profile_a", help="JSON file with the first profile")
        sub.add_argument("profile_b", help="JSON file with the second profile")
        sub.add_argument(
            "--policy",
            choices=["neutral", "exclude"],
            default=None,
            help="Unset-attribute policy (overrides config)"
        )
        sub.set_defaults(func=func)

    rank = subparsers.add_parser("rank", help="Rank listings for a viewer")
    rank.add_argument("--viewer", required=True, help="Viewer's user id")
    rank.add_argument("--profiles", required=True, help="Profiles CSV/JSON export")
    rank.add_argument("--listings", required=True, help="Listings CSV/JSON export")
    rank.add_argument("--min-score", type=int, default=None, help="Drop listings below this score")
    rank.add_argument("--limit", type=int, default=None, help="Maximum listings to print")
    rank.set_defaults(func=cmd_rank)

    report = subparsers.add_parser("report", help="Batch score report over all profile pairs")
    report.add_argument("--profiles", required=True, help="Profiles CSV/JSON export")
    report.add_argument("--output", type=str, default=None, help="Write the report as JSON")
    report.set_defaults(func=cmd_report)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the command-line runner."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = _load_and_validate_config(args.config)
        return args.func(args, config)
    except Exception as e:
        logger.exception(f"Command {args.command} failed with error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
