"""
Reset saved review progress.

DANGEROUS: This deletes review history!
Clears one user's scope, or drops every review store with --all.

Usage:
    python -m scripts.maintenance.reset_review_data --user local --domain vocabulary --direction pl-to-en
    python -m scripts.maintenance.reset_review_data --all
"""

import argparse

from study_core import config
from study_core.log_setup import configure_logging
from study_core.persistence import ReviewStoreRepository, init_db, reset_db
from study_core.schemas import StoreScope


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Reset saved review progress")
    parser.add_argument("--user", default=config.get_default_user_id(), help="User id (default: DEFAULT_USER_ID)")
    parser.add_argument("--domain", help="Study domain, e.g. vocabulary")
    parser.add_argument("--direction", default="default", help="Scope direction, e.g. pl-to-en")
    parser.add_argument("--all", action="store_true", help="Drop every review store for every user")
    parser.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    configure_logging()

    if not args.all and not args.domain:
        build_parser().error("either --domain or --all is required")

    print("=" * 60)
    print("WARNING: Reset Review Data")
    print("=" * 60)
    print()
    if args.all:
        print("This will DELETE every saved review store for every user.")
    else:
        print(f"This will DELETE progress for user '{args.user}' in {args.domain}/{args.direction}.")
    print()

    if not args.yes:
        response = input("Are you sure you want to reset? (type 'yes' to confirm): ")
        if response.lower() != "yes":
            print("\nCancelled. No changes made.")
            return

    if args.all:
        reset_db()
    else:
        init_db()
        ReviewStoreRepository().clear(args.user, StoreScope(domain=args.domain, direction=args.direction))
    print("\nReset complete.")


if __name__ == "__main__":
    main()
