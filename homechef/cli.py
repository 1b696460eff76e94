"""
Command line entry point for the HomeChef order store.
"""
import argparse
import json
import logging
import sys

from .db import init_engine, init_db, run_in_transaction
from .seed import seed_all
from .services.aggregates import reconcile_aggregates
from .services.audit import run_audit
from .settings import settings

logger = logging.getLogger("homechef.cli")


def cmd_init_db(args) -> int:
    init_db()
    print("Tables created")
    return 0


def cmd_seed(args) -> int:
    results = run_in_transaction(lambda db: seed_all(db, demo=args.demo))
    print("\nSeed Summary:")
    for section, counts in results.items():
        print(f"  {section}: " + ", ".join(f"{k}={v}" for k, v in counts.items()))
    return 0


def cmd_audit(args) -> int:
    results = run_in_transaction(run_audit)
    if args.json:
        print(json.dumps(results, indent=2))
    else:
        print("\nAudit Summary:")
        for check, found in results.items():
            if check == "total_issues":
                continue
            print(f"  {check}: {found or 'ok'}")
        print(f"Total issues: {results['total_issues']}")
    return 1 if results["total_issues"] else 0


def cmd_reconcile(args) -> int:
    fixed = run_in_transaction(reconcile_aggregates)
    print(f"Reconciled aggregates: {fixed['recipes']} recipes, {fixed['chefs']} chefs")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="homechef", description="HomeChef order store")
    parser.add_argument("--database-url", help="Override HOMECHEF_DATABASE_URL")
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("init-db", help="Create all tables (development)")
    p.set_defaults(func=cmd_init_db)

    p = sub.add_parser("seed", help="Load reference data (roles, categories, coupons)")
    p.add_argument(
        "--demo", action="store_true", help="Also load demo accounts, chefs, recipes, addresses and sample orders"
    )
    p.set_defaults(func=cmd_seed)

    p = sub.add_parser("audit", help="Check invariants the schema does not enforce")
    p.add_argument("--json", action="store_true", help="Print the report as JSON")
    p.set_defaults(func=cmd_audit)

    p = sub.add_parser("reconcile", help="Recompute chef and recipe aggregates")
    p.set_defaults(func=cmd_reconcile)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    # stderr keeps `audit --json` output parseable
    logging.basicConfig(
        level=args.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stderr)]
    )

    init_engine(args.database_url)
    logger.info(f"Running {args.command}")
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
