#!/usr/bin/env python3
"""Create tables and the singleton temperature alert configuration.

This script is runnable directly (python scripts/seed_alert_config.py) and also import-safe.
Run it once when a new database is provisioned; re-running only updates the values passed in.
"""
import sys
from pathlib import Path

# Ensure project root is on sys.path when running the script directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from bulkload.db import SessionLocal, Base, engine
from bulkload import crud
from bulkload.config import settings


import argparse


def main(argv=None):
    parser = argparse.ArgumentParser(description='Create tables and seed the temperature alert configuration.')
    parser.add_argument('--threshold', type=float, default=None,
                        help='Temperature threshold in °C (default: DEFAULT_TEMPERATURE_THRESHOLD)')
    parser.add_argument('--recipient', action='append', default=None,
                        help='Alert recipient email; repeat for several recipients')
    args = parser.parse_args(argv)

    Base.metadata.create_all(bind=engine)

    with SessionLocal() as db:
        config = crud.get_alert_config(db)
        if config is None:
            print("Creating temperature alert configuration")
            config = crud.get_or_create_alert_config(
                db,
                args.threshold if args.threshold is not None else settings.DEFAULT_TEMPERATURE_THRESHOLD,
                args.recipient if args.recipient is not None else settings.ALERT_RECIPIENTS,
            )
        elif args.threshold is not None or args.recipient is not None:
            print("Temperature alert configuration exists; updating")
            config = crud.update_alert_config(db, config, threshold=args.threshold, recipients=args.recipient)
        else:
            print("Temperature alert configuration already seeded")
        print(f"threshold={config.threshold} recipients={config.recipients}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
