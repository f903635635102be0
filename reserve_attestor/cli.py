"""
CLI for the Reserve Attestor

Usage:
    reserve-attestor                          # Run on the configured cron schedule
    reserve-attestor --once                   # Run one attestation now
    reserve-attestor --validate               # Validate configuration and exit
    reserve-attestor --config config.json     # Read run config from a JSON file
"""

import argparse
import sys
from dotenv import load_dotenv

load_dotenv()


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Reserve Attestor - scheduled Proof-of-Reserve report publisher",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  reserve-attestor --config config.json          Run on the cron schedule in config.json
  reserve-attestor --config config.json --once   Publish one report now
  reserve-attestor --validate                    Check POR_* environment config
        """,
    )
    parser.add_argument("--config", metavar="PATH", help="JSON run config (falls back to POR_* env vars)")
    parser.add_argument("--once", action="store_true", help="Run a single attestation and exit")
    parser.add_argument("--validate", action="store_true", help="Validate configuration and exit")

    args = parser.parse_args(argv)

    from .config import RunConfig, RuntimeSettings, validate_config
    from .errors import AttestationError
    from .utils.scheduler import build_trigger, start_scheduler
    from .workflow import build_runtime, on_trigger

    try:
        config = RunConfig.from_file(args.config) if args.config else RunConfig.from_env()
        validate_config(config)
        build_trigger(config.schedule)
        settings = RuntimeSettings.from_env()
    except AttestationError as e:
        print(f"[ERROR] {e}")
        return 2

    print("=" * 60)
    print("Reserve Attestor")
    print("=" * 60)
    print(f"Schedule: {config.schedule}")
    print(f"Reserve URL: {config.url}")
    print(f"Feed ID: {config.feed_id}")
    print(f"Receiver: {config.data_feeds_cache_address}")
    for key, value in settings.describe().items():
        print(f"{key}: {value}")
    print("=" * 60)

    # --validate: Stop after configuration checks
    if args.validate:
        print("[OK] Configuration is valid")
        return 0

    # --once: Publish a single report now
    if args.once:
        try:
            tx_hash = on_trigger(config, build_runtime(settings))
        except AttestationError as e:
            print(f"[ERROR] Attestation failed: {e}")
            return 1
        print(f"[OK] Report committed: {tx_hash}")
        return 0

    # Default: Run on schedule
    try:
        start_scheduler(config, lambda: build_runtime(settings), on_trigger, blocking=True)
    except (KeyboardInterrupt, SystemExit):
        print("\n[SCHEDULER] Stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
