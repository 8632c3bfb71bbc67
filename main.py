#!/usr/bin/env python
"""
Main entry point for the Warehouse Fulfillment Application.

Usage:
    python main.py --demo                # Queue sample orders, process the next one
    python main.py --demo --all          # Queue sample orders, process them all
    python main.py --demo --list         # Queue sample orders and show the queue
    python main.py --host 10.0.0.5       # Talk to a robot other than the simulator
"""

import argparse
import asyncio
import logging
import sys
from dataclasses import replace
from pathlib import Path

# Add src to path - must be done before any local imports
_src_path = Path(__file__).parent / "src"
sys.path.insert(0, str(_src_path))

from orchestration import ApplicationConfig, create_orchestrator


def main():
    """Main entry point."""

    parser = argparse.ArgumentParser(
        description="Warehouse Fulfillment Application",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Modes:
  next (default)  - Process the next queued order
  all             - Process queued orders until the queue is empty
  list            - Show queued orders without processing
        """
    )

    parser.add_argument(
        "--all",
        action="store_true",
        help="Process every queued order"
    )

    parser.add_argument(
        "--list",
        action="store_true",
        help="Show the queue without processing"
    )

    parser.add_argument(
        "--demo",
        action="store_true",
        help="Queue the sample orders before running"
    )

    parser.add_argument(
        "--env",
        type=Path,
        help="Load robot settings from file (default: robot.env)"
    )

    parser.add_argument(
        "--host",
        help="Override robot host"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show diagnostic log messages"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    try:
        config = ApplicationConfig.from_env_file(args.env)

        if args.host:
            config = replace(config, robot_host=args.host)

        orchestrator = create_orchestrator(config)

        if args.demo:
            orchestrator.seed_demo_orders()

        if args.list:
            orchestrator.show_queue()
        elif args.all:
            asyncio.run(orchestrator.process_all_orders())
        else:
            asyncio.run(orchestrator.process_next_order())

        print("\n[COMPLETE] Application finished")
        sys.exit(0)

    except KeyboardInterrupt:
        print("\n\n[CANCELLED] Application interrupted by user")
        sys.exit(1)

    except Exception as e:
        print(f"\n[ERROR] Application failed: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
