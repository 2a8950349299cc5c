"""Unified entry point for resobox modules."""

import logging
import sys

log = logging.getLogger(__name__)


def main():
    if len(sys.argv) < 2:
        logging.basicConfig(level=logging.INFO)
        log.error("Usage: python -m resobox <module> [args...]")
        log.error("Available modules:")
        log.error("  layout    - Compose a layout frame from a box snapshot")
        sys.exit(1)

    module = sys.argv[1]

    if module == "layout":
        import argparse
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s  %(levelname)-8s  %(message)s",
            datefmt="%H:%M:%S",
        )
        p = argparse.ArgumentParser(description="Compose a fractal box layout frame")
        p.add_argument("--config", required=True, help="Path to YAML config file")
        p.add_argument("--debug", action="store_true", help="Log frame composition details")
        args = p.parse_args(sys.argv[2:])
        if args.debug:
            logging.getLogger("resobox").setLevel(logging.DEBUG)
        from resobox.engine.runner import run_layout
        run_id = run_layout(args.config)
        log.info("Finished: run_id %s", run_id)
    else:
        logging.basicConfig(level=logging.INFO)
        log.error(f"Unknown module: {module}")
        sys.exit(1)


if __name__ == "__main__":
    main()
