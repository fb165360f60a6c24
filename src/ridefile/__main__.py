"""
Command line entrypoint: summarize a GPX/TCX file from disk.

Usage:
    python -m ridefile ride.gpx              # print the session summary as JSON
    python -m ridefile ride.tcx --samples    # include every sample
    uvicorn ridefile.api.main:app --host 0.0.0.0 --port 8000  # starts API
"""
import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import List, Optional

from ridefile.analysis.metrics import format_summary
from ridefile.analysis.timeseries import samples_to_dicts
from ridefile.config import get_settings
from ridefile.ingest.errors import TrainingFileError
from ridefile.ingest.pipeline import NO_TRACKPOINTS_MESSAGE, parse_training_file

logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    log_level = logging.getLevelName(get_settings().log_level.upper())
    logging.basicConfig(
        level=log_level if isinstance(log_level, int) else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    if not isinstance(log_level, int):
        logger.error("Invalid log level: %r", get_settings().log_level)
        return 1

    parser = argparse.ArgumentParser(prog="ridefile", description="Summarize a GPX or TCX ride file")
    parser.add_argument("path", type=Path, help="Path to a .gpx or .tcx file")
    parser.add_argument("--samples", action="store_true", help="Include the full sample series")
    args = parser.parse_args(argv)

    if not args.path.is_file():
        logger.error("File not found: %s", args.path)
        return 1

    try:
        ride = parse_training_file(args.path.name, args.path.read_bytes())
    except (TrainingFileError, OSError) as exc:
        logger.error("%s", exc)
        return 1

    if ride.is_empty:
        print(NO_TRACKPOINTS_MESSAGE)
        return 0

    summary = ride.summary()
    output = {
        "filename": ride.filename,
        "format": ride.file_format.value,
        "sample_count": len(ride.samples),
        "summary": asdict(summary),
        "display": format_summary(summary),
    }
    if args.samples:
        output["samples"] = samples_to_dicts(ride.samples)
    print(json.dumps(output, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
