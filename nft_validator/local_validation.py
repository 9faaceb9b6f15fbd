import argparse
import json
import logging
import os
import sys
from typing import Dict, Optional, Sequence

from nft_validator.helpers.files import get_json_files_for_dir, read_files, read_files_partial
from nft_validator.validator import DEFAULT_VERSION, validate

logger = logging.getLogger(__name__)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def validate_local(directory: str, version: str = DEFAULT_VERSION) -> Dict[str, dict]:
    """
    Validates every `.json` file in `directory`.
    Fails on the first file that cannot be read or parsed.
    """
    filenames = get_json_files_for_dir(directory)
    return {
        record.filename: validate(record.filedata, version)
        for record in read_files(directory, filenames)
    }


def validate_local_partial(directory: str, version: str = DEFAULT_VERSION) -> Dict[str, dict]:
    """
    Validates every `.json` file in `directory`, reporting unreadable or
    malformed files as errors of type "file" instead of failing.
    """
    filenames = get_json_files_for_dir(directory)
    records, failures = read_files_partial(directory, filenames)

    results = {record.filename: validate(record.filedata, version) for record in records}
    for failure in failures:
        results[failure.filename] = {
            "errors": [{"type": "file", "msg": failure.error, "path": failure.filename}],
            "warnings": [],
        }
    # Keep scan order
    return {name: results[name] for name in filenames}


def main(argv: Optional[Sequence[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Validate a directory of HIP412 NFT metadata files")
    p.add_argument("directory", help="folder containing .json metadata files")
    p.add_argument("--version", default=DEFAULT_VERSION, help="HIP412 schema version")
    p.add_argument("--keep-going", action="store_true", help="report unreadable files instead of stopping")
    p.add_argument(
        "--log-level",
        default=LOG_LEVEL.upper(),
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    )
    args = p.parse_args(argv)

    logging.basicConfig(level=args.log_level)

    try:
        if args.keep_going:
            results = validate_local_partial(args.directory, args.version)
        else:
            results = validate_local(args.directory, args.version)
    except (OSError, ValueError) as e:
        logger.error(f"Validation aborted: {e}")
        return 2

    print(json.dumps(results, indent=2))

    invalid = [name for name, result in results.items() if result["errors"]]
    if invalid:
        logger.info(f"{len(invalid)} of {len(results)} files have errors")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
