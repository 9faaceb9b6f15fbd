import json
import logging
import os
from typing import List, Sequence, Tuple

from nft_validator.models import FileFailure, FileRecord

logger = logging.getLogger(__name__)


def read_files(directory: str, filenames: Sequence[str]) -> List[FileRecord]:
    """
    Reads and parses each file in `filenames` from `directory`, in order.
    Any missing file or malformed JSON aborts the whole batch.
    """
    records = []
    for filename in filenames:
        with open(os.path.join(directory, filename), "r", encoding="utf-8") as f:
            data = json.load(f)
        records.append(FileRecord(filename=filename, filedata=data))
    return records


def read_files_partial(
    directory: str, filenames: Sequence[str]
) -> Tuple[List[FileRecord], List[FileFailure]]:
    """
    Like read_files, but a file that cannot be read or parsed is recorded
    as a failure instead of aborting the batch.
    """
    records = []
    failures = []
    for filename in filenames:
        try:
            with open(os.path.join(directory, filename), "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to load {filename}: {e}")
            failures.append(FileFailure(filename=filename, error=str(e)))
            continue
        records.append(FileRecord(filename=filename, filedata=data))
    return records, failures


def get_json_files_for_dir(directory: str) -> List[str]:
    """
    Returns the names of `.json` entries in `directory`, in listing order.
    The total and `.json` entry counts are logged at INFO through this
    module's logger; they only show up once the caller configures logging.
    """
    entries = os.listdir(directory)
    logger.info(f"Found {len(entries)} for directory: {directory}")

    json_files = [name for name in entries if os.path.splitext(name)[1] == ".json"]
    logger.info(f"Found {len(json_files)} files with the .json extension")

    return json_files
