import logging
import os

from fastapi import FastAPI, HTTPException

from nft_validator.models import (
    ValidateBatchRequest,
    ValidateBatchResponse,
    ValidateRequest,
    ValidationResult,
)
from nft_validator.validator import (
    DEFAULT_VERSION,
    SCHEMA_DIR,
    UnknownVersionError,
    get_supported_versions,
    validate,
)

# Configure logging
logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())

app = FastAPI()
logger = logging.getLogger("uvicorn.error")


def run_validation(document, version: str) -> dict:
    try:
        return validate(document, version)
    except UnknownVersionError as e:
        logger.error(f"Rejected validation request: {e}")
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/health")
def health():
    return {
        "status": "ok",
        "DEFAULT_VERSION": DEFAULT_VERSION,
        "SCHEMA_DIR": SCHEMA_DIR,
        "versions": get_supported_versions(),
    }


@app.post("/validate", response_model=ValidationResult)
async def validate_metadata(request: ValidateRequest):
    """
    Input: {"metadata": {...}, "version": "2.0.0"} (version optional)
    Output: {"errors": [...], "warnings": [...]}
    """
    version = request.version or DEFAULT_VERSION
    results = run_validation(request.metadata, version)
    logger.info(f"Validated metadata against HIP412@{version}: {len(results['errors'])} errors")
    return results


@app.post("/validate-batch", response_model=ValidateBatchResponse)
async def validate_batch(request: ValidateBatchRequest):
    """
    Input: {"files": [{"filename": ..., "filedata": {...}}, ...], "version": optional}
    Output: {"results": {filename: {"errors": [...], "warnings": [...]}}}
    Filenames must be unique within a batch.
    """
    filenames = [record.filename for record in request.files]
    duplicates = sorted({name for name in filenames if filenames.count(name) > 1})
    if duplicates:
        raise HTTPException(status_code=400, detail=f"Duplicate filenames in batch: {', '.join(duplicates)}")

    version = request.version or DEFAULT_VERSION
    results = {
        record.filename: run_validation(record.filedata, version)
        for record in request.files
    }
    logger.info(f"Validated {len(results)} files against HIP412@{version}")
    return {"results": results}
