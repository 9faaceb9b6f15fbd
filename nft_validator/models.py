from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict


# One parsed metadata file
class FileRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    filename: str
    filedata: Any


class FileFailure(BaseModel):
    model_config = ConfigDict(frozen=True)

    filename: str
    error: str


class ValidationIssue(BaseModel):
    type: str
    msg: str
    path: str


class ValidationResult(BaseModel):
    errors: List[ValidationIssue] = []
    warnings: List[ValidationIssue] = []


# Request schemas
class ValidateRequest(BaseModel):
    metadata: Any
    version: Optional[str] = None


class ValidateBatchRequest(BaseModel):
    files: List[FileRecord]
    version: Optional[str] = None


# Response schemas
class ValidateBatchResponse(BaseModel):
    results: Dict[str, ValidationResult]
