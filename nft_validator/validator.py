import logging
import os
import re
from typing import Any, Dict, List

from jsonschema import Draft7Validator

from nft_validator.helpers.files import get_json_files_for_dir, read_files

logger = logging.getLogger(__name__)

# Environment variables
SCHEMA_DIR = os.getenv("SCHEMA_DIR", os.path.join(os.path.dirname(__file__), "schemas"))
DEFAULT_VERSION = os.getenv("DEFAULT_VERSION", "2.0.0")

SCHEMA_PREFIX = "HIP412@"

STRING_DISPLAY_TYPES = ("text", "color")
NUMERIC_DISPLAY_TYPES = ("boost", "datetime", "date", "percentage")

LOCALE_RE = re.compile(r"^[a-z]{2}$")
SHA256_RE = re.compile(r"^[a-fA-F0-9]{64}$")


class UnknownVersionError(ValueError):
    pass


def load_schemas(schema_dir: str) -> Dict[str, Draft7Validator]:
    """Builds one validator per `HIP412@<version>.json` file in `schema_dir`."""
    filenames = [
        name for name in get_json_files_for_dir(schema_dir) if name.startswith(SCHEMA_PREFIX)
    ]
    validators = {}
    for record in read_files(schema_dir, filenames):
        Draft7Validator.check_schema(record.filedata)
        version = record.filename[len(SCHEMA_PREFIX):-len(".json")]
        validators[version] = Draft7Validator(record.filedata)
    return validators


def init_schemas(schema_dir: str) -> Dict[str, Draft7Validator]:
    try:
        return load_schemas(schema_dir)
    except Exception as e:
        raise RuntimeError(f"Failed to load schemas: {e}")


# Load schemas once at startup
schemas = init_schemas(SCHEMA_DIR)


def get_supported_versions() -> List[str]:
    return sorted(schemas)


def format_path(path) -> str:
    out = "instance"
    for part in path:
        if isinstance(part, int):
            out += f"[{part}]"
        else:
            out += f".{part}"
    return out


def issue(type_: str, msg: str, path: str) -> dict:
    return {"type": type_, "msg": msg, "path": path}


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_schema(document: Any, schema_validator: Draft7Validator) -> Dict[str, List[dict]]:
    errors = []
    warnings = []
    for error in schema_validator.iter_errors(document):
        path = format_path(error.absolute_path)
        if error.validator == "required":
            # jsonschema yields one error per missing property: "'image' is a required property"
            name = error.message.split(" is a required property")[0]
            errors.append(issue("schema", f"requires property {name}", path))
        elif error.validator == "additionalProperties":
            allowed = error.schema.get("properties", {})
            for name in error.instance:
                if name not in allowed:
                    warnings.append(
                        issue("schema", f"is not allowed to have the additional property '{name}'", path)
                    )
        else:
            errors.append(issue("schema", error.message, path))
    return {"errors": errors, "warnings": warnings}


def validate_attributes(document: Any) -> Dict[str, List[dict]]:
    errors = []
    warnings = []
    attributes = document.get("attributes") if isinstance(document, dict) else None
    if not isinstance(attributes, list):
        return {"errors": errors, "warnings": warnings}

    for i, attribute in enumerate(attributes):
        if not isinstance(attribute, dict) or "display_type" not in attribute:
            continue
        display_type = attribute["display_type"]
        value = attribute.get("value")
        path = f"instance.attributes[{i}]"

        if display_type in STRING_DISPLAY_TYPES:
            if not isinstance(value, str):
                errors.append(issue("attribute", f"value for display_type '{display_type}' must be a string", path))
        elif display_type == "boolean":
            if not isinstance(value, bool):
                errors.append(issue("attribute", "value for display_type 'boolean' must be a boolean", path))
        elif display_type in NUMERIC_DISPLAY_TYPES:
            if not is_number(value):
                errors.append(issue("attribute", f"value for display_type '{display_type}' must be a number", path))
            elif display_type == "percentage" and not 0 <= value <= 100:
                errors.append(issue("attribute", "value for display_type 'percentage' must be between 0 and 100", path))
        else:
            warnings.append(issue("attribute", f"unknown display_type '{display_type}'", path))
    return {"errors": errors, "warnings": warnings}


def validate_localization(document: Any) -> Dict[str, List[dict]]:
    errors = []
    localization = document.get("localization") if isinstance(document, dict) else None
    if not isinstance(localization, dict):
        return {"errors": errors, "warnings": []}

    path = "instance.localization"
    uri = localization.get("uri")
    if isinstance(uri, str) and not uri.endswith("{locale}.json"):
        errors.append(issue("localization", "uri must end with '{locale}.json'", path))

    default = localization.get("default")
    if isinstance(default, str) and not LOCALE_RE.match(default):
        errors.append(issue("localization", f"default locale '{default}' must be a two-letter lowercase code", path))

    locales = localization.get("locales")
    if isinstance(locales, list):
        for locale in locales:
            if isinstance(locale, str) and not LOCALE_RE.match(locale):
                errors.append(issue("localization", f"locale '{locale}' must be a two-letter lowercase code", path))
        if default in locales:
            errors.append(issue("localization", f"locales must not contain the default locale '{default}'", path))
    return {"errors": errors, "warnings": []}


def validate_checksums(document: Any) -> Dict[str, List[dict]]:
    errors = []
    if not isinstance(document, dict):
        return {"errors": errors, "warnings": []}

    checksum = document.get("checksum")
    if isinstance(checksum, str) and not SHA256_RE.match(checksum):
        errors.append(issue("SHA256", "checksum is not a valid SHA256 hash", "instance.checksum"))

    files = document.get("files")
    if isinstance(files, list):
        for i, file_entry in enumerate(files):
            if not isinstance(file_entry, dict):
                continue
            checksum = file_entry.get("checksum")
            if isinstance(checksum, str) and not SHA256_RE.match(checksum):
                errors.append(issue("SHA256", "checksum is not a valid SHA256 hash", f"instance.files[{i}].checksum"))
    return {"errors": errors, "warnings": []}


def validate(document: Any, version: str = DEFAULT_VERSION) -> Dict[str, List[dict]]:
    """
    Validates an NFT metadata document against the HIP412 schema `version`.
    Returns {"errors": [...], "warnings": [...]}, each issue shaped as
    {"type", "msg", "path"}.
    """
    if version not in schemas:
        raise UnknownVersionError(f"Unknown HIP412 version: {version}")

    results = {"errors": [], "warnings": []}
    for partial in (
        validate_schema(document, schemas[version]),
        validate_attributes(document),
        validate_localization(document),
        validate_checksums(document),
    ):
        results["errors"].extend(partial["errors"])
        results["warnings"].extend(partial["warnings"])

    logger.debug(f"Validated metadata against HIP412@{version}: {len(results['errors'])} errors")
    return results
