import json
import os
from functools import lru_cache
from typing import Dict, Any, Tuple

from jsonschema import validate, ValidationError

# Path: mediaref/media/schemas/
SCHEMA_DIR = os.path.join(
    os.path.dirname(__file__),
    "schemas"
)

RESULT_SCHEMA = "resolution_result.json"


@lru_cache(maxsize=None)
def load_schema(filename: str = RESULT_SCHEMA) -> Dict[str, Any]:
    """
    Load a JSON schema file from the schemas directory.
    """
    path = os.path.join(SCHEMA_DIR, filename)

    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def validate_result(data: Dict[str, Any]) -> Tuple[bool, str]:
    """
    Validate a ResolutionResult.to_dict() payload.

    Returns:
        (True, "") if valid
        (False, "<error message>") if invalid
    """
    try:
        schema = load_schema()
        validate(instance=data, schema=schema)
    except ValidationError as e:
        return False, e.message
    except Exception as e:
        return False, f"Schema load/validation error: {e}"

    if data["source"] == "fallback" and data["isValid"]:
        return False, "Fallback result must not be marked valid"

    return True, ""
