"""Configuration defaults, serializer options, and .env loading.

WHY: The null-emission policy, identifier escaping, and the name of the
top-level identifier member are deployment decisions: one consumer
wants compact output, another wants every member spelled out. Keeping
the defaults in one place, overridable from the environment, means
callers only pass options when they disagree with the deployment.

HOW: python-dotenv loads the .env file on import. Defaults are read from
environment variables into module-level constants. SerializerOptions is
a frozen dataclass whose field defaults come from those constants.

RULES:
- GEOJSON_IGNORE_NULL_VALUES: "true" omits absent members (default "false")
- GEOJSON_ESCAPE_IDENTIFIERS: "true" writes the id as an escaped string
  (default "true")
- GEOJSON_ID_PROPERTY_NAME: top-level identifier member (default "id");
  blank values fall back to "id"
- The in-memory attribute key for the identifier is always "id"
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load .env from the working directory (where the process is started)
load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() == "true"


# ---------------------------------------------------------------------------
# Wire constants
# ---------------------------------------------------------------------------

FEATURE_TYPE = "Feature"
"""The only accepted value of a Feature's ``type`` member."""

ID_ATTRIBUTE = "id"
"""Attribute-table key that holds the identifier in memory."""

# ---------------------------------------------------------------------------
# Environment-overridable defaults
# ---------------------------------------------------------------------------

DEFAULT_IGNORE_NULL_VALUES = _env_flag("GEOJSON_IGNORE_NULL_VALUES", "false")
DEFAULT_ESCAPE_IDENTIFIERS = _env_flag("GEOJSON_ESCAPE_IDENTIFIERS", "true")
DEFAULT_ID_PROPERTY_NAME = os.getenv("GEOJSON_ID_PROPERTY_NAME", ID_ATTRIBUTE).strip() or ID_ATTRIBUTE


@dataclass(frozen=True)
class SerializerOptions:
    """Per-call options shared by every converter.

    WHY: Converters are built once and reused; anything that varies per
    call (null emission, id escaping) travels alongside the reader or
    writer instead of living on the converter.

    RULES:
    - ignore_null_values: True omits bbox/geometry/properties when absent,
      False writes them as explicit null
    - escape_identifiers: True writes the id as a JSON string holding the
      JSON serialization of the value, and reads string ids back through
      the same unescaping step
    """

    ignore_null_values: bool = DEFAULT_IGNORE_NULL_VALUES
    escape_identifiers: bool = DEFAULT_ESCAPE_IDENTIFIERS
