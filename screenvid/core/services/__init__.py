from screenvid.core.services.creation_time import (
    parse_creation_time_tag,
    parse_rfc3339,
    parse_time_from_filename,
)
from screenvid.core.services.fallback_chain import first_available

__all__ = [
    "parse_creation_time_tag",
    "parse_rfc3339",
    "parse_time_from_filename",
    "first_available",
]
