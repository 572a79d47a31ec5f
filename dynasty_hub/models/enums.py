from enum import Enum


class BoardKey(str, Enum):
    """site_settings keys holding the raw text of each rankings board."""

    TOP25 = "rankings_top25"
    BIG10 = "rankings_big10"


class VisionProvider(str, Enum):
    OPENAI = "openai"
    # process_weekly only accepts openai for now


class StorageBucket(str, Enum):
    TEMP_UPLOADS = "temp-uploads"
