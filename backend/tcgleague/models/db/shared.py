import json

from pydantic import BaseModel, ConfigDict

from tcgleague.utils.logging import logger


class BaseModelORM(BaseModel):
    model_config = ConfigDict(from_attributes=True)


def parse_json_list(value: object, what: str) -> list[dict]:
    """Parse a JSON array column, discarding (and logging) anything that is not an array."""
    if value is None:
        return []

    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError as exc:
            logger.warning(f"Discarding stored {what} that are not valid JSON: {exc}")
            return []

    if not isinstance(value, list):
        logger.warning(f"Discarding stored {what} of type {type(value).__name__}, expected a list")
        return []

    return value
