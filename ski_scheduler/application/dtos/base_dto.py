# ski_scheduler/application/dtos/base_dto.py

"""
Base class for DTOs.

The client speaks camelCase JSON (``timeLength``, ``assignedTo``);
Python code keeps snake_case attribute names. Output DTOs should be
dumped with ``by_alias=True``.
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CustomBaseModel(BaseModel):
    """Base model for every DTO of the application."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_json(self) -> Dict[str, Any]:
        """JSON-ready dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)
