"""
Tool-related data models.
"""

from enum import Enum
from typing import Tuple
from pydantic import BaseModel, Field, validator


class ToolCategory(str, Enum):
    """Category a tool belongs to."""
    CORE = "core"
    CLI = "cli"
    FONT = "font"
    MANAGER = "manager"
    CONFIG = "config"


class ToolPromptInfo(BaseModel):
    """What the interactive prompt shows before installing a tool."""
    name: str = Field(..., description="Display name")
    description: str = Field(..., description="One-line description")
    changes: Tuple[str, ...] = Field(default_factory=tuple, description="Side effects of installing")
    critical: bool = Field(default=False, description="Installation aborts if this tool is declined")


class Tool(BaseModel):
    """Immutable catalog entry for an installable tool."""
    id: str = Field(..., description="Unique tool identifier")
    name: str = Field(..., description="Display name")
    description: str = Field(..., description="Tool description")
    changes: Tuple[str, ...] = Field(default_factory=tuple, description="Human-readable side effects")
    critical: bool = Field(default=False, description="Abort the whole run if declined or failed")
    category: ToolCategory = Field(..., description="Tool category")
    minimal: bool = Field(default=False, description="Included in --minimal installs")
    dependencies: Tuple[str, ...] = Field(default_factory=tuple, description="Tool ids this depends on")

    @validator('id')
    def validate_id_format(cls, v):
        """Ids are matched case-insensitively, so they are stored lowercase."""
        if not v or v != v.strip().lower():
            raise ValueError(f"Tool id must be non-empty, trimmed and lowercase: {v!r}")
        return v

    @validator('dependencies')
    def validate_no_self_dependency(cls, v, values):
        if values.get('id') in v:
            raise ValueError(f"Tool {values.get('id')} cannot depend on itself")
        return v

    def prompt_info(self) -> ToolPromptInfo:
        """Build the interactive prompt payload for this tool."""
        return ToolPromptInfo(
            name=self.name,
            description=self.description,
            changes=self.changes,
            critical=self.critical,
        )

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "id": "nodejs",
                "name": "Node.js LTS",
                "description": "JavaScript runtime (latest LTS version)",
                "changes": ["Installs via asdf", "Sets as global default"],
                "critical": False,
                "category": "manager",
                "minimal": True,
                "dependencies": ["asdf"]
            }
        }
