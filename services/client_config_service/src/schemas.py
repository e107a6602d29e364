from enum import Enum
from typing import Any, Dict, Optional, Type
from pydantic import BaseModel, ConfigDict, Field


class ConfigRole(str, Enum):
    BASE = "base"
    CONSUMER = "consumer"
    PRODUCER = "producer"


class OptionType(str, Enum):
    STRING = "string"
    INT = "int"
    BOOL = "bool"
    ENUM = "enum"
    LIST = "list"


class OptionSpec(BaseModel):
    """Declaration of a single configuration option."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., description="Option name in lowerCamelCase")
    type: OptionType = Field(..., description="Declared value type")
    default: Any = Field(None, description="Value used while the option is unset")
    description: str = Field("", description="Human readable summary")
    enum_type: Optional[Type[Enum]] = Field(None, description="Allowed values for enum options")
    secret: bool = Field(False, description="Mask the value in snapshots and logs")


class ConfigSnapshot(BaseModel):
    role: ConfigRole = Field(..., description="Role the configuration belongs to")
    options: Dict[str, Any] = Field(default_factory=dict, description="Explicitly assigned options")
    defaults: Dict[str, Any] = Field(default_factory=dict, description="Merged default table")
    runtime_options: Dict[str, Any] = Field(default_factory=dict, description="Runtime-only state")
    checksum: str = Field(..., description="Checksum of the effective option set")
    taken_at: str = Field(..., description="Snapshot timestamp")
