"""Input envelope: a node list plus optional component metadata."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .model import TemplateNode
from .parser import parse_nodes


class ComponentMetadata(BaseModel):
    """Component-level data passed through to the framework renderer."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = "Component"
    props: dict[str, Any] = Field(default_factory=dict)
    imports: list[str] = Field(default_factory=list)
    script: str | None = None
    version: str | None = None
    typescript: bool = False


class TemplateEnvelope(BaseModel):
    """A template document as read from a JSON or YAML file."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    nodes: list[Any]
    component: ComponentMetadata | None = None

    @field_validator("nodes", mode="before")
    @classmethod
    def _nodes_must_be_list(cls, value: Any) -> Any:
        if not isinstance(value, list):
            raise ValueError("nodes must be a list")
        return value

    def template_nodes(self) -> list[TemplateNode]:
        """Parse the raw node list."""
        return parse_nodes(self.nodes)
