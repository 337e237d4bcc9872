# graphvis/schemas.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, FrozenSet, List, Literal, Tuple

Mode = Literal["adjacent", "all", "none", "selected"]

MODES: Tuple[str, ...] = ("adjacent", "all", "none", "selected")
DEFAULT_MODE: Mode = "adjacent"

OTHER_NODE = "other_node"
OTHER_NODE_TYPE = "other_node_type"
RESERVED_COLUMNS: Tuple[str, str] = (OTHER_NODE, OTHER_NODE_TYPE)


def node_id(node_type: str, name: str) -> str:
    return f"{node_type}: {name}"


class Node(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    type: str
    primary: bool
    degree: int = Field(ge=1)


class Link(BaseModel):
    model_config = ConfigDict(frozen=True)

    source: str
    target: str


class TypeVisibility(BaseModel):
    model_config = ConfigDict(frozen=True)

    mode: Mode = DEFAULT_MODE
    selected_names: FrozenSet[str] = frozenset()
    show_labels: bool = True


class VisibilityConfig(BaseModel):
    """Per-type visibility settings. Types that are absent use the defaults."""

    model_config = ConfigDict(frozen=True)

    types: Dict[str, TypeVisibility] = {}

    def for_type(self, node_type: str) -> TypeVisibility:
        return self.types.get(node_type) or TypeVisibility()

    def mode_of(self, node_type: str) -> str:
        return self.for_type(node_type).mode

    def merged(self, partial: "VisibilityConfig") -> "VisibilityConfig":
        """Return a new config with the entries of ``partial`` replacing ours."""
        types = dict(self.types)
        types.update(partial.types)
        return VisibilityConfig(types=types)


class GraphModel(BaseModel):
    model_config = ConfigDict(frozen=True)

    primary_column: str
    nodes: Tuple[Node, ...] = ()
    links: Tuple[Link, ...] = ()

    def node_ids(self) -> FrozenSet[str]:
        return frozenset(n.id for n in self.nodes)

    def node_index(self) -> Dict[str, Node]:
        return {n.id: n for n in self.nodes}

    def types(self) -> List[str]:
        return sorted({n.type for n in self.nodes})


class LiveModel(BaseModel):
    model_config = ConfigDict(frozen=True)

    nodes: Tuple[Node, ...] = ()
    links: Tuple[Link, ...] = ()

    def node_ids(self) -> FrozenSet[str]:
        return frozenset(n.id for n in self.nodes)
