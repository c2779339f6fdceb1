"""Core type definitions for the workflow builder."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Literal, Union

NodeType = Literal["trigger", "action", "logic", "end"]
NodeCategory = Literal["triggers", "integrations", "data", "logic", "ai", "output"]
WorkflowStatus = Literal["draft", "active", "paused"]
TestResultStatus = Literal["pending", "running", "success", "error"]
TestRunStatus = Literal["running", "completed", "failed", "cancelled"]

ConfigValue = Union[str, int, float, bool, list[str]]

TEMP_ID_PREFIX = "temp-"

TERMINAL_RUN_STATUSES: frozenset[str] = frozenset({"completed", "failed", "cancelled"})


# --- Workflow Graph Types ---


@dataclass
class NodePosition:
    """Canvas position of a node (top-left corner, canvas units)."""

    x: float
    y: float


@dataclass
class WorkflowNode:
    """A unit of work on the canvas."""

    id: str
    type: NodeType
    category: NodeCategory
    name: str
    icon: str
    description: str
    position: NodePosition
    config: dict[str, ConfigValue] = field(default_factory=dict)


@dataclass
class Connection:
    """Directed visual edge from one node's output port to another's input port."""

    id: str
    source_id: str
    target_id: str
    source_port: Literal["output"] = "output"
    target_port: Literal["input"] = "input"


@dataclass
class Workflow:
    """Workflow definition. Node order is the test-run execution order."""

    name: str
    id: str = ""
    description: str = ""
    nodes: list[WorkflowNode] = field(default_factory=list)
    connections: list[Connection] = field(default_factory=list)
    status: WorkflowStatus = "draft"

    @property
    def is_temporary(self) -> bool:
        """True for an unsaved draft carrying a placeholder id."""
        return not self.id or self.id.startswith(TEMP_ID_PREFIX)

    def node_ids(self) -> list[str]:
        return [n.id for n in self.nodes]

    def get_node(self, node_id: str) -> WorkflowNode | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None


@dataclass
class NodeTemplate:
    """Palette entry used to create new nodes."""

    type: NodeType
    category: NodeCategory
    name: str
    icon: str
    description: str
    default_config: dict[str, ConfigValue] = field(default_factory=dict)


# --- Test Run Types ---


@dataclass
class TestResult:
    """Outcome record for one node within a test run."""

    __test__ = False

    node_id: str
    status: TestResultStatus = "pending"
    output: Any | None = None
    error: str | None = None
    duration: int | None = None


@dataclass
class TestRun:
    """One simulated execution attempt over a workflow's node list."""

    __test__ = False

    workflow_id: str
    results: list[TestResult]
    started_at: datetime
    id: str = ""
    status: TestRunStatus = "running"
    completed_at: datetime | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_RUN_STATUSES


@dataclass
class NodeOutcome:
    """What a node executor reports for a single node."""

    success: bool
    duration: int
    output: Any | None = None
    error: str | None = None


class TestRunEventType(str, Enum):
    """Types of test-run progress events for SSE streaming."""

    __test__ = False

    RUN_START = "run:start"
    NODE_START = "node:start"
    NODE_COMPLETE = "node:complete"
    NODE_ERROR = "node:error"
    RUN_COMPLETED = "run:completed"
    RUN_FAILED = "run:failed"
    RUN_CANCELLED = "run:cancelled"


@dataclass
class TestRunEvent:
    """Real-time progress event emitted while a test run advances."""

    __test__ = False

    type: TestRunEventType
    run_id: str
    workflow_id: str
    timestamp: datetime
    node_id: str | None = None
    result: TestResult | None = None
    progress: dict[str, int] | None = None

    @property
    def is_terminal(self) -> bool:
        return self.type in (
            TestRunEventType.RUN_COMPLETED,
            TestRunEventType.RUN_FAILED,
            TestRunEventType.RUN_CANCELLED,
        )


# Callback type for receiving test-run events
TestRunEventCallback = Callable[[TestRunEvent], None]
