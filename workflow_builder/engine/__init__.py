"""Core workflow builder engine components."""

from .types import (
    NodePosition,
    WorkflowNode,
    Connection,
    Workflow,
    NodeTemplate,
    TestResult,
    TestRun,
    NodeOutcome,
    TestRunEvent,
    TestRunEventType,
)
from .executor import NodeExecutor, SimulatedNodeExecutor
from .node_registry import NodeRegistryClass, node_registry
from .test_runner import TestRunner

__all__ = [
    "NodePosition",
    "WorkflowNode",
    "Connection",
    "Workflow",
    "NodeTemplate",
    "TestResult",
    "TestRun",
    "NodeOutcome",
    "TestRunEvent",
    "TestRunEventType",
    "NodeExecutor",
    "SimulatedNodeExecutor",
    "NodeRegistryClass",
    "node_registry",
    "TestRunner",
]
