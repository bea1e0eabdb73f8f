"""Job layer package for workflow orchestration boundaries."""

from .interfaces import WorkflowRunnerPort
from .workflow_coordinator import WorkflowCoordinator, WorkflowCoordinatorConfig

__all__ = [
	"WorkflowCoordinator",
	"WorkflowCoordinatorConfig",
	"WorkflowRunnerPort",
]
