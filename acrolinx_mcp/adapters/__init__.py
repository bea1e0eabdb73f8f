"""Adapter layer package for the Acrolinx API integration boundary."""

from .backoff import BackoffRetrier
from .errors import (
	AcrolinxError,
	AcrolinxRemoteError,
	AcrolinxTransportError,
	AcrolinxValidationError,
	OperationFailedError,
	WorkflowFailedError,
	WorkflowTimeoutError,
)
from .interfaces import WorkflowAdapterPort, WorkflowStatusPort, WorkflowSubmitterPort
from .style_web_service import AcrolinxStyleAdapter

__all__ = [
	"AcrolinxError",
	"AcrolinxRemoteError",
	"AcrolinxStyleAdapter",
	"AcrolinxTransportError",
	"AcrolinxValidationError",
	"BackoffRetrier",
	"OperationFailedError",
	"WorkflowAdapterPort",
	"WorkflowFailedError",
	"WorkflowStatusPort",
	"WorkflowSubmitterPort",
	"WorkflowTimeoutError",
]
