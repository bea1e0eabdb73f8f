"""Acrolinx NextGen style API adapter for workflow submission and status checks."""

from __future__ import annotations

import json
from urllib.parse import quote
from typing import Any, Awaitable, Callable, Final

import httpx
import structlog

from acrolinx_mcp.domain import (
    JobHandle,
    JobKind,
    JobRequest,
    JobState,
    domain_parse_workflow_state,
    domain_resolve_style_guide_id,
)

from .backoff import BackoffRetrier
from .errors import AcrolinxRemoteError, AcrolinxTransportError, AcrolinxValidationError, OperationFailedError
from .interfaces import WorkflowAdapterPort

logger = structlog.get_logger(__name__)


class AcrolinxStyleAdapter(WorkflowAdapterPort):
    """Adapter implementation for the `/v1/style/{kind}` submit and status flow."""

    _USER_AGENT: Final[str] = "acrolinx-mcp/1.0 (Python/httpx)"
    _UPLOAD_FIELD_NAME: Final[str] = "file_upload"
    _UPLOAD_FILENAME: Final[str] = "content.txt"
    _UPLOAD_CONTENT_TYPE: Final[str] = "text/plain"
    _MAX_LOGGED_BODY_CHARS: Final[int] = 2000

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://app.acrolinx.cloud",
        max_text_length: int = 100000,
        retrier: BackoffRetrier | None = None,
        request_timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize Acrolinx style API adapter.

        Args:
            api_key: Acrolinx API key sent as `Authorization` header.
            base_url: Base endpoint URL for the Acrolinx API.
            max_text_length: Maximum accepted text length in characters.
            retrier: Backoff policy wrapping every remote call.
            request_timeout_seconds: HTTP request timeout in seconds.
            transport: Optional httpx transport override.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when required config values are invalid.
        """

        normalized_api_key = api_key.strip()
        normalized_base_url = base_url.strip()

        if not normalized_api_key:
            raise ValueError("api_key must not be blank")
        if not normalized_base_url:
            raise ValueError("base_url must not be blank")
        if max_text_length < 1:
            raise ValueError("max_text_length must be >= 1")
        if request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be > 0")

        self._base_url = normalized_base_url.rstrip("/")
        self._max_text_length = max_text_length
        self._retrier = retrier or BackoffRetrier()
        self._client = httpx.AsyncClient(
            headers={"Authorization": normalized_api_key, "User-Agent": self._USER_AGENT},
            timeout=request_timeout_seconds,
            transport=transport,
        )

    def adapter_source_name(self) -> str:
        """Return stable adapter source label.

        Returns:
            str: Source identifier.

        Raises:
            RuntimeError: This implementation does not raise runtime errors.
        """

        return "acrolinx_nextgen_style_api"

    def adapter_validate_text(self, text: str) -> None:
        """Validate request text bounds.

        Args:
            text: Candidate request text.

        Returns:
            None: Returns when text is acceptable.

        Raises:
            AcrolinxValidationError: Raised when text is blank or too long.
        """

        if not isinstance(text, str) or not text.strip():
            raise AcrolinxValidationError("Text parameter is required and must be a non-empty string")
        if len(text) > self._max_text_length:
            raise AcrolinxValidationError(f"Text exceeds maximum length of {self._max_text_length} characters")

    async def adapter_submit_workflow(self, kind: JobKind, request: JobRequest) -> JobState:
        """Submit one workflow as multipart upload and parse its first state.

        Args:
            kind: Workflow family selecting the endpoint.
            request: Caller request.

        Returns:
            JobState: Terminal state for synchronous completion, else pending state.

        Raises:
            AcrolinxValidationError: Raised when request text is invalid.
            AcrolinxRemoteError: Raised when every submission attempt failed.
        """

        self.adapter_validate_text(request.text)

        style_guide_id = domain_resolve_style_guide_id(request.style_guide)
        submit_url = f"{self._base_url}/v1/style/{kind.value}"
        form_fields = {
            "dialect": request.dialect,
            "tone": request.tone,
            "style_guide": style_guide_id,
        }

        async def _submit_attempt() -> JobState:
            logger.debug(
                "submitting workflow",
                workflow_type=kind.value,
                dialect=request.dialect,
                tone=request.tone,
                style_guide=style_guide_id,
                text_length=len(request.text),
            )
            files = {
                self._UPLOAD_FIELD_NAME: (
                    self._UPLOAD_FILENAME,
                    request.text.encode("utf-8"),
                    self._UPLOAD_CONTENT_TYPE,
                )
            }
            payload, response_text = await self._adapter_http_request(
                method="POST",
                url=submit_url,
                data=form_fields,
                files=files,
            )
            state = self._adapter_parse_state(payload=payload, response_text=response_text, kind=kind)
            logger.info(
                "workflow submitted",
                workflow_type=kind.value,
                workflow_id=payload.get("workflow_id") if isinstance(payload, dict) else None,
                status=payload.get("status") if isinstance(payload, dict) else None,
            )
            return state

        return await self._adapter_run_with_retry(_submit_attempt, label=f"submit {kind.value} workflow")

    async def adapter_get_workflow_status(self, handle: JobHandle) -> JobState:
        """Fetch and parse the current state of one workflow.

        Args:
            handle: Submitted workflow handle.

        Returns:
            JobState: Fresh state snapshot.

        Raises:
            AcrolinxRemoteError: Raised when every status attempt failed.
        """

        status_url = f"{self._base_url}/v1/style/{handle.kind.value}/{quote(handle.workflow_id, safe='')}"

        async def _status_attempt() -> JobState:
            logger.debug("checking workflow status", workflow_id=handle.workflow_id, workflow_type=handle.kind.value)
            payload, response_text = await self._adapter_http_request(method="GET", url=status_url)
            state = self._adapter_parse_state(
                payload=payload,
                response_text=response_text,
                kind=handle.kind,
                fallback_workflow_id=handle.workflow_id,
            )
            logger.debug(
                "workflow status retrieved",
                workflow_id=handle.workflow_id,
                status=payload.get("status") if isinstance(payload, dict) else None,
            )
            return state

        return await self._adapter_run_with_retry(_status_attempt, label="check workflow status")

    async def adapter_close(self) -> None:
        """Close the pooled HTTP client.

        Returns:
            None: Releases connections as side effect.

        Raises:
            RuntimeError: This implementation does not raise runtime errors.
        """

        await self._client.aclose()

    async def _adapter_run_with_retry(self, operation: Callable[[], Awaitable[JobState]], label: str) -> JobState:
        """Run one remote operation under the retry policy.

        Args:
            operation: Coroutine factory performing one attempt.
            label: Operation label for logs and errors.

        Returns:
            JobState: Parsed state from the successful attempt.

        Raises:
            AcrolinxRemoteError: Raised when every attempt failed.
        """

        try:
            return await self._retrier.retry_run(operation, label=label)
        except OperationFailedError as error:
            last_error = error.last_error
            raise AcrolinxRemoteError(
                str(error),
                label=error.label,
                attempts=error.attempts,
                last_error=last_error,
                status_code=getattr(last_error, "status_code", None),
                response_body=getattr(last_error, "response_body", None),
            ) from error

    async def _adapter_http_request(
        self,
        method: str,
        url: str,
        data: dict[str, str] | None = None,
        files: dict[str, tuple[str, bytes, str]] | None = None,
    ) -> tuple[Any, str]:
        """Execute one HTTP request and decode its JSON body.

        Args:
            method: HTTP method.
            url: Endpoint URL.
            data: Optional multipart form fields.
            files: Optional multipart file parts.

        Returns:
            tuple[Any, str]: Decoded JSON payload and raw response text.

        Raises:
            AcrolinxTransportError: Raised for transport failures, non-success status or invalid JSON.
        """

        try:
            response = await self._client.request(method, url, data=data, files=files)
        except httpx.TimeoutException as error:
            raise AcrolinxTransportError("Acrolinx transport request timed out") from error
        except httpx.HTTPError as error:
            raise AcrolinxTransportError(f"Acrolinx transport request failed: {error}") from error

        response_text = response.text
        if response.is_error:
            logger.error(
                "api request failed",
                status=response.status_code,
                status_text=response.reason_phrase,
                error=response_text[: self._MAX_LOGGED_BODY_CHARS],
            )
            raise AcrolinxTransportError(
                f"Acrolinx API error: {response.status_code} {response.reason_phrase} - {response_text}",
                status_code=response.status_code,
                response_body=response_text,
            )

        try:
            payload = json.loads(response_text)
        except ValueError as error:
            raise AcrolinxTransportError(
                "Acrolinx API returned a non-JSON body",
                status_code=response.status_code,
                response_body=response_text,
            ) from error

        logger.debug("api response payload", url=url, payload=payload)
        return payload, response_text

    def _adapter_parse_state(
        self,
        payload: Any,
        response_text: str,
        kind: JobKind,
        fallback_workflow_id: str | None = None,
    ) -> JobState:
        """Parse a decoded payload into a state, mapping contract errors to attempt failures.

        Args:
            payload: Decoded JSON payload.
            response_text: Raw response body.
            kind: Workflow family.
            fallback_workflow_id: Workflow id to use when the payload omits it.

        Returns:
            JobState: Parsed state snapshot.

        Raises:
            AcrolinxTransportError: Raised when the payload violates the response contract.
        """

        try:
            return domain_parse_workflow_state(payload, kind=kind, fallback_workflow_id=fallback_workflow_id)
        except ValueError as error:
            raise AcrolinxTransportError(
                f"Acrolinx API response contract violation: {error}",
                status_code=200,
                response_body=response_text,
            ) from error
