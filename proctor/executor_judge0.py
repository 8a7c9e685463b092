"""Judge0 REST API executor for sandboxed remote code execution."""

from __future__ import annotations

import base64
import sys
from dataclasses import dataclass

import httpx

from proctor.models import ExecutionResult, LanguageProfile

# Judge0 status codes
_STATUS_ACCEPTED = 3  # ran successfully (exit code 0)
_STATUS_TLE = 5
_STATUS_COMPILATION_ERROR = 6
_STATUS_RUNTIME_ERROR_NZEC = 11

TIME_LIMIT_MESSAGE = "Time limit exceeded - possible infinite loop"

# Free public instance; no API key required.
PUBLIC_JUDGE0_URL = "https://ce.judge0.com"


@dataclass
class Judge0Config:
    base_url: str = PUBLIC_JUDGE0_URL
    api_key: str = ""
    rapidapi_host: str = ""  # set when going through RapidAPI instead of a self-hosted token
    request_timeout: float = 30.0  # seconds, client-side deadline per submission


def to_base64(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def from_base64(data: str | None) -> str:
    if not data:
        return ""
    return base64.b64decode(data).decode("utf-8", errors="replace")


class Judge0Executor:
    """Executes one program per call via the Judge0 REST API.

    Submissions ask the server to block until the program finishes
    (``wait=true``), so there is no client-side polling. Nothing is retried.
    """

    def __init__(self, config: Judge0Config | None = None) -> None:
        self._config = config or Judge0Config()

    @property
    def config(self) -> Judge0Config:
        return self._config

    def _headers(self) -> dict[str, str]:
        headers: dict[str, str] = {"Content-Type": "application/json"}
        if self._config.api_key:
            if self._config.rapidapi_host:
                headers["X-RapidAPI-Key"] = self._config.api_key
                headers["X-RapidAPI-Host"] = self._config.rapidapi_host
            else:
                headers["X-Auth-Token"] = self._config.api_key
        return headers

    def execute(self, source_text: str, profile: LanguageProfile) -> ExecutionResult:
        payload = {
            "source_code": to_base64(source_text),
            "language_id": profile.id,
        }
        base = self._config.base_url.rstrip("/")

        try:
            resp = httpx.post(
                f"{base}/submissions?base64_encoded=true&wait=true",
                json=payload,
                headers=self._headers(),
                timeout=self._config.request_timeout,
            )
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            _log(f"Judge0 API error: {status} {e.response.text[:500]}")
            return ExecutionResult(
                stdout="", stderr="", exit_code=-1, error=f"Judge0 API error: {status}"
            )
        except httpx.TimeoutException:
            _log("Judge0 request timed out")
            return ExecutionResult(
                stdout="",
                stderr="",
                exit_code=-1,
                timed_out=True,
                error="Judge0 request timed out",
            )
        except Exception as e:
            _log(f"Judge0 request failed: {e}")
            return ExecutionResult(stdout="", stderr=str(e), exit_code=-1, error=str(e))

        try:
            return self.parse_response(data)
        except (ValueError, AttributeError, TypeError) as e:
            # binascii.Error and UnicodeDecodeError are ValueErrors
            _log(f"Malformed Judge0 response: {e}")
            return ExecutionResult(stdout="", stderr=str(e), exit_code=-1, error=str(e))

    def parse_response(self, data: dict) -> ExecutionResult:
        """Classify a Judge0 submission response (base64-encoded fields)."""
        status = data.get("status") or {}
        status_id = status.get("id", 0)
        description = status.get("description") or ""
        stdout = from_base64(data.get("stdout")).strip()
        stderr = from_base64(data.get("stderr")).strip()
        compile_output = from_base64(data.get("compile_output")).strip()

        if status_id == _STATUS_ACCEPTED:
            return ExecutionResult(stdout=stdout, stderr=stderr, exit_code=0, status_id=status_id)

        if status_id == _STATUS_TLE:
            return ExecutionResult(
                stdout=stdout,
                stderr=stderr,
                exit_code=-1,
                timed_out=True,
                status_id=status_id,
                error=TIME_LIMIT_MESSAGE,
            )

        if status_id == _STATUS_COMPILATION_ERROR:
            return ExecutionResult(
                stdout="",
                stderr=compile_output,
                exit_code=-1,
                status_id=status_id,
                error=compile_output or "Compilation error",
            )

        if status_id == _STATUS_RUNTIME_ERROR_NZEC:
            return ExecutionResult(
                stdout=stdout,
                stderr=stderr,
                exit_code=1,
                status_id=status_id,
                error=stderr or "Runtime error",
            )

        # Other runtime errors (7-10, 12), internal errors, or a server that did not wait
        return ExecutionResult(
            stdout=stdout,
            stderr=stderr,
            exit_code=1,
            status_id=status_id,
            error=description or stderr or "Execution error",
        )


def _log(message: str) -> None:
    print(message, file=sys.stderr)
