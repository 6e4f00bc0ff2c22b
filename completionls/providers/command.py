"""
Completion provider backed by an external command.

The command receives one AutoCompleteRequest as JSON on stdin and must print
the candidates as a JSON array on stdout (an object with a "completions"
array is accepted too). Each candidate uses the backend's auto-complete
field names: CompletionText, DisplayText, ReturnType, Description, Kind,
Snippet.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Sequence
from pathlib import Path

from completionls.completion.models import AutoCompleteRequest, AutoCompleteResponse
from completionls.providers.base import CompletionProvider

logger = logging.getLogger(__name__)


class CompletionBackendError(RuntimeError):
    """The completion backend failed to answer a request."""


class CommandCompletionProvider(CompletionProvider):
    """Runs a backend command once per completion request."""

    def __init__(
        self,
        name: str,
        command: Sequence[str],
        position_base: int = 0,
        timeout: float = 10.0,
        working_dir: Path | None = None,
    ) -> None:
        """
        Initialize the provider.

        Args:
            name: Provider name, used in log messages
            command: Executable and arguments
            position_base: Index base of backend line/column coordinates
            timeout: Seconds to wait for the backend before failing
            working_dir: Working directory for the command (workspace root)
        """
        if not command:
            raise ValueError(f"Provider '{name}' has an empty command")

        self._name = name
        self.command = list(command)
        self.position_base = position_base
        self.timeout = timeout
        self.working_dir = working_dir

    @property
    def name(self) -> str:
        return self._name

    async def auto_complete(
        self, request: AutoCompleteRequest
    ) -> Sequence[AutoCompleteResponse]:
        stdout = await self._run(json.dumps(request.to_dict()).encode())
        return self._parse_output(stdout)

    async def _run(self, payload: bytes) -> bytes:
        """Execute the backend command and return its stdout."""
        try:
            process = await asyncio.create_subprocess_exec(
                *self.command,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=str(self.working_dir) if self.working_dir else None,
            )
        except OSError as e:
            raise CompletionBackendError(
                f"Cannot start completion backend '{self.name}': {e}"
            ) from e

        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(input=payload), timeout=self.timeout
            )
        except asyncio.TimeoutError as e:
            await self._kill(process)
            raise CompletionBackendError(
                f"Completion backend '{self.name}' timed out after {self.timeout}s"
            ) from e
        except asyncio.CancelledError:
            # Reap the child even if this task is cancelled again meanwhile
            await asyncio.shield(self._kill(process))
            raise

        if process.returncode != 0:
            message = stderr.decode(errors="replace").strip()
            raise CompletionBackendError(
                f"Completion backend '{self.name}' exited with "
                f"{process.returncode}: {message}"
            )

        return stdout

    async def _kill(self, process: asyncio.subprocess.Process) -> None:
        """Kill the backend and wait for it to exit."""
        if process.returncode is None:
            logger.debug("Killing completion backend '%s'", self.name)
            try:
                process.kill()
            except ProcessLookupError:
                # Exited between the check and the signal
                pass
        await process.wait()

    def _parse_output(self, output: bytes) -> list[AutoCompleteResponse]:
        """Parse the backend's JSON output into candidates."""
        text = output.decode(errors="replace").strip()
        if not text:
            return []

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise CompletionBackendError(
                f"Completion backend '{self.name}' returned invalid JSON: {e}"
            ) from e

        if isinstance(data, dict):
            data = data.get("completions") or data.get("Completions") or []

        if not isinstance(data, list):
            raise CompletionBackendError(
                f"Completion backend '{self.name}' returned "
                f"{type(data).__name__}, expected a list"
            )

        return [
            AutoCompleteResponse.from_dict(entry)
            for entry in data
            if isinstance(entry, dict)
        ]
