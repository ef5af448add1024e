"""Port-forward and exec sessions through AWS Systems Manager.

Each session resolves a task to a live container, then runs one or more
``aws ssm start-session`` child processes against the target
``ecs:<cluster>_<task>_<runtime id>``.

Port forwarding runs one child per port mapping and stops them all when the
operator interrupts. Exec runs a single interactive child and ignores
interrupts while it is attached: the session must be left from inside the
remote shell (CTRL-D), otherwise the remote session is leaked.
"""

import asyncio
import json
import logging
import signal
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from types import TracebackType
from typing import Any

from ecsctl.core.inspection import FirstRunning, NamedContainer, TaskInspector
from ecsctl.errors import InvalidArgument, SubprocessSpawnFailed, SubprocessWaitFailed

logger = logging.getLogger(__name__)

PORT_FORWARD_DOCUMENT = "AWS-StartPortForwardingSessionToRemoteHost"
DETACH_HINT = "\nExit session using CTRL-D"

_NOT_INSTALLED = object()

Spawner = Callable[..., Awaitable[Any]]
Reporter = Callable[[str], None]


@dataclass(frozen=True)
class PortMapping:
    """A local port forwarded to a port inside the container."""

    local_port: str
    remote_port: str


def parse_port_mapping(value: str) -> PortMapping:
    """Parse a ``LOCAL:REMOTE`` port mapping.

    Ports are kept as given; numeric validation is left to the session plugin.

    Raises:
        InvalidArgument: When either side is missing.
    """
    local_port, sep, remote_port = value.partition(":")
    if not sep or not local_port or not remote_port:
        raise InvalidArgument(f"Invalid port mapping '{value}'. Use LOCAL:REMOTE, e.g. 8080:80.")
    return PortMapping(local_port=local_port, remote_port=remote_port)


def session_target(cluster: str, task: str, runtime_id: str) -> str:
    """Return the Session Manager target for a container."""
    return f"ecs:{cluster}_{task}_{runtime_id}"


def port_forward_parameters(mapping: PortMapping) -> str:
    """Return the ``--parameters`` JSON for the port forwarding document."""
    return json.dumps(
        {"portNumber": [mapping.remote_port], "localPortNumber": [mapping.local_port]},
        separators=(",", ":"),
    )


@dataclass(frozen=True)
class SessionCommand:
    """Builds ``aws ssm start-session`` command lines."""

    aws_cli: str = "aws"
    region: str | None = None
    profile: str | None = None
    port_forward_document: str = PORT_FORWARD_DOCUMENT

    def port_forward(self, target: str, mapping: PortMapping) -> list[str]:
        return [
            *self._start_session(target),
            "--document-name",
            self.port_forward_document,
            "--parameters",
            port_forward_parameters(mapping),
        ]

    def interactive(self, target: str) -> list[str]:
        return self._start_session(target)

    def _start_session(self, target: str) -> list[str]:
        command = [self.aws_cli]
        if self.region:
            command.extend(["--region", self.region])
        if self.profile:
            command.extend(["--profile", self.profile])
        command.extend(["ssm", "start-session", "--target", target])
        return command


async def spawn_process(*args: str) -> asyncio.subprocess.Process:
    """Start a child that inherits the terminal."""
    return await asyncio.create_subprocess_exec(*args)  # nosec B603


class InterruptSignal:
    """Delivers SIGINT to the event loop as an ``asyncio.Event``.

    While active, SIGINT no longer raises ``KeyboardInterrupt``.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._previous_handler: Any = _NOT_INSTALLED

    def __enter__(self) -> "InterruptSignal":
        self._loop = asyncio.get_running_loop()
        try:
            self._loop.add_signal_handler(signal.SIGINT, self.trigger)
        except NotImplementedError:
            # Windows event loops have no signal handler support.
            loop = self._loop
            self._previous_handler = signal.signal(
                signal.SIGINT, lambda *_: loop.call_soon_threadsafe(self.trigger)
            )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._previous_handler is not _NOT_INSTALLED:
            # None means the previous handler was not set from Python.
            previous = self._previous_handler
            if previous is None:
                previous = signal.default_int_handler
            signal.signal(signal.SIGINT, previous)
            self._previous_handler = _NOT_INSTALLED
        elif self._loop is not None:
            self._loop.remove_signal_handler(signal.SIGINT)
        self._loop = None

    def trigger(self) -> None:
        self._event.set()

    def clear(self) -> None:
        self._event.clear()

    def is_set(self) -> bool:
        return self._event.is_set()

    async def wait(self) -> None:
        await self._event.wait()


class ChildProcessGroup:
    """Owns spawned session processes and stops them when the block exits.

    Cleanup runs on every exit path. Children that already exited are left
    alone.
    """

    def __init__(self, spawner: Spawner = spawn_process) -> None:
        self._spawner = spawner
        self._children: list[Any] = []

    def __len__(self) -> int:
        return len(self._children)

    async def __aenter__(self) -> "ChildProcessGroup":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        errors = await self.terminate_all()
        if errors and exc_type is None:
            error = errors[0]
            raise SubprocessWaitFailed(f"Failed to stop session process: {error}") from error

    async def spawn(self, command: Sequence[str]) -> Any:
        """Start a child process and take ownership of it.

        Raises:
            SubprocessSpawnFailed: When the process cannot be started.
        """
        logger.debug("Spawning: %s", " ".join(command))
        try:
            process = await self._spawner(*command)
        except FileNotFoundError as exc:
            raise SubprocessSpawnFailed(
                f"'{command[0]}' not found. Install the AWS CLI and the Session Manager plugin."
            ) from exc
        except OSError as exc:
            raise SubprocessSpawnFailed(f"Failed to start '{command[0]}': {exc}") from exc

        self._children.append(process)
        return process

    async def terminate_all(self) -> list[BaseException]:
        """Terminate every owned child and wait for all of them.

        Returns:
            Errors raised while stopping children.
        """
        children, self._children = self._children, []
        results = await asyncio.gather(
            *(_terminate(child) for child in children), return_exceptions=True
        )
        errors = [item for item in results if isinstance(item, BaseException)]
        for error in errors:
            logger.warning("Failed to stop session process: %s", error)
        return errors


async def _terminate(process: Any) -> None:
    if process.returncode is None:
        try:
            process.terminate()
        except ProcessLookupError:
            pass
    returncode = await process.wait()
    logger.debug("Session process %s stopped with %s", getattr(process, "pid", "?"), returncode)


class SessionOrchestrator:
    """Runs port-forward and exec sessions against ECS containers."""

    def __init__(
        self,
        inspector: TaskInspector,
        command: SessionCommand | None = None,
        spawner: Spawner = spawn_process,
        reporter: Reporter = print,
        interrupt_factory: Callable[[], InterruptSignal] = InterruptSignal,
    ) -> None:
        self._inspector = inspector
        self._command = command or SessionCommand()
        self._spawner = spawner
        self._reporter = reporter
        self._interrupt_factory = interrupt_factory

    async def port_forward(self, cluster: str, task: str, ports: Sequence[str]) -> None:
        """Forward local ports to the first running container of a task.

        Blocks until the operator interrupts, then stops every tunnel.

        Args:
            cluster: Cluster name.
            task: Task id.
            ports: ``LOCAL:REMOTE`` mappings, one tunnel each.

        Raises:
            InvalidArgument: When no port is given or a mapping is malformed.
            SubprocessSpawnFailed: When a tunnel cannot be started.
        """
        if not ports:
            raise InvalidArgument("no port specified")
        mappings = [parse_port_mapping(port) for port in ports]

        container = await asyncio.to_thread(
            self._inspector.resolve_running_container, cluster, task, FirstRunning()
        )
        target = session_target(cluster, task, str(container.runtime_id))
        self._reporter(f"Forwarding to {target}")

        with self._interrupt_factory() as interrupt:
            async with ChildProcessGroup(self._spawner) as group:
                for mapping in mappings:
                    await group.spawn(self._command.port_forward(target, mapping))
                    logger.info(
                        "Tunnel localhost:%s -> %s:%s",
                        mapping.local_port,
                        container.name,
                        mapping.remote_port,
                    )
                await interrupt.wait()
                self._reporter("Shutting down")

    async def exec(self, cluster: str, task: str, container_name: str) -> int:
        """Open an interactive session in a named container.

        Interrupts while attached only print a reminder; the command returns
        when the session process exits.

        Args:
            cluster: Cluster name.
            task: Task id.
            container_name: Exact container name.

        Returns:
            The exit code of the session process.

        Raises:
            ContainerNotFound: When the task has no container with that name.
            MissingRuntimeId: When the container has no runtime id.
            SubprocessSpawnFailed: When the session cannot be started.
            SubprocessWaitFailed: When waiting on the session fails.
        """
        container = await asyncio.to_thread(
            self._inspector.resolve_running_container,
            cluster,
            task,
            NamedContainer(container_name),
        )
        target = session_target(cluster, task, str(container.runtime_id))
        self._reporter(f"Exec target: {target}")

        with self._interrupt_factory() as interrupt:
            async with ChildProcessGroup(self._spawner) as group:
                process = await group.spawn(self._command.interactive(target))
                returncode = await self._wait_attached(process, interrupt)

        self._reporter("Session finished")
        return returncode

    async def _wait_attached(self, process: Any, interrupt: InterruptSignal) -> int:
        exited = asyncio.ensure_future(process.wait())
        signalled: asyncio.Future[None] | None = None
        try:
            while True:
                signalled = asyncio.ensure_future(interrupt.wait())
                done, _ = await asyncio.wait(
                    {exited, signalled}, return_when=asyncio.FIRST_COMPLETED
                )
                if exited in done:
                    break
                interrupt.clear()
                self._reporter(DETACH_HINT)
        finally:
            if signalled is not None and not signalled.done():
                signalled.cancel()
            if not exited.done():
                exited.cancel()

        try:
            return int(exited.result())
        except OSError as exc:
            raise SubprocessWaitFailed(f"Failed waiting for session process: {exc}") from exc
