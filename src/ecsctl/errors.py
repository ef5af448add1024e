"""Error types raised by ecsctl."""


class EcsctlError(RuntimeError):
    """Base class for errors surfaced to the operator."""


class ConfigError(EcsctlError):
    """Configuration related errors."""


class RemoteCallFailed(EcsctlError):
    """An ECS API call failed."""


class NotFound(EcsctlError):
    """No task or cluster matched the request."""


class ContainerNotFound(EcsctlError):
    """No container in the task has the requested name."""


class NoRunningContainer(EcsctlError):
    """Every container in the task has already exited."""


class MissingRuntimeId(EcsctlError):
    """The container has no runtime id, so no session target can be built."""


class InvalidArgument(EcsctlError):
    """A command line argument was missing or malformed."""


class SubprocessSpawnFailed(EcsctlError):
    """A session tunnel process could not be started."""


class SubprocessWaitFailed(EcsctlError):
    """Waiting on a session tunnel process failed."""
