# error contract shared by the generation runner and the api layer
# lets the router tell a downstream failure apart from a caller mistake without inspecting messages

from typing import Awaitable, Callable


class ProviderError(Exception):
    pass


class ProviderUnavailable(ProviderError):
    """The generation process could not be started at all."""


class ProviderFailed(ProviderError):
    """The generation process ran but exited with a non-zero status."""

    def __init__(self, returncode: int, stderr: str) -> None:
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"Mini-ICEBURG process exited with code {returncode}: {stderr}")


class ProviderTimeout(ProviderError):
    """The generation process did not finish inside the timeout window and was killed."""

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__("Request timeout - Mini-ICEBURG took too long to respond")


# message -> raw stdout
GenerateFn = Callable[[str], Awaitable[str]]
