import asyncio
import logging
from pathlib import Path

from miniice_proxy.providers.base import ProviderFailed, ProviderTimeout, ProviderUnavailable

logger = logging.getLogger(__name__)


def _decode(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


async def _kill(proc: asyncio.subprocess.Process) -> None:
    if proc.returncode is not None:
        return
    try:
        proc.kill()
    except ProcessLookupError:
        return
    # reap it; the exit status of a killed child is not reported
    await proc.wait()


async def generate(message: str, *, python: str, script: str, timeout: float) -> str:
    """
    Run `python script message` and return everything it wrote to stdout.

    Exactly one of these happens per call:
    - exit 0 inside the window -> stdout (untrimmed)
    - non-zero exit            -> ProviderFailed(returncode, stderr)
    - spawn failure            -> ProviderUnavailable
    - window elapses           -> child killed, ProviderTimeout; partial output dropped
    """
    if not Path(script).is_file():
        raise ProviderUnavailable(f"Failed to start Mini-ICEBURG process: script not found: {script}")

    try:
        proc = await asyncio.create_subprocess_exec(
            python,
            script,
            message,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except (OSError, ValueError) as e:
        # ValueError: NUL byte or unencodable character in argv
        raise ProviderUnavailable(f"Failed to start Mini-ICEBURG process: {e}") from e

    logger.debug("spawned pid=%s script=%s", proc.pid, script)
    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        await _kill(proc)
        logger.warning("pid=%s killed after %.1fs timeout", proc.pid, timeout)
        raise ProviderTimeout(timeout) from None
    finally:
        # covers cancellation of the awaiting task as well
        if proc.returncode is None:
            await _kill(proc)

    logger.debug("pid=%s exited with code %s", proc.pid, proc.returncode)
    if proc.returncode != 0:
        raise ProviderFailed(proc.returncode, _decode(stderr))
    return _decode(stdout)
