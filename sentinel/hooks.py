"""Project on-start hooks — shell commands run when a session begins."""

import asyncio
import logging
from typing import Optional

logger = logging.getLogger(__name__)


async def run_hook(command: str, cwd: Optional[str] = None) -> bool:
    """Run ``command`` through the shell and wait for it.

    Failures are logged and reported through the return value; they never
    raise, so a broken hook cannot undo a session that already started.

    Args:
        command: Shell command string (the project's ``onStart``).
        cwd: Working directory, usually the project's ``workingDir``.

    Returns:
        True if the command exited with status 0.
    """
    logger.debug("Running hook in %s: %s", cwd or ".", command)
    try:
        proc = await asyncio.create_subprocess_shell(
            command,
            cwd=cwd or None,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        stdout, stderr = await proc.communicate()
    except OSError as e:
        logger.warning("Hook failed to start (%s): %s", command, e)
        return False

    if proc.returncode != 0:
        logger.warning(
            "Hook exited with %d (%s): %s",
            proc.returncode, command, stderr.decode(errors="replace").strip(),
        )
        return False

    if stdout:
        logger.debug("Hook output: %s", stdout.decode(errors="replace").strip())
    return True
