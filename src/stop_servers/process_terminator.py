"""Send a kill signal to a single process."""

import logging

import psutil

logger = logging.getLogger(__name__)


def terminate_process(pid: int) -> bool:
    """
    Force kill the process with the given pid (SIGKILL on POSIX).

    Does not wait for the process to exit.

    Returns:
        True if the signal was delivered, False if the process was already gone
        or could not be signalled.
    """
    try:
        psutil.Process(pid).kill()
    except psutil.NoSuchProcess:  # policy_guard: allow-silent-handler
        logger.debug("Process %s exited before it could be killed", pid)
        return False
    except psutil.AccessDenied:  # policy_guard: allow-silent-handler
        logger.debug("Access denied while killing process %s", pid)
        return False
    except (psutil.Error, OSError) as exc:  # policy_guard: allow-silent-handler
        logger.debug("Failed to kill process %s: %s", pid, exc)
        return False
    return True


__all__ = ["terminate_process"]
