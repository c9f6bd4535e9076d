from __future__ import annotations

import asyncio
import logging

import psutil

logger = logging.getLogger(__name__)


def terminate_process(pid: int) -> bool:
    """Kill the process tree rooted at ``pid`` and wait until it is gone.

    Children are collected before the parent is killed so that a shell's
    grandchildren do not outlive it. Returns False when the OS refused; a
    process that already exited counts as terminated. There is no timeout.
    """
    try:
        parent = psutil.Process(pid)
        procs = parent.children(recursive=True)
    except psutil.NoSuchProcess:
        return True
    except psutil.Error as exc:
        logger.error("cannot inspect process %s: %s", pid, exc)
        return False
    procs.append(parent)

    ok = True
    killed: list[psutil.Process] = []
    for proc in procs:
        try:
            proc.kill()
        except psutil.NoSuchProcess:
            continue
        except psutil.Error as exc:
            logger.error("failed to kill process %s: %s", proc.pid, exc)
            ok = False
        else:
            killed.append(proc)
    # Only wait on what was actually signalled, a refused kill would never exit
    psutil.wait_procs(killed)
    logger.debug("terminated process tree of %s (%d processes)", pid, len(procs))
    return ok


async def terminate_process_async(pid: int) -> bool:
    return await asyncio.to_thread(terminate_process, pid)
