"""
orchestration.py - Worker orchestration logic for the multiprocessing runner.
"""

import os
import sys
import logging
import traceback
from pathlib import Path
from typing import Optional, Tuple, Union

from ..logging_utils import configure_logging
from .config import BatchConfig
from .worker import PatternWorker

PathLike = Union[str, Path]
LOGGER_NAME = "lowpoly"
_worker: Optional[PatternWorker] = None

_init_error: Optional[Exception] = None
_init_error_traceback: Optional[str] = None

JobResult = Tuple[Optional[Path], Optional[str], Optional[Exception]]


def worker_init(config: BatchConfig, configure_logs: bool = True) -> None:
    """Initializer for multiprocessing.Pool workers (per process)."""
    global _worker, _init_error, _init_error_traceback
    try:
        pid = os.getpid()
        if configure_logs:
            configure_logging(
                level=config.logger_level,
                log_dir=config.log_dir,
                name=LOGGER_NAME,
                run_prefix=f"worker_{pid}",
            )
        logger = logging.getLogger(LOGGER_NAME)
        logger.debug(f"BatchConfig: {config!r}")
        _worker = PatternWorker(config)
        _init_error = None
        logger.info(f"[worker_init] Worker PID={pid} initialized OK")
    except Exception as e:
        _init_error = e
        _init_error_traceback = traceback.format_exc()
        # stderr in case logging itself failed
        print(f"[worker_init][PID={os.getpid()}] FATAL: {e}\n{_init_error_traceback}",
              file=sys.stderr, flush=True)


def main_worker(job: Tuple[int, PathLike]) -> JobResult:
    """Execute one generation job and return (path, meta_json, error)."""
    logger = logging.getLogger(LOGGER_NAME)
    if _init_error is not None:
        logger.error(f"Worker-{os.getpid()} initialization error in worker_init().")
        logger.error(f"Error: {_init_error}. Traceback:\n{_init_error_traceback}")
        raise _init_error

    index, output_path = job
    try:
        out, meta = _worker.run(index, output_path)
        return out, meta, None
    except Exception as e:
        logger.error(f"Failed to generate {output_path}: {e}")
        return None, None, e
