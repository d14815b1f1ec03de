"""
main.py - Entry point for batch pattern generation.

    python -m lowpoly.runner.main --count 20 --width 1920 --height 1080 --out ./out
"""

import os
import json
import time
import argparse
import logging
import multiprocessing as mp
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from ..logging_utils import configure_logging
from .config import BatchConfig
from .orchestration import main_worker, worker_init

LOGGER_NAME = "lowpoly"
MAX_FAILURES = 5


def _default_processes() -> int:
    total_cores = os.cpu_count() or 1
    return max(1, int(total_cores * 0.75))


def run_batch(config: BatchConfig, batch_size: int = 10,
              processes: Optional[int] = None) -> Dict[str, Any]:
    """
    Generate `batch_size` patterns into `config.output_dir`.

    With `processes == 1` jobs run in the calling process; otherwise a
    `multiprocessing.Pool` is used. A `batch_<ts>.json` manifest maps every
    written file to its metadata.

    Returns:
        The manifest dictionary.

    Raises:
        RuntimeError: MAX_FAILURES jobs failed, or every job failed.
    """
    logger = logging.getLogger(LOGGER_NAME)
    processes = processes or _default_processes()
    jobs = [(i, config.output_dir / f"pattern_{i:06d}.svg") for i in range(batch_size)]
    results_meta: Dict[str, Any] = {}
    errors: List[Exception] = []

    def collect(result) -> None:
        path, meta, err = result
        if err is not None:
            errors.append(err)
            if len(errors) >= MAX_FAILURES:
                raise RuntimeError(f"Too many worker failures ({len(errors)}); last: {err}") from err
            return
        results_meta[str(path)] = json.loads(meta)

    logger.info(f"Using {processes} workers for {batch_size} patterns...")
    if processes == 1:
        worker_init(config, configure_logs=False)
        for job in jobs:
            collect(main_worker(job))
    else:
        with mp.Pool(processes=processes, initializer=worker_init,
                     initargs=(config,)) as pool:
            try:
                for result in pool.imap_unordered(main_worker, jobs, chunksize=4):
                    collect(result)
            except RuntimeError:
                pool.terminate()
                raise

    if errors and not results_meta:
        raise RuntimeError(f"All {len(errors)} jobs failed; last: {errors[-1]}") from errors[-1]

    ts = time.strftime("%Y%m%d_%H%M%S")
    batch_file = config.output_dir / f"batch_{ts}.json"
    with open(batch_file, "w", encoding="utf-8") as f:
        json.dump(results_meta, f, indent=2, ensure_ascii=False)
    logger.info(f"{len(results_meta)} patterns written, {len(errors)} failed; "
                f"manifest {batch_file}")
    return results_meta


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate triangle-mesh SVG backgrounds.")
    parser.add_argument("--count", type=int, default=10, help="number of patterns")
    parser.add_argument("--width", type=int, default=1920)
    parser.add_argument("--height", type=int, default=1080)
    parser.add_argument("--out", type=Path, default=Path("./out"), help="output directory")
    parser.add_argument("--seed", type=int, default=None, help="base seed for reproducible runs")
    parser.add_argument("--cell-size", type=float, default=None)
    parser.add_argument("--noise", type=float, default=None, help="noise overlay intensity")
    parser.add_argument("--processes", type=int, default=None)
    parser.add_argument("--log-dir", type=Path, default=Path("./logs"))
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Run batch generation from the command line."""
    args = _parse_args(argv)
    options = {"cell_size": args.cell_size, "noise_intensity": args.noise}
    config = BatchConfig(
        logger_level=logging.DEBUG if args.verbose else logging.INFO,
        img_size=(args.width, args.height),
        output_dir=args.out,
        log_dir=args.log_dir,
        seed=args.seed,
        pattern_options={k: v for k, v in options.items() if v is not None},
    )

    main_process = mp.current_process()
    log_path = configure_logging(
        level=config.logger_level,
        log_dir=config.log_dir,
        name=LOGGER_NAME,
        run_prefix=f"main_{main_process.pid}",
    )
    logger = logging.getLogger(LOGGER_NAME)
    logger.info(f"BatchConfig: {asdict(config)}")
    logger.info(f"Logs written to: {log_path}")

    try:
        run_batch(config, batch_size=args.count, processes=args.processes)
    except Exception as e:
        logger.critical(f"Run aborted due to fatal error: {e}")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
