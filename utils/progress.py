from typing import Optional
import logging
from tqdm import tqdm
import time

class ProgressMonitor:
    def __init__(self, total: int, desc: str = "Classifying",
                 logger: Optional[logging.Logger] = None,
                 log_every: int = 50, disable: bool = False):
        """Progress bar over a batch of assets with periodic log lines"""
        self.logger = logger or logging.getLogger('progress')
        self.pbar = tqdm(total=total, desc=desc, disable=disable)
        self.total = total
        self.current = 0
        self.failed = 0
        self.log_every = log_every
        self.start_time = time.time()
        self.description = desc

    def update(self, n: int = 1, status: str = "", failed: bool = False):
        """Advance by n items; `failed` counts the items as errors"""
        self.current += n
        if failed:
            self.failed += n
        self.pbar.update(n)

        if status:
            self.logger.debug(f"{self.description}: {status}")

        if self.log_every and self.current % self.log_every == 0:
            elapsed = time.time() - self.start_time
            self.logger.info(
                f"Progress: {self.current}/{self.total} "
                f"({self.current / self.total * 100:.1f}%) - "
                f"{self.failed} failed - "
                f"Elapsed: {elapsed:.1f}s"
            )

    def close(self):
        """Close progress bar and log final counts"""
        self.pbar.close()
        total_time = time.time() - self.start_time
        self.logger.info(
            f"Completed {self.description}: {self.current - self.failed} ok, "
            f"{self.failed} failed in {total_time:.1f}s"
        )
