"""AppService: shared foundation for the application services.

Every service receives its logger at construction time, so failures built
with ``self._fail_if`` are logged through the injected logger instead of a
process-wide one.
"""
from __future__ import annotations

import structlog

from teamboard.domain.common.result import Result


class AppService:

    def __init__(self, logger=None) -> None:
        self._log = logger if logger is not None else structlog.get_logger(f"teamboard.{type(self).__name__}")

    def _fail_if(self, predicate: bool, *args, **kwargs) -> Result[None]:
        return Result.fail_if(predicate, *args, logger=self._log, **kwargs)
