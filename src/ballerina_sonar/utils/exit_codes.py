"""Process exit codes of ``python -m ballerina_sonar``.

Code  Meaning
----  -------
  0   ``rules`` / ``profile`` printed; ``issues`` / ``scan`` found nothing
  1   ``issues`` / ``scan`` report holds at least one issue
  2   No subcommand, report file missing, ``bal scan`` exited non-zero,
      or the rule catalog could be neither generated nor read from cache
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    ISSUES_FOUND = 1
    ERROR = 2
