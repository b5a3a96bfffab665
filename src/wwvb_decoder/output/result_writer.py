"""
Result Writer for the WWVB decoder

Writes a DecodeResult as JSON for consumption by other applications
(loggers, clock setters, dashboards).

The file is updated atomically (write to temp, rename) to prevent partial
reads.

Usage:
    writer = ResultWriter('/var/lib/wwvb/last_decode.json')
    writer.write(result)
"""

import json
import os
import tempfile
import logging
from pathlib import Path
from typing import Optional, Union

from ..interfaces.decode_result import DecodeResult

logger = logging.getLogger(__name__)


class ResultWriter:
    """
    Writes DecodeResult to a JSON file.

    Updates are atomic (write to temp file, then rename).
    """

    def __init__(self, path: Union[str, Path]):
        """
        Initialize result writer.

        Args:
            path: Destination JSON file
        """
        self.path = Path(path)
        self.write_count = 0

        logger.debug(f"ResultWriter initialized: {self.path}")

    def write(self, result: DecodeResult) -> bool:
        """
        Write a decode result.

        Uses atomic write (temp file + rename) to prevent partial reads.

        Returns:
            True if successful, False on error
        """
        try:
            json_data = result.to_json()
            self.path.parent.mkdir(parents=True, exist_ok=True)

            # Temp file in same directory (required for atomic rename)
            fd, temp_path = tempfile.mkstemp(
                dir=self.path.parent,
                prefix='.wwvb_result_',
                suffix='.tmp'
            )

            try:
                with os.fdopen(fd, 'w') as f:
                    f.write(json_data)

                os.replace(temp_path, self.path)
                self.write_count += 1

                logger.info(
                    f"Wrote result to {self.path}: {result.summary_time}, "
                    f"{result.reliability.value}"
                )
                return True

            except Exception:
                if os.path.exists(temp_path):
                    os.unlink(temp_path)
                raise

        except OSError as e:
            logger.error(f"Failed to write result to {self.path}: {e}")
            return False

    def read(self) -> Optional[DecodeResult]:
        """
        Read the last written result.

        Returns:
            DecodeResult or None if the file doesn't exist or is invalid
        """
        try:
            if not self.path.exists():
                return None

            with open(self.path, 'r') as f:
                json_data = f.read()

            return DecodeResult.from_json(json_data)

        except json.JSONDecodeError as e:
            logger.warning(f"Invalid JSON in {self.path}: {e}")
            return None
        except OSError as e:
            logger.warning(f"Failed to read {self.path}: {e}")
            return None
