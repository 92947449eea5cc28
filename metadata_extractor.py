#!/usr/bin/env python3
"""
EXIF Metadata Extraction Module

Recovers the capture device and capture time from embedded EXIF data.
A file without usable metadata is an expected, frequent condition, so every
failure is reported as None rather than raised.
"""

import datetime
import logging
import pathlib
from dataclasses import dataclass
from typing import Optional

# Third-party imports
import exifread

logger = logging.getLogger("taxis")

EXIF_DATE_FORMAT = "%Y:%m:%d %H:%M:%S"
DEVICE_TAG = "Image Model"
CAPTURE_TIME_TAG = "EXIF DateTimeOriginal"


@dataclass(frozen=True)
class CaptureInfo:
    """Device identifier and capture time read from a file's EXIF block"""

    device_id: str
    capture_time: datetime.datetime


def clean_tag_value(tag) -> str:
    """Return a tag as text without surrounding whitespace or quotes"""
    return str(tag).strip().strip('"').strip()


class MetadataExtractor:
    """Reads device model and original capture time via exifread"""

    def __init__(self, device_tag: str = DEVICE_TAG, capture_time_tag: str = CAPTURE_TIME_TAG):
        self.device_tag = device_tag
        self.capture_time_tag = capture_time_tag

    def extract(self, file_path: pathlib.Path) -> Optional[CaptureInfo]:
        """Extract capture info, or None if the file lacks either tag

        Args:
            file_path: File to inspect

        Returns:
            CaptureInfo when both the device and capture time tags are present
            and the timestamp parses, otherwise None
        """
        tags = self._read_tags(file_path)
        if not tags:
            return None

        if self.device_tag not in tags or self.capture_time_tag not in tags:
            logger.debug("%s: EXIF lacks %s or %s", file_path, self.device_tag, self.capture_time_tag)
            return None

        device_id = clean_tag_value(tags[self.device_tag])
        if not device_id:
            logger.debug("%s: empty device tag", file_path)
            return None

        date_str = clean_tag_value(tags[self.capture_time_tag])
        try:
            capture_time = datetime.datetime.strptime(date_str, EXIF_DATE_FORMAT)
        except ValueError:
            logger.debug("%s: unparseable capture time %r", file_path, date_str)
            return None

        return CaptureInfo(device_id=device_id, capture_time=capture_time)

    def _read_tags(self, file_path: pathlib.Path) -> dict:
        """Decode the EXIF block, returning an empty dict on any failure"""
        try:
            with open(file_path, "rb") as f:
                return exifread.process_file(f, details=False)
        except OSError as e:
            logger.debug("%s: cannot open for EXIF: %s", file_path, e)
        except Exception as e:
            # exifread raises assorted errors on truncated or malformed blocks
            logger.debug("%s: EXIF decoding failed: %s", file_path, e)
        return {}
