"""
Response framing: one comma separated record of key=value tokens
"""

import csv
import io
import logging
from typing import Dict, Union

from ..const import RETURN_OK
from ..errors import DeviceError, FrameError

logger = logging.getLogger(__name__)


def parse_response(body: Union[bytes, str]) -> Dict[str, str]:
    """
    Parse a response body such as ``ret=OK,pow=1,mode=3`` into a dict.

    Values may contain "=", only the first one in a token separates key and
    value. Raises FrameError unless the body holds exactly one record and
    DeviceError when a ``ret`` key carries anything but OK. Text after the
    closing quote of a quoted field is a FrameError; a quote inside an
    unquoted field is kept as a literal character.
    """
    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise FrameError(f"response is not valid text: {e}") from None

    try:
        rows = [row for row in csv.reader(io.StringIO(body), strict=True) if row]
    except csv.Error as e:
        raise FrameError(f"malformed response: {e}") from None

    if len(rows) != 1:
        logger.debug(f"Have {len(rows)} rows of records, want just one: {body!r}")
        raise FrameError("expected exactly one record")

    values = {}
    for token in rows[0]:
        if not token:
            continue
        key, sep, value = token.partition("=")
        if not sep:
            raise FrameError(f"token without '=': {token!r}")
        values[key] = value

    ret = values.get("ret")
    if ret is not None and ret != RETURN_OK:
        raise DeviceError(ret)
    return values


def encode_fields(fields: Dict[str, str]) -> str:
    """Render fields the way the unit frames them, for fixtures and logs"""
    return ",".join(f"{key}={value}" for key, value in fields.items())
