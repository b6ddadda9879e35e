"""Parse and normalize toast file contents into a canonical payload."""

import json
import logging
from typing import Any, Dict, Optional

from ..core.errors import ParseError, ValidationError
from ..core.toast import ToastKind, ToastOption, ToastPayload

logger = logging.getLogger(__name__)

DEFAULT_OK_LABEL = "OK"
DEVICE_FLOW_OK_LABEL = "Copy code and open"
COPY_LABEL = "Copy to clipboard"

# Normalized key spellings of the device authorization payload
DEVICE_CODE_KEYS = ("usercode",)
DEVICE_URL_KEYS = ("verificationurl", "verificationuri")
DEVICE_MESSAGE_KEYS = ("message",)


def parse_toast(raw: bytes) -> ToastPayload:
    """
    Turn raw toast file bytes into a payload.

    Well-formed JSON objects are read against the canonical schema, device
    authorization payloads are projected onto it, JSON without a message is
    shown as a pretty-printed dump and plain text becomes an information
    toast carrying the text itself.

    Args:
        raw: File contents.

    Returns:
        Normalized payload with a non-empty message.

    Raises:
        ParseError: The contents are empty or nested too deeply to decode.
        ValidationError: The toast declares an unrecognized type.
    """
    text = raw.decode("utf-8-sig", errors="replace")

    try:
        data = json.loads(text)
    except RecursionError:
        raise ParseError("Toast JSON is nested too deeply")
    except ValueError:
        stripped = text.strip()
        if not stripped:
            raise ParseError("Toast file is empty")
        logger.debug("Toast is not JSON, showing raw text")
        return ToastPayload(message=stripped, raw_text=stripped)

    if not isinstance(data, dict):
        if isinstance(data, str) and data.strip():
            return ToastPayload(message=data.strip())
        return ToastPayload(message=_dump(data))

    device_flow = _project_device_flow(data)
    if device_flow is not None:
        return device_flow

    return _normalize(data)


def parse_kind(value: Any) -> ToastKind:
    """Map a ``type`` field to a kind; missing means information."""
    if value is None or value == "":
        return ToastKind.INFORMATION
    try:
        return ToastKind(str(value).strip().lower())
    except ValueError:
        raise ValidationError(f"Invalid toast type: {value!r}")


def _normalize(data: Dict[str, Any]) -> ToastPayload:
    kind = parse_kind(data.get("type"))

    message = _text(data.get("message"))
    if not message:
        message = _dump(data)

    primary = ToastOption(
        label=_text(data.get("ok")) or DEFAULT_OK_LABEL,
        navigate_url=_text(data.get("okUrl")),
        clipboard_text=_text(data.get("okClipboard")),
    )

    secondary = None
    url = _text(data.get("url"))
    url_clipboard = _text(data.get("urlClipboard"))
    if url or url_clipboard:
        secondary = ToastOption(
            label=_text(data.get("urlDisplayName")) or url or COPY_LABEL,
            navigate_url=url,
            clipboard_text=url_clipboard,
        )

    return ToastPayload(
        message=message,
        kind=kind,
        primary_option=primary,
        secondary_option=secondary,
        redact_on_archive=data.get("burnAfterReading") is True,
    )


def _project_device_flow(data: Dict[str, Any]) -> Optional[ToastPayload]:
    """Project a device authorization payload, or return None if it is not one."""
    fields = {_key(k): v for k, v in data.items()}
    code = _first(fields, DEVICE_CODE_KEYS)
    url = _first(fields, DEVICE_URL_KEYS)
    message = _first(fields, DEVICE_MESSAGE_KEYS)
    if not (code and url and message):
        return None

    logger.debug("Toast is a device authorization payload")
    return ToastPayload(
        message=f"{message}\n\nYour code: {code}",
        kind=ToastKind.INFORMATION,
        primary_option=ToastOption(
            label=DEVICE_FLOW_OK_LABEL,
            navigate_url=url,
            clipboard_text=code,
        ),
        redact_on_archive=True,
    )


def _key(name: str) -> str:
    return name.replace("_", "").replace("-", "").lower()


def _first(fields: Dict[str, Any], keys) -> Optional[str]:
    for key in keys:
        value = _text(fields.get(key))
        if value:
            return value
    return None


def _text(value: Any) -> Optional[str]:
    """String form of a scalar field; None for missing/empty/structured values."""
    if value is None or isinstance(value, (dict, list)):
        return None
    text = str(value).strip()
    return text or None


def _dump(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)
