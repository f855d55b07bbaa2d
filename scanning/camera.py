"""
Camera acquisition failures reported by the scanner page.

The browser hands us a DOMException name (or a library message); we turn it
into one of three named conditions with remediation text for the operator's
platform.
"""
import re

PERMISSION_DENIED = "permission_denied"
NO_CAMERA = "no_camera"
UNSUPPORTED_BROWSER = "unsupported_browser"

PLATFORM_IOS = "ios"
PLATFORM_ANDROID = "android"
PLATFORM_OTHER = "other"

ERROR_NAMES = {
    "notallowederror": PERMISSION_DENIED,
    "permissiondeniederror": PERMISSION_DENIED,
    "securityerror": PERMISSION_DENIED,
    "notfounderror": NO_CAMERA,
    "devicesnotfounderror": NO_CAMERA,
    "overconstrainederror": NO_CAMERA,
    "camera not found.": NO_CAMERA,
    "notsupportederror": UNSUPPORTED_BROWSER,
    "typeerror": UNSUPPORTED_BROWSER,
    "streamapinotsupportederror": UNSUPPORTED_BROWSER,
    "insecurecontext": UNSUPPORTED_BROWSER,
}

MESSAGES = {
    PERMISSION_DENIED: "Camera access was denied.",
    NO_CAMERA: "No camera was found on this device.",
    UNSUPPORTED_BROWSER: "This browser cannot open the camera.",
}

REMEDIATION = {
    (PERMISSION_DENIED, PLATFORM_IOS): (
        "Open Settings > Safari > Camera and choose Allow, "
        "then come back and tap retry."
    ),
    (PERMISSION_DENIED, PLATFORM_ANDROID): (
        "Tap the lock icon next to the address bar, open Permissions, "
        "allow Camera, then tap retry."
    ),
    (PERMISSION_DENIED, PLATFORM_OTHER): (
        "Allow camera access for this site in the browser's site settings, "
        "then tap retry."
    ),
    (NO_CAMERA, PLATFORM_IOS): "Close other apps using the camera and reload the page.",
    (NO_CAMERA, PLATFORM_ANDROID): "Close other apps using the camera and reload the page.",
    (NO_CAMERA, PLATFORM_OTHER): "Connect a camera, or use a phone to scan.",
    (UNSUPPORTED_BROWSER, PLATFORM_IOS): "Open this page in Safari over HTTPS.",
    (UNSUPPORTED_BROWSER, PLATFORM_ANDROID): "Open this page in Chrome over HTTPS.",
    (UNSUPPORTED_BROWSER, PLATFORM_OTHER): "Use a current Chrome, Firefox, Edge or Safari over HTTPS.",
}

_IOS_RE = re.compile(r"iPhone|iPad|iPod", re.IGNORECASE)
_ANDROID_RE = re.compile(r"Android", re.IGNORECASE)


def detect_platform(user_agent: str) -> str:
    user_agent = user_agent or ""
    if _IOS_RE.search(user_agent):
        return PLATFORM_IOS
    if _ANDROID_RE.search(user_agent):
        return PLATFORM_ANDROID
    return PLATFORM_OTHER


def classify(error_name: str) -> str:
    """Unknown errors are treated as an unsupported browser."""
    return ERROR_NAMES.get((error_name or "").strip().lower(), UNSUPPORTED_BROWSER)


def describe_camera_error(error_name: str, user_agent: str = "") -> dict:
    condition = classify(error_name)
    platform = detect_platform(user_agent)
    return {
        "condition": condition,
        "platform": platform,
        "message": MESSAGES[condition],
        "remediation": REMEDIATION[(condition, platform)],
        "can_retry": condition == PERMISSION_DENIED,
    }
