"""
QR identity payloads.

Two encodings are accepted by the scanner:

* plain: ``"<userId>-<displayName>"``, used on printed cards. Only the part
  before the first hyphen is read back, which is safe because user ids are
  integers. Names may contain hyphens.
* json: ``{"id": ..., "name": ..., "email": ...}``. Scanned JSON objects may
  also carry ``studentId`` or ``uid`` instead of ``id``.

Symbol-level encoding and decoding is left to the ``qrcode`` library on the
server and the camera scanner on the client.
"""
import json
from dataclasses import dataclass
from io import BytesIO
from typing import Optional

import qrcode
from django.conf import settings
from django.contrib.auth import get_user_model
from django.db.models import Q
from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError

from core.constants import ROLE_STUDENT

User = get_user_model()

SEPARATOR = "-"
PAYLOAD_PLAIN = "plain"
PAYLOAD_JSON = "json"

# Field preference when a scanned payload is a JSON object
JSON_ID_FIELDS = ("studentId", "id", "uid")


class InvalidPayload(ValidationError):
    default_detail = "Unreadable QR code."
    default_code = "invalid_qr"


class StudentNotFound(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Student not found"
    default_code = "student_not_found"


@dataclass(frozen=True)
class ScanKey:
    """What a scanned payload tells us about who to look up."""
    identifier: Optional[str] = None
    email: Optional[str] = None
    source: str = PAYLOAD_PLAIN


def encode_identity(user_id, name) -> str:
    return f"{user_id}{SEPARATOR}{name}"


def encode_identity_json(user_id, name, email=None) -> str:
    payload = {"id": str(user_id), "name": name}
    if email:
        payload["email"] = email
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


def identity_payload_for(user) -> str:
    if getattr(settings, "QR_PAYLOAD_FORMAT", PAYLOAD_PLAIN) == PAYLOAD_JSON:
        return encode_identity_json(user.pk, user.display_name, user.email or None)
    return encode_identity(user.pk, user.display_name)


def decode_payload(raw) -> ScanKey:
    text = (raw or "").strip()
    if not text:
        raise InvalidPayload()

    structured = _parse_json_object(text)
    if structured is not None:
        identifier = next(
            (str(structured[name]).strip() for name in JSON_ID_FIELDS
             if str(structured.get(name) or "").strip()),
            None,
        )
        email = str(structured.get("email") or "").strip() or None
        if identifier is None and email is None:
            raise InvalidPayload("QR code has no student identifier.")
        return ScanKey(identifier=identifier, email=email, source=PAYLOAD_JSON)

    identifier = text.split(SEPARATOR, 1)[0].strip()
    if not identifier:
        raise InvalidPayload()
    return ScanKey(identifier=identifier, source=PAYLOAD_PLAIN)


def _parse_json_object(text):
    if not text.startswith("{"):
        return None
    try:
        value = json.loads(text)
    except ValueError:
        return None
    return value if isinstance(value, dict) else None


def resolve_student(key: ScanKey, queryset=None):
    """
    Look a scanned key up among known students: by id first, then by email,
    then by the external student_id.
    """
    if queryset is None:
        queryset = User.objects.filter(role=ROLE_STUDENT)

    conditions = []
    if key.identifier and key.identifier.isdigit():
        conditions.append(Q(pk=int(key.identifier)))
    for value in (key.email, key.identifier):
        if value:
            conditions.append(Q(email__iexact=value))
    if key.identifier:
        conditions.append(Q(student_id=key.identifier))

    for condition in conditions:
        user = queryset.filter(condition).order_by("id").first()
        if user:
            return user

    raise StudentNotFound()


def render_png(payload: str) -> bytes:
    qr_img = qrcode.make(payload, border=2)
    buffer = BytesIO()
    qr_img.save(buffer, format="PNG")
    return buffer.getvalue()
