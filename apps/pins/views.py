"""PIN views — mint-if-absent and trusted lookup."""

import logging

from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema

from apps.common.config import CargoConfig
from apps.common.exceptions import InternalError, ValidationError
from apps.common.permissions import is_trusted_caller
from apps.common.phones import normalize_phone
from .serializers import PinRequestSerializer, PinResponseSerializer
from .service import PinService

logger = logging.getLogger("mooncargo.pins")
config = CargoConfig.from_settings()
pin_service = PinService(config)


def _phone_from(request) -> str:
    ser = PinRequestSerializer(data=request.data)
    ser.is_valid(raise_exception=True)
    phone = normalize_phone(ser.validated_data["phone"])
    if not phone:
        logger.info("PIN request rejected: no usable phone number")
        raise ValidationError("Invalid phone number.")
    return phone


# ── POST /api/pins/ensure ─────────────────────────────────────────────────────
@extend_schema(
    tags=["PINs"],
    summary="Make sure a phone has a delivery PIN (PIN shown to admins only)",
    request=PinRequestSerializer, responses=PinResponseSerializer,
)
class PinEnsureView(APIView):

    def post(self, request):
        phone  = _phone_from(request)
        expose = is_trusted_caller(request, config, header="X-Admin-Pin")
        result = pin_service.ensure(phone, expose=expose)

        body = {"created": result.created, "phone": phone}
        if expose:
            body["pin"] = result.pin
        return Response(body)


# ── POST /api/pins/lookup ─────────────────────────────────────────────────────
@extend_schema(
    tags=["PINs"],
    summary="Return the PIN for a phone, issuing one if needed (internal use)",
    request=PinRequestSerializer, responses=PinResponseSerializer,
)
class PinLookupView(APIView):

    def post(self, request):
        phone  = _phone_from(request)
        result = pin_service.lookup(phone)
        logger.info("PIN looked up for …%s (created=%s)", phone[-4:], result.created)
        if not result.pin:
            raise InternalError("Could not issue a PIN.")
        return Response({"pin": result.pin, "created": result.created, "phone": phone})
