"""Site content — the public homepage sections, edited from the admin UI."""

import logging

from rest_framework import serializers
from rest_framework.views import APIView
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .models import SiteContent

logger = logging.getLogger("mooncargo.content")

SECTIONS_KEY = "sections"


class ContentSerializer(serializers.Serializer):
    sections = serializers.JSONField(required=False, allow_null=True)

    def validate_sections(self, value):
        # anything that is not a list is stored as an empty list
        return value if isinstance(value, list) else []


def _sections():
    row = SiteContent.objects.filter(key=SECTIONS_KEY).first()
    return row.payload if row and isinstance(row.payload, list) else []


# ── GET/PUT /api/content ──────────────────────────────────────────────────────
class ContentView(APIView):

    @extend_schema(tags=["Content"], summary="Homepage sections", responses=ContentSerializer)
    def get(self, request):
        return Response({"sections": _sections()})

    @extend_schema(tags=["Content"], summary="Replace homepage sections",
                   request=ContentSerializer, responses=ContentSerializer)
    def put(self, request):
        ser = ContentSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        sections = ser.validated_data.get("sections", [])
        SiteContent.objects.update_or_create(key=SECTIONS_KEY, defaults={"payload": sections})
        logger.info("Site content replaced (%d sections)", len(sections))
        return Response({"sections": sections})
