from django.utils import timezone
from drf_spectacular.utils import OpenApiParameter, extend_schema, extend_schema_view
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from prepwise.api.config import NOTICE_CONFIG
from prepwise.api.models import Notice
from prepwise.api.permissions import IsStaffOrReadOnly
from prepwise.api.serializers.v1.notice import NoticeRangeQuery, NoticeSerializer
from prepwise.api.services import notice_feed


@extend_schema_view(
    list=extend_schema(
        summary="List notices",
        parameters=[OpenApiParameter("kind", str, required=False, enum=Notice.Kind.values)],
    ),
    retrieve=extend_schema(summary="Get a notice"),
    create=extend_schema(summary="Create a notice (staff)"),
    update=extend_schema(summary="Update a notice (staff)"),
    partial_update=extend_schema(summary="Partially update a notice (staff)"),
    destroy=extend_schema(summary="Delete a notice (staff)"),
)
class NoticeViewSet(viewsets.ModelViewSet):
    serializer_class = NoticeSerializer
    permission_classes = [IsStaffOrReadOnly]

    def get_queryset(self):
        qs = Notice.objects.all().order_by("-event_date")
        kind = self.request.query_params.get("kind")
        if kind in Notice.Kind.values:
            qs = qs.filter(kind=kind)
        return qs

    @extend_schema(summary="Upcoming notices", responses=NoticeSerializer(many=True))
    @action(detail=False, methods=["get"])
    def upcoming(self, request):
        qs = Notice.objects.filter(event_date__gte=timezone.now()).order_by("event_date")
        return Response(NoticeSerializer(qs[: NOTICE_CONFIG["UPCOMING_LIMIT"]], many=True).data)

    @extend_schema(
        summary="Notices in a date range",
        parameters=[
            OpenApiParameter("start_date", str, required=True),
            OpenApiParameter("end_date", str, required=True),
        ],
        responses=NoticeSerializer(many=True),
    )
    @action(detail=False, methods=["get"])
    def search(self, request):
        q = NoticeRangeQuery(data=request.query_params)
        q.is_valid(raise_exception=True)
        qs = Notice.objects.filter(
            event_date__gte=q.validated_data["start_date"],
            event_date__lte=q.validated_data["end_date"],
        ).order_by("event_date")
        return Response(NoticeSerializer(qs, many=True).data)

    @extend_schema(summary="Events, with sample events when none are stored")
    @action(detail=False, methods=["get"])
    def events(self, request):
        stored = Notice.objects.filter(kind=Notice.Kind.EVENT).order_by("event_date")
        items = [notice_feed.to_event_item(n) for n in stored]
        if not items:
            return Response({"source": "fallback", "events": [dict(e) for e in notice_feed.SAMPLE_EVENTS]})
        return Response({"source": "stored", "events": items})

    @extend_schema(
        summary="Tech news feed",
        description="""
Stored news notices decorated with type, priority, time-ago and tags.
When nothing is stored, a fixed set of fallback notices is returned (`source: "fallback"`).
""",
    )
    @action(detail=False, methods=["get"])
    def feed(self, request):
        notices = Notice.objects.filter(kind=Notice.Kind.NOTICE).order_by("-event_date")
        events = Notice.objects.filter(kind=Notice.Kind.EVENT).order_by("event_date")
        return Response(notice_feed.build_feed(notices, events))
