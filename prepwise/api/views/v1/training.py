from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from prepwise.api.models import TrainingBooking, TrainingProgram
from prepwise.api.serializers.v1.training import (
    BookingIn,
    TrainingBookingSerializer,
    TrainingListQuery,
    TrainingProgramSerializer,
)
from prepwise.api.services import training_service

TRAINING_NOT_FOUND = "Training not found"


class TrainingListAPIView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="List training programmes",
        parameters=[
            OpenApiParameter("category", str, required=False, description="technical, soft or all"),
            OpenApiParameter("search", str, required=False, description="Matches title or target skill"),
        ],
        responses=TrainingProgramSerializer(many=True),
    )
    def get(self, request, *args, **kwargs):
        q = TrainingListQuery(data=request.query_params)
        q.is_valid(raise_exception=True)
        qs = training_service.filter_programs(
            TrainingProgram.objects.prefetch_related("slots").order_by("id"),
            q.validated_data["category"],
            q.validated_data["search"].strip(),
        )
        return Response(TrainingProgramSerializer(qs, many=True).data)


class TrainingDetailAPIView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Get a training programme", responses=TrainingProgramSerializer)
    def get(self, request, pk, *args, **kwargs):
        program = TrainingProgram.objects.prefetch_related("slots").filter(pk=pk).first()
        if program is None:
            return Response({"detail": TRAINING_NOT_FOUND}, status=status.HTTP_404_NOT_FOUND)
        return Response(TrainingProgramSerializer(program).data)


class TrainingBookAPIView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Book a training slot",
        description="Books the slot with the given date and time. A slot can only be booked once.",
        request=BookingIn,
        responses={201: TrainingBookingSerializer},
    )
    def post(self, request, pk, *args, **kwargs):
        s = BookingIn(data=request.data)
        s.is_valid(raise_exception=True)
        program = TrainingProgram.objects.filter(pk=pk).first()
        if program is None:
            return Response({"detail": TRAINING_NOT_FOUND}, status=status.HTTP_404_NOT_FOUND)

        day, time = s.validated_data["date"], s.validated_data["time"]
        try:
            booking = training_service.book_slot(request.user, program, day, time)
        except training_service.SlotUnavailable as e:
            return Response({"detail": str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(
            {
                "detail": f"Booking confirmed for {program.title} on {day.isoformat()} at {time}",
                "booking": TrainingBookingSerializer(booking).data,
            },
            status=status.HTTP_201_CREATED,
        )


class RecommendedTrainingAPIView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Recommended training programmes",
        description="Programmes targeting skills rated below 6/10 in the latest technology assessment.",
    )
    def get(self, request, *args, **kwargs):
        weak, programs = training_service.recommended_programs(request.user)
        return Response({
            "skills_needing_improvement": weak,
            "programs": TrainingProgramSerializer(programs, many=True).data,
        })


class MyBookingsAPIView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="My training bookings", responses=TrainingBookingSerializer(many=True))
    def get(self, request, *args, **kwargs):
        qs = (
            TrainingBooking.objects.filter(user=request.user)
            .select_related("slot__program")
            .order_by("-created_at")
        )
        return Response(TrainingBookingSerializer(qs, many=True).data)
