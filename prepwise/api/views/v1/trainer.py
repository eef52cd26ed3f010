from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from prepwise.api.models import Trainer
from prepwise.api.permissions import IsStaffOrReadOnly
from prepwise.api.serializers.v1.trainer import TrainerReviewIn, TrainerReviewSerializer, TrainerSerializer
from prepwise.api.utils.common_utils import get_logger

log = get_logger(__name__)


class TrainerViewSet(viewsets.ModelViewSet):
    """Trainer directory. Anyone can browse; staff maintain the entries."""

    queryset = Trainer.objects.all().order_by("name")
    serializer_class = TrainerSerializer
    permission_classes = [IsStaffOrReadOnly]

    @extend_schema(
        summary="Review a trainer",
        description="Adds a 1-5 rating and updates the trainer's average (1 decimal) and count.",
        request=TrainerReviewIn,
        responses={201: TrainerReviewSerializer},
    )
    @action(detail=True, methods=["post"], permission_classes=[IsAuthenticated])
    def review(self, request, pk=None):
        trainer = self.get_object()
        s = TrainerReviewIn(data=request.data)
        s.is_valid(raise_exception=True)
        review = trainer.add_review(request.user, s.validated_data["rating"], s.validated_data["comment"])
        trainer.refresh_from_db()
        log.info(f"Trainer {trainer.trainer_id} reviewed: avg={trainer.rating_average} n={trainer.rating_count}")
        return Response(
            {
                "review": TrainerReviewSerializer(review).data,
                "rating_average": trainer.rating_average,
                "rating_count": trainer.rating_count,
            },
            status=status.HTTP_201_CREATED,
        )
