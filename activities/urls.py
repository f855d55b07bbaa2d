from django.urls import path

from .views import (
    ActivityDetailView,
    ActivityListCreateView,
    CompleteActivityView,
    CompletionHistoryView,
)

urlpatterns = [
    path("", ActivityListCreateView.as_view(), name="activities-list-create"),
    path("history/", CompletionHistoryView.as_view(), name="activity-history"),
    path("<int:activity_id>/", ActivityDetailView.as_view(), name="activity-detail"),
    path(
        "<int:activity_id>/complete/",
        CompleteActivityView.as_view(),
        name="activity-complete",
    ),
]
