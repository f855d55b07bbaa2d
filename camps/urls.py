from django.urls import path

from .views import (
    CampDetailView,
    CampGroupPointsView,
    CampGroupsView,
    CampKidListCreateView,
    CampKidPointsView,
    CampListCreateView,
)

urlpatterns = [
    path("", CampListCreateView.as_view(), name="camps-list-create"),
    path("<int:camp_id>/", CampDetailView.as_view(), name="camp-detail"),
    path("<int:camp_id>/kids/", CampKidListCreateView.as_view(), name="camp-kids"),
    path(
        "<int:camp_id>/kids/<int:kid_id>/points/",
        CampKidPointsView.as_view(),
        name="camp-kid-points",
    ),
    path("<int:camp_id>/groups/", CampGroupsView.as_view(), name="camp-groups"),
    path(
        "<int:camp_id>/groups/<int:group_number>/points/",
        CampGroupPointsView.as_view(),
        name="camp-group-points",
    ),
]
