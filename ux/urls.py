from django.urls import path
from ux.views.dashboard import UXDashboardView
from ux.views.admin import UXAdminOverviewView
from ux.views.camp import UXMentorCampView

urlpatterns = [
    path("me/dashboard/", UXDashboardView.as_view(), name="ux-dashboard"),
    path("me/camp/", UXMentorCampView.as_view(), name="ux-mentor-camp"),
    path("admin/overview/", UXAdminOverviewView.as_view(), name="ux-admin-overview"),
]
