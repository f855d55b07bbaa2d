from django.urls import path

from .views import (
    CameraErrorView,
    MyQRImageView,
    MyQRPayloadView,
    ScanAwardView,
    ScanLookupView,
)

urlpatterns = [
    path("lookup/", ScanLookupView.as_view(), name="scan-lookup"),
    path("award/", ScanAwardView.as_view(), name="scan-award"),
    path("me/", MyQRPayloadView.as_view(), name="my-qr-payload"),
    path("me/qr.png", MyQRImageView.as_view(), name="my-qr-image"),
    path("camera-error/", CameraErrorView.as_view(), name="camera-error"),
]
