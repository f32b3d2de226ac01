from django.urls import path

from accounts.views import (
    AuthenticatedUserAPIView,
    LoginAPIView,
    RegisterAPIView,
    UserDetailAPIView,
    UserListCreateAPIView,
    UserQuickCreateAPIView,
)

auth_urlpatterns = [
    path("login/", LoginAPIView.as_view(), name="auth-login"),
    path("register/", RegisterAPIView.as_view(), name="auth-register"),
    path("me/", AuthenticatedUserAPIView.as_view(), name="auth-me"),
]

user_urlpatterns = [
    path("", UserListCreateAPIView.as_view(), name="user-list"),
    path("quick-create/", UserQuickCreateAPIView.as_view(), name="user-quick-create"),
    path("<str:user_id>/", UserDetailAPIView.as_view(), name="user-detail"),
]
