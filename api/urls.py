"""
API URLs - REST API routing for ProjectHub

Endpoints:
- POST /api/auth/token/ - Get JWT access & refresh tokens
- POST /api/auth/token/refresh/ - Refresh access token
- POST /api/auth/token/verify/ - Verify token validity
- /api/v1/ - Projects and tasks (see projects.api.urls)
"""
from django.urls import path, include
from rest_framework_simplejwt.views import (
    TokenObtainPairView,
    TokenRefreshView,
    TokenVerifyView,
)

app_name = 'api'

urlpatterns = [
    # JWT Authentication endpoints
    path('auth/token/', TokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('auth/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),
    path('auth/token/verify/', TokenVerifyView.as_view(), name='token_verify'),

    # API v1
    path('v1/', include('projects.api.urls')),
]
