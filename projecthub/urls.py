"""
URL configuration for the ProjectHub project.

Routes the admin, health checks, the OpenAPI schema and the versioned API.
"""
import time

from django.conf import settings
from django.contrib import admin
from django.db import connection
from django.http import JsonResponse
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView


# ==================== Health Check Endpoint ====================

def health_check(request):
    """
    Health check endpoint for load balancers and monitoring.
    """
    health_status = {
        'status': 'healthy',
        'timestamp': time.time(),
        'version': getattr(settings, 'APP_VERSION', '1.0.0'),
    }

    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
        health_status['database'] = 'connected'
    except Exception as e:
        health_status['database'] = 'error'
        health_status['status'] = 'degraded'
        health_status['database_error'] = str(e)

    status_code = 200 if health_status['status'] == 'healthy' else 503
    return JsonResponse(health_status, status=status_code)


# ==================== API Root View ====================

def api_root(request):
    """
    API root view providing API information and documentation links.
    """
    base_url = request.build_absolute_uri('/api/')
    return JsonResponse({
        'name': 'ProjectHub API',
        'version': 'v1',
        'endpoints': {
            'v1': f'{base_url}v1/',
            'auth': f'{base_url}auth/token/',
            'schema': f'{base_url}schema/',
        },
    })


# ==================== URL Patterns ====================

urlpatterns = [
    path('admin/', admin.site.urls),

    path('api/health/', health_check, name='health_check'),
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/', api_root, name='api_root'),
    path('api/', include('api.urls')),
]
