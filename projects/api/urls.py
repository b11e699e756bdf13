"""
Projects API URLs
"""

from rest_framework.routers import DefaultRouter

from .viewsets import ProjectViewSet, TaskViewSet

app_name = 'projects'

router = DefaultRouter()

router.register(r'projects', ProjectViewSet, basename='project')
router.register(r'tasks', TaskViewSet, basename='task')

urlpatterns = router.urls
