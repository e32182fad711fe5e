# gym_system/urls.py
#
# Purpose:
# - Project URL router.
# - Keeps DRF routers under /api/ to avoid collisions with admin pages.
#
from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    # Django admin
    path("admin/", admin.site.urls),

    # =====
    # API's
    # =====
    path("api/", include("scheduling.urls")),
    path("api/schedule/", include("trainers.urls")),
]

# Static files in DEBUG (dev only). In production, serve via web server / CDN.
if settings.DEBUG:
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)
