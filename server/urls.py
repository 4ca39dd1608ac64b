"""Main URL mapping configuration file.

Only the Django admin is routed here; end-user screens live in a
separate client that talks to the logic layer.
"""

from django.contrib import admin
from django.urls import path

admin.site.site_header = 'Dagitab'
admin.site.site_title = 'Dagitab admin'

urlpatterns = [
    path('admin/', admin.site.urls),
]
