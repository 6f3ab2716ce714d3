"""
HLS Output URL Configuration

Public, read-only mount of the segment directory.
"""

from django.urls import path
from . import views

app_name = 'hls_output'

urlpatterns = [
    path('<str:filename>', views.serve_hls_file, name='hls-file'),
]
