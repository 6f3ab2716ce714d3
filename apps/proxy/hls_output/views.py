"""
HLS Output Views

Static delivery of the playlist and segments ffmpeg writes.
"""

import logging

from django.http import FileResponse, Http404
from django.views.decorators.http import require_http_methods

from .manager import HLSOutputManager

logger = logging.getLogger(__name__)


@require_http_methods(['GET', 'HEAD'])
def serve_hls_file(request, filename):
    """
    Serve a playlist or segment from the segment directory.
    Nginx can mount the directory directly; this is the fallback.
    """
    segment_mgr = HLSOutputManager.get_instance().segment_manager
    file_path = segment_mgr.resolve(filename)
    if file_path is None:
        raise Http404("Not an HLS file")

    try:
        handle = open(file_path, 'rb')
    except FileNotFoundError:
        raise Http404("HLS file not found")
    except OSError as e:
        logger.error(f"Error opening HLS file {file_path}: {e}")
        raise Http404("HLS file not found")

    if filename.endswith('.m3u8'):
        response = FileResponse(handle, content_type='application/vnd.apple.mpegurl')
        response['Cache-Control'] = 'no-cache, no-store, must-revalidate'
    else:
        response = FileResponse(handle, content_type='video/mp2t')
        response['Cache-Control'] = 'public, max-age=86400, immutable'

    response['Access-Control-Allow-Origin'] = '*'
    return response
