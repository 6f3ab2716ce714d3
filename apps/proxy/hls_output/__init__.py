"""
HLS Output Module

Republishes one live source (RTSP and friends) as a sliding-window HLS
playlist by supervising a single ffmpeg process.
"""
