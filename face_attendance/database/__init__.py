"""
Database modules for Face Attendance System
"""

from .attendance_log import AttendanceLogger, AttendanceRecord, AlreadyMarked
from .gallery import GalleryStore, iter_gallery_dir

__all__ = [
    'AttendanceLogger',
    'AttendanceRecord',
    'AlreadyMarked',
    'GalleryStore',
    'iter_gallery_dir',
]
