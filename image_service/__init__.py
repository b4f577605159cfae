"""Image Service

A console tool that analyzes images with Azure Computer Vision,
prints captions, tags and detected objects, draws bounding boxes
and creates thumbnails.
"""

__version__ = "1.0.0"
__author__ = "Image Service"
