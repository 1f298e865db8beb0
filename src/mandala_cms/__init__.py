"""
Mandala CMS content service.

Content services over the document store, media uploads to S3, and the
FastAPI surface used by the public site and the admin panel.
"""
