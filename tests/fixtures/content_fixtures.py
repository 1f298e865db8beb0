"""
Sample content for service and route tests.
Names are chosen so that insertion order differs from display order.
"""

from mandala_cms.media import MediaUpload

VISTARA = {"name": "Vistara"}

SUB_COMPANY_NAMES_REVERSED = ["Citra Land", "Bumi Asri", "Anggrek Residence"]

SUB_COMPANY_DEFAULT_FIELDS = [
    "email",
    "mobile_phone",
    "address",
    "description",
    "logo",
    "facebook",
    "instagram",
    "tiktok",
    "youtube",
]

NEWS_ARTICLE = {
    "title": "Groundbreaking at Bumi Asri",
    "slug": "groundbreaking-bumi-asri",
    "author": "Marketing",
}

CMS_USER = {
    "name": "Dewi",
    "email": "dewi@example.com",
    "role": "editor",
}

EMAIL_MESSAGE = {
    "from": "buyer@example.com",
    "to": "info@example.com",
    "message": "Is the show unit open on Sunday?",
}

PNG_HEADER = b"\x89PNG\r\n\x1a\n"


def image_upload(name: str = "photo.png", size: int = 1024) -> MediaUpload:
    content = PNG_HEADER + b"\x00" * max(size - len(PNG_HEADER), 0)
    return MediaUpload(filename=name, content_type="image/png", content=content)


def video_upload(name: str = "tour.mp4", size: int = 2048) -> MediaUpload:
    return MediaUpload(filename=name, content_type="video/mp4", content=b"\x00" * size)


def text_upload(name: str = "notes.txt", size: int = 10 * 1024) -> MediaUpload:
    return MediaUpload(filename=name, content_type="text/plain", content=b"a" * size)
