from io import BytesIO

SUPPORTED_MEDIA_TYPES: frozenset[str] = frozenset(
    {
        "image/jpeg",
        "image/jpg",
        "image/png",
        "image/gif",
        "image/bmp",
        "image/webp",
        "image/tiff",
        "image/svg+xml",
    }
)

# libmagic spellings that differ from what browsers declare
_MIME_ALIASES: dict[str, str] = {
    "image/x-ms-bmp": "image/bmp",
    "image/x-bmp": "image/bmp",
    "image/pjpeg": "image/jpeg",
    "image/svg": "image/svg+xml",
    "image/x-tiff": "image/tiff",
}

SNIFF_BYTES = 2048


def normalize_media_type(media_type: str) -> str:
    """Lower-case, drop parameters and map known aliases."""
    base = media_type.split(";")[0].strip().lower()
    return _MIME_ALIASES.get(base, base)


def is_supported(media_type: str) -> bool:
    return media_type in SUPPORTED_MEDIA_TYPES


def determine_mime(bytes_io: BytesIO, file_type: str | None = None) -> str:
    """Return the declared type if given, else sniff it from the content."""
    if not file_type:
        import magic

        _ = bytes_io.seek(0)
        # Create a Magic object
        mime = magic.Magic(mime=True)

        # Determine the file type
        file_type = mime.from_buffer(bytes_io.read(SNIFF_BYTES))
        if not file_type:
            file_type = "application/octet-stream"
        elif file_type in ("text/xml", "application/xml", "text/plain", "text/html"):
            # SVG without an XML prolog is often reported as plain text
            _ = bytes_io.seek(0)
            head = bytes_io.read(SNIFF_BYTES).decode("utf-8", errors="ignore")
            if "<svg" in head:
                file_type = "image/svg+xml"
    return normalize_media_type(file_type)
