import logging
import re
import secrets
import time
from pathlib import Path

from fastapi import UploadFile

from storefront.core.errors import ApiError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024

GENERATED_NAME_RE = re.compile(r"screenshot-[0-9]+-[0-9]+(\.[a-z0-9]+)?")

# stored extension -> media type it is served with
IMAGE_MEDIA_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".webp": "image/webp",
}
EXTENSION_FOR_MEDIA_TYPE = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/gif": ".gif",
    "image/webp": ".webp",
}

NOT_AN_IMAGE_MESSAGE = "يُسمح برفع الصور فقط"
TOO_LARGE_MESSAGE = "حجم الصورة يتجاوز الحد المسموح"
TOO_MANY_FILES_MESSAGE = "يُسمح برفع صورة واحدة فقط"


def _extension(filename: str | None, content_type: str | None = None) -> str:
    """
    The client's extension is kept only when it is a known image type;
    otherwise it comes from the content type, or is left off.
    """
    suffix = Path(filename or "").suffix.lower()
    cleaned = "." + re.sub(r"[^a-z0-9]", "", suffix)
    if cleaned in IMAGE_MEDIA_TYPES:
        return cleaned
    media_type = (content_type or "").split(";")[0].strip().lower()
    return EXTENSION_FOR_MEDIA_TYPE.get(media_type, "")


def generate_screenshot_name(original_filename: str | None, content_type: str | None = None) -> str:
    # "screenshot-<epoch ms>-<random>" keeps names unique across concurrent uploads
    unique_suffix = f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}"
    return f"screenshot-{unique_suffix}{_extension(original_filename, content_type)}"


def is_generated_name(name: str) -> bool:
    return GENERATED_NAME_RE.fullmatch(name) is not None


def image_media_type(name: str) -> str | None:
    return IMAGE_MEDIA_TYPES.get(Path(name).suffix.lower())


def is_image(content_type: str | None) -> bool:
    return bool(content_type) and content_type.lower().startswith("image/")


def has_file(upload: UploadFile | None) -> bool:
    # browsers send an empty part when the input is left blank
    return upload is not None and bool(upload.filename)


def save_screenshot(upload: UploadFile, upload_dir: str | Path, max_bytes: int) -> str:
    """
    Validate and store one transfer screenshot, returning the generated
    file name. Nothing is left on disk when validation fails.
    """
    if not is_image(upload.content_type):
        logger.info("Rejected upload %r with content type %r", upload.filename, upload.content_type)
        raise ApiError(400, NOT_AN_IMAGE_MESSAGE)

    target_dir = Path(upload_dir)
    target_dir.mkdir(parents=True, exist_ok=True)
    name = generate_screenshot_name(upload.filename, upload.content_type)
    target = target_dir / name

    written = 0
    too_large = False
    try:
        with target.open("wb") as out:
            while chunk := upload.file.read(CHUNK_SIZE):
                written += len(chunk)
                if written > max_bytes:
                    too_large = True
                    break
                out.write(chunk)
    except OSError:
        discard_upload(target_dir, name)
        raise

    if too_large:
        discard_upload(target_dir, name)
        logger.info("Rejected upload %r larger than %d bytes", upload.filename, max_bytes)
        raise ApiError(400, TOO_LARGE_MESSAGE)

    logger.info("Stored screenshot %s (%d bytes)", name, written)
    return name


def discard_upload(upload_dir: str | Path, name: str | None) -> None:
    if not name:
        return
    try:
        (Path(upload_dir) / name).unlink(missing_ok=True)
    except OSError:
        logger.exception("Could not delete orphaned upload %s", name)


def resolve_screenshot(upload_dir: str | Path, name: str) -> Path | None:
    """Only generated names directly inside upload_dir are ever served."""
    if not is_generated_name(name):
        return None
    path = Path(upload_dir) / name
    if not path.is_file():
        return None
    return path
